"""Customer creation date criterion."""

from __future__ import annotations

from datetime import date

from app.audience.criteria.base import CandidateRecord, Criterion, CriterionId, parse_timestamp
from app.schemas.audience import FilterConfig


def parse_day(value: str) -> date | None:
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp; return the UTC day."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    moment = parse_timestamp(value)
    return moment.date() if moment else None


class CustomerCreatedFromCriterion(Criterion[date]):
    id = CriterionId.customer_created_from
    config_field = "customer_created_from"
    fragment = ()
    cost = 1

    def selection(self, config: FilterConfig) -> date | None:
        value = self.raw_value(config)
        return parse_day(value) if value else None

    def matches(self, record: CandidateRecord, selection: date) -> bool:
        created_at = parse_timestamp(record.get("createdAt"))
        return created_at is not None and created_at.date() >= selection
