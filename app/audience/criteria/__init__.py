"""Fixed registry of audience criteria, keyed by criterion id."""

from __future__ import annotations

from types import MappingProxyType

from app.schemas.audience import FilterConfig

from .amount_spent import AmountSpentCriterion
from .base import CandidateRecord, Criterion, CriterionId
from .created_from import CustomerCreatedFromCriterion
from .delivery import DeliveryCriterion
from .location import LocationCriterion, normalize_countries
from .payment import PaymentCriterion
from .products import ProductsCriterion
from .timing import TimingCriterion

CRITERIA: MappingProxyType[CriterionId, Criterion] = MappingProxyType(
    {
        c.id: c
        for c in (
            LocationCriterion(),
            ProductsCriterion(),
            TimingCriterion(),
            PaymentCriterion(),
            DeliveryCriterion(),
            AmountSpentCriterion(),
            CustomerCreatedFromCriterion(),
        )
    }
)


def get_criterion(criterion_id: CriterionId | str) -> Criterion:
    return CRITERIA[CriterionId(criterion_id)]


def active_criteria(config: FilterConfig) -> list[Criterion]:
    """Criteria with a usable configuration, cheapest first."""
    return sorted(
        (c for c in CRITERIA.values() if c.is_active(config)),
        key=lambda c: c.cost,
    )


__all__ = [
    "CRITERIA",
    "CandidateRecord",
    "Criterion",
    "CriterionId",
    "active_criteria",
    "get_criterion",
    "normalize_countries",
]
