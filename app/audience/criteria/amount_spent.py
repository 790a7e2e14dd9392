"""Lifetime amount-spent criterion."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from app.audience.criteria.base import CandidateRecord, Criterion, CriterionId
from app.schemas.audience import AmountSpentFilter, FilterConfig


def lifetime_spend(record: CandidateRecord) -> Decimal:
    """The record's ``amountSpent.amount``; absent or unreadable means zero."""
    money = record.get("amountSpent")
    amount = money.get("amount") if isinstance(money, Mapping) else None
    if amount in (None, ""):
        return Decimal("0")
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        return Decimal("0")
    return value if value.is_finite() else Decimal("0")


class AmountSpentCriterion(Criterion[AmountSpentFilter]):
    id = CriterionId.amount_spent
    config_field = "amount_spent"
    # amountSpent is part of the baseline selection
    fragment = ()
    cost = 0

    def selection(self, config: FilterConfig) -> AmountSpentFilter | None:
        value = self.raw_value(config)
        if value is None or value.amount is None or value.operator is None:
            return None
        return value

    def matches(self, record: CandidateRecord, selection: AmountSpentFilter) -> bool:
        spent = lifetime_spend(record)
        if selection.operator == "min":
            return spent >= selection.amount
        return spent <= selection.amount
