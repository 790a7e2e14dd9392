"""AND-composition of active criteria over fetched records."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from app.audience.criteria import CandidateRecord, CriterionId, active_criteria
from app.schemas.audience import FilterConfig
from app.utils.logging import get_logger

logger = get_logger(__name__)


def apply_filters(
    records: Iterable[CandidateRecord],
    config: FilterConfig,
    *,
    resolved: Mapping[CriterionId, Any] | None = None,
    order: Sequence[CriterionId | str] | None = None,
) -> list[CandidateRecord]:
    """Narrow ``records`` through each active criterion in turn.

    Stages run cheapest first unless ``order`` names an explicit sequence;
    the surviving set is the same either way. ``resolved`` supplies
    selections that were enriched through upstream lookups.
    """
    stages = active_criteria(config)
    if order is not None:
        rank = {CriterionId(c): i for i, c in enumerate(order)}
        stages.sort(key=lambda c: rank.get(c.id, len(rank)))

    surviving = list(records)
    for criterion in stages:
        if resolved is not None and criterion.id in resolved:
            selection = resolved[criterion.id]
        else:
            selection = criterion.selection(config)
        before = len(surviving)
        surviving = [r for r in surviving if criterion.matches(r, selection)]
        logger.debug("%s kept %d of %d records", criterion.id.value, len(surviving), before)
        if not surviving:
            break
    return surviving
