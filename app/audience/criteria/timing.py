"""Shopping timing criterion.

Buckets are evaluated in UTC, the zone Shopify stores order timestamps in.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from types import MappingProxyType

from app.audience.criteria.base import (
    CandidateRecord,
    CriterionId,
    ListCriterion,
    iter_orders,
    parse_timestamp,
    recent_orders,
)

MORNING = "Morning (6am-12pm)"
AFTERNOON = "Afternoon (12pm-6pm)"
EVENING = "Evening (6pm-12am)"
NIGHT = "Night (12am-6am)"
WEEKDAYS = "Weekdays"
WEEKENDS = "Weekends"


def time_of_day(moment: datetime) -> str:
    hour = moment.hour
    if 6 <= hour < 12:
        return MORNING
    if 12 <= hour < 18:
        return AFTERNOON
    if 18 <= hour < 24:
        return EVENING
    return NIGHT


def is_weekday(moment: datetime) -> bool:
    return moment.weekday() < 5


TIMING_BUCKETS: MappingProxyType[str, Callable[[datetime], bool]] = MappingProxyType(
    {
        MORNING: lambda moment: time_of_day(moment) == MORNING,
        AFTERNOON: lambda moment: time_of_day(moment) == AFTERNOON,
        EVENING: lambda moment: time_of_day(moment) == EVENING,
        NIGHT: lambda moment: time_of_day(moment) == NIGHT,
        WEEKDAYS: is_weekday,
        WEEKENDS: lambda moment: not is_weekday(moment),
    }
)


class TimingCriterion(ListCriterion):
    id = CriterionId.timing
    config_field = "timing"
    fragment = (recent_orders("createdAt"),)
    requires_orders = True
    cost = 50

    def matches(self, record: CandidateRecord, selection: tuple[str, ...]) -> bool:
        # values without a bucket (e.g. "Holidays", "Sale Events") never match
        buckets = [TIMING_BUCKETS[value] for value in selection if value in TIMING_BUCKETS]
        if not buckets:
            return False
        for order in iter_orders(record):
            placed_at = parse_timestamp(order.get("createdAt"))
            if placed_at is None:
                continue
            if any(bucket(placed_at) for bucket in buckets):
                return True
        return False
