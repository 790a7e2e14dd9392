"""Geographic location criterion."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from app.audience.criteria.base import CandidateRecord, CriterionId, ListCriterion
from app.schemas.audience import FilterConfig
from app.shopify.selection import field

UNKNOWN_COUNTRY = "Unknown"

REGIONS = MappingProxyType(
    {
        "North America": ("United States", "Canada", "Mexico"),
        "Europe": (
            "United Kingdom",
            "Germany",
            "France",
            "Italy",
            "Spain",
            "Netherlands",
            "Belgium",
            "Switzerland",
            "Austria",
            "Sweden",
            "Norway",
            "Denmark",
            "Finland",
            "Poland",
            "Portugal",
            "Greece",
            "Ireland",
        ),
        "Asia": (
            "India",
            "Japan",
            "China",
            "South Korea",
            "Singapore",
            "Thailand",
            "Malaysia",
            "Indonesia",
            "Philippines",
            "Vietnam",
        ),
        "South America": (
            "Brazil",
            "Argentina",
            "Chile",
            "Colombia",
            "Peru",
            "Venezuela",
        ),
    }
)


def normalize_countries(values: Iterable[str]) -> list[str]:
    """Expand region names into member countries; flatten and de-duplicate.

    Literal country names pass through. Order of first appearance is kept.
    """
    countries: dict[str, None] = {}
    for value in values or ():
        for country in REGIONS.get(value, (value,)):
            countries[country] = None
    return list(countries)


def customer_country(record: CandidateRecord) -> str | None:
    address = record.get("defaultAddress")
    if not isinstance(address, Mapping):
        return None
    return address.get("country") or None


class LocationCriterion(ListCriterion):
    id = CriterionId.location
    config_field = "location"
    fragment = (field("defaultAddress", "country", "countryCodeV2"),)
    cost = 10

    def selection(self, config: FilterConfig) -> tuple[str, ...] | None:
        values = super().selection(config)
        if values is None:
            return None
        return tuple(normalize_countries(values)) or None

    def matches(self, record: CandidateRecord, selection: tuple[str, ...]) -> bool:
        country = customer_country(record)
        return country is not None and country in selection
