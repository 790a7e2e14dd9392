"""Audience filter compiler: criteria registry, fetch planning, filtering."""

from .compiler import FetchSpec, build_fetch_spec
from .criteria import CRITERIA, CriterionId, active_criteria, get_criterion
from .fetcher import fetch_candidates, iter_candidate_pages, page_fetcher
from .formatter import format_customer
from .pipeline import apply_filters

__all__ = [
    "CRITERIA",
    "CriterionId",
    "FetchSpec",
    "active_criteria",
    "apply_filters",
    "build_fetch_spec",
    "fetch_candidates",
    "format_customer",
    "get_criterion",
    "iter_candidate_pages",
    "page_fetcher",
]
