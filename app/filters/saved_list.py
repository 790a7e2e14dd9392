"""Declarative filters for SavedList queries."""

from __future__ import annotations

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from app.models.saved_list import SavedList


class SavedListFilter(Filter):
    """FilterSet for saved-list queries.

    Supported query params::

        ?source=ai-search
        ?status=archived
        ?list_name__ilike=%vip%
        ?order_by=-created_at
    """

    source: Optional[str] = None
    status: Optional[str] = None
    list_name__ilike: Optional[str] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = SavedList
