"""Database models package."""

from app.models.base import Base
from app.models.saved_list import ListSource, ListStatus, SavedList

__all__ = [
    "Base",
    "SavedList",
    "ListSource",
    "ListStatus",
]
