"""Declarative filter classes for API query parameter filtering."""

from .saved_list import SavedListFilter

__all__ = ["SavedListFilter"]
