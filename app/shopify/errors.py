"""Error taxonomy for Shopify Admin GraphQL calls.

Shopify reports missing protected-data approval only through human-readable
error messages, so access denial is detected by substring matching. The
matching rules live in the two ``is_*_access_denied`` functions below and
nowhere else. If Shopify ever exposes a structured error code for this,
those two functions are the single point to switch over.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable, Mapping
from typing import Any

DENIAL_PHRASES: tuple[str, ...] = ("not approved", "protected")

_URL_RE = re.compile(r"https?://\S+")
_OBJECT_RE = re.compile(r"\b(customer|order) object\b")


class ProtectedDataDomain(enum.StrEnum):
    customer = "customer"
    order = "order"


class ShopifyQueryError(Exception):
    """Base class for failures reported by the Shopify Admin API."""


class UpstreamQueryError(ShopifyQueryError):
    """Any upstream error that is not a protected-data denial."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AccessDeniedError(ShopifyQueryError):
    """The shop has not granted the app access to a protected-data domain."""

    def __init__(self, domain: ProtectedDataDomain, message: str = "") -> None:
        self.domain = ProtectedDataDomain(domain)
        self.upstream_message = message
        super().__init__(self.code)

    @property
    def code(self) -> str:
        return f"PROTECTED_{self.domain.value.upper()}_DATA_ACCESS_DENIED"


def _denied_entity(message: str | None) -> str | None:
    """Return the entity a denial message names, or ``None``.

    Linked docs URLs are ignored (Shopify's order denial links to the
    protected-customer-data page). A named ``Customer object``/``Order object``
    decides the entity before the bare entity words are considered.
    """
    if not message:
        return None
    text = _URL_RE.sub("", message).lower()
    if not any(phrase in text for phrase in DENIAL_PHRASES):
        return None
    named = _OBJECT_RE.search(text)
    if named:
        return named.group(1)
    for entity in ("customer", "order"):
        if entity in text:
            return entity
    return None


def is_customer_access_denied(message: str | None) -> bool:
    """True if ``message`` reports missing approval for protected customer data."""
    return _denied_entity(message) == "customer"


def is_order_access_denied(message: str | None) -> bool:
    """True if ``message`` reports missing approval for protected order data."""
    return _denied_entity(message) == "order"


def classify_graphql_errors(
    errors: Iterable[Mapping[str, Any]] | None,
) -> ShopifyQueryError | None:
    """Map a GraphQL ``errors`` array to the exception the caller should raise.

    Access denial anywhere in the array wins over the generic error. Returns
    ``None`` for an empty or missing array.
    """
    if not errors:
        return None
    messages = [str(error.get("message") or "") for error in errors]
    for message in messages:
        if is_customer_access_denied(message):
            return AccessDeniedError(ProtectedDataDomain.customer, message)
        if is_order_access_denied(message):
            return AccessDeniedError(ProtectedDataDomain.order, message)
    return UpstreamQueryError(messages[0] or "Unknown GraphQL error")


def raise_for_graphql_errors(payload: Mapping[str, Any]) -> None:
    """Raise the classified error for a response payload, if it carries one."""
    error = classify_graphql_errors(payload.get("errors"))
    if error is not None:
        raise error
