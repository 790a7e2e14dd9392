"""Shopify Admin GraphQL client, selection model and error taxonomy."""

from .client import AdminGraphQL, ShopifyAdminClient
from .errors import (
    AccessDeniedError,
    ProtectedDataDomain,
    ShopifyQueryError,
    UpstreamQueryError,
)

__all__ = [
    "AdminGraphQL",
    "ShopifyAdminClient",
    "AccessDeniedError",
    "ProtectedDataDomain",
    "ShopifyQueryError",
    "UpstreamQueryError",
]
