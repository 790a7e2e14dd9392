"""Catalog lookups used to resolve product selections to product ids.

These helpers fail soft: an upstream error is logged and yields an empty id
set, because the products criterion can still match on titles and types.
Protected-data denials are not downgraded and propagate to the caller.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Collection
from typing import Any

from app.shopify.client import AdminGraphQL
from app.shopify.errors import UpstreamQueryError, raise_for_graphql_errors
from app.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_PAGES = 20

PRODUCTS_BY_PAGE = """
query CatalogProducts($first: Int!, $after: String) {
  products(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    nodes { id title }
  }
}
"""

COLLECTIONS_BY_PAGE = """
query CatalogCollections($first: Int!, $after: String) {
  collections(first: $first, after: $after) {
    pageInfo { hasNextPage endCursor }
    nodes { id title }
  }
}
"""

COLLECTION_PRODUCTS_BY_PAGE = """
query CollectionProducts($id: ID!, $first: Int!, $after: String) {
  collection(id: $id) {
    products(first: $first, after: $after) {
      pageInfo { hasNextPage endCursor }
      nodes { id }
    }
  }
}
"""


async def _iter_connection(
    client: AdminGraphQL,
    document: str,
    path: tuple[str, ...],
    variables: dict[str, Any] | None = None,
    *,
    page_size: int = 250,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> AsyncIterator[list[dict[str, Any]]]:
    """Yield node pages of the connection found at ``path`` in ``data``."""
    cursor: str | None = None
    for _ in range(max_pages):
        payload = await client.query(
            document, {**(variables or {}), "first": page_size, "after": cursor}
        )
        raise_for_graphql_errors(payload)

        connection: Any = payload.get("data") or {}
        for key in path:
            connection = (connection or {}).get(key)
        if not connection:
            return

        yield connection.get("nodes") or []

        page_info = connection.get("pageInfo") or {}
        cursor = page_info.get("endCursor")
        if not page_info.get("hasNextPage") or not cursor:
            return


async def _ids_by_title(
    client: AdminGraphQL,
    document: str,
    root: str,
    titles: Collection[str],
    max_pages: int,
) -> set[str]:
    wanted = set(titles)
    found: set[str] = set()
    if not wanted:
        return found
    try:
        async for nodes in _iter_connection(client, document, (root,), max_pages=max_pages):
            found.update(node["id"] for node in nodes if node.get("title") in wanted)
            # titles are not unique; allow a couple of matches per title before stopping
            if len(found) >= len(wanted) * 2:
                break
    except UpstreamQueryError as exc:
        logger.warning("Catalog lookup of %s by title failed: %s", root, exc.message)
        return set()
    return found


async def get_product_ids_by_titles(
    client: AdminGraphQL,
    titles: Collection[str],
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> set[str]:
    """Return ids of products whose title is one of ``titles``."""
    return await _ids_by_title(client, PRODUCTS_BY_PAGE, "products", titles, max_pages)


async def get_collection_ids_by_titles(
    client: AdminGraphQL,
    titles: Collection[str],
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> set[str]:
    """Return ids of collections whose title is one of ``titles``."""
    return await _ids_by_title(client, COLLECTIONS_BY_PAGE, "collections", titles, max_pages)


async def get_collection_product_ids(
    client: AdminGraphQL,
    collection_ids: Collection[str],
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> set[str]:
    """Return ids of every product in the given collections.

    Collections are walked one after another; a failing collection is skipped.
    """
    product_ids: set[str] = set()
    for collection_id in sorted(collection_ids):
        try:
            async for nodes in _iter_connection(
                client,
                COLLECTION_PRODUCTS_BY_PAGE,
                ("collection", "products"),
                {"id": collection_id},
                max_pages=max_pages,
            ):
                product_ids.update(node["id"] for node in nodes if node.get("id"))
        except UpstreamQueryError as exc:
            logger.warning(
                "Listing products of collection %s failed: %s", collection_id, exc.message
            )
    return product_ids
