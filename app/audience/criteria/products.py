"""Product, collection and category criterion.

The admin UI sends one flat list that mixes product titles, collection
titles and product types, so every configured value is tried against all
of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field, replace

from app.audience.criteria.base import (
    CandidateRecord,
    Criterion,
    CriterionId,
    connection_nodes,
    iter_orders,
    recent_orders,
)
from app.schemas.audience import FilterConfig
from app.shopify.client import AdminGraphQL
from app.shopify.lookups import (
    DEFAULT_MAX_PAGES,
    get_collection_ids_by_titles,
    get_collection_product_ids,
    get_product_ids_by_titles,
)
from app.shopify.selection import field
from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProductSelection:
    items: frozenset[str]
    # filled by resolve(): ids of products named by, or collected under, an item
    product_ids: frozenset[str] = dataclass_field(default_factory=frozenset)


@dataclass(frozen=True)
class PurchasedProducts:
    ids: frozenset[str]
    titles: frozenset[str]
    types: frozenset[str]


def purchased_products(record: CandidateRecord) -> PurchasedProducts:
    """Collect product ids, titles and types across the record's recent orders."""
    ids: set[str] = set()
    titles: set[str] = set()
    types: set[str] = set()
    for order in iter_orders(record):
        for line_item in connection_nodes(order.get("lineItems")):
            product = line_item.get("product") or (line_item.get("variant") or {}).get("product")
            if not product:
                continue
            if product.get("id"):
                ids.add(product["id"])
            if product.get("title"):
                titles.add(product["title"])
            if product.get("productType"):
                types.add(product["productType"])
    return PurchasedProducts(frozenset(ids), frozenset(titles), frozenset(types))


class ProductsCriterion(Criterion[ProductSelection]):
    id = CriterionId.products
    config_field = "products"
    fragment = (
        recent_orders(
            field(
                "lineItems",
                field("edges", field("node", field("product", "id", "title", "productType"))),
                args="first: 10",
            )
        ),
    )
    requires_orders = True
    cost = 40
    lookup_max_pages = DEFAULT_MAX_PAGES

    def selection(self, config: FilterConfig) -> ProductSelection | None:
        items = frozenset(self.raw_value(config) or ())
        return ProductSelection(items=items) if items else None

    async def resolve(
        self, selection: ProductSelection, client: AdminGraphQL | None
    ) -> ProductSelection:
        """Look up product ids for items naming products or collections.

        Lookups run one after another. Without a client the selection still
        matches on titles and types.
        """
        if client is None:
            return selection

        product_ids = await get_product_ids_by_titles(
            client, selection.items, max_pages=self.lookup_max_pages
        )
        collection_ids = await get_collection_ids_by_titles(
            client, selection.items, max_pages=self.lookup_max_pages
        )
        if collection_ids:
            product_ids |= await get_collection_product_ids(
                client, collection_ids, max_pages=self.lookup_max_pages
            )
        logger.debug(
            "Resolved %d product selection items to %d product ids (%d collections)",
            len(selection.items),
            len(product_ids),
            len(collection_ids),
        )
        return replace(selection, product_ids=selection.product_ids | frozenset(product_ids))

    def matches(self, record: CandidateRecord, selection: ProductSelection) -> bool:
        purchased = purchased_products(record)
        if selection.product_ids & purchased.ids:
            return True
        return bool(
            selection.items & purchased.ids
            or selection.items & purchased.titles
            or selection.items & purchased.types
        )
