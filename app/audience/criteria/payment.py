"""Payment method criterion."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from app.audience.criteria.base import (
    CandidateRecord,
    Criterion,
    CriterionId,
    iter_orders,
    recent_orders,
)
from app.schemas.audience import FilterConfig

PREPAID = "Prepaid"
CASH_ON_DELIVERY = "Cash on Delivery"

PREPAID_STATUSES = frozenset({"PAID"})
COD_STATUSES = frozenset({"PENDING", "AUTHORIZED", "PARTIALLY_PAID"})

# Display name -> Shopify payment gateway names
GATEWAY_ALIASES = MappingProxyType(
    {
        "Credit Card": (
            "shopify_payments",
            "stripe",
            "authorize_net",
            "braintree",
            "first_data",
            "cybersource",
            "worldpay",
            "adyen",
        ),
        "PayPal": ("paypal", "paypal_express"),
        "Apple Pay": ("apple_pay", "shopify_payments"),
        "Google Pay": ("google_pay", "shopify_payments"),
        "Shop Pay": ("shopify_payments",),
        "Amazon Pay": ("amazon_payments",),
        "Bank Transfer": ("manual", "bank_transfer"),
        "Gift Card": ("gift_card",),
        "Store Credit": ("store_credit",),
        "Klarna": ("klarna",),
        "Afterpay": ("afterpay",),
        "Affirm": ("affirm",),
        "Sezzle": ("sezzle",),
    }
)


def gateway_names_for(methods: tuple[str, ...]) -> frozenset[str]:
    """Lower-cased gateway names for display methods; unknown names map to themselves."""
    gateways: set[str] = set()
    for method in methods:
        gateways.update(g.lower() for g in GATEWAY_ALIASES.get(method, (method,)))
    return frozenset(gateways)


@dataclass(frozen=True)
class PaymentSelection:
    gateways: frozenset[str]
    financial_statuses: frozenset[str]


class PaymentCriterion(Criterion[PaymentSelection]):
    id = CriterionId.payment
    config_field = "payment"
    fragment = (recent_orders("paymentGatewayNames", "displayFinancialStatus"),)
    requires_orders = True
    cost = 30

    def selection(self, config: FilterConfig) -> PaymentSelection | None:
        methods = tuple(dict.fromkeys(self.raw_value(config) or ()))
        if not methods:
            return None
        statuses: set[str] = set()
        if PREPAID in methods:
            statuses |= PREPAID_STATUSES
        if CASH_ON_DELIVERY in methods:
            statuses |= COD_STATUSES
        gateway_methods = tuple(m for m in methods if m not in (PREPAID, CASH_ON_DELIVERY))
        return PaymentSelection(
            gateways=gateway_names_for(gateway_methods),
            financial_statuses=frozenset(statuses),
        )

    def matches(self, record: CandidateRecord, selection: PaymentSelection) -> bool:
        for order in iter_orders(record):
            status = (order.get("displayFinancialStatus") or "").upper()
            if status in selection.financial_statuses:
                return True
            gateways = order.get("paymentGatewayNames") or []
            if any(str(g).lower() in selection.gateways for g in gateways):
                return True
        return False
