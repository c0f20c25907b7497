"""
Declarative descriptions of the Enzona API operations.

Each operation is an :class:`EndpointDescriptor`; adding an operation means
adding a constant here and a thin method on the client.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .models import (
    CancelPaymentResponse,
    CheckoutResponse,
    CreateClaimResponse,
    PaymentDetails,
    RefundDetails,
    RefundsList,
)

__all__ = [
    "ENDPOINTS",
    "EndpointDescriptor",
    "describe",
    "get",
]

_LIST_FILTERS = (
    "limit",
    "offset",
    "status_filter",
    "start_date_filter",
    "end_date_filter",
    "order_filter",
)


def _placeholders(template: str) -> Tuple[str, ...]:
    return tuple(
        name for _, name, _, _ in string.Formatter().parse(template) if name is not None
    )


@dataclass(frozen=True)
class EndpointDescriptor:
    name: str
    http_method: str
    path_template: str
    query_params: Tuple[str, ...] = ()
    has_body: bool = False
    # ``None`` means the raw decoded JSON is returned.
    response_shape: Optional[type] = None

    def __post_init__(self) -> None:
        if self.http_method not in ("GET", "POST"):
            raise ValueError(f"Unsupported HTTP method {self.http_method!r} for {self.name}")
        if any(not name for name in self.path_params):
            raise ValueError(f"Path template for {self.name} has an unnamed placeholder")

    @property
    def path_params(self) -> Tuple[str, ...]:
        return _placeholders(self.path_template)


_DESCRIPTORS = (
    EndpointDescriptor(
        name="create_payment",
        http_method="POST",
        path_template="payments",
        has_body=True,
        response_shape=PaymentDetails,
    ),
    EndpointDescriptor(
        name="confirm_payment",
        http_method="POST",
        path_template="payments/{transactionUuid}/confirm",
        has_body=True,
        response_shape=PaymentDetails,
    ),
    EndpointDescriptor(
        name="complete_payment",
        http_method="POST",
        path_template="payments/{transactionUuid}/complete",
        response_shape=PaymentDetails,
    ),
    EndpointDescriptor(
        name="cancel_payment",
        http_method="POST",
        path_template="payments/{transactionUuid}/cancel",
        response_shape=CancelPaymentResponse,
    ),
    EndpointDescriptor(
        name="get_payment_details",
        http_method="GET",
        path_template="payments/{transactionUuid}",
        response_shape=PaymentDetails,
    ),
    EndpointDescriptor(
        name="list_payments",
        http_method="GET",
        path_template="payments",
        query_params=("merchant_uuid", "merchant_op_filter", "enzona_op_filter") + _LIST_FILTERS,
    ),
    EndpointDescriptor(
        name="checkout",
        http_method="GET",
        path_template="payments/checkout/{uuid}",
        response_shape=CheckoutResponse,
    ),
    EndpointDescriptor(
        name="refund_payment",
        http_method="POST",
        path_template="payments/{transactionUuid}/refund",
        has_body=True,
        response_shape=RefundDetails,
    ),
    EndpointDescriptor(
        name="get_refund_details",
        http_method="GET",
        path_template="payments/refund/{transactionUuid}",
        response_shape=RefundDetails,
    ),
    EndpointDescriptor(
        name="list_refunds",
        http_method="GET",
        path_template="payments/refunds",
        query_params=("merchant_uuid", "transaction_uuid", "commerce_refund_id") + _LIST_FILTERS,
        response_shape=RefundsList,
    ),
    EndpointDescriptor(
        name="list_payment_refunds",
        http_method="GET",
        path_template="payments/{transactionUuid}/refunds",
        query_params=_LIST_FILTERS,
        response_shape=RefundsList,
    ),
    EndpointDescriptor(
        name="create_receive_code",
        http_method="POST",
        path_template="payments/vendor/code",
        has_body=True,
    ),
    EndpointDescriptor(
        name="pay_product",
        http_method="POST",
        path_template="shop",
        has_body=True,
    ),
    EndpointDescriptor(
        name="create_payment_order",
        http_method="POST",
        path_template="payment-orders",
        has_body=True,
        response_shape=PaymentDetails,
    ),
    EndpointDescriptor(
        name="create_claim",
        http_method="POST",
        path_template="payment/createClaims",
        has_body=True,
        response_shape=CreateClaimResponse,
    ),
)

ENDPOINTS: Dict[str, EndpointDescriptor] = {item.name: item for item in _DESCRIPTORS}


def get(name: str) -> EndpointDescriptor:
    try:
        return ENDPOINTS[name]
    except KeyError as exc:
        raise KeyError(f"Unknown endpoint '{name}'") from exc


def describe() -> Dict[str, Any]:
    """Summarise the endpoint table (used by the CLI's ``endpoints`` command)."""
    return {
        name: {
            "method": item.http_method,
            "path": item.path_template,
            "query": list(item.query_params),
            "body": item.has_body,
        }
        for name, item in ENDPOINTS.items()
    }
