"""
Request and response records for the Enzona payment API.

These are plain data holders. Python attribute names are snake_case; the JSON
keys are camelCase (see :mod:`enzona_payments.core.codec`). Every field is
optional so partial responses decode cleanly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .codec import json_field

__all__ = [
    "Amount",
    "AmountDetails",
    "CancelPaymentResponse",
    "CheckoutResponse",
    "ConfirmPaymentRequest",
    "CreateClaimRequest",
    "CreateClaimResponse",
    "CreatePaymentOrderRequest",
    "CreatePaymentRequest",
    "CreateReceiveCodeRequest",
    "Item",
    "Link",
    "PayProductRequest",
    "PaymentDetails",
    "Refund",
    "RefundAmount",
    "RefundDetails",
    "RefundPaymentRequest",
    "RefundsList",
    "ShopAmount",
    "ShopItem",
]


@dataclass(frozen=True)
class Link:
    method: Optional[str] = None
    rel: Optional[str] = None
    href: Optional[str] = None


@dataclass(frozen=True)
class AmountDetails:
    shipping: Optional[float] = None
    discount: Optional[float] = None
    tax: Optional[float] = None
    tip: Optional[float] = None
    refunded: Optional[float] = None
    total_refunded: Optional[float] = None


@dataclass(frozen=True)
class Amount:
    total: Optional[float] = None
    details: Optional[AmountDetails] = None


@dataclass(frozen=True)
class Item:
    quantity: Optional[int] = None
    price: Optional[float] = None
    name: Optional[str] = None
    description: Optional[str] = None
    tax: Optional[float] = None


# Requests


@dataclass(frozen=True)
class CreatePaymentRequest:
    merchant_uuid: Optional[str] = None
    merchant_op_id: Optional[int] = None
    amount: Optional[Amount] = None
    description: Optional[str] = None
    currency: Optional[str] = None
    items: Optional[List[Item]] = None
    invoice_number: Optional[int] = None
    terminal_id: Optional[int] = None
    return_url: Optional[str] = None
    cancel_url: Optional[str] = None
    buyer_identity_code: Optional[str] = None


@dataclass(frozen=True)
class ConfirmPaymentRequest:
    funding_source_uuid: Optional[str] = None
    payment_password: Optional[str] = field(default=None, repr=False)
    fingerprint: Optional[str] = None


@dataclass(frozen=True)
class RefundAmount:
    total: Optional[str] = None


@dataclass(frozen=True)
class RefundPaymentRequest:
    amount: Optional[RefundAmount] = None
    commerce_refund_id: Optional[str] = None
    username: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class CreateReceiveCodeRequest:
    amount: Optional[str] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    funding_source_uuid: Optional[str] = None
    payment_password: Optional[str] = field(default=None, repr=False)
    fingerprint: Optional[str] = None
    vendor_identity_code: Optional[str] = None
    cash_advance: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class ShopAmount:
    total: Optional[float] = None
    shipping: Optional[float] = None


@dataclass(frozen=True)
class ShopItem:
    quantity: Optional[int] = None
    price: Optional[float] = None
    product_id: Optional[str] = None
    product_name: Optional[str] = None


@dataclass(frozen=True)
class PayProductRequest:
    cart_id: Optional[str] = None
    amount: Optional[ShopAmount] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    merchant_uuid: Optional[str] = None
    id_shop: Optional[str] = None
    funding_source_uuid: Optional[str] = None
    payment_password: Optional[str] = field(default=None, repr=False)
    fingerprint: Optional[str] = None
    items: Optional[List[ShopItem]] = None


@dataclass(frozen=True)
class CreatePaymentOrderRequest:
    merchant_op_id: Optional[int] = None
    amount: Optional[float] = None
    description: Optional[str] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class CreateClaimRequest:
    """Claim form; the API expects its own (Spanish) field names verbatim."""

    type_claim: Optional[str] = None
    claim_type: Optional[str] = json_field("V_tipo_reclamacion")
    reason: Optional[str] = json_field("V_motivo")
    operation_number: Optional[str] = json_field("no_operacionEZ")
    customer_phone: Optional[str] = json_field("telefono_cliente_afec")
    customer_email: Optional[str] = json_field("correo_cliente_afec")
    affected_customer: Optional[str] = json_field("cliente_afectado")
    merchant_operation_id: Optional[str] = json_field("id_op_comercio")
    merchant_name: Optional[str] = json_field("nombre_comercio")
    customer_id: Optional[str] = json_field("id_cliente")
    commercial_office: Optional[str] = json_field("oficina_comercial")
    invoice_number: Optional[str] = json_field("no_factura")


# Responses


@dataclass(frozen=True)
class PaymentDetails:
    transaction_uuid: Optional[str] = None
    status_code: Optional[str] = None
    status_denom: Optional[str] = None
    amount: Optional[Amount] = None
    currency: Optional[str] = None
    description: Optional[str] = None
    merchant_uuid: Optional[str] = None
    merchant_op_id: Optional[Union[int, str]] = None
    invoice_number: Optional[Union[int, float, str]] = None
    terminal_id: Optional[Union[int, float, str]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = json_field("updateAt")
    items: List[Item] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)

    def link(self, rel: str) -> Optional[str]:
        """Return the ``href`` of the first link with relation ``rel``."""
        for item in self.links:
            if item.rel == rel:
                return item.href
        return None


@dataclass(frozen=True)
class CancelPaymentResponse:
    transaction_uuid: Optional[str] = None
    status_code: Optional[str] = None
    status_denom: Optional[str] = None
    transaction_denom: Optional[str] = None
    updated_at: Optional[str] = json_field("updateAt")


@dataclass(frozen=True)
class CheckoutResponse:
    message: Optional[str] = None


@dataclass(frozen=True)
class RefundDetails:
    uuid: Optional[str] = None
    parent_payment_uuid: Optional[str] = None
    status_code: Optional[str] = None
    transaction_status_code: Optional[str] = None
    transaction_denom: Optional[str] = None
    state: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    links: List[Link] = field(default_factory=list)


@dataclass(frozen=True)
class Refund:
    transaction_uuid: Optional[str] = None
    transaction_code: Optional[int] = None
    transaction_signature: Optional[str] = None
    transaction_denom: Optional[str] = None
    transaction_description: Optional[str] = None
    transaction_created_at: Optional[str] = None
    transaction_updated_at: Optional[str] = None
    status_code: Optional[str] = None
    status_denom: Optional[str] = None
    amount: Optional[Amount] = None
    currency: Optional[str] = None
    invoice_number: Optional[Union[int, float, str]] = None
    terminal_id: Optional[Union[int, float, str]] = None
    username: Optional[str] = None
    name: Optional[str] = None
    lastname: Optional[str] = None
    avatar: Optional[str] = None
    items: List[Item] = field(default_factory=list)


@dataclass(frozen=True)
class RefundsList:
    refunds: List[Refund] = field(default_factory=list)


@dataclass(frozen=True)
class CreateClaimResponse:
    status_code: Optional[str] = None
    message: Optional[str] = None
