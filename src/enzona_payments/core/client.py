"""
HTTP client for the Enzona payment API.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from . import endpoints
from .auth import TOKEN_URL, Credentials, TokenProvider
from .config import EnzonaConfig
from .executor import API_BASE_URL, Cancellation, RequestExecutor
from .models import (
    CancelPaymentResponse,
    CheckoutResponse,
    ConfirmPaymentRequest,
    CreateClaimRequest,
    CreateClaimResponse,
    CreatePaymentOrderRequest,
    CreatePaymentRequest,
    CreateReceiveCodeRequest,
    PayProductRequest,
    PaymentDetails,
    RefundDetails,
    RefundPaymentRequest,
    RefundsList,
)

__all__ = ["PaymentClient"]


class PaymentClient:
    """
    Typed operations over the Enzona payment API.

    The client owns its ``requests.Session`` (and closes it in :meth:`close`)
    unless one is passed in. One instance can be shared between threads.
    """

    def __init__(
        self,
        config: EnzonaConfig,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = API_BASE_URL,
        token_url: str = TOKEN_URL,
    ) -> None:
        self.config = config
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.tokens = TokenProvider(
            Credentials(config.client_id, config.client_secret),
            self.session,
            timeout=config.timeout_seconds,
            default_lifetime=config.token_lifetime_seconds,
            expiry_margin=config.expiry_margin_seconds,
            token_url=token_url,
        )
        self.executor = RequestExecutor(
            self.session,
            self.tokens,
            timeout=config.timeout_seconds,
            base_url=base_url,
        )

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "PaymentClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _call(
        self,
        name: str,
        path_params: Optional[Dict[str, Any]] = None,
        query_params: Optional[Dict[str, Any]] = None,
        body: Any = None,
        cancellation: Optional[Cancellation] = None,
    ) -> Any:
        return self.executor.invoke(
            endpoints.get(name),
            path_params,
            query_params,
            body,
            cancellation=cancellation,
        )

    def access_token(self) -> str:
        """Return a currently valid bearer token, exchanging credentials if needed."""
        return self.tokens.get_token().value

    # Payments

    def create_payment(
        self, request: CreatePaymentRequest, *, cancellation: Optional[Cancellation] = None
    ) -> PaymentDetails:
        return self._call("create_payment", body=request, cancellation=cancellation)

    def confirm_payment(
        self,
        transaction_uuid: str,
        request: ConfirmPaymentRequest,
        *,
        cancellation: Optional[Cancellation] = None,
    ) -> PaymentDetails:
        return self._call(
            "confirm_payment",
            {"transactionUuid": transaction_uuid},
            body=request,
            cancellation=cancellation,
        )

    def complete_payment(
        self, transaction_uuid: str, *, cancellation: Optional[Cancellation] = None
    ) -> PaymentDetails:
        return self._call(
            "complete_payment", {"transactionUuid": transaction_uuid}, cancellation=cancellation
        )

    def cancel_payment(
        self, transaction_uuid: str, *, cancellation: Optional[Cancellation] = None
    ) -> CancelPaymentResponse:
        return self._call(
            "cancel_payment", {"transactionUuid": transaction_uuid}, cancellation=cancellation
        )

    def get_payment_details(
        self, transaction_uuid: str, *, cancellation: Optional[Cancellation] = None
    ) -> PaymentDetails:
        return self._call(
            "get_payment_details", {"transactionUuid": transaction_uuid}, cancellation=cancellation
        )

    def list_payments(
        self,
        *,
        merchant_uuid: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        merchant_op_filter: Optional[str] = None,
        enzona_op_filter: Optional[str] = None,
        status_filter: Optional[str] = None,
        start_date_filter: Optional[str] = None,
        end_date_filter: Optional[str] = None,
        order_filter: Optional[str] = None,
        cancellation: Optional[Cancellation] = None,
    ) -> Dict[str, Any]:
        """List payments; the listing is returned as decoded JSON."""
        return self._call(
            "list_payments",
            query_params={
                "merchant_uuid": merchant_uuid,
                "limit": limit,
                "offset": offset,
                "merchant_op_filter": merchant_op_filter,
                "enzona_op_filter": enzona_op_filter,
                "status_filter": status_filter,
                "start_date_filter": start_date_filter,
                "end_date_filter": end_date_filter,
                "order_filter": order_filter,
            },
            cancellation=cancellation,
        )

    def checkout(
        self, uuid: str, *, cancellation: Optional[Cancellation] = None
    ) -> CheckoutResponse:
        return self._call("checkout", {"uuid": uuid}, cancellation=cancellation)

    def pay_product(
        self, request: PayProductRequest, *, cancellation: Optional[Cancellation] = None
    ) -> Dict[str, Any]:
        return self._call("pay_product", body=request, cancellation=cancellation)

    def create_payment_order(
        self, request: CreatePaymentOrderRequest, *, cancellation: Optional[Cancellation] = None
    ) -> PaymentDetails:
        return self._call("create_payment_order", body=request, cancellation=cancellation)

    def create_receive_code(
        self, request: CreateReceiveCodeRequest, *, cancellation: Optional[Cancellation] = None
    ) -> Dict[str, Any]:
        return self._call("create_receive_code", body=request, cancellation=cancellation)

    # Refunds

    def refund_payment(
        self,
        transaction_uuid: str,
        request: RefundPaymentRequest,
        *,
        cancellation: Optional[Cancellation] = None,
    ) -> RefundDetails:
        return self._call(
            "refund_payment",
            {"transactionUuid": transaction_uuid},
            body=request,
            cancellation=cancellation,
        )

    def get_refund_details(
        self, transaction_uuid: str, *, cancellation: Optional[Cancellation] = None
    ) -> RefundDetails:
        return self._call(
            "get_refund_details", {"transactionUuid": transaction_uuid}, cancellation=cancellation
        )

    def list_refunds(
        self,
        *,
        merchant_uuid: Optional[str] = None,
        transaction_uuid: Optional[str] = None,
        commerce_refund_id: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        status_filter: Optional[str] = None,
        start_date_filter: Optional[str] = None,
        end_date_filter: Optional[str] = None,
        order_filter: Optional[str] = None,
        cancellation: Optional[Cancellation] = None,
    ) -> RefundsList:
        return self._call(
            "list_refunds",
            query_params={
                "merchant_uuid": merchant_uuid,
                "transaction_uuid": transaction_uuid,
                "commerce_refund_id": commerce_refund_id,
                "limit": limit,
                "offset": offset,
                "status_filter": status_filter,
                "start_date_filter": start_date_filter,
                "end_date_filter": end_date_filter,
                "order_filter": order_filter,
            },
            cancellation=cancellation,
        )

    def list_payment_refunds(
        self,
        transaction_uuid: str,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        status_filter: Optional[str] = None,
        start_date_filter: Optional[str] = None,
        end_date_filter: Optional[str] = None,
        order_filter: Optional[str] = None,
        cancellation: Optional[Cancellation] = None,
    ) -> RefundsList:
        return self._call(
            "list_payment_refunds",
            {"transactionUuid": transaction_uuid},
            {
                "limit": limit,
                "offset": offset,
                "status_filter": status_filter,
                "start_date_filter": start_date_filter,
                "end_date_filter": end_date_filter,
                "order_filter": order_filter,
            },
            cancellation=cancellation,
        )

    # Claims

    def create_claim(
        self, request: CreateClaimRequest, *, cancellation: Optional[Cancellation] = None
    ) -> CreateClaimResponse:
        return self._call("create_claim", body=request, cancellation=cancellation)
