"""
Public facade for the Enzona payment API client.

The most useful pieces are re-exported so integrators can
``from enzona_payments import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    AuthError,
    Cancellation,
    CancelledError,
    ConfigError,
    DecodeError,
    EnzonaConfig,
    EnzonaError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    PaymentClient,
    RateLimitedError,
    ServerError,
    TimeoutError,
    UnknownStatusError,
    ValidationError,
    load_config,
)
from .core.models import (
    Amount,
    AmountDetails,
    CancelPaymentResponse,
    CheckoutResponse,
    ConfirmPaymentRequest,
    CreateClaimRequest,
    CreateClaimResponse,
    CreatePaymentOrderRequest,
    CreatePaymentRequest,
    CreateReceiveCodeRequest,
    Item,
    Link,
    PayProductRequest,
    PaymentDetails,
    Refund,
    RefundAmount,
    RefundDetails,
    RefundPaymentRequest,
    RefundsList,
    ShopAmount,
    ShopItem,
)

__all__ = (
    "Amount",
    "AmountDetails",
    "AuthError",
    "CancelPaymentResponse",
    "Cancellation",
    "CancelledError",
    "CheckoutResponse",
    "ConfigError",
    "ConfirmPaymentRequest",
    "CreateClaimRequest",
    "CreateClaimResponse",
    "CreatePaymentOrderRequest",
    "CreatePaymentRequest",
    "CreateReceiveCodeRequest",
    "DecodeError",
    "EnzonaConfig",
    "EnzonaError",
    "ErrorKind",
    "Item",
    "Link",
    "NetworkError",
    "NotFoundError",
    "PayProductRequest",
    "PaymentClient",
    "PaymentDetails",
    "RateLimitedError",
    "Refund",
    "RefundAmount",
    "RefundDetails",
    "RefundPaymentRequest",
    "RefundsList",
    "ServerError",
    "ShopAmount",
    "ShopItem",
    "TimeoutError",
    "UnknownStatusError",
    "ValidationError",
    "create_client",
    "load_config",
)
