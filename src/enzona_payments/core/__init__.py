"""
Core primitives: authentication, request execution and error classification.
"""

from .auth import Credentials, Token, TokenProvider
from .client import PaymentClient
from .config import ConfigError, EnzonaConfig, load_config
from .endpoints import ENDPOINTS, EndpointDescriptor
from .environment import build_environment
from .errors import (
    AuthError,
    CancelledError,
    DecodeError,
    EnzonaError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    TimeoutError,
    UnknownStatusError,
    ValidationError,
    classify,
)
from .executor import Cancellation, RequestContext, RequestExecutor

__all__ = [
    "AuthError",
    "Cancellation",
    "CancelledError",
    "ConfigError",
    "Credentials",
    "DecodeError",
    "ENDPOINTS",
    "EndpointDescriptor",
    "EnzonaConfig",
    "EnzonaError",
    "ErrorKind",
    "NetworkError",
    "NotFoundError",
    "PaymentClient",
    "RateLimitedError",
    "RequestContext",
    "RequestExecutor",
    "ServerError",
    "TimeoutError",
    "Token",
    "TokenProvider",
    "UnknownStatusError",
    "ValidationError",
    "build_environment",
    "classify",
    "load_config",
]
