"""
Public, high-level helpers for building an Enzona client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import PaymentClient
from .core.config import ConfigError, EnzonaConfig, load_config

__all__ = [
    "ConfigError",
    "EnzonaConfig",
    "PaymentClient",
    "create_client",
    "load_config",
]


def create_client(
    *,
    config: Optional[EnzonaConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
) -> PaymentClient:
    """
    Construct a :class:`PaymentClient`.

    Callers can either supply a ready-made :class:`EnzonaConfig` or let the
    helper assemble one from environment data and keyword arguments.
    """
    if config is not None:
        extras = (overrides, base, client_id, client_secret, timeout_seconds)
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built EnzonaConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            client_id=client_id,
            client_secret=client_secret,
            timeout_seconds=timeout_seconds,
        )
    return PaymentClient(cfg, session=session)
