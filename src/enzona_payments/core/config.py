"""
Configuration objects and helpers for the Enzona client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .environment import build_environment

__all__ = [
    "ConfigError",
    "EnzonaConfig",
    "load_config",
]

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_TOKEN_LIFETIME_SECONDS = 3600
DEFAULT_EXPIRY_MARGIN_SECONDS = 30

_PARAMETER_TO_ENV_KEY = {
    "client_id": "ENZONA_CLIENT_ID",
    "client_secret": "ENZONA_CLIENT_SECRET",
    "timeout_seconds": "ENZONA_TIMEOUT_SECONDS",
    "token_lifetime_seconds": "ENZONA_TOKEN_LIFETIME_SECONDS",
    "expiry_margin_seconds": "ENZONA_EXPIRY_MARGIN_SECONDS",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _required(values: Mapping[str, str], key: str) -> str:
    value = (values.get(key) or "").strip()
    if not value:
        raise ConfigError(f"{key} must be provided")
    return value


def _positive_number(values: Mapping[str, str], key: str, default: float) -> float:
    raw = values.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        number = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got '{raw}'") from exc
    if number <= 0:
        raise ConfigError(f"{key} must be greater than zero")
    return number


@dataclass(frozen=True)
class EnzonaConfig:
    client_id: str
    client_secret: str = field(repr=False)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    token_lifetime_seconds: float = DEFAULT_TOKEN_LIFETIME_SECONDS
    expiry_margin_seconds: float = DEFAULT_EXPIRY_MARGIN_SECONDS

    def __post_init__(self) -> None:
        if not self.client_id or not self.client_secret:
            raise ConfigError("Client credentials require client_id and client_secret")
        if self.timeout_seconds <= 0:
            raise ConfigError("timeout_seconds must be greater than zero")
        if self.expiry_margin_seconds < 0:
            raise ConfigError("expiry_margin_seconds must not be negative")

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "EnzonaConfig":
        margin_raw = values.get("ENZONA_EXPIRY_MARGIN_SECONDS")
        try:
            margin = (
                float(margin_raw)
                if margin_raw is not None and margin_raw.strip()
                else DEFAULT_EXPIRY_MARGIN_SECONDS
            )
        except ValueError as exc:
            raise ConfigError(
                f"ENZONA_EXPIRY_MARGIN_SECONDS must be a number, got '{margin_raw}'"
            ) from exc

        return cls(
            client_id=_required(values, "ENZONA_CLIENT_ID"),
            client_secret=_required(values, "ENZONA_CLIENT_SECRET"),
            timeout_seconds=_positive_number(
                values, "ENZONA_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
            ),
            token_lifetime_seconds=_positive_number(
                values, "ENZONA_TOKEN_LIFETIME_SECONDS", DEFAULT_TOKEN_LIFETIME_SECONDS
            ),
            expiry_margin_seconds=margin,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout_seconds: Optional[float | str] = None,
        token_lifetime_seconds: Optional[float | str] = None,
        expiry_margin_seconds: Optional[float | str] = None,
    ) -> "EnzonaConfig":
        parameter_overrides = _collect_parameter_overrides(
            {
                "client_id": client_id,
                "client_secret": client_secret,
                "timeout_seconds": timeout_seconds,
                "token_lifetime_seconds": token_lifetime_seconds,
                "expiry_margin_seconds": expiry_margin_seconds,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        return cls.from_mapping(
            build_environment(env_file=env_file, base=base, overrides=merged_overrides)
        )


def load_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
    token_lifetime_seconds: Optional[float | str] = None,
    expiry_margin_seconds: Optional[float | str] = None,
) -> EnzonaConfig:
    """
    Convenience wrapper that mirrors :meth:`EnzonaConfig.from_env`.

    Credentials can come from environment variables, a ``.env`` file, direct
    keyword arguments, or any combination of the three.
    """
    return EnzonaConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        client_id=client_id,
        client_secret=client_secret,
        timeout_seconds=timeout_seconds,
        token_lifetime_seconds=token_lifetime_seconds,
        expiry_margin_seconds=expiry_margin_seconds,
    )
