"""
Command-line interface for exercising the Enzona payment API.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, Iterable, Sequence, Tuple

from .api import ConfigError, create_client, load_config
from .core import endpoints
from .core.errors import EnzonaError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _as_json(value: Any) -> str:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    return json.dumps(value, indent=2, sort_keys=True, default=str)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="enzona-payments",
        description="Call the Enzona payment API with client credentials",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing ENZONA_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("token", help="Check the credentials by requesting an access token")
    commands.add_parser("endpoints", help="Print the operations known to the client")

    payment = commands.add_parser("payment", help="Show the details of a payment")
    payment.add_argument("transaction_uuid")

    payments = commands.add_parser("payments", help="List payments")
    payments.add_argument("--merchant-uuid")
    payments.add_argument("--limit", type=int)
    payments.add_argument("--offset", type=int)
    payments.add_argument("--status", dest="status_filter")

    refund = commands.add_parser("refund-details", help="Show the details of a refund")
    refund.add_argument("transaction_uuid")
    return parser


def _dispatch(client, args: argparse.Namespace) -> Any:
    if args.command == "token":
        client.access_token()
        return {"authenticated": True}
    if args.command == "payment":
        return client.get_payment_details(args.transaction_uuid)
    if args.command == "payments":
        return client.list_payments(
            merchant_uuid=args.merchant_uuid,
            limit=args.limit,
            offset=args.offset,
            status_filter=args.status_filter,
        )
    if args.command == "refund-details":
        return client.get_refund_details(args.transaction_uuid)
    raise ValueError(f"Unknown command {args.command!r}")


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.command == "endpoints":
        print(_as_json(endpoints.describe()))
        return 0

    overrides = _collect_overrides(args.set or ())
    try:
        config = load_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_client(config=config) as client:
        try:
            result = _dispatch(client, args)
        except EnzonaError as exc:
            logging.error("%s request failed: %s", args.command, exc)
            if exc.raw_body:
                logging.error("Response body: %s", exc.raw_body)
            return 1
        except ValueError as exc:
            logging.error("Invalid %s arguments: %s", args.command, exc)
            return 1

    print(_as_json(result))
    return 0


if __name__ == "__main__":
    sys.exit(run_cli())
