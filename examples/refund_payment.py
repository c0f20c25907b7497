"""
Minimal script that uses the public API to refund a payment.
"""

from __future__ import annotations

import argparse
import logging
import sys

from enzona_payments import (
    ConfigError,
    EnzonaError,
    RefundAmount,
    RefundPaymentRequest,
    create_client,
    load_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Refund an Enzona payment using the SDK API")
    parser.add_argument("transaction_uuid", help="UUID of the payment to refund")
    parser.add_argument("--amount", help="Partial refund amount (full refund when omitted)")
    parser.add_argument("--description", help="Reason shown on the refund")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing ENZONA_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_config(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    request = RefundPaymentRequest(
        amount=RefundAmount(total=args.amount) if args.amount else None,
        description=args.description,
    )

    with create_client(config=config) as client:
        try:
            payment = client.get_payment_details(args.transaction_uuid)
            logging.info("Payment %s is in status %s", payment.transaction_uuid, payment.status_denom)
            refund = client.refund_payment(args.transaction_uuid, request)
        except EnzonaError as exc:
            logging.error("Refund failed: %s", exc)
            if exc.retryable:
                logging.info("The failure looks transient; retrying later may succeed.")
            return 1

    logging.info("Refund %s created with state %s", refund.uuid, refund.state)
    return 0


if __name__ == "__main__":
    sys.exit(main())
