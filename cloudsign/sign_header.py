"""
CLI for generating signed Authorization headers.

Reads account credentials from the environment (optionally from a .env
file, see .env.example), signs a Date value and prints the headers to send.
Handy for debugging signature mismatches or for use with curl.

Usage:
    python -m cloudsign.sign_header
    python -m cloudsign.sign_header --manta
    python -m cloudsign.sign_header --date "Thu, 05 Jan 2023 21:31:40 GMT"

Example output:
    Date: Thu, 05 Jan 2023 21:31:40 GMT
    Authorization: Signature keyId="/jdoe/keys/ab:cd:ef",algorithm="rsa-sha256" dGhpcyBpcyBub3Q...
"""

import argparse
import logging
from typing import List, Optional

from dotenv import load_dotenv

from cloudsign.auth.header import create_authorization_header, http_date
from cloudsign.exceptions import SignatureAuthError
from cloudsign.models import Credentials

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Print a signed Authorization header for CloudAPI or Manta",
        epilog='Example: python -m cloudsign.sign_header --manta --date "Thu, 05 Jan 2023 21:31:40 GMT"',
    )
    parser.add_argument(
        "--manta",
        action="store_true",
        help="Sign for Manta instead of CloudAPI",
    )
    parser.add_argument(
        "--date",
        default=None,
        help="Date header value to sign (default: current time)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Sign a Date value and print the Date and Authorization headers.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Load environment variables from .env file
    load_dotenv()

    try:
        credentials = Credentials.from_env()
    except KeyError as e:
        parser.error(f"missing environment variable {e.args[0]}")

    date = args.date or http_date()

    try:
        authorization = create_authorization_header(
            {"Date": date}, credentials, is_manta_request=args.manta
        )
    except SignatureAuthError as e:
        logger.debug("Signing failed", exc_info=True)
        parser.exit(1, f"Error: {e.message}\n")

    print(f"Date: {date}")
    print(f"Authorization: {authorization}")


if __name__ == "__main__":
    main()
