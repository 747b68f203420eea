#!/usr/bin/env python3
"""Resend list CLI.

Command-line tool for listing a Resend collection with cursor pagination.

Usage:
    list_resource.py /emails                     # First 50 emails
    list_resource.py /contacts --limit 200       # First 200 contacts
    list_resource.py /domains --all              # Every domain (up to ceiling)
    list_resource.py /emails --after EMAIL_ID    # Page forward from an email

Exit codes: 0 success, 1 configuration/API error, 2 invalid arguments,
130 interrupted.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from resend_sync.client import ResendClient, ResendClientError
from resend_sync.config import get_config
from resend_sync.list_options import InvalidArgumentError, ListOptions
from resend_sync.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List a Resend collection across pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s /emails                  # First 50 emails
  %(prog)s /contacts --limit 200    # First 200 contacts (2 requests, 1s apart)
  %(prog)s /domains --all           # Every domain up to RESEND_RETURN_ALL_CEILING

Configuration:
  Set credentials in .env or the environment:
    RESEND_API_KEY=re_...
    RESEND_REQUEST_INTERVAL_MS=1000
        """,
    )
    parser.add_argument("endpoint", help="List endpoint path (e.g., /emails)")
    parser.add_argument(
        "--all",
        dest="return_all",
        action="store_true",
        help="Return every item up to the configured ceiling",
    )
    parser.add_argument(
        "--limit",
        type=int,
        metavar="N",
        help="Number of items to return (ignored with --all)",
    )

    # argparse rejects both cursors before the list options validator runs
    cursor_group = parser.add_mutually_exclusive_group()
    cursor_group.add_argument("--after", metavar="ID", help="Return items after this ID")
    cursor_group.add_argument(
        "--before", metavar="ID", help="Return items before this ID"
    )

    parser.add_argument(
        "--pretty", action="store_true", help="Indent the JSON output"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = get_config()
        configure_logging(config.log_level, config.log_format)
        client = ResendClient.from_config(config)
    except Exception as e:
        print(f"Error: Failed to load configuration: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = asyncio.run(run_list(args, client))
    except KeyboardInterrupt:
        print("\nListing interrupted by user", file=sys.stderr)
        sys.exit(130)
    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except ResendClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2 if args.pretty else None))


async def run_list(args: argparse.Namespace, client: ResendClient) -> dict:
    """Run the paginated list call and close the client.

    Args:
        args: Parsed command-line arguments
        client: ResendClient instance
    """
    endpoint = args.endpoint if args.endpoint.startswith("/") else f"/{args.endpoint}"
    async with client:
        return await client.list_items(
            endpoint,
            ListOptions(after=args.after, before=args.before),
            return_all=args.return_all,
            limit=args.limit,
        )


if __name__ == "__main__":
    main()
