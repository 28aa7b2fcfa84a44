from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from revsync.app import enrich_service_metadata, reconcile_revisions
from revsync.config import ConfigurationError, configure_logging, get_reconciliation_config
from revsync.config.reconciliation import ReconciliationConfig
from revsync.domain.errors import DiscoveryError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_PARTIAL_FAILURE = 3


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise microservice revisions")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Record newly published image tags of all tracked services",
    )
    reconcile.add_argument(
        "--namespace",
        type=str,
        help="Registry namespace the services are published under (defaults to config)",
    )
    reconcile.add_argument(
        "--page-size",
        type=int,
        help="Number of most recent tags to request per service (defaults to config)",
    )
    reconcile.add_argument(
        "--max-concurrency",
        type=int,
        help="Maximum number of concurrent registry and store requests (defaults to config)",
    )
    reconcile.add_argument(
        "--strict",
        action="store_true",
        help=f"Exit with status {EXIT_PARTIAL_FAILURE} when any service or version failed",
    )

    subparsers.add_parser(
        "metadata",
        help="Refresh commands and compose snippets of all tracked services",
    )

    return parser.parse_args(list(argv))


def _build_config(args: argparse.Namespace) -> ReconciliationConfig:
    base = get_reconciliation_config()
    return ReconciliationConfig(
        namespace=args.namespace if args.namespace is not None else base.namespace,
        page_size=args.page_size if args.page_size is not None else base.page_size,
        page=base.page,
        max_concurrency=(
            args.max_concurrency if args.max_concurrency is not None else base.max_concurrency
        ),
        revision_base_uri=base.revision_base_uri,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        config = _build_config(parsed_args) if parsed_args.command == "reconcile" else None
    except ConfigurationError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            result = reconcile_revisions(config=config)
            log.info("Reconciliation summary: %s", result.summary())
            for failure in result.errors:
                log.warning("%s", failure.describe())
            if parsed_args.strict and not result.succeeded:
                sys.exit(EXIT_PARTIAL_FAILURE)
        elif parsed_args.command == "metadata":
            enrichment = enrich_service_metadata()
            for error in enrichment.errors:
                log.warning("%s", error)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except DiscoveryError:
        log.exception("Could not discover tracked services, nothing was written")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
