# main.py

"""Entry point for the psref command-line client."""

import argparse
import logging
import sys

from psref.config.logging_config import setup_logging
from psref.config.settings import Settings

logger = logging.getLogger("psref.main")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="psref",
        description="Read-only client for the Lenovo PSREF catalog API.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help=f"API base URL (default: {Settings.DEFAULT_BASE_URL}).",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Attempts per request; -1 retries until success.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Overall deadline in seconds.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Dump raw responses to stderr.",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("products", help="List active products.")
    sub.add_parser("withdrawn", help="List withdrawn products.")
    sub.add_parser("updates", help="Show the latest data version and changes.")
    sub.add_parser("books", help="List reading resources.")

    search = sub.add_parser("search", help="Search by keywords.")
    search.add_argument("keywords")

    product = sub.add_parser("product", help="Show one product.")
    product.add_argument("pid", type=int, nargs="?", default=None)
    product.add_argument(
        "--code", default=None, help="Look up by model code instead."
    )
    product.add_argument("--kw", default=None, help="Filter models by keyword.")
    product.add_argument(
        "--clsf", default=None, help="Sent as the clsf query parameter."
    )
    product.add_argument(
        "--sc", default=None, help="Sent as the sc query parameter."
    )
    product.add_argument(
        "--qt", default=None, help="Sent as the qt query parameter."
    )
    product.add_argument("--page", type=int, default=None)

    model = sub.add_parser("model", help="Show one model.")
    model.add_argument("pid", type=int, nargs="?", default=None)
    model.add_argument("model_code", nargs="?", default=None)
    model.add_argument(
        "--code", default=None, help="Look up by model code only."
    )
    return parser


def _check_args(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> None:
    if args.command == "product" and args.pid is None and not args.code:
        parser.error("product: give a product ID or --code")
    if args.command == "model" and not args.code and (
        args.pid is None or args.model_code is None
    ):
        parser.error("model: give a product ID and model code, or --code")


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run one command and exit with its status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _check_args(parser, args)

    log_file = setup_logging()
    logger.info("psref starting, log file: %s", log_file)

    from psref.cli.runner import run_command

    try:
        exit_code = run_command(args)
    except Exception:
        logger.critical("Fatal error during command run", exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
