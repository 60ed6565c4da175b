"""Command line entry point: replay a CSV file of transactions and print balances.

Example::

    naive-ledger transactions.csv > accounts.csv
    NAIVE_LEDGER_SOURCE=transactions.csv python -m naive_ledger --format json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from .config import Settings
from .ledger import Ledger
from .records import dump_accounts_json, read_transactions, write_accounts

logger = logging.getLogger("naive_ledger")


def parse_args(
    argv: Sequence[str] | None = None, settings: Settings | None = None
) -> argparse.Namespace:
    settings = settings or Settings()
    parser = argparse.ArgumentParser(
        prog="naive-ledger",
        description="Replay client transactions from a CSV file and print account balances.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        type=Path,
        default=settings.source,
        help="the source CSV file to be parsed (env: NAIVE_LEDGER_SOURCE or NAIVE_PARSER_SOURCE)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="DEBUG, INFO, WARNING, ERROR (env: NAIVE_LEDGER_LOG_LEVEL)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["csv", "json"],
        default=settings.output_format,
        help="output format (env: NAIVE_LEDGER_OUTPUT_FORMAT)",
    )
    args = parser.parse_args(argv)
    if args.source is None:
        parser.error("the source CSV file is required")
    if not args.source.is_file():
        parser.error(f"'{args.source}' is not a readable file")
    return args


def configure_logging(level: str) -> None:
    """Configure logging to standard error."""
    lvl = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(level=lvl, format="%(levelname)s: %(message)s", stream=sys.stderr)


def run(
    source: Path, output_format: str = "csv", stream: TextIO | None = None
) -> Ledger:
    """Replay transactions from *source* and write final balances to *stream*."""
    stream = stream or sys.stdout
    logger.info("starting naive ledger for %s", source)
    with open(source, newline="", encoding="utf-8", errors="replace") as file:
        ledger = Ledger().apply_many(read_transactions(file))
    accounts = ledger.export()
    if output_format == "json":
        dump_accounts_json(accounts, stream)
    else:
        write_accounts(accounts, stream)
    logger.info("wrote %d accounts", len(accounts))
    return ledger


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    try:
        run(args.source, args.output_format)
    except OSError as e:
        logger.error("cannot read %s: %s", args.source, e)
        return 1
    return 0
