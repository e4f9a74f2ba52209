import csv
import logging
import os
import sys
from typing import List, Optional

from engine import PaymentsEngine
from writer import write_accounts

LOG_LEVEL_ENV = "PAYMENTS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING

logger = logging.getLogger(__name__)


def resolve_log_level(value: Optional[str]) -> int:
    """Map a level name like "info" to its logging constant, falling back to WARNING."""
    if not value:
        return DEFAULT_LOG_LEVEL
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def configure_logging() -> None:
    logging.basicConfig(
        level=resolve_log_level(os.environ.get(LOG_LEVEL_ENV)),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        return 1

    filepath = args[0]
    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(filepath)
    except (OSError, csv.Error) as e:
        logger.error(f"Cannot read input file {filepath}: {e}")
        return 1

    write_accounts(sys.stdout, accounts)
    return 0


def run() -> None:
    configure_logging()
    sys.exit(main())


if __name__ == "__main__":
    run()
