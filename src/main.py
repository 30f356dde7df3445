import csv
import sys
import logging
from typing import List, Optional

from config import Settings, get_settings
from errors import AmountOverflowError
from payments_engine import PaymentsEngine
from report import write_accounts

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format=settings.log_format,
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: payments <input.csv>", file=sys.stderr)
        return 1

    settings = get_settings()
    configure_logging(settings)

    filepath = args[0]
    engine = PaymentsEngine(prefetch_records=settings.prefetch_records)
    try:
        accounts = engine.process_file(filepath)
        write_accounts(sys.stdout, accounts)
    except OSError as e:
        logger.error(f"Cannot read {filepath}: {e}")
        return 1
    except (UnicodeDecodeError, csv.Error) as e:
        logger.error(f"Cannot decode {filepath} as UTF-8 CSV: {e}")
        return 1
    except AmountOverflowError as e:
        logger.critical(f"Fatal amount overflow, no report written: {e}")
        return 2

    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
