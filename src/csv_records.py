import csv
import logging
from typing import Dict, Iterator, Optional, TextIO

from amounts import ZERO, parse_amount
from errors import RecordParseError
from models import (
    CLIENT_ID_MAX,
    RECORD_TYPES,
    TRANSACTION_ID_MAX,
    Deposit,
    ProcessingStats,
    Record,
    TransactionType,
    Withdrawal,
)

logger = logging.getLogger(__name__)


def _parse_id(value: str, field: str, maximum: int) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise RecordParseError(f"Invalid {field} {value!r}") from None
    if not 0 <= parsed <= maximum:
        raise RecordParseError(f"{field} {parsed} out of range 0..{maximum}")
    return parsed


def parse_row(row: Dict[Optional[str], Optional[str]]) -> Record:
    """
    Parse a CSV row into a Record.

    Raises RecordParseError for malformed rows. An amount given on a dispute,
    resolve or chargeback row is dropped.
    """
    # DictReader uses a None key for surplus columns and None values for missing ones
    normalized = {k.strip(): (v or "").strip() for k, v in row.items() if isinstance(k, str)}

    try:
        transaction_type = TransactionType(normalized["type"].lower())
        client_id = _parse_id(normalized["client"], "client", CLIENT_ID_MAX)
        transaction_id = _parse_id(normalized["tx"], "tx", TRANSACTION_ID_MAX)
    except KeyError as e:
        raise RecordParseError(f"Missing column {e}") from None
    except ValueError:
        raise RecordParseError(f"Unknown transaction type {normalized['type']!r}") from None

    record_class = RECORD_TYPES[transaction_type]
    if record_class not in (Deposit, Withdrawal):
        return record_class(client_id=client_id, transaction_id=transaction_id)

    amount_str = normalized.get("amount", "")
    if not amount_str:
        raise RecordParseError(f"No amount for {transaction_type.value} tx {transaction_id}")

    amount = parse_amount(amount_str)
    if amount <= ZERO:
        raise RecordParseError(f"Non-positive amount {amount_str} for {transaction_type.value} tx {transaction_id}")

    return record_class(client_id=client_id, transaction_id=transaction_id, amount=amount)


def iter_records(source: TextIO, stats: Optional[ProcessingStats] = None) -> Iterator[Record]:
    """
    Lazily yield records from a CSV stream with a `type, client, tx, amount` header.
    Malformed rows are logged and skipped, AmountOverflowError propagates.
    """
    reader = csv.DictReader(source)
    for row in reader:
        try:
            yield parse_row(row)
        except RecordParseError as e:
            logger.warning(f"Failed to parse row {reader.line_num}: {e}")
            if stats is not None:
                stats.record_malformed()
