import logging
import threading
from typing import Iterable, Iterator, Optional

from account_ledger import AccountLedger
from csv_records import iter_records
from message_queue import RecordQueue
from models import (
    AccountSummary,
    Chargeback,
    Deposit,
    Dispute,
    ProcessingResult,
    ProcessingStats,
    Record,
    Resolve,
    Withdrawal,
)
from transaction_store import TransactionStore

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Applies transaction records to a ledger strictly in input order.

    Reading the CSV file may happen on a publisher thread feeding a bounded
    queue, but there is only ever one consumer, so the order in which records
    reach the transaction store is the order of the input.
    """

    def __init__(
        self,
        ledger: Optional[AccountLedger] = None,
        store: Optional[TransactionStore] = None,
        prefetch_records: int = 1024,
    ):
        self._ledger = ledger if ledger is not None else AccountLedger()
        self._store = store if store is not None else TransactionStore()
        self._prefetch_records = prefetch_records
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def apply_record(self, record: Record) -> ProcessingResult:
        """Route a single record through the transaction store into the ledger."""
        match record:
            case Deposit():
                result = self._store.apply_deposit(self._ledger, record.transaction_id, record.client_id, record.amount)
            case Withdrawal():
                result = self._store.apply_withdrawal(self._ledger, record.transaction_id, record.client_id, record.amount)
            case Dispute():
                result = self._store.apply_dispute(self._ledger, record.transaction_id, record.client_id)
            case Resolve():
                result = self._store.apply_resolve(self._ledger, record.transaction_id, record.client_id)
            case Chargeback():
                result = self._store.apply_chargeback(self._ledger, record.transaction_id, record.client_id)
            case _:
                raise TypeError(f"Unsupported record {record!r}")

        self._stats.record_result(result)
        return result

    def process_records(self, records: Iterable[Record]) -> Iterator[AccountSummary]:
        """Apply records in order and return the final account states."""
        for record in records:
            self.apply_record(record)
        return self.snapshot()

    def process_file(self, filepath: str) -> Iterator[AccountSummary]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing {filepath}")

        if self._prefetch_records > 0:
            self._process_file_threaded(filepath)
        else:
            with open(filepath, "r", encoding="utf-8", newline="") as f:
                for record in iter_records(f, self._stats):
                    self.apply_record(record)

        logger.info(
            f"Processed: {self._stats.processed}, "
            f"Ignored: {self._stats.ignored}, "
            f"Malformed: {self._stats.malformed}"
        )
        return self.snapshot()

    def snapshot(self) -> Iterator[AccountSummary]:
        return self._ledger.snapshot()

    def _process_file_threaded(self, filepath: str) -> None:
        """1 publisher thread decodes the file, the calling thread applies records."""
        queue = RecordQueue(maxsize=self._prefetch_records)
        errors = []

        publisher_thread = threading.Thread(
            target=self._publish_records,
            args=(filepath, queue, errors),
            daemon=True,
        )
        publisher_thread.start()

        try:
            self._consume_records(queue)
        except BaseException:
            queue.cancel()
            raise
        finally:
            publisher_thread.join()

        if errors:
            raise errors[0]

    def _publish_records(self, filepath: str, queue: RecordQueue, errors: list) -> None:
        """Read CSV and publish records to queue. Failures are handed to the consumer."""
        try:
            with open(filepath, "r", encoding="utf-8", newline="") as f:
                for record in iter_records(f, self._stats):
                    if not queue.publish_message(record):
                        logger.info("Record queue cancelled, publisher stopping")
                        return
        except BaseException as e:
            errors.append(e)
        finally:
            queue.shutdown()

    def _consume_records(self, queue: RecordQueue) -> None:
        """Consumer loop: pull from queue and apply, until the publisher is done."""
        while True:
            record = queue.consume_message()
            if record is None:
                if queue.is_shutdown() and queue.is_empty():
                    break
                continue

            self.apply_record(record)
