import threading
from queue import Queue, Empty, Full
from typing import Optional

from models import Record


class RecordQueue:
    """
    Thread-safe bounded queue between the CSV reader and the applying loop.
    All synchronization is internal - callers never need to lock.
    """

    DEFAULT_TIMEOUT = 0.1

    def __init__(self, maxsize: int = 0):
        self._main_queue: Queue[Record] = Queue(maxsize=maxsize)
        self._shutdown_event = threading.Event()
        self._cancel_event = threading.Event()

    def publish_message(self, message: Record) -> bool:
        """
        Add message to queue, blocking while it is full.
        Returns False if the queue was cancelled before the message got in.
        """
        while not self._cancel_event.is_set():
            try:
                self._main_queue.put(message, timeout=self.DEFAULT_TIMEOUT)
                return True
            except Full:
                continue
        return False

    def consume_message(self) -> Optional[Record]:
        """
        Get next message from queue.
        Returns None if queue is empty after timeout.
        """
        try:
            return self._main_queue.get(timeout=self.DEFAULT_TIMEOUT)
        except Empty:
            return None

    def is_empty(self) -> bool:
        return self._main_queue.empty()

    def shutdown(self) -> None:
        """Signal no more messages will be published."""
        self._shutdown_event.set()

    def is_shutdown(self) -> bool:
        return self._shutdown_event.is_set()

    def cancel(self) -> None:
        """Signal the consumer has stopped; pending and future publishes give up."""
        self._cancel_event.set()

    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()
