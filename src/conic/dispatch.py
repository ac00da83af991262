"""Notification queue for on-load observers.

Observers are not called on the thread that loaded the configuration.
Each notification is put on a FIFO queue and run by a single worker
thread, so one observer sees its notifications in load order. Ordering
across different observers is not guaranteed by contract.

Architecture:
- One daemon worker thread per queue, started lazily
- ``None`` on the queue is the shutdown sentinel
- Observer exceptions are logged and do not stop the worker
"""

import logging
import threading
import time
from queue import Queue
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class NotificationQueue:
    """FIFO queue of callbacks run on one worker thread."""

    def __init__(self, name: str = "conic-notify") -> None:
        self.name = name
        self._queue: Queue = Queue()
        self._shutdown_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def submit(self, callback: Callable[[], None]) -> None:
        """Queue a callback, starting the worker if needed."""
        if self._shutdown_event.is_set():
            logger.warning(f"Notification dropped, queue is closed: {{'queue': {self.name!r}}}")
            return
        self._ensure_started()
        self._queue.put(callback)

    def _ensure_started(self) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()

    def _run(self) -> None:
        logger.debug(f"Started notification worker: {{'queue': {self.name!r}}}")
        while True:
            callback = self._queue.get()

            if callback is None:
                self._queue.task_done()
                break

            try:
                callback()
            except Exception as e:
                logger.error(f"On-load observer failed: {{'error': {str(e)!r}}}", exc_info=True)
            finally:
                self._queue.task_done()
        logger.debug(f"Notification worker shutting down: {{'queue': {self.name!r}}}")

    def join(self, timeout: Optional[float] = None) -> bool:
        """Block until every queued callback has run.

        Returns:
            False if the timeout expired first
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._queue.all_tasks_done:
            while self._queue.unfinished_tasks:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._queue.all_tasks_done.wait(remaining)
        return True

    def close(self, timeout: Optional[float] = 2.0) -> None:
        """Run remaining callbacks, then stop the worker."""
        self._shutdown_event.set()
        thread = self._thread
        if thread is None or not thread.is_alive():
            return
        self._queue.put(None)
        if thread is not threading.current_thread():
            thread.join(timeout)
