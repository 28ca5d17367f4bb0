"""
Channel Queue

Per-channel FIFO task queues, each served by its own worker thread.

Why one queue per channel?
- Operations on one pin run strictly in submission order
  (export -> direction -> watcher, then the next request)
- Different pins never wait for each other
- Callers get a Future back immediately and are never blocked

A worker that stays idle for idle_timeout seconds exits; the next task for
its channel starts a new one.
"""

import logging
import queue
import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from gpio.constants import QUEUE_IDLE_TIMEOUT, WORKER_JOIN_TIMEOUT

Task = Tuple[Callable[[], Any], Future]


class _ChannelWorker:
    """One FIFO queue plus the thread that drains it"""

    def __init__(
        self,
        key: Hashable,
        idle_timeout: float,
        on_idle: Callable[["_ChannelWorker"], bool],
    ):
        self.logger = logging.getLogger(__name__)
        self.key = key
        self.idle_timeout = idle_timeout
        self.on_idle = on_idle  # Returns True when the worker may exit

        self.tasks: "queue.Queue[Optional[Task]]" = queue.Queue()
        self.running = True
        self.thread = threading.Thread(
            target=self._worker_loop,
            daemon=True,  # Dies when main program exits
            name=f"ChannelQueue-{key}",
        )
        self.thread.start()

    def _worker_loop(self) -> None:
        while self.running:
            try:
                task = self.tasks.get(timeout=self.idle_timeout)
            except queue.Empty:
                # Idle for a full timeout: retire unless work just arrived
                if self.on_idle(self):
                    break
                continue

            if task is None:
                # Wake-up sentinel from stop()
                self.tasks.task_done()
                break

            func, future = task

            # Skipped if cancelled while waiting in the queue
            if future.set_running_or_notify_cancel():
                try:
                    future.set_result(func())
                except BaseException as e:
                    future.set_exception(e)

            self.tasks.task_done()

        self.logger.debug(f"Worker for channel {self.key} stopped")

    def cancel_pending(self) -> int:
        cancelled = 0
        try:
            while True:
                _, future = self.tasks.get_nowait()
                future.cancel()
                self.tasks.task_done()
                cancelled += 1
        except queue.Empty:
            pass
        return cancelled


class ChannelQueue:
    """
    Runs callables sequentially per key, concurrently across keys.

    Usage:
        channel_queue = ChannelQueue()
        future = channel_queue.submit(17, lambda: gateway.export(17))
        future.result(timeout=1.0)
    """

    def __init__(self, idle_timeout: Optional[float] = None):
        self.logger = logging.getLogger(__name__)
        self.idle_timeout = idle_timeout or QUEUE_IDLE_TIMEOUT

        self._workers: Dict[Hashable, _ChannelWorker] = {}
        self._lock = threading.Lock()
        self._stopped = False

    def submit(self, key: Hashable, func: Callable[[], Any]) -> Future:
        """
        Queue func behind everything already queued for key.

        Returns:
            Future resolved with func's return value or exception

        Raises:
            RuntimeError: If the queue has been stopped
        """
        future: Future = Future()

        with self._lock:
            if self._stopped:
                raise RuntimeError("Channel queue has been stopped")

            worker = self._workers.get(key)
            if worker is None:
                worker = _ChannelWorker(key, self.idle_timeout, self._retire_if_idle)
                self._workers[key] = worker
                self.logger.debug(f"Started worker for channel {key}")

            worker.tasks.put((func, future))

        return future

    def _retire_if_idle(self, worker: _ChannelWorker) -> bool:
        """
        Drop an idle worker so untouched channels hold no thread.

        Runs on the worker's own thread. submit() holds the same lock while
        it looks up a worker and enqueues, so a task is either seen here or
        lands on a fresh worker.
        """
        with self._lock:
            if self._workers.get(worker.key) is worker:
                if not worker.tasks.empty():
                    return False
                del self._workers[worker.key]

        # Already retired or stopped if it was not registered
        worker.running = False
        self.logger.debug(f"Retired idle worker for channel {worker.key}")
        return True

    def wait_until_idle(self) -> None:
        """Block until every queued task has finished"""
        with self._lock:
            workers = list(self._workers.values())

        for worker in workers:
            worker.tasks.join()

    def get_status(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "workers": len(self._workers),
                "pending": {
                    key: worker.tasks.qsize()
                    for key, worker in self._workers.items()
                },
                "stopped": self._stopped,
            }

    def stop(self) -> None:
        """
        Cancel pending tasks and stop every worker.

        A task already running finishes; its Future still resolves.
        """
        with self._lock:
            self._stopped = True
            workers = list(self._workers.values())
            self._workers.clear()

        cancelled = 0
        for worker in workers:
            cancelled += worker.cancel_pending()
            worker.running = False
            worker.tasks.put(None)

        for worker in workers:
            if worker.thread is not threading.current_thread():
                worker.thread.join(timeout=WORKER_JOIN_TIMEOUT)

        if cancelled:
            self.logger.info(f"Cancelled {cancelled} pending channel tasks")
        self.logger.debug("Channel queue stopped")
