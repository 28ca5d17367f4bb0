"""
OS Filesystem Implementation

Concrete FilesystemInterface backed by the real operating system.

Value watchers follow the kernel's sysfs contract: the value file is opened
once and polled for POLLPRI/POLLERR, which the kernel raises on an edge when
the pin's edge file is configured. The watcher also re-reads the file after
every poll timeout, so changes are still reported for pins without edge
detection (and for plain files, which never raise POLLPRI).
"""

import logging
import os
import select
import threading
from typing import Dict, Optional

from gpio.constants import WATCH_POLL_INTERVAL, WORKER_JOIN_TIMEOUT
from gpio.interfaces.filesystem_interface import ChangeCallback, FilesystemInterface
from gpio.interfaces.gpio_interface import FilesystemError


class _ValueWatcher:
    """Background thread reporting content changes of one file"""

    def __init__(
        self,
        path: str,
        callback: ChangeCallback,
        poll_interval: float,
    ):
        self.logger = logging.getLogger(__name__)
        self.path = path
        self.callback = callback
        self.poll_interval = poll_interval

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        try:
            self._fd = os.open(path, os.O_RDONLY | os.O_NONBLOCK)
            self._last_contents = self._read_contents()
        except OSError as e:
            raise FilesystemError(f"Cannot watch {path}: {e}") from e

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._watch_loop,
            daemon=True,  # Dies when main program exits
            name=f"GPIOWatcher-{os.path.basename(os.path.dirname(self.path))}",
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()

        # The callback may itself unwatch, which runs on this thread
        if (
            self._thread
            and self._thread.is_alive()
            and self._thread is not threading.current_thread()
        ):
            self._thread.join(timeout=WORKER_JOIN_TIMEOUT)

        try:
            os.close(self._fd)
        except OSError as e:
            self.logger.debug(f"Error closing {self.path}: {e}")

    def _read_contents(self) -> bytes:
        # sysfs attributes must be re-read from offset 0 to clear the event
        os.lseek(self._fd, 0, os.SEEK_SET)
        return os.read(self._fd, 64)

    def _watch_loop(self) -> None:
        poller = select.poll()
        poller.register(self._fd, select.POLLPRI | select.POLLERR)
        timeout_ms = int(self.poll_interval * 1000)

        while not self._stop_event.is_set():
            try:
                poller.poll(timeout_ms)
                if self._stop_event.is_set():
                    break
                contents = self._read_contents()
            except OSError as e:
                # Pin unexported underneath us - nothing left to watch
                self.logger.warning(f"Stopped watching {self.path}: {e}")
                break

            if contents == self._last_contents:
                continue

            self._last_contents = contents
            try:
                self.callback(self.path)
            except Exception as e:
                self.logger.error(
                    f"Error in change callback for {self.path}: {e}",
                    exc_info=True,
                )


class OSFilesystem(FilesystemInterface):
    """
    Filesystem operations against the real OS (sysfs, procfs).

    Every OSError is re-raised as FilesystemError so callers only deal with
    the GPIO exception hierarchy.
    """

    def __init__(self, poll_interval: Optional[float] = None):
        self.logger = logging.getLogger(__name__)
        self.poll_interval = poll_interval or WATCH_POLL_INTERVAL

        self._watchers: Dict[str, _ValueWatcher] = {}
        self._lock = threading.Lock()

    def path_exists(self, path: str) -> bool:
        return os.path.exists(path)

    def write_file(self, path: str, contents: str) -> None:
        try:
            with open(path, "w") as f:
                f.write(contents)
        except OSError as e:
            raise FilesystemError(
                f"Failed to write '{contents}' to {path}: {e}",
            ) from e

    def read_file(self, path: str) -> str:
        try:
            with open(path, "r") as f:
                return f.read()
        except OSError as e:
            raise FilesystemError(f"Failed to read {path}: {e}") from e

    def watch_change(self, path: str, callback: ChangeCallback) -> None:
        watcher = _ValueWatcher(path, callback, self.poll_interval)

        with self._lock:
            previous = self._watchers.pop(path, None)
            self._watchers[path] = watcher

        if previous is not None:
            previous.stop()

        watcher.start()
        self.logger.debug(f"Watching {path}")

    def unwatch_change(self, path: str) -> None:
        with self._lock:
            watcher = self._watchers.pop(path, None)

        if watcher is None:
            return

        watcher.stop()
        self.logger.debug(f"Stopped watching {path}")

    def is_available(self) -> bool:
        return True

    def cleanup(self) -> None:
        """Stop every watcher thread"""
        with self._lock:
            watchers = list(self._watchers.values())
            self._watchers.clear()

        for watcher in watchers:
            watcher.stop()
