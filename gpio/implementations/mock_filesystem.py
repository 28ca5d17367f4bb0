"""
Mock Filesystem Implementation

In-memory stand-in for sysfs and /proc/cpuinfo, for development and testing
without a Raspberry Pi.

This is a "Fake" rather than a stub: writes to export/unexport create and
remove the per-pin directory the way the kernel does, writing a direction
initializes the value file, and writes to files of unexported pins fail.
Every write and watcher registration is recorded so tests can assert the
exact sequence of operations.
"""

import logging
import posixpath
import threading
from typing import Dict, List, Optional, Set, Tuple

from gpio.constants import (
    CPUINFO_PATH,
    SYSFS_DIRECTION_FILE,
    SYSFS_EDGE_FILE,
    SYSFS_EXPORT_FILE,
    SYSFS_GPIO_ROOT,
    SYSFS_PIN_DIR_PATTERN,
    SYSFS_UNEXPORT_FILE,
    SYSFS_VALUE_FILE,
    VALUE_HIGH,
    VALUE_LOW,
)
from gpio.interfaces.filesystem_interface import ChangeCallback, FilesystemInterface
from gpio.interfaces.gpio_interface import FilesystemError

# Raspberry Pi 2 Model B, as reported by a real board
DEFAULT_CPUINFO = (
    "processor\t: 0\n"
    "model name\t: ARMv7 Processor rev 5 (v7l)\n"
    "BogoMIPS\t: 38.40\n"
    "CPU revision\t: 5\n"
    "\n"
    "Hardware\t: BCM2835\n"
    "Revision\t: a01041\n"
    "Serial\t\t: 00000000deadbeef\n"
)


class MockFilesystem(FilesystemInterface):
    """
    Simulated filesystem that mimics the kernel's sysfs GPIO behavior.

    Usage:
        fs = MockFilesystem()
        fs.write_file("/sys/class/gpio/export", "17")
        fs.path_exists("/sys/class/gpio/gpio17")  # True
    """

    def __init__(
        self,
        sysfs_root: str = SYSFS_GPIO_ROOT,
        cpuinfo: Optional[str] = DEFAULT_CPUINFO,
        cpuinfo_path: str = CPUINFO_PATH,
    ):
        self.logger = logging.getLogger(__name__)
        self.sysfs_root = sysfs_root

        self._files: Dict[str, str] = {}
        self._dirs: Set[str] = {sysfs_root}
        self._watchers: Dict[str, ChangeCallback] = {}
        self._failures: Dict[str, Exception] = {}
        self._lock = threading.RLock()

        # Call history for assertions
        self.writes: List[Tuple[str, str]] = []
        self.reads: List[str] = []
        self.watch_calls: List[str] = []
        self.unwatch_calls: List[str] = []

        if cpuinfo is not None:
            self._files[cpuinfo_path] = cpuinfo

        self.logger.info("Mock filesystem initialized (simulation mode)")

    # =========================================================================
    # FilesystemInterface
    # =========================================================================

    def path_exists(self, path: str) -> bool:
        with self._lock:
            return path in self._files or path in self._dirs

    def write_file(self, path: str, contents: str) -> None:
        with self._lock:
            self._raise_if_failing(path)
            self.writes.append((path, contents))

            if path == self._control_path(SYSFS_EXPORT_FILE):
                self._export(contents)
            elif path == self._control_path(SYSFS_UNEXPORT_FILE):
                self._unexport(contents)
            else:
                self._write_attribute(path, contents)

        self.logger.debug(f"[MOCK] {path} <- {contents!r}")

    def read_file(self, path: str) -> str:
        with self._lock:
            self._raise_if_failing(path)
            self.reads.append(path)

            if path not in self._files:
                raise FilesystemError(f"No such file: {path}")
            return self._files[path]

    def watch_change(self, path: str, callback: ChangeCallback) -> None:
        with self._lock:
            self._raise_if_failing(path)
            if path not in self._files:
                raise FilesystemError(f"Cannot watch missing file: {path}")

            self.watch_calls.append(path)
            self._watchers[path] = callback

        self.logger.debug(f"[MOCK] Watching {path}")

    def unwatch_change(self, path: str) -> None:
        with self._lock:
            self.unwatch_calls.append(path)
            self._watchers.pop(path, None)

    def cleanup(self) -> None:
        with self._lock:
            self._watchers.clear()

    def is_available(self) -> bool:
        """Mock filesystem never talks to real sysfs"""
        return False

    # =========================================================================
    # KERNEL BEHAVIOR EMULATION
    # =========================================================================

    def _control_path(self, name: str) -> str:
        return posixpath.join(self.sysfs_root, name)

    def _pin_dir(self, gpio: str) -> str:
        return posixpath.join(
            self.sysfs_root,
            SYSFS_PIN_DIR_PATTERN.format(gpio=gpio),
        )

    def _export(self, contents: str) -> None:
        gpio = contents.strip()
        pin_dir = self._pin_dir(gpio)

        if pin_dir in self._dirs:
            # Kernel answers EBUSY for a pin that is already exported
            raise FilesystemError(f"GPIO {gpio} is already exported")

        self._dirs.add(pin_dir)
        self._files[posixpath.join(pin_dir, SYSFS_DIRECTION_FILE)] = "in\n"
        self._files[posixpath.join(pin_dir, SYSFS_EDGE_FILE)] = "none\n"
        self._files[posixpath.join(pin_dir, SYSFS_VALUE_FILE)] = f"{VALUE_LOW}\n"

    def _unexport(self, contents: str) -> None:
        gpio = contents.strip()
        pin_dir = self._pin_dir(gpio)

        if pin_dir not in self._dirs:
            # Kernel answers EINVAL for a pin that is not exported
            raise FilesystemError(f"GPIO {gpio} is not exported")

        self._dirs.discard(pin_dir)
        for path in [p for p in self._files if p.startswith(pin_dir + "/")]:
            del self._files[path]

    def _write_attribute(self, path: str, contents: str) -> None:
        parent = posixpath.dirname(path)
        if parent not in self._dirs:
            raise FilesystemError(f"No such file: {path}")

        self._files[path] = contents

        # "high"/"low" directions also set the initial output level
        if posixpath.basename(path) == SYSFS_DIRECTION_FILE:
            value_path = posixpath.join(parent, SYSFS_VALUE_FILE)
            if contents == "high":
                self._files[value_path] = VALUE_HIGH
            elif contents == "low":
                self._files[value_path] = VALUE_LOW

    def _raise_if_failing(self, path: str) -> None:
        if path in self._failures:
            raise self._failures[path]

    # =========================================================================
    # TESTING HELPER METHODS (not part of FilesystemInterface)
    # =========================================================================

    def set_file(self, path: str, contents: str) -> None:
        """Create or overwrite a file without recording a write"""
        with self._lock:
            self._dirs.add(posixpath.dirname(path))
            self._files[path] = contents

    def mark_exported(self, gpio: int) -> None:
        """
        Simulate a pin left exported by a previous process.

        Nothing is recorded in the write history.
        """
        with self._lock:
            self._export(str(gpio))

    def fail_on(self, path: str, error: Optional[Exception] = None) -> None:
        """Make every later operation on path raise error"""
        with self._lock:
            self._failures[path] = error or FilesystemError(
                f"Permission denied: {path}",
            )

    def clear_failures(self) -> None:
        with self._lock:
            self._failures.clear()

    def simulate_value_change(self, path: str, value: str) -> None:
        """
        Change a value file as if the pin level changed, then notify the
        watcher registered for it (on the calling thread).
        """
        with self._lock:
            self._files[path] = value
            callback = self._watchers.get(path)

        self.logger.info(f"[MOCK] Simulated change {path} -> {value}")

        if callback is not None:
            callback(path)

    def get_file(self, path: str) -> Optional[str]:
        with self._lock:
            return self._files.get(path)

    def get_writes(self, path: Optional[str] = None) -> List[Tuple[str, str]]:
        """Recorded writes, optionally filtered to one path"""
        with self._lock:
            if path is None:
                return list(self.writes)
            return [write for write in self.writes if write[0] == path]

    def is_watching(self, path: str) -> bool:
        with self._lock:
            return path in self._watchers

    def reset_history(self) -> None:
        """Forget recorded calls, keep the simulated files"""
        with self._lock:
            self.writes.clear()
            self.reads.clear()
            self.watch_calls.clear()
            self.unwatch_calls.clear()
