"""
Test Configuration and Fixtures

Shared pytest fixtures for the GPIO package.

Every fixture runs against MockFilesystem, so the whole pin lifecycle can be
exercised on a machine without sysfs. Paths are pinned to the standard
/sys/class/gpio root regardless of local .env overrides.

To use pytest:
    pip install -e ".[test]"
    pytest tests/gpio/
"""

import threading

import pytest

from gpio.controllers.pin_manager import GPIOManager
from gpio.implementations.mock_filesystem import DEFAULT_CPUINFO, MockFilesystem
from gpio.interfaces.gpio_interface import NumberingMode

SYSFS_ROOT = "/sys/class/gpio"
CPUINFO = "/proc/cpuinfo"

# Model B revision 1 - uses the v1 physical pin map
REV1_CPUINFO = (
    "Processor   : ARMv6-compatible processor rev 7 (v6l)\n"
    "BogoMIPS    : 697.95\n"
    "Features    : swp half thumb fastmult vfp edsp java tls\n"
    "CPU implementer : 0x41\n"
    "CPU architecture: 7\n"
    "CPU variant : 0x0\n"
    "CPU part    : 0xb76\n"
    "CPU revision    : 7\n"
    "\n"
    "\n"
    "Hardware    : BCM2708\n"
    "Revision    : 0002\n"
    "Serial   : 000000009a5d9c22"
)


# =============================================================================
# FILESYSTEM FIXTURES
# =============================================================================

@pytest.fixture
def mock_fs():
    """
    Provide a fresh MockFilesystem (Pi 2 cpuinfo) for each test.

    Usage in test:
        def test_something(mock_fs):
            mock_fs.mark_exported(17)
    """
    fs = MockFilesystem(sysfs_root=SYSFS_ROOT, cpuinfo=DEFAULT_CPUINFO, cpuinfo_path=CPUINFO)
    yield fs
    fs.cleanup()


@pytest.fixture
def rev1_fs():
    """MockFilesystem reporting a revision 1 Model B"""
    fs = MockFilesystem(sysfs_root=SYSFS_ROOT, cpuinfo=REV1_CPUINFO, cpuinfo_path=CPUINFO)
    yield fs
    fs.cleanup()


# =============================================================================
# MANAGER FIXTURES
# =============================================================================

def _make_manager(fs, mode):
    return GPIOManager(
        filesystem=fs,
        mode=mode,
        sysfs_root=SYSFS_ROOT,
        cpuinfo_path=CPUINFO,
    )


@pytest.fixture
def gpio_manager(mock_fs):
    """
    Provide a GPIOManager in VIRTUAL numbering, so channel N is GPIO N.

    Usage:
        def test_write(gpio_manager):
            gpio_manager.setup(1).result(timeout=2)
    """
    manager = _make_manager(mock_fs, NumberingMode.VIRTUAL)
    yield manager
    manager.close()


@pytest.fixture
def physical_manager(mock_fs):
    """GPIOManager in PHYSICAL numbering on a Pi 2 (v2 pin map)"""
    manager = _make_manager(mock_fs, NumberingMode.PHYSICAL)
    yield manager
    manager.close()


@pytest.fixture
def manager_factory():
    """
    Build managers over custom filesystems; all are closed after the test.

    Usage:
        def test_board(manager_factory, rev1_fs):
            manager = manager_factory(rev1_fs, NumberingMode.PHYSICAL)
    """
    managers = []

    def factory(fs, mode=NumberingMode.VIRTUAL):
        manager = _make_manager(fs, mode)
        managers.append(manager)
        return manager

    yield factory

    for manager in managers:
        manager.close()


# =============================================================================
# HELPER FIXTURES
# =============================================================================

@pytest.fixture
def callback_tracker():
    """
    Provide a helper for tracking callback calls.

    Works for operation callbacks (error, result) and event listeners alike.
    Calls may arrive on worker threads, so wait_for_calls() is provided.

    Usage:
        def test_callback(gpio_manager, callback_tracker):
            gpio_manager.on("export", callback_tracker.track)
            gpio_manager.setup(1).result(timeout=2)
            assert callback_tracker.get_call_count() == 1
    """
    class CallbackTracker:
        def __init__(self):
            self.calls = []
            self._condition = threading.Condition()

        def track(self, *args, **kwargs):
            """Record a callback invocation"""
            with self._condition:
                self.calls.append({'args': args, 'kwargs': kwargs})
                self._condition.notify_all()

        def was_called(self) -> bool:
            """Check if callback was called"""
            return len(self.calls) > 0

        def get_call_count(self) -> int:
            """Get number of times callback was called"""
            return len(self.calls)

        def get_last_call(self):
            """Get arguments from last call"""
            return self.calls[-1] if self.calls else None

        def wait_for_calls(self, count: int = 1, timeout: float = 2.0) -> bool:
            """Block until at least count calls were recorded"""
            with self._condition:
                return self._condition.wait_for(
                    lambda: len(self.calls) >= count,
                    timeout=timeout,
                )

        def reset(self):
            """Clear call history"""
            with self._condition:
                self.calls.clear()

    return CallbackTracker()


