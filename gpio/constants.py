"""
GPIO Constants

Centralizes the sysfs layout and the tuning values used by the GPIO stack.

Tunable values are imported from config.settings so there is one source of
truth; the sysfs file names below are fixed by the kernel ABI.
"""

from config.settings import (
    CPUINFO_PATH,
    DEFAULT_NUMBERING_MODE,
    QUEUE_IDLE_TIMEOUT,
    SYSFS_GPIO_ROOT,
    WATCH_POLL_INTERVAL,
    WORKER_JOIN_TIMEOUT,
)

# =============================================================================
# SYSFS LAYOUT
# =============================================================================
# Paths are relative to SYSFS_GPIO_ROOT. Control files take the kernel GPIO
# number as a decimal string.

SYSFS_EXPORT_FILE = "export"
SYSFS_UNEXPORT_FILE = "unexport"

# Per-pin directory, exists only while the pin is exported
SYSFS_PIN_DIR_PATTERN = "gpio{gpio}"

SYSFS_DIRECTION_FILE = "direction"
SYSFS_EDGE_FILE = "edge"
SYSFS_VALUE_FILE = "value"

# What the value file holds
VALUE_HIGH = "1"
VALUE_LOW = "0"

# =============================================================================
# SYSTEM INFORMATION
# =============================================================================

# Key of the cpuinfo line carrying the board revision code
CPUINFO_REVISION_KEY = "Revision"

__all__ = [
    "CPUINFO_PATH",
    "CPUINFO_REVISION_KEY",
    "DEFAULT_NUMBERING_MODE",
    "QUEUE_IDLE_TIMEOUT",
    "SYSFS_DIRECTION_FILE",
    "SYSFS_EDGE_FILE",
    "SYSFS_EXPORT_FILE",
    "SYSFS_GPIO_ROOT",
    "SYSFS_PIN_DIR_PATTERN",
    "SYSFS_UNEXPORT_FILE",
    "SYSFS_VALUE_FILE",
    "VALUE_HIGH",
    "VALUE_LOW",
    "WATCH_POLL_INTERVAL",
    "WORKER_JOIN_TIMEOUT",
]
