"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Machine-specific overrides belong in .env, NOT here
- Import these settings in modules: from config.settings import SYSFS_GPIO_ROOT
- Keep values generic and board-agnostic
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# SYSFS CONFIGURATION
# =============================================================================

# Root of the kernel's sysfs GPIO tree
SYSFS_GPIO_ROOT = os.getenv("GPIO_SYSFS_ROOT", "/sys/class/gpio")

# System information source used for board revision detection
CPUINFO_PATH = os.getenv("GPIO_CPUINFO_PATH", "/proc/cpuinfo")

# =============================================================================
# PIN NUMBERING
# =============================================================================

# Numbering mode used until set_mode() is called: "physical" or "virtual"
DEFAULT_NUMBERING_MODE = os.getenv("GPIO_DEFAULT_MODE", "physical")

# =============================================================================
# WATCHER / WORKER CONFIGURATION
# =============================================================================

# How long a value watcher waits for a kernel edge event before re-reading
# the value file (seconds)
WATCH_POLL_INTERVAL = float(os.getenv("GPIO_WATCH_POLL_INTERVAL", "0.1"))

# How long a channel worker may sit idle before its thread exits (seconds)
QUEUE_IDLE_TIMEOUT = float(os.getenv("GPIO_QUEUE_IDLE_TIMEOUT", "1.0"))

# Maximum time to wait for a worker or watcher thread on shutdown (seconds)
WORKER_JOIN_TIMEOUT = float(os.getenv("GPIO_WORKER_JOIN_TIMEOUT", "3.0"))
