"""
GPIO Interface - Shared Vocabulary

Enums and exceptions used by every layer of the sysfs GPIO stack.

The manager, the resolver, the gateway and the filesystem implementations
all speak these types, so they live in one place that depends on nothing.
"""

from enum import Enum, IntEnum


class NumberingMode(Enum):
    """How caller-supplied channel numbers are interpreted"""

    PHYSICAL = "physical"  # Header pin position (pin 11, pin 12, ...)
    VIRTUAL = "virtual"  # Broadcom/kernel GPIO number (GPIO17, GPIO18, ...)


class PinDirection(Enum):
    """
    Value written to a pin's sysfs direction file.

    HIGH and LOW configure an output and set its initial level in a single
    write, which avoids a glitch on the line.
    """

    IN = "in"
    OUT = "out"
    HIGH = "high"
    LOW = "low"

    @property
    def is_output(self) -> bool:
        return self is not PinDirection.IN


class EdgeDetection(Enum):
    """Value written to a pin's sysfs edge file (inputs only)"""

    NONE = "none"
    RISING = "rising"  # LOW -> HIGH transition
    FALLING = "falling"  # HIGH -> LOW transition
    BOTH = "both"  # Any transition


class PinState(IntEnum):
    """Digital pin states (compare equal to 0 and 1)"""

    LOW = 0
    HIGH = 1


class GPIOEvent(Enum):
    """Events published by the GPIO manager"""

    EXPORT = "export"  # args: channel
    CHANGE = "change"  # args: channel, PinState
    MODE_CHANGE = "modeChange"  # args: NumberingMode


class GPIOError(Exception):
    """
    Base exception for GPIO-related errors.

    Catch this to handle every failure the GPIO stack can report.
    """


class InvalidChannelError(GPIOError):
    """Channel is missing, not a number, or not a GPIO in the active mode"""


class InvalidModeError(GPIOError):
    """Numbering mode token is not recognized"""


class InvalidDirectionError(GPIOError):
    """Direction token is not recognized"""


class InvalidEdgeError(GPIOError):
    """Edge token is not recognized, or edge requested on an output"""


class DirectionError(GPIOError):
    """Write attempted on an input or unconfigured pin"""


class FilesystemError(GPIOError):
    """Filesystem operation failed (permission, missing sysfs, I/O)"""


class ParseError(GPIOError):
    """Board revision could not be read or parsed"""
