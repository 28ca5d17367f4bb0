"""
GPIO Interfaces Package

Exposes the shared enums, exceptions and the filesystem capability contract.
"""

from gpio.interfaces.filesystem_interface import ChangeCallback, FilesystemInterface
from gpio.interfaces.gpio_interface import (
    DirectionError,
    EdgeDetection,
    FilesystemError,
    GPIOError,
    GPIOEvent,
    InvalidChannelError,
    InvalidDirectionError,
    InvalidEdgeError,
    InvalidModeError,
    NumberingMode,
    ParseError,
    PinDirection,
    PinState,
)

# Public API (sorted alphabetically)
__all__ = [
    "ChangeCallback",
    "DirectionError",
    "EdgeDetection",
    "FilesystemError",
    "FilesystemInterface",
    "GPIOError",
    "GPIOEvent",
    "InvalidChannelError",
    "InvalidDirectionError",
    "InvalidEdgeError",
    "InvalidModeError",
    "NumberingMode",
    "ParseError",
    "PinDirection",
    "PinState",
]
