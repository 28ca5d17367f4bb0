"""
GPIO Module

Digital GPIO for Raspberry Pi through the kernel's sysfs interface.

Provides physical/virtual pin numbering, the export/configure/watch
lifecycle of each pin, and events for exports, value changes and mode
changes. Falls back to an in-memory simulation where sysfs is missing.

Public API:
    - GPIOManager: Pin lifecycle manager (setup/read/write/destroy)
    - GPIOFactory: Factory choosing real or simulated sysfs
    - create_gpio: Quick GPIOManager creation with auto-detection
    - NumberingMode, PinDirection, EdgeDetection, PinState, GPIOEvent
    - GPIOError and its subclasses

Usage:
    from gpio import NumberingMode, PinDirection, create_gpio

    gpio = create_gpio()
    gpio.set_mode(NumberingMode.PHYSICAL)
    gpio.setup(12, PinDirection.OUT).result()
    gpio.write(12, 1).result()
"""

from gpio.controllers.pin_manager import ActivePin, GPIOManager
from gpio.factory import GPIOFactory, create_gpio
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

__all__ = [
    "ActivePin",
    "DirectionError",
    "EdgeDetection",
    "FilesystemError",
    "GPIOError",
    "GPIOEvent",
    "GPIOFactory",
    "GPIOManager",
    "InvalidChannelError",
    "InvalidDirectionError",
    "InvalidEdgeError",
    "InvalidModeError",
    "NumberingMode",
    "ParseError",
    "PinDirection",
    "PinState",
    "create_gpio",
]
