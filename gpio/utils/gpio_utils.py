"""
GPIO Utilities

Shared helpers for turning caller arguments into the GPIO enums and for
converting between PinState and the text sysfs stores.
"""

import logging
from typing import Any, Callable, Optional

from gpio.constants import VALUE_HIGH, VALUE_LOW
from gpio.interfaces.gpio_interface import (
    EdgeDetection,
    GPIOError,
    InvalidDirectionError,
    InvalidEdgeError,
    InvalidModeError,
    NumberingMode,
    PinDirection,
    PinState,
)

# callback(error, result) - error is None on success
OperationCallback = Callable[[Optional[GPIOError], Any], None]

# String spellings accepted by write()
HIGH_TOKENS = frozenset({VALUE_HIGH, "high", "true", "on"})
LOW_TOKENS = frozenset({VALUE_LOW, "", "low", "false", "off"})


def parse_mode(mode: Any) -> NumberingMode:
    """
    Accept a NumberingMode or its token ("physical" / "virtual").

    Raises:
        InvalidModeError: For anything else
    """
    if isinstance(mode, NumberingMode):
        return mode
    try:
        return NumberingMode(mode)
    except ValueError as e:
        raise InvalidModeError(f"Cannot set invalid mode: {mode!r}") from e


def parse_direction(direction: Any) -> PinDirection:
    """
    Accept a PinDirection or its token; None means OUT.

    Raises:
        InvalidDirectionError: For anything else
    """
    if direction is None:
        return PinDirection.OUT
    if isinstance(direction, PinDirection):
        return direction
    try:
        return PinDirection(direction)
    except ValueError as e:
        raise InvalidDirectionError(f"Cannot set invalid direction: {direction!r}") from e


def parse_edge(edge: Any) -> EdgeDetection:
    """
    Accept an EdgeDetection or its token; None means NONE.

    Raises:
        InvalidEdgeError: For anything else
    """
    if edge is None:
        return EdgeDetection.NONE
    if isinstance(edge, EdgeDetection):
        return edge
    try:
        return EdgeDetection(edge)
    except ValueError as e:
        raise InvalidEdgeError(f"Cannot set invalid edge: {edge!r}") from e


def to_value_string(value: Any) -> str:
    """
    Convert a value to what the sysfs value file expects.

    Truthy values become "1" and falsy values "0". Strings are matched
    against the level tokens instead, so "low" never drives a pin HIGH.

    Raises:
        GPIOError: For a string that is not a level token

    Example:
        to_value_string(True)           # "1"
        to_value_string(PinState.LOW)   # "0"
        to_value_string("low")          # "0"
    """
    if isinstance(value, str):
        token = value.strip().lower()
        if token in HIGH_TOKENS:
            return VALUE_HIGH
        if token in LOW_TOKENS:
            return VALUE_LOW
        raise GPIOError(f"Cannot write invalid value: {value!r}")
    return VALUE_HIGH if value else VALUE_LOW


def parse_value(contents: str) -> PinState:
    """
    Parse the contents of a sysfs value file.

    Raises:
        GPIOError: If the file holds something other than 0 or 1
    """
    text = contents.strip() or VALUE_LOW
    if text == VALUE_HIGH:
        return PinState.HIGH
    if text == VALUE_LOW:
        return PinState.LOW
    raise GPIOError(f"Unexpected pin value: {contents!r}")


def safe_invoke_callback(
    callback: Optional[OperationCallback],
    error: Optional[GPIOError],
    result: Any = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Invoke an operation callback without letting it raise.

    A failing callback must not kill the worker thread that completed the
    operation, so its exception is logged instead.
    """
    if callback is None:
        return

    try:
        callback(error, result)
    except Exception as e:
        if logger:
            logger.error(f"Error in operation callback: {e}", exc_info=True)
