"""
GPIO Utilities Package

Public API:
    - ChannelQueue: Per-channel sequential task queues
    - parse_mode / parse_direction / parse_edge: Argument normalization
    - parse_value / to_value_string: PinState <-> sysfs text
    - safe_invoke_callback: Callback invocation that never raises
"""

from gpio.utils.channel_queue import ChannelQueue
from gpio.utils.gpio_utils import (
    OperationCallback,
    parse_direction,
    parse_edge,
    parse_mode,
    parse_value,
    safe_invoke_callback,
    to_value_string,
)

# Public API
__all__ = [
    # Classes and type aliases (capitalized, sorted first)
    "ChannelQueue",
    "OperationCallback",
    # Functions (sorted alphabetically)
    "parse_direction",
    "parse_edge",
    "parse_mode",
    "parse_value",
    "safe_invoke_callback",
    "to_value_string",
]
