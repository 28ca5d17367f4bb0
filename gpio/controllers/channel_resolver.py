"""
Channel Resolver

Turns a caller-supplied channel into a kernel GPIO number under the active
numbering mode. Runs before any sysfs I/O, so bad channels are reported
immediately and never cause a partial export.
"""

import logging
from typing import Any

from gpio.board.pin_maps import lookup
from gpio.board.revision import BoardIdentifier
from gpio.interfaces.gpio_interface import InvalidChannelError, NumberingMode


def normalize_channel(channel: Any) -> int:
    """
    Coerce a channel argument to an int.

    Accepts ints, integral floats and numeric strings ("7").

    Raises:
        InvalidChannelError: For None, booleans and anything non-numeric
    """
    if channel is None:
        raise InvalidChannelError("Channel must be specified")

    # bool is an int subclass, but True is never a meaningful pin
    if isinstance(channel, bool):
        raise InvalidChannelError(f"Channel must be a number, got {channel!r}")

    if isinstance(channel, int):
        return channel

    if isinstance(channel, float) and channel.is_integer():
        return int(channel)

    if isinstance(channel, str) and channel.strip().isdigit():
        return int(channel.strip())

    raise InvalidChannelError(f"Channel must be a number, got {channel!r}")


class ChannelResolver:
    """
    Resolves channels against the pin map of the detected board.

    The board is only identified on the first PHYSICAL lookup; VIRTUAL
    numbering never needs it.
    """

    def __init__(self, board_identifier: BoardIdentifier):
        self.logger = logging.getLogger(__name__)
        self.board_identifier = board_identifier

    def resolve(self, channel: Any, mode: NumberingMode) -> int:
        """
        Resolve a channel to its kernel GPIO number.

        Args:
            channel: Caller-supplied channel number
            mode: Numbering mode in effect for this call

        Returns:
            Kernel GPIO number

        Raises:
            InvalidChannelError: If channel is not a GPIO in this mode
            ParseError: If PHYSICAL mode needs a board revision that
                cannot be read

        Example:
            resolver.resolve(11, NumberingMode.PHYSICAL)  # 17
        """
        number = normalize_channel(channel)

        if mode is NumberingMode.VIRTUAL:
            gpio = lookup(mode, None, number)
        else:
            variant = self.board_identifier.resolve_board().variant
            gpio = lookup(mode, variant, number)

        if gpio is None:
            raise InvalidChannelError(
                f"Channel {channel!r} is not a GPIO in {mode.value} mode",
            )

        self.logger.debug(f"Channel {number} ({mode.value}) -> GPIO {gpio}")
        return gpio
