"""
Pin Map Registry

Static tables translating caller channel numbers to kernel GPIO numbers.

- VIRTUAL numbering is the Broadcom GPIO number itself, identical on every
  board, so one table serves all variants.
- PHYSICAL numbering is the header pin position. Revision 1 boards have a
  26-pin header with a few different GPIOs behind pins 3, 5 and 13; later
  boards keep those positions remapped and extend the header to 40 pins.
  Power and ground positions are simply absent from the tables.
"""

from enum import Enum
from typing import Dict, Optional

from gpio.interfaces.gpio_interface import NumberingMode


class BoardVariant(Enum):
    """Which physical pin map a board uses"""

    V1 = "v1"  # Model B revision 1 (26-pin header)
    V2 = "v2"  # Model B revision 2 and everything after (26/40-pin header)


# Header pin -> kernel GPIO
PHYSICAL_PINS_V1: Dict[int, int] = {
    # 1: 3.3v, 2: 5v
    3: 0,
    # 4: 5v
    5: 1,
    # 6: ground
    7: 4,
    8: 14,
    # 9: ground
    10: 15,
    11: 17,
    12: 18,
    13: 21,
    # 14: ground
    15: 22,
    16: 23,
    # 17: 3.3v
    18: 24,
    19: 10,
    # 20: ground
    21: 9,
    22: 25,
    23: 11,
    24: 8,
    # 25: ground
    26: 7,
}

PHYSICAL_PINS_V2: Dict[int, int] = {
    **PHYSICAL_PINS_V1,
    3: 2,
    5: 3,
    13: 27,
    # Pins 27-40, present from Model B+ onwards
    27: 0,  # ID_SD
    28: 1,  # ID_SC
    29: 5,
    # 30: ground
    31: 6,
    32: 12,
    33: 13,
    # 34: ground
    35: 19,
    36: 16,
    37: 26,
    38: 20,
    # 39: ground
    40: 21,
}

PHYSICAL_PINS: Dict[BoardVariant, Dict[int, int]] = {
    BoardVariant.V1: PHYSICAL_PINS_V1,
    BoardVariant.V2: PHYSICAL_PINS_V2,
}

# Broadcom GPIOs routed to the header; the number is its own kernel number
VIRTUAL_PINS: Dict[int, int] = {gpio: gpio for gpio in range(28)}


def lookup(
    mode: NumberingMode,
    variant: Optional[BoardVariant],
    channel: int,
) -> Optional[int]:
    """
    Translate a channel number to a kernel GPIO number.

    Args:
        mode: Numbering convention the channel is expressed in
        variant: Board variant (ignored for VIRTUAL mode)
        channel: Caller-supplied channel number

    Returns:
        Kernel GPIO number, or None if the channel is not a GPIO

    Example:
        lookup(NumberingMode.PHYSICAL, BoardVariant.V2, 11)  # 17
        lookup(NumberingMode.PHYSICAL, BoardVariant.V2, 6)   # None (ground)
    """
    if mode is NumberingMode.VIRTUAL:
        return VIRTUAL_PINS.get(channel)
    return PHYSICAL_PINS[variant].get(channel)
