"""
Board Package

Board revision detection and the static physical/virtual pin maps.
"""

from gpio.board.pin_maps import BoardVariant, lookup
from gpio.board.revision import (
    BoardIdentifier,
    BoardInfo,
    parse_cpuinfo,
    variant_for_revision,
)

# Public API (sorted alphabetically)
__all__ = [
    "BoardIdentifier",
    "BoardInfo",
    "BoardVariant",
    "lookup",
    "parse_cpuinfo",
    "variant_for_revision",
]
