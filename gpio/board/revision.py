"""
Board Identifier

Detects the board revision from /proc/cpuinfo and picks the pin map variant.

The revision line is read once per identifier and cached; board hardware
cannot change while the process runs.
"""

import logging
import threading
from dataclasses import dataclass
from typing import FrozenSet, Optional

from gpio.board.pin_maps import BoardVariant
from gpio.constants import CPUINFO_PATH, CPUINFO_REVISION_KEY
from gpio.interfaces.filesystem_interface import FilesystemInterface
from gpio.interfaces.gpio_interface import FilesystemError, ParseError

# Model B revision 1.0 / 1.0 with ECN0001
V1_REVISIONS: FrozenSet[str] = frozenset({"0002", "0003"})

# Boards known to use the revision 2 header layout
V2_REVISIONS: FrozenSet[str] = frozenset({
    # Old-style codes: Model A/B rev 2, B+, A+, Compute Module 1
    "0004", "0005", "0006", "0007", "0008", "0009",
    "000d", "000e", "000f", "0010", "0011", "0012",
    "0013", "0014", "0015",
    # New-style codes: A+, B+, Zero, Zero W, Zero 2 W
    "900021", "900032", "900092", "900093", "9000c1", "920092",
    "920093", "902120",
    # Pi 2 and Pi 3 family
    "a01040", "a01041", "a21041", "a22042", "a02082", "a22082",
    "a32082", "a52082", "a22083", "a020d3", "9020e0", "a020a0",
    "a02100",
    # Pi 4 and Pi 400
    "a03111", "b03111", "b03112", "b03114", "b03115",
    "c03111", "c03112", "c03114", "c03115", "d03114",
    "d03115", "c03130",
})

# Used for revision codes we have never seen
FALLBACK_VARIANT = BoardVariant.V2


@dataclass(frozen=True)
class BoardInfo:
    """Result of board detection"""

    revision: str
    variant: BoardVariant
    is_fallback: bool = False  # True when revision was not recognized


def parse_cpuinfo(cpuinfo: str) -> str:
    """
    Extract the revision code from cpuinfo text.

    Some kernels print several codes on the Revision line (warranty and
    overclock flags come first); the last one is authoritative.

    Args:
        cpuinfo: Full contents of /proc/cpuinfo

    Returns:
        Revision code, e.g. "a01041"

    Raises:
        ParseError: If there is no Revision line or it carries no code

    Example:
        parse_cpuinfo("Hardware : BCM2708\\nRevision : 0002\\n")  # "0002"
    """
    for line in cpuinfo.splitlines():
        key, sep, value = line.partition(":")
        # "CPU revision" must not match
        if not sep or key.strip() != CPUINFO_REVISION_KEY:
            continue

        tokens = value.split()
        if not tokens:
            raise ParseError("Revision line carries no revision code")
        return tokens[-1].strip()

    raise ParseError("No Revision line found in cpuinfo")


def variant_for_revision(revision: str) -> BoardInfo:
    """
    Map a revision code to a pin map variant.

    Unknown codes resolve to FALLBACK_VARIANT with is_fallback set, so newer
    boards keep working and callers can still tell a guess happened.
    """
    code = revision.lower()

    if code in V1_REVISIONS:
        return BoardInfo(revision=revision, variant=BoardVariant.V1)
    if code in V2_REVISIONS:
        return BoardInfo(revision=revision, variant=BoardVariant.V2)
    return BoardInfo(
        revision=revision,
        variant=FALLBACK_VARIANT,
        is_fallback=True,
    )


class BoardIdentifier:
    """
    Lazily reads and caches the board revision.

    Usage:
        identifier = BoardIdentifier(filesystem)
        board = identifier.resolve_board()
        if board.is_fallback:
            print(f"Unknown revision {board.revision}, assuming {board.variant}")
    """

    def __init__(
        self,
        filesystem: FilesystemInterface,
        cpuinfo_path: str = CPUINFO_PATH,
    ):
        self.logger = logging.getLogger(__name__)
        self.filesystem = filesystem
        self.cpuinfo_path = cpuinfo_path

        self._board: Optional[BoardInfo] = None
        self._lock = threading.Lock()

    def resolve_board_revision(self) -> str:
        """
        Get the board revision code.

        Raises:
            ParseError: If cpuinfo is unreadable or has no revision
        """
        return self.resolve_board().revision

    def resolve_board(self) -> BoardInfo:
        """
        Get the detected board (revision, variant, fallback flag).

        Raises:
            ParseError: If cpuinfo is unreadable or has no revision
        """
        with self._lock:
            if self._board is None:
                self._board = self._detect()
            return self._board

    def override(self, variant: BoardVariant, revision: str = "override") -> None:
        """Skip detection and use a fixed variant (tests, exotic boards)"""
        with self._lock:
            self._board = BoardInfo(revision=revision, variant=variant)
        self.logger.info(f"Board variant overridden: {variant.value}")

    def _detect(self) -> BoardInfo:
        try:
            cpuinfo = self.filesystem.read_file(self.cpuinfo_path)
        except FilesystemError as e:
            raise ParseError(f"Cannot read {self.cpuinfo_path}: {e}") from e

        board = variant_for_revision(parse_cpuinfo(cpuinfo))

        if board.is_fallback:
            self.logger.warning(
                f"Unknown board revision {board.revision}, "
                f"using {board.variant.value} pin map",
            )
        else:
            self.logger.info(
                f"Detected board revision {board.revision} "
                f"({board.variant.value} pin map)",
            )

        return board
