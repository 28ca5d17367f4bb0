"""
Channel Resolver Tests

To run these tests:
    pytest tests/gpio/controllers/test_channel_resolver.py -v
"""

import pytest

from gpio.board.revision import BoardIdentifier
from gpio.controllers.channel_resolver import ChannelResolver, normalize_channel
from gpio.implementations.mock_filesystem import MockFilesystem
from gpio.interfaces.gpio_interface import InvalidChannelError, NumberingMode

CPUINFO = "/proc/cpuinfo"


def _resolver(revision="a01041"):
    fs = MockFilesystem(cpuinfo=f"Revision\t: {revision}\n", cpuinfo_path=CPUINFO)
    return ChannelResolver(BoardIdentifier(fs, cpuinfo_path=CPUINFO)), fs


# =============================================================================
# NORMALIZATION TESTS
# =============================================================================

@pytest.mark.unit
@pytest.mark.parametrize("channel, expected", [(7, 7), ("7", 7), (" 12 ", 12), (11.0, 11)])
def test_normalize_accepts_numbers(channel, expected):
    assert normalize_channel(channel) == expected


@pytest.mark.unit
@pytest.mark.parametrize("channel", [None, True, False, "abc", "", 1.5, [], object()])
def test_normalize_rejects_non_numbers(channel):
    with pytest.raises(InvalidChannelError):
        normalize_channel(channel)


# =============================================================================
# RESOLUTION TESTS
# =============================================================================

@pytest.mark.unit
def test_resolve_physical_uses_board_map():
    resolver, _ = _resolver("a01041")

    assert resolver.resolve(11, NumberingMode.PHYSICAL) == 17
    assert resolver.resolve(3, NumberingMode.PHYSICAL) == 2


@pytest.mark.unit
def test_resolve_physical_on_revision_one_board():
    resolver, _ = _resolver("0002")

    assert resolver.resolve(3, NumberingMode.PHYSICAL) == 0


@pytest.mark.unit
def test_resolve_physical_unknown_board_uses_fallback_map():
    resolver, _ = _resolver("ffffff")

    assert resolver.resolve(40, NumberingMode.PHYSICAL) == 21


@pytest.mark.unit
def test_resolve_virtual_never_reads_cpuinfo():
    resolver, fs = _resolver()

    assert resolver.resolve(4, NumberingMode.VIRTUAL) == 4
    assert fs.reads == []


@pytest.mark.unit
@pytest.mark.parametrize("channel", [1, 6, 41])
def test_resolve_physical_non_gpio_pin_raises(channel):
    resolver, _ = _resolver()

    with pytest.raises(InvalidChannelError):
        resolver.resolve(channel, NumberingMode.PHYSICAL)


@pytest.mark.unit
def test_resolve_virtual_unknown_gpio_raises():
    resolver, _ = _resolver()

    with pytest.raises(InvalidChannelError):
        resolver.resolve(28, NumberingMode.VIRTUAL)


@pytest.mark.unit
def test_resolve_none_raises_before_board_detection():
    resolver, fs = _resolver()

    with pytest.raises(InvalidChannelError):
        resolver.resolve(None, NumberingMode.PHYSICAL)
    assert fs.reads == []
