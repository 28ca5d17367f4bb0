"""
GPIO Factory Tests

To run these tests:
    pytest tests/gpio/test_factory.py -v
"""

import pytest

from gpio.controllers.pin_manager import GPIOManager
from gpio.factory import GPIOFactory, create_filesystem, create_gpio
from gpio.implementations.mock_filesystem import MockFilesystem
from gpio.implementations.os_filesystem import OSFilesystem
from gpio.interfaces.gpio_interface import NumberingMode


@pytest.mark.unit
def test_force_mock():
    fs = GPIOFactory.create_filesystem(mode="mock")

    assert isinstance(fs, MockFilesystem)


@pytest.mark.unit
def test_auto_uses_os_filesystem_when_sysfs_exists(tmp_path):
    fs = GPIOFactory.create_filesystem(mode="auto", sysfs_root=str(tmp_path))

    assert isinstance(fs, OSFilesystem)


@pytest.mark.unit
def test_auto_falls_back_to_mock(tmp_path):
    root = str(tmp_path / "no-gpio")

    fs = GPIOFactory.create_filesystem(mode="auto", sysfs_root=root)

    assert isinstance(fs, MockFilesystem)
    assert fs.sysfs_root == root


@pytest.mark.unit
def test_real_without_sysfs_raises(tmp_path):
    with pytest.raises(RuntimeError):
        GPIOFactory.create_filesystem(mode="real", sysfs_root=str(tmp_path / "no-gpio"))


@pytest.mark.unit
def test_create_manager_in_mock_mode():
    manager = GPIOFactory.create_manager(mode="mock", numbering="virtual")
    try:
        assert isinstance(manager, GPIOManager)
        assert isinstance(manager.filesystem, MockFilesystem)
        assert manager.get_mode() is NumberingMode.VIRTUAL
    finally:
        manager.close()


@pytest.mark.unit
def test_convenience_functions_force_mock():
    assert isinstance(create_filesystem(force_mock=True), MockFilesystem)

    manager = create_gpio(force_mock=True)
    try:
        assert manager.filesystem.is_available() is False
    finally:
        manager.close()
