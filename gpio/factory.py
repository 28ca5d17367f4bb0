"""
GPIO Factory

Single place that decides between real sysfs and the in-memory simulation.

Controllers never construct filesystem implementations themselves, so tests
can force mock mode and development machines without sysfs fall back to the
simulation automatically.
"""

import logging
import os
from typing import TYPE_CHECKING, Literal, Union

from gpio.constants import SYSFS_GPIO_ROOT
from gpio.implementations.mock_filesystem import MockFilesystem
from gpio.implementations.os_filesystem import OSFilesystem
from gpio.interfaces.filesystem_interface import FilesystemInterface

if TYPE_CHECKING:
    from gpio.controllers.pin_manager import GPIOManager
    from gpio.interfaces.gpio_interface import NumberingMode

# Type aliases for better type hints
HardwareMode = Literal["auto", "real", "mock"]


class GPIOFactory:
    """
    Factory for creating filesystem capabilities and GPIO managers.

    Usage:
        # Auto-detect (real sysfs if present, mock otherwise)
        gpio = GPIOFactory.create_manager()

        # Force mock mode (useful for testing)
        gpio = GPIOFactory.create_manager(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def is_sysfs_available(cls, sysfs_root: str = SYSFS_GPIO_ROOT) -> bool:
        """Check whether the kernel exposes the sysfs GPIO interface"""
        return os.path.isdir(sysfs_root)

    @classmethod
    def create_filesystem(
        cls,
        mode: HardwareMode = "auto",
        sysfs_root: str = SYSFS_GPIO_ROOT,
    ) -> FilesystemInterface:
        """
        Create a filesystem capability.

        Args:
            mode: "auto" (detect), "real" (force OS filesystem),
                  "mock" (force simulation)
            sysfs_root: Root checked for sysfs GPIO support

        Returns:
            OSFilesystem or MockFilesystem

        Raises:
            RuntimeError: If mode="real" but sysfs GPIO is not available
        """
        if mode == "mock":
            cls._logger.info("Creating mock filesystem (forced)")
            return MockFilesystem(sysfs_root=sysfs_root)

        available = cls.is_sysfs_available(sysfs_root)

        if mode == "real":
            if not available:
                raise RuntimeError(
                    f"Real GPIO requested but {sysfs_root} does not exist",
                )
            cls._logger.info("Creating OS filesystem (forced)")
            return OSFilesystem()

        # mode == "auto" - real when sysfs is there, mock otherwise
        if available:
            cls._logger.info("Creating OS filesystem (auto-detected)")
            return OSFilesystem()

        cls._logger.warning(
            f"Sysfs GPIO not available at {sysfs_root}, using mock filesystem",
        )
        return MockFilesystem(sysfs_root=sysfs_root)

    @classmethod
    def create_manager(
        cls,
        mode: HardwareMode = "auto",
        numbering: "Union[NumberingMode, str, None]" = None,
        sysfs_root: str = SYSFS_GPIO_ROOT,
    ) -> "GPIOManager":
        """
        Create a GPIOManager wired to the selected filesystem.

        Args:
            mode: Filesystem selection, see create_filesystem()
            numbering: Initial numbering mode, or None for configuration
            sysfs_root: Root of the sysfs GPIO tree
        """
        # Imported here: the manager itself uses this module
        from gpio.controllers.pin_manager import GPIOManager

        filesystem = cls.create_filesystem(mode=mode, sysfs_root=sysfs_root)
        return GPIOManager(
            filesystem=filesystem,
            mode=numbering,
            sysfs_root=sysfs_root,
        )


# Convenience functions for quick creation


def create_filesystem(force_mock: bool = False) -> FilesystemInterface:
    """
    Quick filesystem creation with simple mock override.

    Example:
        fs = create_filesystem(force_mock=True)
    """
    mode = "mock" if force_mock else "auto"
    return GPIOFactory.create_filesystem(mode=mode)


def create_gpio(force_mock: bool = False) -> "GPIOManager":
    """
    Quick GPIOManager creation with simple mock override.

    Example:
        # Normal usage
        gpio = create_gpio()

        # Testing
        gpio = create_gpio(force_mock=True)
    """
    mode = "mock" if force_mock else "auto"
    return GPIOFactory.create_manager(mode=mode)
