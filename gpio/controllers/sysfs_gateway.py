"""
Sysfs Gateway

The one place that builds sysfs GPIO paths and hands them to the filesystem.

No business logic lives here: each method is path construction plus a
single pass-through call, so the lifecycle manager decides ordering and
the filesystem implementation decides how I/O actually happens.
"""

import logging
import posixpath
from typing import Callable

from gpio.constants import (
    SYSFS_DIRECTION_FILE,
    SYSFS_EDGE_FILE,
    SYSFS_EXPORT_FILE,
    SYSFS_GPIO_ROOT,
    SYSFS_PIN_DIR_PATTERN,
    SYSFS_UNEXPORT_FILE,
    SYSFS_VALUE_FILE,
)
from gpio.interfaces.filesystem_interface import FilesystemInterface
from gpio.interfaces.gpio_interface import EdgeDetection, PinDirection


class SysfsGateway:
    """
    Sysfs GPIO operations addressed by kernel GPIO number.

    Usage:
        gateway = SysfsGateway(filesystem)
        gateway.export(17)
        gateway.set_direction(17, PinDirection.OUT)
        gateway.write_value(17, "1")
    """

    def __init__(
        self,
        filesystem: FilesystemInterface,
        root: str = SYSFS_GPIO_ROOT,
    ):
        self.logger = logging.getLogger(__name__)
        self.filesystem = filesystem
        self.root = root

    # =========================================================================
    # PATHS
    # =========================================================================

    def control_path(self, name: str) -> str:
        return posixpath.join(self.root, name)

    def pin_path(self, gpio: int) -> str:
        """Per-pin directory; its existence is the export marker"""
        return posixpath.join(self.root, SYSFS_PIN_DIR_PATTERN.format(gpio=gpio))

    def attribute_path(self, gpio: int, name: str) -> str:
        return posixpath.join(self.pin_path(gpio), name)

    def value_path(self, gpio: int) -> str:
        return self.attribute_path(gpio, SYSFS_VALUE_FILE)

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def is_exported(self, gpio: int) -> bool:
        return self.filesystem.path_exists(self.pin_path(gpio))

    def export(self, gpio: int) -> None:
        self.logger.debug(f"Exporting GPIO {gpio}")
        self.filesystem.write_file(self.control_path(SYSFS_EXPORT_FILE), str(gpio))

    def unexport(self, gpio: int) -> None:
        self.logger.debug(f"Unexporting GPIO {gpio}")
        self.filesystem.write_file(self.control_path(SYSFS_UNEXPORT_FILE), str(gpio))

    def set_direction(self, gpio: int, direction: PinDirection) -> None:
        self.filesystem.write_file(
            self.attribute_path(gpio, SYSFS_DIRECTION_FILE),
            direction.value,
        )

    def set_edge(self, gpio: int, edge: EdgeDetection) -> None:
        self.filesystem.write_file(
            self.attribute_path(gpio, SYSFS_EDGE_FILE),
            edge.value,
        )

    def read_value(self, gpio: int) -> str:
        return self.filesystem.read_file(self.value_path(gpio))

    def write_value(self, gpio: int, value: str) -> None:
        self.filesystem.write_file(self.value_path(gpio), value)

    def watch_value(self, gpio: int, callback: Callable[[str], None]) -> None:
        self.filesystem.watch_change(self.value_path(gpio), callback)

    def unwatch_value(self, gpio: int) -> None:
        self.filesystem.unwatch_change(self.value_path(gpio))
