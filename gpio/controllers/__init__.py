"""
Controllers Package

Channel resolution, sysfs access and the pin lifecycle manager.
"""

from gpio.controllers.channel_resolver import ChannelResolver
from gpio.controllers.pin_manager import ActivePin, GPIOManager
from gpio.controllers.sysfs_gateway import SysfsGateway

# Public API (sorted alphabetically)
__all__ = [
    "ActivePin",
    "ChannelResolver",
    "GPIOManager",
    "SysfsGateway",
]
