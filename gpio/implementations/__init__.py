"""
GPIO Implementations Package

Exposes concrete implementations of the filesystem capability.
"""

from gpio.implementations.mock_filesystem import MockFilesystem
from gpio.implementations.os_filesystem import OSFilesystem

# Public API (sorted alphabetically)
__all__ = [
    "MockFilesystem",
    "OSFilesystem",
]
