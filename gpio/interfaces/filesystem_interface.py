"""
Filesystem Interface - Abstract Capability Layer

The only contract through which the GPIO stack touches the operating system.

Swapping the real implementation for the in-memory mock is what lets the
whole lifecycle run (and be tested) on a machine without sysfs.
"""

from abc import ABC, abstractmethod
from typing import Callable

# Called with the watched path whenever its content may have changed
ChangeCallback = Callable[[str], None]


class FilesystemInterface(ABC):
    """
    Abstract base class for the file operations sysfs GPIO needs.

    All methods are blocking; callers that want asynchrony run them on
    their own worker threads.
    """

    @abstractmethod
    def path_exists(self, path: str) -> bool:
        """
        Check whether a file or directory exists.

        Args:
            path: Absolute path

        Returns:
            True if the path exists
        """

    @abstractmethod
    def write_file(self, path: str, contents: str) -> None:
        """
        Replace the contents of a file.

        Args:
            path: Absolute path
            contents: Text to write

        Raises:
            FilesystemError: If the write fails
        """

    @abstractmethod
    def read_file(self, path: str) -> str:
        """
        Read the full contents of a file.

        Args:
            path: Absolute path

        Returns:
            File contents as text

        Raises:
            FilesystemError: If the read fails
        """

    @abstractmethod
    def watch_change(self, path: str, callback: ChangeCallback) -> None:
        """
        Start notifying callback when the file at path changes.

        Registering a second watcher for the same path replaces the first.

        Args:
            path: Absolute path of the file to watch
            callback: Receives the path on each change

        Raises:
            FilesystemError: If the watcher cannot be installed
        """

    @abstractmethod
    def unwatch_change(self, path: str) -> None:
        """
        Stop watching a path. Unknown paths are ignored.

        Args:
            path: Absolute path previously passed to watch_change
        """

    @abstractmethod
    def cleanup(self) -> None:
        """
        Stop all watchers and release resources.
        Does not touch any watched file.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this implementation talks to real sysfs.

        Returns:
            True for the OS filesystem, False for simulations
        """
