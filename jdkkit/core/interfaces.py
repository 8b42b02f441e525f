"""
Core interfaces for jdkkit.

This module defines the abstract interfaces the installer depends on to reach
a target machine. The installation procedure never touches a target directly;
it goes through these narrow capabilities so any machine that can implement
them (local, over SSH, an agent channel, an in-memory fake) is supportable.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Callable, List, Optional, TextIO, TypeVar, Union

T = TypeVar("T")

Command = Union[List[str], str]


class FileSystem(ABC):
    """
    File system operations used by the installation procedure.

    Paths are strings in the target machine's native notation.
    """

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a file."""
        pass

    @abstractmethod
    def chmod(self, path: str, mode: int) -> None:
        """Change the permission bits of a file."""
        pass

    @abstractmethod
    def read(self, path: str) -> BinaryIO:
        """
        Open a file for reading.

        Returns:
            Binary stream; the caller closes it
        """
        pass

    @abstractmethod
    def list_subdirectories(self, path: str) -> List[str]:
        """
        List sub-directories of the given directory.

        Returns:
            Just the file name portion of each sub-directory
        """
        pass

    @abstractmethod
    def pull_up(self, from_dir: str, to_dir: str) -> None:
        """
        Move all children of ``from_dir`` into ``to_dir``.

        The emptied ``from_dir`` is removed.
        """
        pass


class NodeFileSystem(FileSystem):
    """
    File system operations the installer needs around the installation itself.

    These cover the install marker, cleaning the target directory, and
    staging the downloaded bundle onto the machine.
    """

    separator = "/"

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def read_text(self, path: str) -> str:
        pass

    @abstractmethod
    def write_text(self, path: str, content: str) -> None:
        pass

    @abstractmethod
    def delete_recursive(self, path: str) -> None:
        """Delete a file or directory tree; missing paths are ignored."""
        pass

    @abstractmethod
    def mkdirs(self, path: str) -> None:
        pass

    @abstractmethod
    def copy_from(self, local_path: str, path: str) -> None:
        """
        Copy a file from the controlling machine onto this machine.

        Args:
            local_path: Source file on the controlling machine
            path: Destination on this machine
        """
        pass

    @abstractmethod
    def absolutize(self, path: str) -> str:
        """Return the absolute form of ``path`` in native notation."""
        pass

    def child(self, path: str, name: str) -> str:
        """Join a child name onto a directory path."""
        return path.rstrip("/\\") + self.separator + name


class Launcher(ABC):
    """Starts processes on a machine and waits for them."""

    @abstractmethod
    def launch(
        self,
        cmd: Command,
        stdin: Optional[bytes] = None,
        stdout: Optional[TextIO] = None,
        pwd: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> int:
        """
        Run a process to completion.

        Args:
            cmd: Argument list, or a single pre-joined command line that
                must reach the process exactly as given
            stdin: Content fed to the process's standard input
            stdout: Stream receiving the process's output
            pwd: Working directory
            timeout: Seconds to wait before giving up (None waits forever)

        Returns:
            Exit status of the process
        """
        pass


class Node(ABC):
    """
    A machine the JDK can be installed on.

    This is the remote execution abstraction: ``call`` runs a callable in the
    machine's own context and returns its result (or raises its exception).
    """

    @abstractmethod
    def call(self, fn: Callable[[], T]) -> T:
        pass

    @abstractmethod
    def file_system(self) -> NodeFileSystem:
        pass

    @abstractmethod
    def create_launcher(self) -> Launcher:
        pass


__all__ = [
    "Command",
    "FileSystem",
    "NodeFileSystem",
    "Launcher",
    "Node",
]
