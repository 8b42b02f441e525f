"""
File system utilities for jdkkit.

This module provides:
- Safe file operations (atomic writes via temp file + rename)
- LocalFileSystem, the FileSystem implementation for the machine jdkkit runs on

All operations handle platform differences transparently.
"""

import logging
import os
import shutil
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, List, Union

from jdkkit.core.exceptions import JdkKitError
from jdkkit.core.interfaces import NodeFileSystem

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


class FilesystemError(JdkKitError):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Safe File Operations
# ============================================================================


@contextmanager
def atomic_destination(file_path: Union[str, Path]) -> Iterator[Path]:
    """
    Provide a temp file that replaces ``file_path`` when the block succeeds.

    The temp file lives in the same directory as the destination (ensures same
    filesystem), so the final rename is atomic and the destination is never
    visible in a partially-written state. If the block raises, the temp file
    is deleted and the destination is left untouched.

    Args:
        file_path: Final destination path

    Yields:
        Path of the temp file to write to

    Example:
        >>> with atomic_destination('cache/jdk.bin') as tmp:
        ...     tmp.write_bytes(b'...')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    os.close(temp_fd)
    temp_path = Path(temp_path_str)

    try:
        yield temp_path
        # Atomic rename (replaces destination if it exists)
        temp_path.replace(file_path)
    finally:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Failed to remove temp file {temp_path}: {e}")


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    Args:
        file_path: Path to write to
        content: Content to write (string or bytes)
        encoding: Text encoding (used only for string content)

    Example:
        >>> atomic_write('.installedByJdkkit', 'jdk-7u80-oth-JPR')
    """
    with atomic_destination(file_path) as temp_path:
        if isinstance(content, str):
            temp_path.write_text(content, encoding=encoding)
        else:
            temp_path.write_bytes(content)


def safe_rmtree(path: Union[str, Path]) -> None:
    """
    Remove a file or directory tree; missing paths are ignored.

    Raises:
        FilesystemError: If deletion fails
    """
    path = Path(path)

    if not path.exists() and not path.is_symlink():
        return

    try:
        if path.is_dir() and not path.is_symlink():
            if IS_WINDOWS:

                def handle_remove_readonly(func, p, exc):
                    """Error handler for Windows read-only files."""
                    os.chmod(p, stat.S_IWRITE)
                    func(p)

                shutil.rmtree(path, onerror=handle_remove_readonly)
            else:
                shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        raise FilesystemError(f"Failed to remove '{path}': {e}") from e


# ============================================================================
# Local File System
# ============================================================================


class LocalFileSystem(NodeFileSystem):
    """NodeFileSystem backed by the file system of the running machine."""

    separator = os.sep

    def delete(self, path: str) -> None:
        Path(path).unlink()

    def chmod(self, path: str, mode: int) -> None:
        if IS_WINDOWS:
            # Permission bits beyond read-only have no meaning on Windows
            return
        os.chmod(path, mode)

    def read(self, path: str) -> BinaryIO:
        return open(path, "rb")

    def list_subdirectories(self, path: str) -> List[str]:
        return sorted(p.name for p in Path(path).iterdir() if p.is_dir())

    def pull_up(self, from_dir: str, to_dir: str) -> None:
        source = Path(from_dir)
        destination = Path(to_dir)
        for child in source.iterdir():
            shutil.move(str(child), str(destination / child.name))
        source.rmdir()
        logger.debug(f"Pulled up contents of {source} into {destination}")

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def read_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        atomic_write(path, content)

    def delete_recursive(self, path: str) -> None:
        safe_rmtree(path)

    def mkdirs(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def copy_from(self, local_path: str, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(local_path, path)

    def absolutize(self, path: str) -> str:
        return str(Path(path).absolute())


__all__ = [
    "FilesystemError",
    "atomic_destination",
    "atomic_write",
    "safe_rmtree",
    "LocalFileSystem",
]
