"""
Download locks for the shared bundle cache.

Every install started from the controlling machine reads and writes the same
cache directory. Cache writes are already atomic, so nobody sees half a
bundle; the locks here only stop two installs of the same release from both
downloading it. They are plain lock files handled by ``filelock``, which
works across processes on Windows and Unix and is released when its holder
dies.

Usage:
    from jdkkit.core.locking import LockManager

    lock_manager = LockManager(cache_dir / "lock")
    with lock_manager.download_lock("LINUX-X86_64-jdk-7u80", timeout=600):
        ...
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)


class LockManager:
    """
    Hands out per-key download locks.

    Attributes:
        lock_dir: Directory holding one lock file per key
    """

    def __init__(self, lock_dir: Path):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files
        """
        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def download_lock(self, key: str, timeout: float = 600):
        """
        Acquire lock for downloading one cache entry.

        Args:
            key: Cache key (e.g., 'LINUX-X86_64-jdk-7u80-oth-JPR')
            timeout: Maximum wait time in seconds (default: 600 for long downloads)

        Yields:
            None

        Raises:
            LockTimeout: If lock can't be acquired within timeout
        """
        # Sanitize key to create valid filename
        safe_key = key.replace("/", "-").replace("\\", "-").replace(":", "-")
        lock_path = self.lock_dir / f"download-{safe_key}.lock"
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired download lock: {lock_path}")
                yield
                logger.debug(f"Released download lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire download lock for {key} after {timeout}s. "
                "Another process may be downloading this JDK."
            )
            raise LockTimeout(str(lock_path)) from e


__all__ = [
    "LockManager",
    "LockTimeout",
]
