"""
Local cache of downloaded JDK bundles.

Bundles are kept on the controlling machine under
``<cache_dir>/jdks/<PLATFORM>/<CPU>/<release id>`` so installing the same
release onto many machines downloads it once. A file at that path is trusted
as-is: there is no freshness check and no expiry, so a bundle that changes
upstream under the same release id keeps being served from the cache until
the file is removed by hand.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, TextIO

from jdkkit.core.directory import get_bundle_cache_dir
from jdkkit.core.download import DownloadProgress, stream_to_file
from jdkkit.core.filesystem import atomic_destination
from jdkkit.core.locking import LockManager
from jdkkit.core.platform import CPU, Platform
from jdkkit.jdk.auth import Credentials, JDKResolver

logger = logging.getLogger(__name__)


class LocalCache:
    """
    Download-once cache of JDK bundles.

    Downloads land in a temp file next to the final path and are renamed into
    place, so the cache never holds a partially-written bundle. Without a lock
    manager, concurrent requests for the same key each download their own
    copy and the last rename wins; with one, they queue on a file lock and
    later requests find the finished file.

    Example:
        >>> cache = LocalCache(Path("~/.jdkkit").expanduser(), resolver)
        >>> path = cache.fetch_or_download(Platform.LINUX, CPU.X86_64, "jdk-7u80-oth-JPR")
    """

    def __init__(
        self,
        cache_dir: Path,
        resolver: JDKResolver,
        lock_manager: Optional[LockManager] = None,
        lock_timeout: float = 600,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    ):
        self.cache_dir = Path(cache_dir)
        self.resolver = resolver
        self.lock_manager = lock_manager
        self.lock_timeout = lock_timeout
        self.progress_callback = progress_callback

    def cache_path(self, platform: Platform, cpu: CPU, release_id: str) -> Path:
        """This is where we locally cache a JDK bundle."""
        return get_bundle_cache_dir(self.cache_dir) / platform.name / cpu.name / release_id

    def fetch_or_download(
        self,
        platform: Platform,
        cpu: CPU,
        release_id: str,
        credentials: Optional[Credentials] = None,
        out: Optional[TextIO] = None,
    ) -> Path:
        """
        Get the cached bundle, downloading it first if needed.

        Args:
            platform: Target platform
            cpu: Target CPU
            release_id: Catalog id of the release
            credentials: Account for the distribution site, if configured
            out: Stream receiving user-visible progress messages

        Returns:
            Path of the bundle in the cache

        Raises:
            Any error of ``JDKResolver.resolve``, or OSError while writing.
            Nothing is left at the cache path on failure.
        """
        path = self.cache_path(platform, cpu, release_id)
        if path.exists():
            logger.debug(f"Using cached JDK bundle: {path}")
            return path

        if self.lock_manager is None:
            return self._download(path, platform, cpu, release_id, credentials, out)

        key = f"{platform.name}-{cpu.name}-{release_id}"
        with self.lock_manager.download_lock(key, timeout=self.lock_timeout):
            # Another process may have finished the download while we waited
            if path.exists():
                logger.info(f"JDK bundle downloaded by another process: {path}")
                return path
            return self._download(path, platform, cpu, release_id, credentials, out)

    def _download(
        self,
        path: Path,
        platform: Platform,
        cpu: CPU,
        release_id: str,
        credentials: Optional[Credentials],
        out: Optional[TextIO],
    ) -> Path:
        message = f"Installing JDK {release_id}"
        logger.info(message)
        if out is not None:
            print(message, file=out)

        with atomic_destination(path) as temp_path:
            response = self.resolver.resolve(
                release_id, platform, cpu, credentials=credentials, out=out
            )
            try:
                size = stream_to_file(response, temp_path, self.progress_callback)
            finally:
                response.close()

        logger.info(f"Cached {size} bytes of {release_id} at {path}")
        return path


__all__ = ["LocalCache"]
