"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys

from jdkkit.config import Settings, load_settings
from jdkkit.core.directory import get_lock_dir
from jdkkit.core.download import DownloadProgress
from jdkkit.core.locking import LockManager
from jdkkit.jdk.auth import JDKResolver
from jdkkit.jdk.cache import LocalCache
from jdkkit.jdk.catalog import JsonCatalogProvider

logger = logging.getLogger(__name__)


def settings_from_args(args) -> Settings:
    """Load settings honoring the global ``--config`` option."""
    return load_settings(getattr(args, "config", None))


def build_resolver(settings: Settings) -> JDKResolver:
    """Create a resolver reading the configured catalog."""
    return JDKResolver(
        JsonCatalogProvider(settings.catalog),
        sso_host=settings.sso_host,
        timeout=settings.http_timeout,
        credential_hint=settings.credential_hint(),
    )


def build_cache(settings: Settings, show_progress: bool = True) -> LocalCache:
    """Create the local bundle cache described by the settings."""
    lock_manager = (
        LockManager(get_lock_dir(settings.cache_dir))
        if settings.lock_downloads
        else None
    )
    return LocalCache(
        settings.cache_dir,
        build_resolver(settings),
        lock_manager=lock_manager,
        lock_timeout=settings.lock_timeout,
        progress_callback=print_progress if show_progress else None,
    )


def print_progress(progress: DownloadProgress) -> None:
    """Print download progress on a single terminal line."""
    sys.stderr.write(f"\r  {progress}")
    if progress.total_bytes and progress.bytes_downloaded >= progress.total_bytes:
        sys.stderr.write("\n")
    sys.stderr.flush()


__all__ = [
    "settings_from_args",
    "build_resolver",
    "build_cache",
    "print_progress",
]
