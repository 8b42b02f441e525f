"""
Directory layout for jdkkit.

Directory Structure:
    Global Cache (~/.jdkkit/ or %USERPROFILE%\\.jdkkit\\):
        - catalog.json  : Release catalog materialized by the refresh job
        - jdks/         : Downloaded bundles, jdks/<PLATFORM>/<CPU>/<release id>
        - lock/         : Concurrent download control files
"""

import os
from pathlib import Path

from jdkkit.core.exceptions import JdkKitError

IS_WINDOWS = os.name == "nt"


class DirectoryError(JdkKitError):
    """Base exception for directory-related errors."""

    pass


def get_global_cache_dir() -> Path:
    """
    Get the platform-specific global cache directory path.

    Returns:
        Path: The global cache directory path.
            - Windows: %USERPROFILE%\\.jdkkit
            - Linux/macOS/Solaris: ~/.jdkkit/

    Raises:
        DirectoryError: If the user profile directory cannot be determined
    """
    if IS_WINDOWS:
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine global cache directory."
            )
        return Path(user_profile) / ".jdkkit"
    else:
        return Path.home() / ".jdkkit"


def get_bundle_cache_dir(cache_dir: Path) -> Path:
    """Directory holding downloaded JDK bundles."""
    return Path(cache_dir) / "jdks"


def get_lock_dir(cache_dir: Path) -> Path:
    """Directory holding download lock files."""
    return Path(cache_dir) / "lock"


def get_default_catalog_path(cache_dir: Path) -> Path:
    """Default location of the materialized release catalog."""
    return Path(cache_dir) / "catalog.json"


__all__ = [
    "DirectoryError",
    "get_global_cache_dir",
    "get_bundle_cache_dir",
    "get_lock_dir",
    "get_default_catalog_path",
]
