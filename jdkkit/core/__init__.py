"""
Core functionality for jdkkit.

This package contains the foundational modules that other components depend on.
"""

from .directory import (
    get_global_cache_dir,
    DirectoryError,
)

from .locking import (
    LockManager,
    LockTimeout,
)

from .platform import (
    Platform,
    CPU,
    detect_platform,
    detect_cpu,
)

from .interfaces import (
    FileSystem,
    NodeFileSystem,
    Launcher,
    Node,
)

from .exceptions import (
    JdkKitError,
    DetectionFailed,
    CatalogError,
    AbortError,
    NotFound,
    NoCompatibleArtifact,
    AuthenticationRequired,
    AuthenticationFailed,
    InstallExecutionFailed,
    UnexpectedLayout,
    ProtocolViolation,
)

__all__ = [
    "get_global_cache_dir",
    "DirectoryError",
    "LockManager",
    "LockTimeout",
    "Platform",
    "CPU",
    "detect_platform",
    "detect_cpu",
    "FileSystem",
    "NodeFileSystem",
    "Launcher",
    "Node",
    "JdkKitError",
    "DetectionFailed",
    "CatalogError",
    "AbortError",
    "NotFound",
    "NoCompatibleArtifact",
    "AuthenticationRequired",
    "AuthenticationFailed",
    "InstallExecutionFailed",
    "UnexpectedLayout",
    "ProtocolViolation",
]
