"""
Centralized exception hierarchy for jdkkit.

This module defines all custom exceptions used across the codebase
to eliminate duplication and provide clear exception semantics.
"""

from typing import List, Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class JdkKitError(Exception):
    """Base exception for all jdkkit errors."""

    pass


class DetectionFailed(JdkKitError):
    """Raised when the platform or CPU of a machine cannot be determined."""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(message)


class CatalogError(JdkKitError):
    """Raised when the materialized release catalog cannot be read."""

    pass


# ============================================================================
# Abort Exceptions
# ============================================================================


class AbortError(JdkKitError):
    """
    Base exception for failures that abort the current install attempt.

    The message is meant to be shown to the user as-is, without a traceback.
    """

    pass


class NotFound(AbortError):
    """Raised when a release id is absent from the catalog, or the catalog is empty."""

    def __init__(self, message: str, release_id: str = ""):
        self.release_id = release_id
        super().__init__(message)


class NoCompatibleArtifact(AbortError):
    """Raised when no artifact of a release fits the platform/CPU combination."""

    def __init__(self, platform, cpu):
        self.platform = platform
        self.cpu = cpu
        super().__init__(
            f"Couldn't find the right download for {platform.name} and "
            f"{cpu.name} combination"
        )


class AuthenticationRequired(AbortError):
    """Raised when the download site asks for credentials and none are configured."""

    def __init__(self, message: str, credential_hint: str = ""):
        self.credential_hint = credential_hint
        if credential_hint:
            message = f"{message} Specify them in {credential_hint}"
        super().__init__(message)


class AuthenticationFailed(AuthenticationRequired):
    """Raised when the configured credentials are repeatedly rejected."""

    pass


class InstallExecutionFailed(AbortError):
    """Raised when the extraction command or native installer exits with an error."""

    def __init__(self, exit_code: Optional[int], log: str = "", message: str = ""):
        self.exit_code = exit_code
        self.log = log
        super().__init__(message or f"Failed to install JDK. Exit code={exit_code}")


class UnexpectedLayout(AbortError):
    """Raised when an extracted bundle does not yield exactly one JDK directory."""

    def __init__(self, found: List[str]):
        self.found = list(found)
        super().__init__(f"Failed to find the extracted JDKs: {self.found}")


# ============================================================================
# Protocol Exceptions
# ============================================================================


class ProtocolViolation(JdkKitError, IOError):
    """
    Raised when the download site's login flow behaves unexpectedly.

    This usually means the remote site changed its pages and the login
    state machine needs updating.
    """

    pass


__all__ = [
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
