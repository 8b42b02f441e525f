"""
Streaming of HTTP response bodies to disk with progress tracking.

The JDK download itself is negotiated by the login flow in
``jdkkit.jdk.auth``; by the time a response reaches this module it is the
final binary body, and all that is left is to copy it to a file.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import requests

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# Minimum seconds between two progress reports
REPORT_INTERVAL = 0.5


@dataclass
class DownloadProgress:
    """Snapshot of a running transfer."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float
    eta_seconds: float

    def __str__(self) -> str:
        return format_progress(self)


class _ProgressTracker:
    """Turns byte counts into throttled DownloadProgress reports."""

    def __init__(
        self, total: int, callback: Optional[Callable[[DownloadProgress], None]]
    ):
        self.total = total
        self.callback = callback
        self.started = time.time()
        self.reported = self.started

    def update(self, done: int) -> None:
        if self.callback is None:
            return
        now = time.time()
        if now - self.reported < REPORT_INTERVAL and done != self.total:
            return
        self.reported = now
        self.callback(self._snapshot(done, now))

    def _snapshot(self, done: int, now: float) -> DownloadProgress:
        elapsed = now - self.started
        speed = done / elapsed if elapsed > 0 else 0
        if self.total > 0:
            left = max(self.total - done, 0)
            return DownloadProgress(
                bytes_downloaded=done,
                total_bytes=self.total,
                percentage=done * 100 / self.total,
                speed_bps=speed,
                eta_seconds=left / speed if speed > 0 else 0,
            )
        return DownloadProgress(done, done, 0, speed, 0)


def stream_to_file(
    response: requests.Response,
    destination: Path,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
) -> int:
    """
    Copy a streaming response body into a file.

    Args:
        response: Response opened with ``stream=True``
        destination: File to write; truncated if it exists
        progress_callback: Receives a DownloadProgress at most every
            REPORT_INTERVAL seconds, and once more on completion when the
            length is known

    Returns:
        Number of bytes written

    Raises:
        requests.RequestException: If the connection fails mid-transfer
        OSError: If the file cannot be written
    """
    length = response.headers.get("content-length")
    tracker = _ProgressTracker(int(length) if length else 0, progress_callback)

    written = 0
    with open(destination, "wb") as f:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if not chunk:
                continue
            f.write(chunk)
            written += len(chunk)
            tracker.update(written)

    logger.debug(f"Wrote {written} bytes to {destination}")
    return written


def format_progress(progress: DownloadProgress) -> str:
    """
    Render progress as one line of text.

    Example:
        >>> format_progress(DownloadProgress(52428800, 104857600, 50.0, 1048576, 50))
        '50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s'
    """
    mib = 1024 * 1024
    done = progress.bytes_downloaded / mib
    speed = progress.speed_bps / mib

    if progress.total_bytes <= 0 or progress.percentage <= 0:
        return f"{done:.1f} MB at {speed:.1f} MB/s"

    return (
        f"{done:.1f}/{progress.total_bytes / mib:.1f} MB "
        f"({progress.percentage:.1f}%) at {speed:.1f} MB/s "
        f"ETA: {progress.eta_seconds:.0f}s"
    )


__all__ = [
    "DownloadProgress",
    "stream_to_file",
    "format_progress",
]
