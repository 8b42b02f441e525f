"""
Installs a JDK release onto a node, end to end.

detect platform/CPU -> download into the local cache -> stage the bundle on
the node -> run the platform install -> write the marker -> remove the bundle
"""

import logging
from typing import Optional, TextIO

from jdkkit.core.exceptions import DetectionFailed
from jdkkit.core.interfaces import Node
from jdkkit.core.platform import detect_cpu, detect_platform
from jdkkit.jdk.auth import Credentials
from jdkkit.jdk.cache import LocalCache
from jdkkit.jdk.install import install

logger = logging.getLogger(__name__)

MARKER_FILE = ".installedByJdkkit"


class JDKInstaller:
    """
    Installs one JDK release into a directory on a node.

    The installed directory records the release id in a marker file, so
    running the installer again for the same release is a no-op, while a
    different release replaces the directory wholesale.

    Attributes:
        release_id: Catalog id of the release, such as 'jdk-7u80-oth-JPR'
        accept_license: Whether the user accepted the JDK license
        cache: Local cache the bundle is downloaded through
        credentials: Account for the distribution site, if configured
        process_timeout: Seconds to wait for the installer process
    """

    def __init__(
        self,
        release_id: str,
        accept_license: bool,
        cache: LocalCache,
        credentials: Optional[Credentials] = None,
        process_timeout: Optional[float] = None,
    ):
        if not release_id or not release_id.strip():
            raise ValueError("Define JDK ID")
        self.release_id = release_id
        self.accept_license = accept_license
        self.cache = cache
        self.credentials = credentials
        self.process_timeout = process_timeout

    def perform_installation(
        self, node: Node, expected_location: str, out: Optional[TextIO] = None
    ) -> str:
        """
        Make sure the release is installed at ``expected_location`` on the node.

        A declined license or a node whose platform can't be detected is not
        an error: a message is written and the (unpopulated) location is
        returned, so the job can go on without this JDK.

        Args:
            node: Node to install on
            expected_location: Install directory on the node
            out: Stream receiving user-visible messages and installer output

        Returns:
            ``expected_location``

        Raises:
            AbortError: If resolving, downloading or installing fails
            requests.RequestException: If talking to the download site fails
            OSError: If file operations fail
        """
        if not self.accept_license:
            self._print(
                out,
                "Unable to perform installation until the license is accepted.",
            )
            return expected_location

        fs = node.file_system()
        marker = fs.child(expected_location, MARKER_FILE)

        try:
            if fs.exists(marker) and fs.read_text(marker) == self.release_id:
                logger.debug(f"{self.release_id} already installed at {expected_location}")
                return expected_location

            fs.delete_recursive(expected_location)
            fs.mkdirs(expected_location)

            platform = detect_platform(node)
            cpu = detect_cpu(node)

            local_bundle = self.cache.fetch_or_download(
                platform, cpu, self.release_id, credentials=self.credentials, out=out
            )

            bundle = fs.child(expected_location, platform.bundle_file_name)
            fs.copy_from(str(local_bundle), bundle)

            # Installers don't like paths such as '/tmp/foo' on Windows, so
            # hand them the native absolute form
            install(
                node.create_launcher(),
                platform,
                fs,
                out,
                fs.absolutize(expected_location),
                fs.absolutize(bundle),
                timeout=self.process_timeout,
            )

            fs.write_text(marker, self.release_id)
            fs.delete(bundle)
            logger.info(f"Installed {self.release_id} at {expected_location}")

        except DetectionFailed as e:
            self._print(out, f"JDK installation skipped: {e}")

        return expected_location

    @staticmethod
    def _print(out: Optional[TextIO], message: str) -> None:
        logger.info(message)
        if out is not None:
            print(message, file=out)


__all__ = [
    "JDKInstaller",
    "MARKER_FILE",
]
