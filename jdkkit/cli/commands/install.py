"""
Install command implementation.

Installs a JDK release into a directory on this machine.
"""

import logging
import sys

from jdkkit.cli.utils import build_cache, settings_from_args
from jdkkit.core.launcher import LocalNode
from jdkkit.jdk.installer import MARKER_FILE, JDKInstaller

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if the JDK is installed, 1 if installation was skipped)
    """
    settings = settings_from_args(args)

    installer = JDKInstaller(
        args.release_id,
        accept_license=args.accept_license or settings.accept_license,
        cache=build_cache(settings, show_progress=not args.quiet),
        credentials=settings.credentials(),
        process_timeout=settings.process_timeout,
    )

    location = installer.perform_installation(
        LocalNode(), str(args.directory), out=sys.stdout
    )

    # Skipped installs return the location without populating it
    marker = args.directory / MARKER_FILE
    if not marker.exists() or marker.read_text(encoding="utf-8") != args.release_id:
        logger.error(f"{args.release_id} was not installed")
        return 1

    print(f"JDK {args.release_id} installed at {location}")
    return 0
