"""
Detect command implementation.

Shows the platform and CPU jdkkit would pick a bundle for on this machine.
"""

import logging

from jdkkit.core.exceptions import DetectionFailed
from jdkkit.core.launcher import LocalNode
from jdkkit.core.platform import detect_cpu, detect_platform

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the detect command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    node = LocalNode()
    try:
        platform = detect_platform(node)
        cpu = detect_cpu(node)
    except DetectionFailed as e:
        logger.error(str(e))
        return 1

    print(f"Platform: {platform.name}")
    print(f"CPU:      {cpu.name}")
    print(f"Bundle:   {platform.bundle_file_name}")
    return 0
