"""
Locate command implementation.

Downloads a JDK bundle into the local cache and prints where it is.
"""

import logging
import sys

from jdkkit.cli.utils import build_cache, settings_from_args
from jdkkit.core.launcher import LocalNode
from jdkkit.core.platform import CPU, Platform, detect_cpu, detect_platform

logger = logging.getLogger(__name__)

_CPU_NAMES = {
    "x86_32": CPU.X86_32,
    "x86_64": CPU.X86_64,
    "sparc": CPU.SPARC,
    "itanium": CPU.ITANIUM,
}


def run(args) -> int:
    """
    Run the locate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = settings_from_args(args)

    node = LocalNode()
    platform = Platform[args.platform.upper()] if args.platform else detect_platform(node)
    cpu = _CPU_NAMES[args.cpu] if args.cpu else detect_cpu(node)

    cache = build_cache(settings, show_progress=not args.quiet)
    path = cache.fetch_or_download(
        platform,
        cpu,
        args.release_id,
        credentials=settings.credentials(),
        out=sys.stderr,
    )

    print(path)
    return 0
