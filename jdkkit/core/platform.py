"""
Platform and CPU detection for jdkkit.

Detection must run on the machine the JDK is installed to, not on the
controller, so the public entry points take a node and ask it to run
``Platform.current`` / ``CPU.current`` in its own interpreter.

Usage:
    from jdkkit.core.platform import detect_platform, detect_cpu

    platform = detect_platform(node)
    cpu = detect_cpu(node)
    print(f"{platform.name}/{cpu.name}")
"""

import logging
import platform as _platform
from enum import Enum

from jdkkit.core.exceptions import DetectionFailed

logger = logging.getLogger(__name__)


class Platform(Enum):
    """
    Supported operating system families.

    Each member carries the file name the downloaded bundle is staged
    under on the target machine.
    """

    LINUX = "jdk.sh"
    SOLARIS = "jdk.sh"
    WINDOWS = "jdk.exe"

    def __new__(cls, bundle_file_name: str):
        # LINUX and SOLARIS share a file name; keep them distinct members.
        obj = object.__new__(cls)
        obj._value_ = len(cls.__members__)
        obj.bundle_file_name = bundle_file_name
        return obj

    def is_named_in(self, line: str) -> bool:
        """
        Check whether an upper-cased artifact name mentions this platform.

        JDK files have either 'WINDOWS', 'LINUX', or 'SOLARIS' in their name,
        which lets non-applicable files be thrown away right away.
        """
        return self.name in line

    @classmethod
    def from_os_name(cls, os_name: str) -> "Platform":
        """
        Map a raw OS name to a platform.

        Args:
            os_name: OS name as reported by the runtime (e.g. 'Linux', 'SunOS')

        Returns:
            Matching Platform

        Raises:
            DetectionFailed: If the name matches no known platform
        """
        name = os_name.lower()
        if "linux" in name:
            return cls.LINUX
        if "windows" in name:
            return cls.WINDOWS
        if "sun" in name or "solaris" in name:
            return cls.SOLARIS
        raise DetectionFailed(f"Unknown OS name: {os_name}", raw=os_name)

    @classmethod
    def current(cls) -> "Platform":
        """Determine the platform of the running interpreter."""
        return cls.from_os_name(_platform.system())


class CPU(Enum):
    """CPU types a JDK bundle can be built for."""

    X86_32 = "i386"
    X86_64 = "amd64"
    SPARC = "sparc"
    ITANIUM = "ia64"

    @classmethod
    def from_arch(cls, arch: str) -> "CPU":
        """
        Map a raw architecture string to a CPU.

        Tokens are tested in priority order, so 'x86_64' is X86_64 and
        never X86_32.

        Raises:
            DetectionFailed: If the string matches no known CPU
        """
        name = arch.lower()
        if "sparc" in name:
            return cls.SPARC
        if "ia64" in name:
            return cls.ITANIUM
        if "amd64" in name or "86_64" in name:
            return cls.X86_64
        if "86" in name:
            return cls.X86_32
        raise DetectionFailed(f"Unknown CPU architecture: {arch}", raw=arch)

    @classmethod
    def current(cls) -> "CPU":
        """
        Determine the CPU of the running interpreter.

        Solaris x86 reports 'i86pc'/'i386' even on 64-bit kernels, so an x86
        host counts as X86_64 whenever the interpreter itself is 64-bit.
        """
        cpu = cls.from_arch(_raw_arch())
        if cpu is cls.X86_32 and _platform.architecture()[0] == "64bit":
            return cls.X86_64
        return cpu


def _raw_arch() -> str:
    """
    Get the architecture string of the running interpreter.

    ``platform.machine()`` alone is not enough on Solaris, where it reports
    the machine class ('sun4v') and the processor ('sparc') separately.
    """
    parts = [_platform.machine(), _platform.processor()]
    return " ".join(p for p in parts if p)


def detect_platform(node) -> Platform:
    """
    Determine the platform of the given node.

    Args:
        node: Node to run detection on

    Returns:
        Platform of the node

    Raises:
        DetectionFailed: If the node's OS is not recognized
    """
    result = node.call(Platform.current)
    logger.debug(f"Detected platform {result.name} on {node}")
    return result


def detect_cpu(node) -> CPU:
    """
    Determine the CPU of the given node.

    Raises:
        DetectionFailed: If the node's architecture is not recognized
    """
    result = node.call(CPU.current)
    logger.debug(f"Detected CPU {result.name} on {node}")
    return result


__all__ = [
    "Platform",
    "CPU",
    "detect_platform",
    "detect_cpu",
]
