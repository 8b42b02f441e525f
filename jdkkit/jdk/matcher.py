"""
Selection of the artifact file that fits a platform/CPU combination.

Catalog entries carry no structured platform data, only file names such as
'jdk-7u80-linux-x64.tar.gz' or 'jdk-6u45-solaris-sparcv9.sh'. Matching is
therefore done on substrings of the upper-cased file name. Callers go through
``select_best``/``require_best`` only, so a structured catalog format can
replace the heuristics here without touching them.
"""

import logging
from enum import Enum
from typing import Iterable, Optional

from jdkkit.core.exceptions import NoCompatibleArtifact
from jdkkit.core.platform import CPU, Platform
from jdkkit.jdk.catalog import ArtifactFile

logger = logging.getLogger(__name__)


class Preference(Enum):
    """How well an artifact fits a CPU."""

    PRIMARY = 0
    SECONDARY = 1
    UNACCEPTABLE = 2


def _must(condition: bool) -> Preference:
    return Preference.PRIMARY if condition else Preference.UNACCEPTABLE


def classify(cpu: CPU, name: str) -> Preference:
    """
    Rank an artifact name for a CPU.

    JDK 5 names bundles like 'Linux AMD64' while JDK 6 uses 'Linux x64', so
    "64" alone is what identifies a 64-bit x86 bundle.

    Args:
        cpu: Target CPU
        name: Artifact file name (any case)

    Returns:
        Preference of the artifact for the CPU
    """
    line = name.upper()

    # No fallback for these two, they run nothing else
    if cpu is CPU.SPARC:
        return _must("SPARC" in line)
    if cpu is CPU.ITANIUM:
        return _must("IA64" in line)

    if cpu is CPU.X86_64:
        if "SPARC" in line or "IA64" in line:
            return Preference.UNACCEPTABLE
        if "64" in line:
            return Preference.PRIMARY
        # 64-bit hosts can run a 32-bit bundle
        return Preference.SECONDARY

    if cpu is CPU.X86_32:
        if "64" in line or "SPARC" in line or "IA64" in line:
            return Preference.UNACCEPTABLE
        return Preference.PRIMARY

    return Preference.UNACCEPTABLE


def select_best(
    candidates: Iterable[ArtifactFile], platform: Platform, cpu: CPU
) -> Optional[ArtifactFile]:
    """
    Choose the artifact to download for a platform/CPU combination.

    The first PRIMARY candidate in iteration order wins; failing that, the
    first SECONDARY one.

    Returns:
        Chosen ArtifactFile, or None if nothing is usable
    """
    primary = None
    secondary = None

    for candidate in candidates:
        line = candidate.name.upper()
        if not platform.is_named_in(line):
            continue

        preference = classify(cpu, line)
        if preference is Preference.PRIMARY and primary is None:
            primary = candidate
        elif preference is Preference.SECONDARY and secondary is None:
            secondary = candidate

    choice = primary or secondary
    logger.debug(f"Platform choice for {platform.name}/{cpu.name}: {choice}")
    return choice


def require_best(
    candidates: Iterable[ArtifactFile], platform: Platform, cpu: CPU
) -> ArtifactFile:
    """
    Like ``select_best``, but fail when nothing fits.

    Raises:
        NoCompatibleArtifact: If no candidate is usable
    """
    choice = select_best(candidates, platform, cpu)
    if choice is None:
        raise NoCompatibleArtifact(platform, cpu)
    return choice


__all__ = [
    "Preference",
    "classify",
    "select_best",
    "require_best",
]
