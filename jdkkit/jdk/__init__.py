"""
JDK installation module for jdkkit.

This module provides functionality for:
- Reading the release catalog
- Choosing the right bundle for a platform/CPU combination
- Logging into the distribution site and downloading the bundle
- Caching downloads on the controlling machine
- Installing the bundle onto a node
"""

from jdkkit.jdk.catalog import (
    ArtifactFile,
    Release,
    Family,
    ReleaseCatalog,
    CatalogProvider,
    StaticCatalogProvider,
    JsonCatalogProvider,
)
from jdkkit.jdk.matcher import (
    Preference,
    classify,
    select_best,
    require_best,
)
from jdkkit.jdk.auth import (
    Credentials,
    JDKResolver,
)
from jdkkit.jdk.cache import LocalCache
from jdkkit.jdk.install import install
from jdkkit.jdk.installer import JDKInstaller, MARKER_FILE

__all__ = [
    "ArtifactFile",
    "Release",
    "Family",
    "ReleaseCatalog",
    "CatalogProvider",
    "StaticCatalogProvider",
    "JsonCatalogProvider",
    "Preference",
    "classify",
    "select_best",
    "require_best",
    "Credentials",
    "JDKResolver",
    "LocalCache",
    "install",
    "JDKInstaller",
    "MARKER_FILE",
]
