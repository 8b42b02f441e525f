"""
Release catalog of installable JDKs.

The catalog is fetched and written to disk by an external refresh job; this
module only reads the materialized JSON. Its shape is:

    {
      "version": 2,
      "data": [
        {
          "name": "JDK 7",
          "releases": [
            {
              "name": "jdk-7u80-oth-JPR",
              "title": "Java SE Development Kit 7u80",
              "files": [
                {"name": "jdk-7u80-linux-x64.tar.gz",
                 "title": "Linux x64",
                 "filepath": "https://download.oracle.com/..."}
              ]
            }
          ]
        }
      ]
    }
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

from jdkkit.core.exceptions import CatalogError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArtifactFile:
    """A single downloadable bundle for one platform/CPU combination."""

    name: str
    """File name; carries the platform and architecture hints matched against"""

    title: str
    """Human readable description"""

    download_path: str
    """URL the bundle is downloaded from"""


@dataclass(frozen=True)
class Release:
    """A specific JDK version offering one or more artifact files."""

    id: str
    """Product code, like 'jdk-6u13-oth-JPR'"""

    title: str
    files: Tuple[ArtifactFile, ...] = ()

    def matches(self, candidate_id: Optional[str]) -> bool:
        """
        Check whether a requested id refers to this release.

        Ids used to look like 'jdk-6u13-oth-JPR@CDS-CDS_Developer' but are
        now just 'jdk-6u13-oth-JPR'; both forms are accepted.
        """
        if candidate_id is None:
            return False
        return candidate_id == self.id or candidate_id.startswith(self.id + "@")


@dataclass(frozen=True)
class Family:
    """A group of releases, such as 'JDK 6'."""

    name: str
    releases: Tuple[Release, ...] = ()


@dataclass(frozen=True)
class ReleaseCatalog:
    """Ordered, immutable collection of JDK families."""

    families: Tuple[Family, ...] = ()
    version: int = 0

    def is_empty(self) -> bool:
        """True when no family has any release."""
        return not any(f.releases for f in self.families)

    def releases(self) -> Iterator[Release]:
        """Iterate over all releases in catalog order."""
        for family in self.families:
            yield from family.releases

    def get_release(self, release_id: Optional[str]) -> Optional[Release]:
        """
        Find a release by id.

        Ids are not required to be unique across families; the first match
        in catalog order wins.

        Returns:
            Matching Release, or None
        """
        for release in self.releases():
            if release.matches(release_id):
                return release
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReleaseCatalog":
        """
        Build a catalog from its materialized JSON form.

        Raises:
            CatalogError: If an entry is missing required fields
        """
        try:
            families = tuple(
                Family(
                    name=f.get("name", ""),
                    releases=tuple(
                        Release(
                            id=r["name"],
                            title=r.get("title", r["name"]),
                            files=tuple(
                                ArtifactFile(
                                    name=a["name"],
                                    title=a.get("title", a["name"]),
                                    download_path=a["filepath"],
                                )
                                for a in r.get("files") or ()
                            ),
                        )
                        for r in f.get("releases") or ()
                    ),
                )
                for f in data.get("data") or ()
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise CatalogError(f"Invalid catalog entry: {e!r}") from e

        return cls(families=families, version=int(data.get("version", 0)))


class CatalogProvider(ABC):
    """Source of the materialized release catalog."""

    @abstractmethod
    def load_catalog(self) -> ReleaseCatalog:
        pass


@dataclass
class StaticCatalogProvider(CatalogProvider):
    """Provider returning a catalog held in memory."""

    catalog: ReleaseCatalog = field(default_factory=ReleaseCatalog)

    def load_catalog(self) -> ReleaseCatalog:
        return self.catalog


class JsonCatalogProvider(CatalogProvider):
    """Provider reading the catalog file written by the refresh job."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load_catalog(self) -> ReleaseCatalog:
        """
        Load the catalog from disk.

        A missing file means the refresh job has not run yet and yields an
        empty catalog.

        Raises:
            CatalogError: If the file cannot be parsed
        """
        if not self.path.exists():
            logger.debug(f"Catalog file not found: {self.path}")
            return ReleaseCatalog()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(
                f"Invalid JSON in catalog file: {e}\nFile: {self.path}"
            ) from e
        except OSError as e:
            raise CatalogError(
                f"Failed to load catalog file: {e}\nFile: {self.path}"
            ) from e

        if not isinstance(data, dict):
            raise CatalogError(f"Invalid catalog structure in {self.path}")

        catalog = ReleaseCatalog.from_dict(data)
        logger.debug(
            f"Loaded catalog with {sum(1 for _ in catalog.releases())} releases"
        )
        return catalog


__all__ = [
    "ArtifactFile",
    "Release",
    "Family",
    "ReleaseCatalog",
    "CatalogProvider",
    "StaticCatalogProvider",
    "JsonCatalogProvider",
]
