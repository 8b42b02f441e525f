"""
List command implementation.

Lists the installable JDK releases from the catalog.
"""

import logging

from jdkkit.cli.utils import settings_from_args
from jdkkit.jdk.catalog import JsonCatalogProvider

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 if the catalog is empty)
    """
    settings = settings_from_args(args)
    catalog = JsonCatalogProvider(settings.catalog).load_catalog()

    if catalog.is_empty():
        logger.error(f"JDK data is empty. No catalog at {settings.catalog}?")
        return 1

    for family in catalog.families:
        if not family.releases:
            continue
        print(family.name)
        for release in family.releases:
            print(f"  {release.id:<40} {release.title}")
            if args.files:
                for f in release.files:
                    print(f"      {f.name:<36} {f.title}")

    return 0
