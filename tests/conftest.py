"""
Pytest configuration and shared fixtures for jdkkit tests.
"""

import pytest

from jdkkit.jdk.catalog import ReleaseCatalog, StaticCatalogProvider
from tests.mocks import MockFilesystem, MockLauncher, MockNode


SAMPLE_CATALOG = {
    "version": 2,
    "data": [
        {
            "name": "JDK 7",
            "releases": [
                {
                    "name": "jdk-7u80-oth-JPR",
                    "title": "Java SE Development Kit 7u80",
                    "files": [
                        {
                            "name": "jdk-7u80-linux-i586.tar.gz",
                            "title": "Linux x86",
                            "filepath": "https://download.example.com/jdk-7u80-linux-i586.tar.gz",
                        },
                        {
                            "name": "jdk-7u80-linux-x64.tar.gz",
                            "title": "Linux x64",
                            "filepath": "https://download.example.com/jdk-7u80-linux-x64.tar.gz",
                        },
                        {
                            "name": "jdk-7u80-solaris-sparcv9.tar.gz",
                            "title": "Solaris SPARC 64-bit",
                            "filepath": "https://download.example.com/jdk-7u80-solaris-sparcv9.tar.gz",
                        },
                        {
                            "name": "jdk-7u80-windows-i586.exe",
                            "title": "Windows x86",
                            "filepath": "https://download.example.com/jdk-7u80-windows-i586.exe",
                        },
                        {
                            "name": "jdk-7u80-windows-x64.exe",
                            "title": "Windows x64",
                            "filepath": "https://download.example.com/jdk-7u80-windows-x64.exe",
                        },
                    ],
                }
            ],
        },
        {
            "name": "JDK 6",
            "releases": [
                {
                    "name": "jdk-6u45-oth-JPR",
                    "title": "Java SE Development Kit 6u45",
                    "files": [
                        {
                            "name": "jdk-6u45-linux-i586.bin",
                            "title": "Linux x86",
                            "filepath": "https://download.example.com/jdk-6u45-linux-i586.bin",
                        },
                        {
                            "name": "jdk-6u45-solaris-sparc.sh",
                            "title": "Solaris SPARC",
                            "filepath": "https://download.example.com/jdk-6u45-solaris-sparc.sh",
                        },
                    ],
                }
            ],
        },
    ],
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def sample_catalog() -> ReleaseCatalog:
    """Catalog with a JDK 7 and a JDK 6 release."""
    return ReleaseCatalog.from_dict(SAMPLE_CATALOG)


@pytest.fixture
def catalog_provider(sample_catalog) -> StaticCatalogProvider:
    """Provider serving the sample catalog."""
    return StaticCatalogProvider(sample_catalog)


@pytest.fixture
def mock_fs() -> MockFilesystem:
    """Empty in-memory file system."""
    return MockFilesystem()


@pytest.fixture
def mock_launcher() -> MockLauncher:
    """Launcher whose processes succeed without doing anything."""
    return MockLauncher()


@pytest.fixture
def mock_node(mock_fs, mock_launcher) -> MockNode:
    """64-bit Linux node backed by the mock file system and launcher."""
    return MockNode("Linux", "amd64", fs=mock_fs, launcher=mock_launcher)
