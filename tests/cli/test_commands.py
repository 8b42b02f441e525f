"""
Tests for the CLI commands, run through CLI.run().
"""

import json
import shutil
import tarfile
from unittest.mock import MagicMock, patch

import pytest
import yaml

from jdkkit.cli.parser import CLI
from jdkkit.core.exceptions import DetectionFailed
from jdkkit.core.platform import CPU, Platform
from jdkkit.jdk.installer import MARKER_FILE
from tests.conftest import SAMPLE_CATALOG

JDK_ID = "jdk-7u80-oth-JPR"


@pytest.fixture
def config_file(tmp_path):
    """Config pointing the cache and catalog into tmp_path."""
    cache_dir = tmp_path / "cache"
    catalog = tmp_path / "catalog.json"
    catalog.write_text(json.dumps(SAMPLE_CATALOG), encoding="utf-8")

    path = tmp_path / "jdkkit.yaml"
    path.write_text(
        yaml.safe_dump(
            {"cache_dir": str(cache_dir), "catalog": str(catalog), "lock_downloads": False}
        ),
        encoding="utf-8",
    )
    return path


class TestDetectCommand:
    """Test detect command."""

    def test_detect(self, capsys):
        with patch("jdkkit.core.platform._platform.system", return_value="Linux"), patch(
            "jdkkit.core.platform._platform.machine", return_value="x86_64"
        ), patch("jdkkit.core.platform._platform.processor", return_value=""):
            result = CLI().run(["detect"])

        assert result == 0
        out = capsys.readouterr().out
        assert "Platform: LINUX" in out
        assert "X86_64" in out
        assert "jdk.sh" in out

    def test_detect_unknown(self):
        with patch("jdkkit.core.platform._platform.system", return_value="Darwin"):
            assert CLI().run(["detect"]) == 1


class TestListCommand:
    """Test list command."""

    def test_list(self, config_file, capsys):
        result = CLI().run(["--config", str(config_file), "list", "--files"])

        assert result == 0
        out = capsys.readouterr().out
        assert "JDK 7" in out
        assert JDK_ID in out
        assert "jdk-6u45-solaris-sparc.sh" in out

    def test_list_without_catalog(self, tmp_path):
        path = tmp_path / "jdkkit.yaml"
        path.write_text(f"catalog: {tmp_path / 'missing.json'}\n", encoding="utf-8")

        assert CLI().run(["--config", str(path), "list"]) == 1

    def test_missing_config_file(self, tmp_path):
        assert CLI().run(["--config", str(tmp_path / "nope.yaml"), "list"]) == 1


class TestLocateCommand:
    """Test locate command."""

    def test_locate_explicit_target(self, config_file, tmp_path, capsys):
        cache = MagicMock()
        cache.fetch_or_download.return_value = tmp_path / "bundle"

        with patch("jdkkit.cli.commands.locate.build_cache", return_value=cache):
            result = CLI().run(
                [
                    "--config",
                    str(config_file),
                    "locate",
                    JDK_ID,
                    "--platform",
                    "solaris",
                    "--cpu",
                    "sparc",
                ]
            )

        assert result == 0
        args = cache.fetch_or_download.call_args[0]
        assert args == (Platform.SOLARIS, CPU.SPARC, JDK_ID)
        assert str(tmp_path / "bundle") in capsys.readouterr().out

    def test_locate_cache_hit(self, config_file, tmp_path, capsys):
        """Test a cached bundle is printed without any download."""
        bundle = tmp_path / "cache" / "jdks" / "WINDOWS" / "X86_64" / JDK_ID
        bundle.parent.mkdir(parents=True)
        bundle.write_bytes(b"MZ")

        result = CLI().run(
            [
                "--config",
                str(config_file),
                "-q",
                "locate",
                JDK_ID,
                "--platform",
                "windows",
                "--cpu",
                "x86_64",
            ]
        )

        assert result == 0
        assert str(bundle) in capsys.readouterr().out

    def test_locate_unknown_release(self, config_file):
        result = CLI().run(
            [
                "--config",
                str(config_file),
                "locate",
                "jdk-9-oth-JPR",
                "--platform",
                "linux",
                "--cpu",
                "x86_64",
            ]
        )

        assert result == 1


def _host_target():
    try:
        return Platform.current(), CPU.current()
    except DetectionFailed:
        return None, None


def _tarball(path):
    """Write a gzip tarball holding a minimal JDK directory."""
    java = path.parent / "java"
    java.write_text("#!/bin/sh\n")
    with tarfile.open(path, "w:gz") as tar:
        tar.add(java, arcname="jdk1.7.0_80/bin/java")
    java.unlink()


class TestInstallCommand:
    """Test install command."""

    def test_license_required(self, config_file, tmp_path, capsys):
        target = tmp_path / "jdk"

        result = CLI().run(["--config", str(config_file), "install", JDK_ID, str(target)])

        assert result == 1
        assert "license is accepted" in capsys.readouterr().out
        assert not target.exists()

    @pytest.mark.slow
    @pytest.mark.skipif(shutil.which("tar") is None, reason="needs tar")
    def test_install_from_cache(self, config_file, tmp_path, capsys):
        """Test installing a cached tarball on this machine end to end."""
        platform, cpu = _host_target()
        if platform is None or platform is Platform.WINDOWS:
            pytest.skip("needs a Unix host jdkkit can detect")

        bundle = tmp_path / "cache" / "jdks" / platform.name / cpu.name / JDK_ID
        bundle.parent.mkdir(parents=True)
        _tarball(bundle)
        target = tmp_path / "jdk"

        result = CLI().run(
            [
                "--config",
                str(config_file),
                "install",
                JDK_ID,
                str(target),
                "--accept-license",
            ]
        )

        assert result == 0
        assert (target / "bin" / "java").exists()
        assert (target / MARKER_FILE).read_text(encoding="utf-8") == JDK_ID
        assert not (target / "jdk.sh").exists()
        assert not (target / "jdk1.7.0_80").exists()
        assert "installed at" in capsys.readouterr().out

        # Second run finds the marker and does nothing
        assert CLI().run(
            ["--config", str(config_file), "install", JDK_ID, str(target), "--accept-license"]
        ) == 0
