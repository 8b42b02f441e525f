"""
Unit tests for platform-specific bundle installation.

Installer processes are simulated by MockLauncher callbacks that change the
MockFilesystem the way the real tar/shell/InstallShield run would.
"""

import io

import pytest

from jdkkit.core.exceptions import InstallExecutionFailed, UnexpectedLayout
from jdkkit.core.platform import Platform
from jdkkit.jdk.install import JDK_DIR_PATTERN, install, windows_command_line
from tests.mocks import MockFilesystem, MockLauncher

LOCATION = "/opt/jdk"
BUNDLE = "/opt/jdk/jdk.sh"


def _extract(fs, *dirs):
    """Launch callback creating JDK directories in the install location."""

    def on_launch(call):
        for name in dirs:
            fs.add_file(f"{LOCATION}/{name}/bin/java", b"java")
            fs.add_file(f"{LOCATION}/{name}/COPYRIGHT")

    return on_launch


@pytest.fixture
def fs():
    return MockFilesystem()


class TestJdkDirPattern:
    """Test recognition of extracted JDK directories."""

    @pytest.mark.parametrize("name", ["jdk1.7.0_80", "jdk1.6.0_45", "j2sdk1.4.2_19"])
    def test_matches(self, name):
        assert JDK_DIR_PATTERN.fullmatch(name)

    @pytest.mark.parametrize("name", ["jre1.7.0", "myjdk", "lib"])
    def test_does_not_match(self, name):
        assert not JDK_DIR_PATTERN.fullmatch(name)


class TestUnixInstall:
    """Test Linux and Solaris installation."""

    def test_tarball(self, fs):
        """Test a gzip bundle is untarred and its JDK dir pulled up."""
        fs.add_file(BUNDLE, b"\x1f\x8b\x08\x00rest")
        launcher = MockLauncher(on_launch=_extract(fs, "jdk1.7.0_80"))
        out = io.StringIO()

        install(launcher, Platform.LINUX, fs, out, LOCATION, BUNDLE, timeout=60)

        call = launcher.calls[0]
        assert call.cmd == ["tar", "xvzf", BUNDLE]
        assert call.pwd == LOCATION
        assert call.stdin == b"yes"
        assert call.stdout is out
        assert call.timeout == 60
        assert BUNDLE not in fs.modes

        assert fs.exists(f"{LOCATION}/bin/java")
        assert fs.exists(f"{LOCATION}/COPYRIGHT")
        assert not fs.exists(f"{LOCATION}/jdk1.7.0_80")
        assert f"Installing {BUNDLE}" in out.getvalue()

    def test_shell_installer(self, fs):
        """Test a non-gzip bundle is made executable and run."""
        fs.add_file(BUNDLE, b"#!/bin/sh\n")
        launcher = MockLauncher(on_launch=_extract(fs, "jdk1.6.0_45"))

        install(launcher, Platform.SOLARIS, fs, None, LOCATION, BUNDLE)

        assert fs.modes[BUNDLE] == 0o755
        call = launcher.calls[0]
        assert call.cmd == [BUNDLE, "-noregister"]
        assert call.stdin == b"yes"
        assert fs.exists(f"{LOCATION}/bin/java")

    def test_bundle_is_left_in_place(self, fs):
        """Test removing the staged bundle is left to the caller."""
        fs.add_file(BUNDLE, b"\x1f\x8b")
        launcher = MockLauncher(on_launch=_extract(fs, "jdk1.7.0_80"))

        install(launcher, Platform.LINUX, fs, None, LOCATION, BUNDLE)

        assert fs.exists(BUNDLE)

    def test_non_zero_exit(self, fs):
        fs.add_file(BUNDLE, b"\x1f\x8b")
        launcher = MockLauncher(exit_code=2)

        with pytest.raises(InstallExecutionFailed) as exc_info:
            install(launcher, Platform.LINUX, fs, None, LOCATION, BUNDLE)

        assert exc_info.value.exit_code == 2
        assert str(exc_info.value) == "Failed to install JDK. Exit code=2"

    def test_no_jdk_directory(self, fs):
        """Test a bundle that extracts no JDK directory fails."""
        fs.add_file(BUNDLE, b"\x1f\x8b")
        launcher = MockLauncher(on_launch=lambda call: fs.add_dir(f"{LOCATION}/lib"))

        with pytest.raises(UnexpectedLayout) as exc_info:
            install(launcher, Platform.LINUX, fs, None, LOCATION, BUNDLE)

        assert exc_info.value.found == []

    def test_two_jdk_directories(self, fs):
        """Test an ambiguous layout fails instead of guessing."""
        fs.add_file(BUNDLE, b"\x1f\x8b")
        launcher = MockLauncher(on_launch=_extract(fs, "jdk1.7.0_79", "jdk1.7.0_80"))

        with pytest.raises(UnexpectedLayout) as exc_info:
            install(launcher, Platform.LINUX, fs, None, LOCATION, BUNDLE)

        assert sorted(exc_info.value.found) == ["jdk1.7.0_79", "jdk1.7.0_80"]


class TestWindowsInstall:
    """Test Windows installation."""

    LOCATION = "C:/jdk"
    BUNDLE = "C:/jdk/jdk.exe"
    LOG = "C:/jdk/jdk.exe.install.log"

    def test_command_line(self):
        """Test the pre-quoted InstallShield command line."""
        cmd = windows_command_line(
            r"C:\jdk", r"C:\jdk\jdk.exe", r"C:\jdk\jdk.exe.install.log"
        )

        assert cmd == (
            r'"C:\jdk\jdk.exe" /s /v/qn REBOOT=Suppress INSTALLDIR=\"C:\jdk\" '
            r'/L \"C:\jdk\jdk.exe.install.log\"'
        )

    def test_success_deletes_log(self, fs):
        fs.add_file(self.BUNDLE, b"MZ")

        def on_launch(call):
            fs.add_file(self.LOG, "ok".encode("utf-16"))
            fs.add_file(f"{self.LOCATION}/bin/java.exe")

        launcher = MockLauncher(on_launch=on_launch)

        install(launcher, Platform.WINDOWS, fs, None, self.LOCATION, self.BUNDLE)

        call = launcher.calls[0]
        assert call.cmd == windows_command_line(self.LOCATION, self.BUNDLE, self.LOG)
        assert call.pwd == self.LOCATION
        assert not fs.exists(self.LOG)
        assert fs.exists(f"{self.LOCATION}/bin/java.exe")

    def test_failure_echoes_log(self, fs):
        """Test the UTF-16 installer log is shown when the install fails."""
        fs.add_file(self.BUNDLE, b"MZ")

        def on_launch(call):
            fs.add_file(self.LOG, "Error 1603: disk full".encode("utf-16"))
            return 1603

        out = io.StringIO()

        with pytest.raises(InstallExecutionFailed) as exc_info:
            install(
                MockLauncher(on_launch=on_launch),
                Platform.WINDOWS,
                fs,
                out,
                self.LOCATION,
                self.BUNDLE,
            )

        assert exc_info.value.exit_code == 1603
        assert exc_info.value.log == "Error 1603: disk full"
        assert "Failed to install JDK. Exit code=1603" in out.getvalue()
        assert "Error 1603: disk full" in out.getvalue()
        assert fs.exists(self.LOG)

    def test_failure_without_log_keeps_exit_code(self, fs):
        """Test an installer that died before logging still reports its exit code."""
        fs.add_file(self.BUNDLE, b"MZ")
        out = io.StringIO()

        with pytest.raises(InstallExecutionFailed) as exc_info:
            install(
                MockLauncher(exit_code=1602),
                Platform.WINDOWS,
                fs,
                out,
                self.LOCATION,
                self.BUNDLE,
            )

        assert exc_info.value.exit_code == 1602
        assert exc_info.value.log == ""
        assert "Failed to install JDK. Exit code=1602" in out.getvalue()
        assert f"No installer log at {self.LOG}" in out.getvalue()
