"""
Platform-specific installation of a JDK bundle already staged on a machine.

Everything here goes through the FileSystem and Launcher interfaces, so the
same procedure works for the local machine or any remote one.

Unix (Linux, Solaris):
    JDKs up to 6 were distributed as self-extracting shell installers; JDK 7
    switched to a plain tar.gz. The bundle's first bytes tell them apart.
    Either way the JDK lands in its own 'jdk1.x.y' sub-directory, which is
    pulled up into the install location.

Windows:
    The bundle is an InstallShield installer run silently.
"""

import logging
import re
from typing import Callable, Dict, Optional, TextIO

from jdkkit.core.exceptions import InstallExecutionFailed, UnexpectedLayout
from jdkkit.core.interfaces import FileSystem, Launcher
from jdkkit.core.platform import Platform

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"

JDK_DIR_PATTERN = re.compile(r"j(2s)?dk.*")

# The shell installer asks a single yes/no question before extracting
INSTALLER_ANSWER = b"yes"

LOG_ENCODING = "utf-16"


def _print(out: Optional[TextIO], message: str) -> None:
    logger.info(message)
    if out is not None:
        print(message, file=out)


def _read_header(fs: FileSystem, bundle: str, size: int) -> bytes:
    stream = fs.read(bundle)
    try:
        return stream.read(size)
    finally:
        stream.close()


def _install_unix(
    launcher: Launcher,
    fs: FileSystem,
    out: Optional[TextIO],
    expected_location: str,
    bundle: str,
    timeout: Optional[float],
) -> None:
    if _read_header(fs, bundle, len(GZIP_MAGIC)) == GZIP_MAGIC:
        cmd = ["tar", "xvzf", bundle]
    else:
        fs.chmod(bundle, 0o755)
        cmd = [bundle, "-noregister"]

    exit_code = launcher.launch(
        cmd,
        stdin=INSTALLER_ANSWER,
        stdout=out,
        pwd=expected_location,
        timeout=timeout,
    )
    if exit_code != 0:
        raise InstallExecutionFailed(exit_code)

    # The JDK creates its own sub-directory, so pull it up
    found = [
        name
        for name in fs.list_subdirectories(expected_location)
        if JDK_DIR_PATTERN.fullmatch(name)
    ]
    if len(found) != 1:
        raise UnexpectedLayout(found)

    fs.pull_up(expected_location + "/" + found[0], expected_location)


def windows_command_line(expected_location: str, bundle: str, log_file: str) -> str:
    """
    Build the command line for a silent InstallShield install.

    InstallShield parses its own arguments out of the raw Windows command
    line, and the '/v' option takes everything after it as one MSI argument
    string in which values are quoted as \\"...\\". Conventional per-argument
    quoting mangles that string, so the whole command line is built here and
    passed through untouched.
    """
    msi_args = (
        f'/v/qn REBOOT=Suppress INSTALLDIR=\\"{expected_location}\\" '
        f'/L \\"{log_file}\\"'
    )
    return f'"{bundle}" /s {msi_args}'


def _read_log(fs: FileSystem, log_file: str) -> str:
    """InstallShield writes its MSI log as UTF-16."""
    stream = fs.read(log_file)
    try:
        return stream.read().decode(LOG_ENCODING, errors="replace")
    finally:
        stream.close()


def _install_windows(
    launcher: Launcher,
    fs: FileSystem,
    out: Optional[TextIO],
    expected_location: str,
    bundle: str,
    timeout: Optional[float],
) -> None:
    log_file = bundle + ".install.log"

    exit_code = launcher.launch(
        windows_command_line(expected_location, bundle, log_file),
        stdout=out,
        pwd=expected_location,
        timeout=timeout,
    )
    if exit_code != 0:
        _print(out, f"Failed to install JDK. Exit code={exit_code}")
        try:
            log = _read_log(fs, log_file)
        except OSError as e:
            logger.debug(f"Unable to read {log_file}: {e}")
            _print(out, f"No installer log at {log_file}")
            raise InstallExecutionFailed(exit_code) from e
        if out is not None:
            out.write(log)
        raise InstallExecutionFailed(exit_code, log)

    fs.delete(log_file)


_INSTALLERS: Dict[Platform, Callable[..., None]] = {
    Platform.LINUX: _install_unix,
    Platform.SOLARIS: _install_unix,
    Platform.WINDOWS: _install_windows,
}


def install(
    launcher: Launcher,
    platform: Platform,
    fs: FileSystem,
    out: Optional[TextIO],
    expected_location: str,
    bundle: str,
    timeout: Optional[float] = None,
) -> None:
    """
    Install a JDK bundle that was already downloaded onto a machine.

    Args:
        launcher: Used to launch processes on the machine
        platform: Platform of the machine; decides how the bundle is installed
        fs: File system of the machine
        out: Where the output from the installation is written
        expected_location: Directory to install the JDK to. Must be absolute
            and in the native file system notation.
        bundle: Path of the JDK bundle on the machine
        timeout: Seconds to wait for the installer process

    Raises:
        InstallExecutionFailed: If the installer exits with an error
        UnexpectedLayout: If a Unix bundle doesn't yield exactly one JDK directory
    """
    _print(out, f"Installing {bundle}")
    _INSTALLERS[platform](launcher, fs, out, expected_location, bundle, timeout)


__all__ = [
    "install",
    "windows_command_line",
    "JDK_DIR_PATTERN",
]
