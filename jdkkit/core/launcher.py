"""
Process launching and the local node.

LocalLauncher runs processes on the machine jdkkit itself runs on, and
LocalNode bundles it with LocalFileSystem so the installer can target the
local machine through the same interfaces it uses for any other node.
"""

import logging
import os
import shlex
import subprocess
import threading
from typing import BinaryIO, Callable, Optional, TextIO, TypeVar

from jdkkit.core.exceptions import InstallExecutionFailed
from jdkkit.core.filesystem import LocalFileSystem
from jdkkit.core.interfaces import Command, Launcher, Node, NodeFileSystem

logger = logging.getLogger(__name__)

T = TypeVar("T")

IS_WINDOWS = os.name == "nt"

# Seconds to wait for trailing output once the process is gone; children
# that inherited the pipe can keep it open
PUMP_GRACE = 5


class LocalLauncher(Launcher):
    """
    Launcher backed by ``subprocess`` on the running machine.

    Output is copied to the sink line by line while the process runs, so a
    long extraction shows progress and a timed-out run keeps what it printed.
    """

    def launch(
        self,
        cmd: Command,
        stdin: Optional[bytes] = None,
        stdout: Optional[TextIO] = None,
        pwd: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> int:
        if isinstance(cmd, str) and not IS_WINDOWS:
            # Only Windows hands a command line to the process verbatim
            args = shlex.split(cmd)
        else:
            args = cmd

        logger.debug(f"Launching {cmd!r} in {pwd}")

        process = subprocess.Popen(
            args,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            cwd=pwd,
        )
        pump = threading.Thread(
            target=_pump_output, args=(process.stdout, stdout), daemon=True
        )
        pump.start()

        try:
            if stdin:
                process.stdin.write(stdin)
            process.stdin.close()
        except BrokenPipeError:
            # The process exited without reading its input
            logger.debug("Process closed its standard input early")

        try:
            exit_code = process.wait(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            process.kill()
            process.wait()
            pump.join(PUMP_GRACE)
            raise InstallExecutionFailed(
                None, message=f"Process did not finish within {timeout}s: {cmd!r}"
            ) from e

        pump.join(PUMP_GRACE)
        logger.debug(f"Process exited with {exit_code}")
        return exit_code


def _pump_output(source: BinaryIO, sink: Optional[TextIO]) -> None:
    """Copy process output to the sink as it arrives."""
    with source:
        for line in iter(source.readline, b""):
            if sink is not None:
                sink.write(line.decode(errors="replace"))
                sink.flush()


class LocalNode(Node):
    """The machine jdkkit runs on."""

    def call(self, fn: Callable[[], T]) -> T:
        return fn()

    def file_system(self) -> NodeFileSystem:
        return LocalFileSystem()

    def create_launcher(self) -> Launcher:
        return LocalLauncher()

    def __str__(self) -> str:
        return "local"


__all__ = [
    "LocalLauncher",
    "LocalNode",
]
