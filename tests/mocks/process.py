"""
Mock process launching for testing.

MockLauncher records every launch and lets a test decide what the
"process" does: change the mock file system, print output, or fail.
"""

from typing import Callable, List, Optional, TextIO

from jdkkit.core.interfaces import Command, Launcher


class LaunchCall:
    """Arguments of one recorded launch."""

    def __init__(self, cmd, stdin, stdout, pwd, timeout):
        self.cmd = cmd
        self.stdin = stdin
        self.stdout = stdout
        self.pwd = pwd
        self.timeout = timeout


class MockLauncher(Launcher):
    """Launcher that runs a Python callback instead of a process."""

    def __init__(
        self,
        exit_code: int = 0,
        on_launch: Optional[Callable[[LaunchCall], Optional[int]]] = None,
    ):
        """
        Initialize mock launcher.

        Args:
            exit_code: Exit code returned when the callback returns None
            on_launch: Called with each LaunchCall; may return an exit code
        """
        self.exit_code = exit_code
        self.on_launch = on_launch
        self.calls: List[LaunchCall] = []

    def launch(
        self,
        cmd: Command,
        stdin: Optional[bytes] = None,
        stdout: Optional[TextIO] = None,
        pwd: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> int:
        call = LaunchCall(cmd, stdin, stdout, pwd, timeout)
        self.calls.append(call)
        if self.on_launch is not None:
            result = self.on_launch(call)
            if result is not None:
                return result
        return self.exit_code
