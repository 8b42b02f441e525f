"""
Mock implementations for testing jdkkit components.

This package provides in-memory implementations of the node interfaces
(file system, process launcher, remote execution) so the installer can be
tested without a real target machine.
"""

from .filesystem import MockFilesystem
from .process import MockLauncher
from .node import MockNode

__all__ = [
    "MockFilesystem",
    "MockLauncher",
    "MockNode",
]
