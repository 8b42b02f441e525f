"""
jdkkit command-line interface.
"""

from jdkkit.cli.parser import CLI, main

__all__ = ["CLI", "main"]
