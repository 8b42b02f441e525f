"""
Entry point for running jdkkit CLI as a module.

Usage: python -m jdkkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
