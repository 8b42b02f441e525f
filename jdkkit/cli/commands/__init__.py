"""CLI command implementations for jdkkit."""
