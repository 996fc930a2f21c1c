"""Shared helpers used across the naming package and the CLI."""
