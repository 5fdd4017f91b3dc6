"""Shared constants, paths, formatting and progress reporting."""
