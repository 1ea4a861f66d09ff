"""Shared constants and utilities used by the CLI, scripts and tests.

This package provides a dependency-free location for constants that need to be
shared across packages without creating circular imports.
"""

from __future__ import annotations
