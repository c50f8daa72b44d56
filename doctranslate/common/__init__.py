"""
Common low-level utilities with minimal dependencies.

This package contains fundamental utilities that don't depend on
the rest of the application to avoid circular imports.
"""
