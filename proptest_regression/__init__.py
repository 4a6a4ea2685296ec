"""Regression runner for the proptest port (format, build, test, codegen, docs)."""

__version__ = "0.1.0"
