"""Callboard: casting-network backend built from independent concepts."""

__version__ = "0.1.0"
