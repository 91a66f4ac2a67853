"""Utility functions and helpers."""

from .exceptions import raise_bad_request, raise_too_large

__all__ = ["raise_bad_request", "raise_too_large"]
