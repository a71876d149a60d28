"""
Models package for ConcatSHA1.

This package contains the Pydantic-based Digest model.
"""

from .digest import Digest

__all__ = ["Digest"]
