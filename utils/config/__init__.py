"""
Configuration utilities for ConcatSHA1.

This package provides configuration normalization and environment variable overrides.
"""

from .config_normalizer import ConfigNormalizer

__all__ = [
    'ConfigNormalizer',
]
