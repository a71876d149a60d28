#!/usr/bin/env python3
"""
CLI helper utilities for consistent input decoding, digest rendering and service lookup.
"""

import click
from typing import Optional

from models.digest import Digest
from services.hashing_service import HashingService



def decode_input(value: str, as_hex: bool, param_name: str) -> bytes:
    """
    Convert a command-line argument to bytes.

    Args:
        value: Raw argument text.
        as_hex: Treat the text as hex (whitespace ignored) instead of UTF-8.
        param_name: Parameter name used in error messages.

    Returns:
        bytes: Decoded input.

    Raises:
        click.BadParameter: If hex decoding fails.
    """
    if not as_hex:
        return value.encode("utf-8")
    try:
        return bytes.fromhex("".join(value.split()))
    except ValueError as e:
        raise click.BadParameter(f"not valid hex: {value!r}", param_hint=param_name) from e


def format_digest(digest: Digest, output_format: str = "hex") -> str:
    """
    Render a digest for display.

    Args:
        digest: Digest to render.
        output_format: 'hex' (40 lowercase chars), 'upper' or 'words' (five space separated words).

    Returns:
        str: Rendered digest.
    """
    if output_format == "upper":
        return digest.hexdigest().upper()
    if output_format == "words":
        return " ".join(digest.word_strings())
    return digest.hexdigest()


def get_hashing_service(ctx: click.Context) -> HashingService:
    """
    Get the hashing service from context, falling back to a default service.

    Commands invoked directly (e.g. from tests) may have no context object.
    """
    service: Optional[HashingService] = (ctx.obj or {}).get("hashing")
    return service if service is not None else HashingService()


def get_output_format(ctx: click.Context, override: Optional[str] = None) -> str:
    if override:
        return override
    return (ctx.obj or {}).get("output_format", "hex")
