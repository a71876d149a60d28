"""
CLI command to hash the virtual concatenation of command-line segments.
"""

import logging
import click
from utils.cli_helpers import decode_input, format_digest, get_hashing_service, get_output_format
from utils.concat_sha1_config import OUTPUT_FORMATS

logger = logging.getLogger(__name__)


@click.command("sha1", help="Hash the concatenation of SEGMENTS (UTF-8, or hex with --hex).")
@click.argument("segments", nargs=-1)
@click.option("--hex", "as_hex", is_flag=True, help="Segments are hex encoded bytes")
@click.option("--stdin", "read_stdin", is_flag=True, help="Append standard input as a final segment")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Digest output format (defaults to the [output] config)")
@click.pass_context
def sha1(ctx: click.Context, segments: tuple, as_hex: bool, read_stdin: bool, output_format: str) -> None:
    """
    Hash SEGMENTS as one message without joining them first.

    Args:
        ctx (click.Context): Click context containing shared config and services.
        segments (tuple): Message segments in order.
        as_hex (bool): Decode segments from hex.
        read_stdin (bool): Append stdin bytes as a final segment.
        output_format (str): Override of the configured output format.

    Returns:
        None. Prints the digest.
    """
    service = get_hashing_service(ctx)
    data = [decode_input(segment, as_hex, "SEGMENTS") for segment in segments]
    if read_stdin:
        data.append(click.get_binary_stream("stdin").read())

    logger.info(f"Hashing {len(data)} segments")
    digest = service.hash_concat(data)
    click.echo(format_digest(digest, get_output_format(ctx, output_format)))
