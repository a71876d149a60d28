"""
CLI command to compute the HMAC-SHA1 of a message.
"""

import logging
import click
from utils.cli_helpers import decode_input, format_digest, get_hashing_service, get_output_format
from utils.concat_sha1_config import OUTPUT_FORMATS

logger = logging.getLogger(__name__)


@click.command("hmac-sha1", help="Compute HMAC-SHA1 of MESSAGE under --key.")
@click.argument("message")
@click.option("--key", "-k", required=True, help="Secret key (UTF-8, or hex with --key-hex)")
@click.option("--key-hex", is_flag=True, help="Key is hex encoded bytes")
@click.option("--message-hex", is_flag=True, help="Message is hex encoded bytes")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Digest output format (defaults to the [output] config)")
@click.pass_context
def hmac_sha1(ctx: click.Context, message: str, key: str, key_hex: bool, message_hex: bool, output_format: str) -> None:
    """
    Compute HMAC-SHA1(key, message).

    Args:
        ctx (click.Context): Click context containing shared config and services.
        message (str): Message text.
        key (str): Key text.
        key_hex (bool): Decode the key from hex.
        message_hex (bool): Decode the message from hex.
        output_format (str): Override of the configured output format.

    Returns:
        None. Prints the digest.
    """
    service = get_hashing_service(ctx)
    key_bytes = decode_input(key, key_hex, "--key")
    message_bytes = decode_input(message, message_hex, "MESSAGE")

    logger.info(f"HMAC-SHA1 with {len(key_bytes)} byte key over {len(message_bytes)} byte message")
    digest = service.hmac_sha1(key_bytes, message_bytes)
    click.echo(format_digest(digest, get_output_format(ctx, output_format)))
