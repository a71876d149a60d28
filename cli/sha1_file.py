"""
CLI command to hash files, printing one sha1sum-style line per file.
"""

import logging
import click
from services.hashing_service import FileHashError
from utils.cli_helpers import format_digest, get_hashing_service, get_output_format
from utils.concat_sha1_config import OUTPUT_FORMATS

logger = logging.getLogger(__name__)


@click.command("sha1-file", help="Hash each file in PATHS without loading it into memory.")
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Digest output format (defaults to the [output] config)")
@click.pass_context
def sha1_file(ctx: click.Context, paths: tuple, output_format: str) -> None:
    """Hash files; unreadable files are reported and make the exit code 1."""
    service = get_hashing_service(ctx)
    output_format = get_output_format(ctx, output_format)

    failures = 0
    for path in paths:
        try:
            digest = service.hash_file(path)
        except FileHashError as e:
            failures += 1
            click.secho(f"❌ {e}", fg="red", err=True)
            continue
        click.echo(f"{format_digest(digest, output_format)}  {path}")

    if failures:
        logger.error(f"{failures} of {len(paths)} files could not be hashed")
        ctx.exit(1)
