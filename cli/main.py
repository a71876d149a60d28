"""
Main entry point for the ConcatSHA1 CLI.
- Sets up the Click command group and context object.
- Dynamically loads all CLI commands from this directory.
"""
import os
import importlib
import click
import logging
import rich_click as rclick
from utils.concat_sha1_config import DEFAULT_CONFIG_PATH, load_configuration, get_output_format
from utils.logging_config import setup_logging
from services.hashing_service import HashingService

logger = logging.getLogger(__name__)


@rclick.group()
@click.option('--logfile', '-l', type=click.Path(writable=True), help="Log to file")
@click.option('--verbose', '-v', count=True, help="Set verbosity level (-v = INFO, -vv = DEBUG)")
@click.option('--config', '-c', type=click.Path(dir_okay=False), default=DEFAULT_CONFIG_PATH, show_default=True,
              help="Path to config file (missing file means defaults)")
@click.pass_context
def concat_sha1_cli(ctx: click.Context, verbose: int, logfile: str, config: str) -> None:
    """
    SHA-1 and HMAC-SHA1 digests of byte segments, text and files.

    Sets up the context object with configuration, the hashing service and the
    output format. All subcommands share this context.

    Args:
        ctx (click.Context): Click context for Click command group.
        verbose (int): Verbosity level (-v = INFO, -vv = DEBUG).
        logfile (str): Path to log file.
        config (str): Path to configuration file.

    Returns:
        None
    """
    # If the context object is already set, return it without reinitializing it
    if ctx.obj and all(k in ctx.obj for k in ("config", "hashing", "output_format")):
        return

    setup_logging(verbosity=verbose, logfile=logfile)

    try:
        cfg = load_configuration(config)
        hashing_service = HashingService.from_config(cfg)
    except ValueError as e:
        logger.error(f"❌ Invalid configuration in {config}: {e}")
        raise click.ClickException(f"Invalid configuration in {config}: {e}")

    ctx.obj = {
        "config": cfg,
        "hashing": hashing_service,
        "output_format": get_output_format(cfg),
    }
    logger.info(f"✓ Hashing service initialized (chunk_size={hashing_service.chunk_size}, fast_path={hashing_service.fast_path})")


# Dynamic discovery loop: auto-register all CLI commands in this directory
COMMAND_DIR = os.path.dirname(__file__)
for filename in sorted(os.listdir(COMMAND_DIR)):
    # Only import .py files that are not main.py or __init__.py
    if filename.endswith(".py") and filename not in {"main.py", "__init__.py"}:
        command_name = filename[:-3]
        module_name = f"cli.{command_name}"
        try:
            module = importlib.import_module(module_name)
            cli_function = getattr(module, command_name, None)
            if cli_function:
                concat_sha1_cli.add_command(cli_function)
            else:
                logger.debug(f"No command function found in {module_name}")
        except ImportError as e:
            logger.debug(f"Failed to import {module_name}: {e}")
    else:
        logger.debug(f"Skipping non-Python file: {filename}")

if __name__ == '__main__':
    concat_sha1_cli()
