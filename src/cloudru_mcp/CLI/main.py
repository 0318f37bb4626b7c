"""
Command Line Interface for the Cloud.ru Container Apps MCP server.
"""
import asyncio
import logging
import sys

import click

from .. import SERVER_NAME, __version__, version_info
from ..CONFIG.settings import load_config
from ..SERVER.description import render_description
from ..SERVER.mcp_server import serve
from ..SERVER.tools import SYSTEM_LOGS_LIMIT, CloudruTools
from ..UTILS.logger import setup_logging
from ..errors import ConfigError

logger = logging.getLogger(__name__)


def _load(ctx):
    """Loads configuration once per invocation; missing credentials end the process."""
    if 'config' not in ctx.obj:
        try:
            ctx.obj['config'] = load_config(ctx.obj.get('env_file'))
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
    return ctx.obj['config']


@click.group(invoke_without_command=True)
@click.option('--env-file', '-e', default=None, type=click.Path(dir_okay=False),
              help='Path to a .env file (searched from the working directory by default)')
@click.option('--log-level', '-l', default='INFO',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Log level for messages written to stderr')
@click.option('--log-file', default=None, type=click.Path(dir_okay=False),
              help='Also append log records to this file')
@click.version_option(__version__, message=f"{SERVER_NAME} %(version)s")
@click.pass_context
def cli(ctx, env_file, log_level, log_file):
    """
    Cloud.ru Container Apps MCP server.

    Without a subcommand, serves MCP over stdio.
    """
    ctx.ensure_object(dict)
    ctx.obj['env_file'] = env_file
    setup_logging(log_level, log_file)

    if ctx.invoked_subcommand is None:
        ctx.invoke(serve_command)


@cli.command('serve')
@click.pass_context
def serve_command(ctx):
    """Serve MCP over stdin/stdout."""
    config = _load(ctx)
    logger.info(version_info().replace("\n", ", "))
    logger.info(render_description(config, SYSTEM_LOGS_LIMIT))
    tools = CloudruTools.from_config(config)
    try:
        asyncio.run(serve(tools))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


@cli.command()
@click.pass_context
def describe(ctx):
    """Print the usage description the server returns to agents."""
    click.echo(render_description(_load(ctx), SYSTEM_LOGS_LIMIT))


@cli.command()
@click.pass_context
def tools(ctx):
    """List the tools the server registers."""
    registry = CloudruTools.from_config(_load(ctx))
    for definition in registry.definitions():
        click.echo(f"{definition.name:40} {definition.description}")


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    sys.exit(main())
