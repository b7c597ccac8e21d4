import logging
import sys

import click

from ..config import LOG_FORMAT
from .commands import issue, merge_request


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version information")
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, version, verbose):
    """
    GitLab resource state events CLI
    """
    logging.basicConfig(
        stream=sys.stderr,
        format=LOG_FORMAT,
        level=logging.DEBUG if verbose else logging.WARNING,
    )

    if version:
        from .. import __version__

        click.echo(f"gitlab-events v{__version__}")
        click.echo("Python: " + sys.version.split()[0])
        ctx.exit()
    elif ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(issue)
cli.add_command(merge_request)


if __name__ == "__main__":
    cli()
