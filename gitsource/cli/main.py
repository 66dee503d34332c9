"""gitsource CLI"""

import click

from gitsource import __version__
from gitsource.cli.deps import deps
from gitsource.cli.repo import init, resolve, status

from .debug import add_debug_option


@click.group()
@click.version_option(__version__, prog_name="gitsource")
@click.pass_context
def cli(ctx):
    """
    gitsource: fetch, pin and check out git dependencies.
    """
    ctx.ensure_object(dict)


for command in (status, resolve, init, deps, *deps.commands.values()):
    add_debug_option(command)

cli.add_command(status)
cli.add_command(resolve)
cli.add_command(init)
cli.add_command(deps)

add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})
