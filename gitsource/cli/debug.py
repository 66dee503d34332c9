import click

from .utils.logging import configure_logging


def _set_debug(ctx: click.Context, param: click.Parameter, value: bool) -> bool:
    """Record the flag on the root context and reconfigure logging.

    Any level of the command line can switch debug on; a later level without
    the flag does not switch it off again.
    """
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)

    debug = bool(value) or root_ctx.obj.get("DEBUG", False)
    root_ctx.obj["DEBUG"] = debug

    configure_logging(debug)
    return debug


debug_option = click.option(
    "--debug",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    envvar="GITSOURCE_DEBUG",
    callback=_set_debug,
    help="Show every git command that is run.",
)


def add_debug_option(cmd: click.Command) -> click.Command:
    """Attach --debug to a command or group unless it already has one."""
    if not any(param.name == "debug" for param in cmd.params):
        debug_option(cmd)
    return cmd
