"""Top-level click group for Design Lab."""

from pathlib import Path

import click

from .. import __version__
from ..config import get_config, Config
from .common import setup_logging
from .catalog_cmds import themes, palettes, fonts, presets
from .token_cmds import resolve, export, contrast, audit, shades, share, load, apply, mode


@click.group()
@click.option("--config", type=click.Path(), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(__version__, prog_name="design-lab")
@click.pass_context
def main(ctx, config, verbose):
    """Design Lab - resolve, preview and export design tokens."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    setup_logging(verbose)

    if config:
        ctx.obj['config'] = Config.reload(Path(config))
    else:
        ctx.obj['config'] = get_config()


for command in (themes, palettes, fonts, presets,
                resolve, export, contrast, audit, shades, share, load, apply, mode):
    main.add_command(command)


if __name__ == "__main__":
    main()
