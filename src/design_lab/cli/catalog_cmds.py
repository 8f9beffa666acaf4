"""Catalog listing commands.

Each command prints one rich table describing part of the built-in
catalog: themes, palettes, fonts and presets.
"""

import click
from rich.table import Table

from ..token_engine import get_catalog
from ..token_engine.schema import ACCENT_TOKEN_KEYS
from .common import console


@click.command()
def themes():
    """List the available themes."""
    table = Table(title="Themes", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Display name", no_wrap=True)
    table.add_column("Description")
    table.add_column("Decorations", style="magenta")

    for theme in get_catalog().list_themes():
        table.add_row(
            theme.name.value,
            theme.display_name,
            theme.description,
            ", ".join(theme.decorations) or "none",
        )

    console.print(table)


@click.command()
@click.option('--dark', is_flag=True, help='Show the dark mode variants')
def palettes(dark: bool):
    """List the available palettes."""
    mode = "dark" if dark else "light"
    table = Table(title=f"Palettes ({mode})", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Primary", no_wrap=True)
    table.add_column("Surface", no_wrap=True)
    table.add_column("Text", no_wrap=True)
    table.add_column("Extra", style="magenta")

    for palette in get_catalog().list_palettes(dark_mode=dark):
        tokens = palette.tokens
        extras = [f"{key}: {tokens[key]}" for key in ACCENT_TOKEN_KEYS if key in tokens]
        table.add_row(
            palette.name.value,
            _swatch(tokens['--primary']),
            _swatch(tokens['--surface']),
            _swatch(tokens['--text']),
            ", ".join(extras),
        )

    console.print(table)


def _swatch(color: str) -> str:
    return f"[{color}]■[/] {color}"


@click.command()
def fonts():
    """List the available font stacks."""
    table = Table(title="Fonts", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Stack")

    for name, stack in get_catalog().list_fonts().items():
        table.add_row(name, stack)

    console.print(table)


@click.command()
def presets():
    """List the named presets."""
    table = Table(title="Presets", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Theme", no_wrap=True)
    table.add_column("Palette", no_wrap=True)
    table.add_column("Font", no_wrap=True)
    table.add_column("Mode")
    table.add_column("Base size")
    table.add_column("Scale")

    for name, preset in get_catalog().list_presets().items():
        table.add_row(
            name,
            preset.theme.value,
            preset.palette.value,
            preset.font.value,
            "dark" if preset.dark_mode else "light",
            str(preset.base_font_size) if preset.base_font_size else "-",
            str(preset.type_scale) if preset.type_scale else "-",
        )

    console.print(table)
