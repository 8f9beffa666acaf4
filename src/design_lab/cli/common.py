"""Helpers shared by the Design Lab commands."""

import logging
import sys
from typing import Any, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..config import ConfigModel
from ..preferences import PreferenceStore
from ..session import DesignSession, overlay_partial
from ..token_engine import (
    AnimationSpeed,
    Selection,
    StyleSink,
    config_from_url,
    decode,
    get_catalog,
)
from ..token_engine.share import QUERY_PARAMETER

console = Console()


def setup_logging(verbose: bool) -> None:
    """Route log records through rich; debug output only with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error: {escape(message)}[/red]")
    sys.exit(1)


def selection_options(func):
    """Attach the options that build a Selection."""
    options = [
        click.option('--preset', help='Start from a named preset'),
        click.option('--shared', help='Start from a share string or share URL'),
        click.option('--theme', '-t', help='Theme name'),
        click.option('--palette', '-p', help='Palette name'),
        click.option('--font', '-f', help='Font name'),
        click.option('--dark/--light', 'dark_mode', default=None,
                     help='Palette mode (defaults to the saved preference)'),
        click.option('--base-font-size', type=float, help='Body font size in px (12-24)'),
        click.option('--type-scale', type=float, help='Heading scale ratio (1.1-1.6)'),
        click.option('--spacing-unit', type=float, help='Spacing unit in px'),
        click.option('--animation-speed',
                     type=click.Choice([speed.value for speed in AnimationSpeed]),
                     help='Transition speed'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def load_shared_text(text: str):
    """Decode either a bare share string or a URL carrying one."""
    if f"{QUERY_PARAMETER}=" in text:
        return config_from_url(text)
    return decode(text)


def build_selection(base: Selection, preset: Optional[str] = None,
                    shared: Optional[str] = None, **changes: Any) -> Selection:
    """Combine a starting selection with preset, share link and explicit options.

    Later sources win: the starting selection, then the preset, then the
    share link, then options given on the command line.

    Raises:
        UnknownIdentifier: If the preset does not exist
        ValidationError: If an explicit size is out of range
    """
    selection = base
    if preset:
        selection = Selection.from_preset(get_catalog().preset(preset), selection)
    if shared:
        selection = overlay_partial(selection, load_shared_text(shared))

    explicit = {key: value for key, value in changes.items() if value is not None}
    if explicit:
        selection = selection.evolve(**explicit)
    return selection


def build_session(ctx: click.Context, sink: Optional[StyleSink] = None,
                  preset: Optional[str] = None, shared: Optional[str] = None,
                  **changes: Any) -> DesignSession:
    """Create a session for the selection described by the options."""
    config: ConfigModel = ctx.obj['config']
    preferences = PreferenceStore(config.get_preferences_path())
    session = DesignSession.from_config(config, sink=sink, preferences=preferences)
    session.selection = build_selection(session.selection, preset, shared, **changes)
    return session
