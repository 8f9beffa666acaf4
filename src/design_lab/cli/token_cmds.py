"""Token commands: resolve, export, inspect, share and apply."""

import json
from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..clipboard import copy_to_clipboard
from ..preferences import PreferenceStore
from ..token_engine import (
    CSSFileStyleSink,
    InvalidColor,
    TokenEngineError,
    check_contrast,
    generate_shades,
    shade_tokens,
    validate_color_accessibility,
)
from .common import build_session, console, fail, load_shared_text, selection_options

LEVEL_STYLES = {"AAA": "green", "AA": "yellow", "FAIL": "red"}


def _copy(text: str, what: str) -> None:
    if copy_to_clipboard(text):
        console.print(f"[green]✓ Copied {what} to clipboard[/green]")
    else:
        console.print(f"[yellow]Could not copy {what} to clipboard[/yellow]")


def _selection_panel(session) -> Panel:
    selection = session.selection
    body = Text.assemble(
        ("Theme: ", "dim"), (selection.theme, "cyan"), "\n",
        ("Palette: ", "dim"), (selection.palette, "cyan"), "\n",
        ("Font: ", "dim"), (selection.font, "cyan"), "\n",
        ("Mode: ", "dim"), (selection.mode.value, "cyan"), "\n",
        ("Base font size: ", "dim"), (f"{selection.base_font_size:g}px", "cyan"), "\n",
        ("Type scale: ", "dim"), (f"{selection.type_scale:g}", "cyan"),
    )
    return Panel(body, title="[cyan]Configuration[/cyan]", border_style="blue", padding=(0, 2))


@click.command()
@selection_options
@click.option('--json', 'as_json', is_flag=True, help='Print the merged tokens as JSON')
@click.pass_context
def resolve(ctx, as_json: bool, **options):
    """Resolve a selection and show its tokens."""
    try:
        session = build_session(ctx, **options)
        tokens = session.current_tokens()
    except (TokenEngineError, ValueError) as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps(tokens.as_dict(), indent=2))
        return

    table = Table(title=f"Tokens: {tokens.name} ({tokens.mode.value})",
                  show_header=True, header_style="bold")
    table.add_column("Group", style="magenta", no_wrap=True)
    table.add_column("Token", style="cyan", no_wrap=True)
    table.add_column("Value")

    groups = (
        ("theme", tokens.theme_tokens),
        ("palette", tokens.palette_tokens),
        ("typography", tokens.typography_tokens),
        ("font", tokens.font_tokens),
    )
    for group, values in groups:
        for key, value in values.items():
            table.add_row(group, key, value)

    console.print(table)


@click.command()
@click.argument('format', required=False)
@selection_options
@click.option('--output', '-o', type=click.Path(), help='Write the export to a file')
@click.option('--copy', is_flag=True, help='Copy the export to the clipboard')
@click.pass_context
def export(ctx, format: Optional[str], output: Optional[str], copy: bool, **options):
    """Export tokens as css, tailwind or figma."""
    format = format or ctx.obj['config'].default_export_format
    try:
        session = build_session(ctx, **options)
        content = session.export(format, output)
    except (TokenEngineError, ValueError) as e:
        fail(str(e))

    if output:
        console.print(f"[green]✓ Exported {session.tokens.name} as {format} to {output}[/green]")
    else:
        click.echo(content)

    if copy:
        _copy(content, "export")


@click.command()
@click.argument('foreground')
@click.argument('background')
def contrast(foreground: str, background: str):
    """Check the WCAG contrast of two hex colors."""
    try:
        report = check_contrast(foreground, background)
    except InvalidColor as e:
        fail(str(e))

    style = LEVEL_STYLES[report.label]
    console.print(
        f"Contrast ratio: {report.ratio:.2f}:1 "
        f"[{style}]{report.label}[/{style}]"
    )


@click.command()
@selection_options
@click.pass_context
def audit(ctx, **options):
    """Check every palette color against the page background."""
    try:
        session = build_session(ctx, **options)
        entries = session.contrast_report()
    except (TokenEngineError, ValueError) as e:
        fail(str(e))

    tokens = session.tokens
    table = Table(title=f"Contrast audit: {tokens.palette} ({tokens.mode.value})",
                  show_header=True, header_style="bold")
    table.add_column("Token", style="cyan", no_wrap=True)
    table.add_column("Color", no_wrap=True)
    table.add_column("Against", no_wrap=True)
    table.add_column("Ratio", justify="right")
    table.add_column("Level")

    for entry in entries:
        label = entry.report.label
        style = LEVEL_STYLES[label]
        table.add_row(
            entry.token,
            f"[{entry.color}]■[/] {entry.color}",
            entry.against,
            f"{entry.report.ratio:.2f}",
            f"[{style}]{label}[/{style}]",
        )

    console.print(table)

    for issue in validate_color_accessibility(tokens.palette_tokens):
        console.print(f"[yellow]⚠ {issue}[/yellow]")


@click.command()
@click.argument('color', required=False)
@selection_options
@click.option('--css', 'as_css', is_flag=True, help='Print the ramp as custom properties')
@click.option('--prefix', default='--primary', help='Custom property prefix for --css')
@click.pass_context
def shades(ctx, color: Optional[str], as_css: bool, prefix: str, **options):
    """Show the 100-900 shade ramp of a color (default: the primary color)."""
    try:
        if color is None:
            color = build_session(ctx, **options).current_tokens().palette_tokens['--primary']
        ramp = generate_shades(color)
    except (TokenEngineError, ValueError) as e:
        fail(str(e))

    if as_css:
        for key, value in shade_tokens(color, prefix).items():
            click.echo(f"  {key}: {value};")
        return

    table = Table(title=f"Shades of {color}", show_header=True, header_style="bold")
    table.add_column("Step", justify="right")
    table.add_column("Color", no_wrap=True)
    for step, value in ramp.items():
        table.add_row(str(step), f"[{value}]■■■[/] {value}")

    console.print(table)


@click.command()
@selection_options
@click.option('--base-url', help='Application URL the link points at')
@click.option('--text', 'text_only', is_flag=True, help='Print only the encoded configuration')
@click.option('--copy', is_flag=True, help='Copy the result to the clipboard')
@click.pass_context
def share(ctx, base_url: Optional[str], text_only: bool, copy: bool, **options):
    """Encode a selection as a share link."""
    try:
        session = build_session(ctx, **options)
        session.current_tokens()
    except (TokenEngineError, ValueError) as e:
        fail(str(e))

    if text_only:
        result = session.share_text()
    else:
        result = session.share_url(base_url or ctx.obj['config'].share_base_url)
    click.echo(result)

    if copy:
        _copy(result, "share link")


@click.command()
@click.argument('text')
@click.pass_context
def load(ctx, text: str):
    """Decode a share string or share URL and show the configuration."""
    partial = load_shared_text(text)
    if partial.is_empty():
        console.print("[yellow]No shared configuration found; showing defaults[/yellow]")

    try:
        session = build_session(ctx)
        tokens = session.load_partial(partial)
    except TokenEngineError as e:
        fail(str(e))

    console.print(_selection_panel(session))
    console.print(f"[dim]{len(tokens)} tokens resolved for {tokens.name}[/dim]")


@click.command()
@selection_options
@click.option('--stylesheet', type=click.Path(), help='Stylesheet to update')
@click.pass_context
def apply(ctx, stylesheet: Optional[str], **options):
    """Write the resolved tokens into a stylesheet's :root block."""
    path = Path(stylesheet or ctx.obj['config'].stylesheet_path)
    try:
        session = build_session(ctx, sink=CSSFileStyleSink(path), **options)
        tokens = session.start()
    except (TokenEngineError, ValueError) as e:
        fail(str(e))

    if session.has_error:
        fail(f"Could not apply tokens: {session.last_error}")

    console.print(f"[green]✓ Applied {len(tokens)} tokens for {tokens.name} "
                  f"({tokens.mode.value}) to {path}[/green]")


@click.command()
@click.argument('value', required=False, type=click.Choice(['dark', 'light', 'toggle']))
@click.pass_context
def mode(ctx, value: Optional[str]):
    """Show or change the saved dark/light preference."""
    store = PreferenceStore(ctx.obj['config'].get_preferences_path())

    if value is None:
        current = "dark" if store.load_dark_mode() else "light"
        console.print(f"Current mode: [cyan]{current}[/cyan]")
        return

    if value == 'toggle':
        dark_mode = store.toggle_dark_mode()
    else:
        dark_mode = value == 'dark'
        if not store.save_dark_mode(dark_mode):
            console.print("[yellow]Preference could not be saved[/yellow]")

    console.print(f"Mode set to [cyan]{'dark' if dark_mode else 'light'}[/cyan]")
