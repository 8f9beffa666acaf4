"""Token resolver for the design token engine.

This module provides the TokenResolver class that merges a theme
descriptor, a palette descriptor, computed typography tokens and the
font stack into one ResolvedTokenSet. Resolution is a pure function of
the selection and the catalog.
"""

from typing import Any, Optional
import logging

from .catalog import TokenCatalog, get_catalog
from .schema import (
    PaletteMode,
    ResolvedTokenSet,
    Selection,
    TypographyParameters,
)
from .typography import typography_tokens

logger = logging.getLogger(__name__)


class TokenResolver:
    """Merges catalog descriptors and typography into token sets."""

    def __init__(self, catalog: Optional[TokenCatalog] = None):
        """Initialize the resolver.

        Args:
            catalog: Optional catalog; defaults to the process-wide one
        """
        self.catalog = catalog or get_catalog()

    def resolve(self, selection: Selection) -> ResolvedTokenSet:
        """Resolve a selection into a complete token set.

        Merge order is theme structure, palette colors, typography, then
        the font stack. Every mapping is freshly copied, so catalog
        entries are never shared with callers.

        Args:
            selection: Current theme, palette, font, mode and typography

        Returns:
            ResolvedTokenSet for the selection

        Raises:
            UnknownIdentifier: If any name is outside the catalog
        """
        theme = self.catalog.theme(selection.theme)
        palette = self.catalog.palette(selection.palette, selection.dark_mode)
        font_stack = self.catalog.font_stack(selection.font)
        duration = self.catalog.transition_duration(selection.animation_speed)

        resolved = ResolvedTokenSet(
            theme=theme.name.value,
            palette=palette.name.value,
            font=selection.font,
            dark_mode=selection.dark_mode,
            theme_tokens=dict(theme.tokens),
            palette_tokens=dict(palette.tokens),
            typography_tokens=typography_tokens(selection.typography, duration),
            font_tokens={'--font-sans': font_stack},
        )

        logger.debug(
            f"Resolved '{resolved.name}' ({selection.mode.value}) "
            f"with {len(resolved)} tokens"
        )
        return resolved


def resolve(theme: Any, palette: Any, mode: Any = PaletteMode.LIGHT, font: Any = "inter",
            typography: Optional[TypographyParameters] = None,
            catalog: Optional[TokenCatalog] = None) -> ResolvedTokenSet:
    """Resolve tokens from individual selection parts.

    Args:
        theme: Theme name
        palette: Palette name
        mode: PaletteMode, 'light'/'dark', or a dark-mode boolean
        font: Font name
        typography: Optional typography parameters (defaults apply)
        catalog: Optional catalog override

    Returns:
        ResolvedTokenSet for the selection
    """
    if isinstance(mode, bool):
        dark_mode = mode
    else:
        dark_mode = PaletteMode(mode) == PaletteMode.DARK
    typography = typography or TypographyParameters()

    selection = Selection(
        theme=theme,
        palette=palette,
        font=font,
        dark_mode=dark_mode,
        base_font_size=typography.base_font_size,
        type_scale=typography.type_scale,
        spacing_unit=typography.spacing_unit,
        animation_speed=typography.animation_speed,
    )
    return TokenResolver(catalog).resolve(selection)
