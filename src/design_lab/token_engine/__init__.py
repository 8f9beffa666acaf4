"""Design Lab Token Engine Package.

This package resolves themes, palettes and typography into design
tokens, evaluates color contrast, generates shade ramps, exports tokens
to stylesheet, Tailwind and design-tool formats, keeps a bounded history
of applied configurations, and encodes configurations as share links.
"""

from .catalog import TokenCatalog, get_catalog
from .resolver import TokenResolver, resolve
from .sink import (
    StyleSink,
    MemoryStyleSink,
    CSSFileStyleSink,
    ApplyResult,
    apply_tokens,
)
from .exporters import ExportFormat, ExportManager, format_tokens
from .history import ConfigurationHistory
from .share import encode, decode, build_share_url, config_from_url
from .color import (
    hex_to_rgb,
    rgb_to_hex,
    calculate_contrast_ratio,
    check_contrast,
    meets_wcag_contrast,
    generate_shades,
    shade_tokens,
    audit_palette,
    validate_color_accessibility,
    ContrastAuditEntry,
)
from .typography import compute_type_scale, compute_spacing
from .schema import (
    # Core models
    ThemeDescriptor,
    PaletteDescriptor,
    TypographyParameters,
    Selection,
    ResolvedTokenSet,
    HistoryEntry,
    ShareableConfig,
    PartialConfig,
    ContrastReport,
    PresetConfig,
    SpacingScaleConfig,

    # Enums
    ThemeName,
    PaletteName,
    FontName,
    AnimationSpeed,
    SpacingScale,
    PaletteMode,
)
from .errors import (
    TokenEngineError,
    UnknownIdentifier,
    InvalidColor,
    ApplyError,
    UnsupportedFormat,
    DecodeFailure,
)

__all__ = [
    # Main classes
    "TokenCatalog",
    "TokenResolver",
    "ConfigurationHistory",
    "ExportManager",
    "StyleSink",
    "MemoryStyleSink",
    "CSSFileStyleSink",
    "ApplyResult",

    # Operations
    "get_catalog",
    "resolve",
    "apply_tokens",
    "format_tokens",
    "encode",
    "decode",
    "build_share_url",
    "config_from_url",

    # Schema models
    "ThemeDescriptor",
    "PaletteDescriptor",
    "TypographyParameters",
    "Selection",
    "ResolvedTokenSet",
    "HistoryEntry",
    "ShareableConfig",
    "PartialConfig",
    "ContrastReport",
    "ContrastAuditEntry",
    "PresetConfig",
    "SpacingScaleConfig",

    # Enums
    "ThemeName",
    "PaletteName",
    "FontName",
    "AnimationSpeed",
    "SpacingScale",
    "PaletteMode",
    "ExportFormat",

    # Errors
    "TokenEngineError",
    "UnknownIdentifier",
    "InvalidColor",
    "ApplyError",
    "UnsupportedFormat",
    "DecodeFailure",

    # Utilities
    "hex_to_rgb",
    "rgb_to_hex",
    "calculate_contrast_ratio",
    "check_contrast",
    "meets_wcag_contrast",
    "generate_shades",
    "shade_tokens",
    "audit_palette",
    "validate_color_accessibility",
    "compute_type_scale",
    "compute_spacing",
]
