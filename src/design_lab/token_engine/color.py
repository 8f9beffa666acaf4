"""Color utilities for the token engine.

This module provides hex parsing, WCAG relative-luminance contrast
calculation and classification, palette contrast audits, and the tint
ramp generator used for primary color shades.
"""

import math
import re
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import InvalidColor
from .schema import ContrastReport

AA_THRESHOLD = 4.5
AAA_THRESHOLD = 7.0

SHADE_STEPS = tuple(range(100, 1000, 100))

_HEX_BODY = re.compile(r'^[0-9A-Fa-f]{6}$')


def hex_to_rgb(hex_color: Any) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple.

    Args:
        hex_color: Hex color string (e.g., '#FF0000' or 'FF0000')

    Returns:
        RGB tuple (r, g, b) with values 0-255

    Raises:
        InvalidColor: If hex_color is not a valid six digit hex color
    """
    if not isinstance(hex_color, str):
        raise InvalidColor(hex_color)

    body = hex_color[1:] if hex_color.startswith('#') else hex_color
    if not _HEX_BODY.match(body):
        raise InvalidColor(hex_color)

    return (int(body[0:2], 16), int(body[2:4], 16), int(body[4:6], 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB values to a zero-padded lowercase hex string."""
    return f"#{r:02x}{g:02x}{b:02x}"


def calculate_luminance(r: int, g: int, b: int) -> float:
    """Calculate relative luminance of an RGB color.

    Uses the WCAG formula for luminance calculation.

    Args:
        r, g, b: RGB values 0-255

    Returns:
        Relative luminance 0.0-1.0
    """
    def gamma_correct(value: int) -> float:
        normalized = value / 255.0
        if normalized <= 0.03928:
            return normalized / 12.92
        else:
            return ((normalized + 0.055) / 1.055) ** 2.4

    return (
        0.2126 * gamma_correct(r)
        + 0.7152 * gamma_correct(g)
        + 0.0722 * gamma_correct(b)
    )


def relative_luminance(hex_color: str) -> float:
    """Relative luminance of a hex color."""
    return calculate_luminance(*hex_to_rgb(hex_color))


def calculate_contrast_ratio(color1: str, color2: str) -> float:
    """Calculate WCAG contrast ratio between two colors.

    Args:
        color1, color2: Hex color strings

    Returns:
        Contrast ratio 1.0-21.0 (higher is more contrast)

    Raises:
        InvalidColor: If either color is malformed
    """
    lum1 = relative_luminance(color1)
    lum2 = relative_luminance(color2)

    lighter = max(lum1, lum2)
    darker = min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def check_contrast(color1: str, color2: str) -> ContrastReport:
    """Classify the contrast between two colors at the AA and AAA levels."""
    ratio = calculate_contrast_ratio(color1, color2)
    return ContrastReport(
        ratio=ratio,
        aa=ratio >= AA_THRESHOLD,
        aaa=ratio >= AAA_THRESHOLD,
        fail=ratio < AA_THRESHOLD,
    )


def meets_wcag_contrast(fg_color: str, bg_color: str, level: str = 'AA') -> bool:
    """Check if color combination meets WCAG contrast requirements.

    Args:
        fg_color: Foreground hex color
        bg_color: Background hex color
        level: 'AA' (4.5:1) or 'AAA' (7:1)

    Returns:
        True if contrast meets requirements
    """
    report = check_contrast(fg_color, bg_color)
    if level.upper() == 'AAA':
        return report.aaa
    return report.aa


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def generate_shades(base: str) -> Dict[int, str]:
    """Derive a nine step tint ramp from a base color.

    Step ``i`` (1..9) moves each channel toward white by ``1 - i/10``, so
    step 100 is nearly white and step 900 sits a tenth of the way from
    the base color toward white.

    Args:
        base: Hex color string

    Returns:
        Mapping of step (100..900) to hex color

    Raises:
        InvalidColor: If base is malformed
    """
    r, g, b = hex_to_rgb(base)
    shades = {}
    for i, step in enumerate(SHADE_STEPS, start=1):
        toward_white = 1 - i / 10
        shades[step] = rgb_to_hex(
            _round_half_up(r + (255 - r) * toward_white),
            _round_half_up(g + (255 - g) * toward_white),
            _round_half_up(b + (255 - b) * toward_white),
        )
    return shades


def shade_tokens(base: str, prefix: str = '--primary') -> Dict[str, str]:
    """Name a shade ramp as custom properties (``--primary-100`` ...)."""
    return {f"{prefix}-{step}": color for step, color in generate_shades(base).items()}


class ContrastAuditEntry(BaseModel):
    """One palette color checked against the mode's text color"""
    model_config = ConfigDict(frozen=True)

    token: str
    color: str
    against: str
    report: ContrastReport


def audit_palette(palette_tokens: Dict[str, str], dark_mode: bool) -> List[ContrastAuditEntry]:
    """Check palette colors against white (dark mode) or black (light mode).

    Surface and text colors are skipped since they are the backgrounds
    and foregrounds themselves.

    Args:
        palette_tokens: Palette color tokens in catalog order
        dark_mode: Whether the dark palette is active

    Returns:
        Audit entries in palette order
    """
    against = '#ffffff' if dark_mode else '#000000'
    entries = []
    for key, value in palette_tokens.items():
        if not key.startswith('--') or 'surface' in key or 'text' in key:
            continue
        entries.append(ContrastAuditEntry(
            token=key,
            color=value,
            against=against,
            report=check_contrast(value, against),
        ))
    return entries


def validate_color_accessibility(palette_tokens: Dict[str, str]) -> List[str]:
    """Report text/surface pairs below the AA level.

    Args:
        palette_tokens: Palette color tokens

    Returns:
        List of accessibility warnings
    """
    warnings = []
    combinations = [
        ('--text', '--surface'),
        ('--text', '--surface-alt'),
        ('--text-secondary', '--surface'),
    ]

    for fg_key, bg_key in combinations:
        if fg_key in palette_tokens and bg_key in palette_tokens:
            report = check_contrast(palette_tokens[fg_key], palette_tokens[bg_key])
            if report.fail:
                warnings.append(
                    f"Low contrast between {fg_key} and {bg_key}: "
                    f"{report.ratio:.1f}:1 (recommended {AA_THRESHOLD}:1+)"
                )

    return warnings
