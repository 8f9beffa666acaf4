"""Typography calculator.

Heading sizes follow a geometric progression from the base size so the
ratio between levels stays constant when the base is rescaled.
"""

from typing import Dict, Tuple

from .schema import TypographyParameters

# Multipliers of the spacing unit for --spacing-1 .. --spacing-6
SPACING_MULTIPLIERS: Tuple[int, ...] = (1, 2, 3, 4, 6, 8)


def format_px(value: float) -> str:
    """Render a pixel length, dropping a trailing '.0'.

    Args:
        value: Length in pixels

    Returns:
        CSS length string such as '16px' or '31.25px'
    """
    if float(value).is_integer():
        return f"{int(value)}px"
    return f"{value!r}px"


def compute_type_scale(base_font_size: float, type_scale: float) -> Dict[str, float]:
    """Calculate heading and body sizes.

    Args:
        base_font_size: Body text size in pixels
        type_scale: Ratio between consecutive heading levels

    Returns:
        Dictionary with h1, h2, h3 and body sizes in pixels
    """
    return {
        'h1': base_font_size * type_scale ** 3,
        'h2': base_font_size * type_scale ** 2,
        'h3': base_font_size * type_scale,
        'body': base_font_size,
    }


def compute_spacing(spacing_unit: float) -> Tuple[float, ...]:
    """Spacing steps in pixels for the given unit."""
    return tuple(spacing_unit * multiplier for multiplier in SPACING_MULTIPLIERS)


def typography_tokens(params: TypographyParameters, transition_duration: str) -> Dict[str, str]:
    """Build the typography token namespace.

    Args:
        params: Base size, scale and spacing unit
        transition_duration: Resolved duration for the animation speed

    Returns:
        Token mapping for headings, body, spacing steps and transitions
    """
    sizes = compute_type_scale(params.base_font_size, params.type_scale)
    tokens = {
        '--h1-size': format_px(sizes['h1']),
        '--h2-size': format_px(sizes['h2']),
        '--h3-size': format_px(sizes['h3']),
        '--body-size': format_px(sizes['body']),
    }
    for step, value in enumerate(compute_spacing(params.spacing_unit), start=1):
        tokens[f'--spacing-{step}'] = format_px(value)
    tokens['--transition-speed'] = transition_duration
    return tokens
