"""Token catalog of built-in themes, palettes, fonts and presets.

This module provides the TokenCatalog class that loads the YAML preset
files shipped with the package, validates every descriptor once, and
answers lookups by catalog name for the lifetime of the process.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import logging

import yaml

from .errors import UnknownIdentifier
from .schema import (
    AnimationSpeed,
    FontName,
    PaletteDescriptor,
    PaletteMode,
    PaletteName,
    PresetConfig,
    SpacingScale,
    SpacingScaleConfig,
    ThemeDescriptor,
    ThemeName,
)

logger = logging.getLogger(__name__)

PRESETS_DIR = Path(__file__).parent.parent / "catalog_presets"


class TokenCatalog:
    """Read-only registry of descriptor data."""

    def __init__(self, presets_dir: Optional[Path] = None):
        """Load and validate every catalog file.

        Args:
            presets_dir: Optional directory holding the catalog YAML files

        Raises:
            ValueError: If a catalog file is missing, malformed or incomplete
        """
        self.presets_dir = Path(presets_dir) if presets_dir else PRESETS_DIR

        self._themes: Dict[ThemeName, ThemeDescriptor] = {}
        self._palettes: Dict[Tuple[PaletteName, PaletteMode], PaletteDescriptor] = {}
        self._fonts: Dict[FontName, str] = {}
        self._speeds: Dict[AnimationSpeed, str] = {}
        self._spacing: Dict[SpacingScale, SpacingScaleConfig] = {}
        self._presets: Dict[str, PresetConfig] = {}

        self._load_themes(self._load_yaml_file("themes.yaml"))
        self._load_palettes(self._load_yaml_file("palettes.yaml"))
        self._load_typography(self._load_yaml_file("typography.yaml"))
        self._load_presets(self._load_yaml_file("presets.yaml"))

        logger.debug(
            f"Catalog loaded: {len(self._themes)} themes, "
            f"{len(self._palettes)} palette variants, {len(self._fonts)} fonts"
        )

    def _load_yaml_file(self, file_name: str) -> Dict[str, Any]:
        """Load YAML file safely."""
        file_path = self.presets_dir / file_name
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {file_path}: {e}")
        except OSError as e:
            raise ValueError(f"Error reading {file_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping at the top of {file_path}")
        return data

    def _load_themes(self, data: Dict[str, Any]) -> None:
        for theme_name in ThemeName:
            if theme_name.value not in data:
                raise ValueError(f"Theme '{theme_name.value}' is not defined in themes.yaml")
            entry = data[theme_name.value]
            try:
                self._themes[theme_name] = ThemeDescriptor(name=theme_name, **entry)
            except Exception as e:
                raise ValueError(f"Invalid theme definition for '{theme_name.value}': {e}")

        extra = set(data) - {t.value for t in ThemeName}
        if extra:
            logger.warning(f"Ignoring themes outside the catalog: {', '.join(sorted(extra))}")

    def _load_palettes(self, data: Dict[str, Any]) -> None:
        for palette_name in PaletteName:
            entry = data.get(palette_name.value)
            if not entry:
                raise ValueError(f"Palette '{palette_name.value}' is not defined in palettes.yaml")
            for mode in PaletteMode:
                if mode.value not in entry:
                    raise ValueError(f"Palette '{palette_name.value}' has no {mode.value} variant")
                try:
                    self._palettes[(palette_name, mode)] = PaletteDescriptor(
                        name=palette_name,
                        mode=mode,
                        display_name=entry.get('display_name', ''),
                        tokens=entry[mode.value],
                    )
                except Exception as e:
                    raise ValueError(
                        f"Invalid palette definition for '{palette_name.value}' ({mode.value}): {e}"
                    )

    def _load_typography(self, data: Dict[str, Any]) -> None:
        fonts = data.get('fonts', {})
        speeds = data.get('animation_speeds', {})
        spacing = data.get('spacing_scales', {})

        for font in FontName:
            if font.value not in fonts:
                raise ValueError(f"Font '{font.value}' has no font stack")
            self._fonts[font] = fonts[font.value]

        for speed in AnimationSpeed:
            if speed.value not in speeds:
                raise ValueError(f"Animation speed '{speed.value}' has no duration")
            self._speeds[speed] = speeds[speed.value]

        for scale in SpacingScale:
            if scale.value not in spacing:
                raise ValueError(f"Spacing scale '{scale.value}' is not defined")
            self._spacing[scale] = SpacingScaleConfig(**spacing[scale.value])

    def _load_presets(self, data: Dict[str, Any]) -> None:
        for preset_name, entry in data.items():
            try:
                self._presets[preset_name] = PresetConfig(**entry)
            except Exception as e:
                raise ValueError(f"Invalid preset '{preset_name}': {e}")

    @staticmethod
    def _coerce(enum_cls, kind: str, name: Any):
        """Map a name onto a catalog enumeration member."""
        try:
            return enum_cls(name)
        except (ValueError, TypeError):
            raise UnknownIdentifier(kind, name, [member.value for member in enum_cls])

    def theme(self, name: Any) -> ThemeDescriptor:
        """Get the descriptor for a theme.

        Raises:
            UnknownIdentifier: If the theme is not in the catalog
        """
        return self._themes[self._coerce(ThemeName, 'theme', name)]

    def palette(self, name: Any, dark_mode: bool = False) -> PaletteDescriptor:
        """Get the descriptor for a palette in light or dark mode.

        Raises:
            UnknownIdentifier: If the palette is not in the catalog
        """
        palette_name = self._coerce(PaletteName, 'palette', name)
        mode = dark_mode if isinstance(dark_mode, PaletteMode) else PaletteMode.from_dark(dark_mode)
        return self._palettes[(palette_name, mode)]

    def font_stack(self, name: Any) -> str:
        return self._fonts[self._coerce(FontName, 'font', name)]

    def transition_duration(self, speed: Any) -> str:
        return self._speeds[self._coerce(AnimationSpeed, 'animation speed', speed)]

    def spacing_scale(self, scale: Any) -> SpacingScaleConfig:
        return self._spacing[self._coerce(SpacingScale, 'spacing scale', scale)]

    def preset(self, name: str) -> PresetConfig:
        """Get a named preset.

        Raises:
            UnknownIdentifier: If no preset has that name
        """
        if name not in self._presets:
            raise UnknownIdentifier('preset', name, self._presets.keys())
        return self._presets[name]

    def list_themes(self) -> List[ThemeDescriptor]:
        return [self._themes[name] for name in ThemeName]

    def list_palettes(self, dark_mode: bool = False) -> List[PaletteDescriptor]:
        mode = PaletteMode.from_dark(dark_mode)
        return [self._palettes[(name, mode)] for name in PaletteName]

    def list_fonts(self) -> Dict[str, str]:
        return {font.value: stack for font, stack in self._fonts.items()}

    def list_presets(self) -> Dict[str, PresetConfig]:
        return dict(self._presets)


@lru_cache(maxsize=1)
def get_catalog() -> TokenCatalog:
    """Get the process-wide catalog, loading it on first use."""
    return TokenCatalog()
