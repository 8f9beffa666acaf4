"""Schema definitions for the design token engine.

This module defines the enumerations of catalog names and the Pydantic
models that carry descriptors, selections, resolved token sets, history
entries and share-link payloads between the engine components.
"""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from enum import Enum
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


HEX_COLOR_PATTERN = re.compile(r'^#[0-9A-Fa-f]{6}$')

# Structural keys every theme must define
STRUCTURAL_TOKEN_KEYS = (
    '--radius',
    '--shadow',
    '--shadow-lg',
    '--border-width',
    '--button-transform',
)

# Optional decorative keys; a theme without one of these has no such decoration
DECORATIVE_TOKEN_KEYS = (
    '--texture',
    '--gradient',
    '--scanline',
    '--grid-bg',
    '--organic-wave',
    '--flow-gradient',
    '--minimal-grid',
    '--geometric-pattern',
    '--gold-gradient',
    '--neon-glow',
    '--vintage-accent',
    '--nature-accent',
    '--gold-accent',
)

# Color keys every palette must define, in export order
COLOR_TOKEN_KEYS = (
    '--primary',
    '--success',
    '--warning',
    '--error',
    '--info',
    '--surface',
    '--surface-alt',
    '--text',
    '--text-secondary',
    '--border',
)

SEMANTIC_COLOR_KEYS = COLOR_TOKEN_KEYS[:5]

ACCENT_TOKEN_KEYS = (
    '--neon-glow',
    '--vintage-accent',
    '--nature-accent',
    '--gold-accent',
)


class ThemeName(str, Enum):
    """Built-in visual themes"""
    FLAT_MODERN = "flat-modern"
    NEO_BRUTALIST = "neo-brutalist"
    SKEUOMORPHIC = "skeuomorphic"
    NEUMORPHIC = "neumorphic"
    GLASSMORPHISM = "glassmorphism"
    MATERIAL = "material"
    RETRO_VINTAGE = "retro-vintage"
    CYBERPUNK = "cyberpunk"
    ORGANIC_MODERN = "organic-modern"
    MINIMALIST = "minimalist"
    ART_DECO = "art-deco"
    CLAYMORPHISM = "claymorphism"


class PaletteName(str, Enum):
    """Built-in color palettes"""
    DEFAULT = "default"
    OCEAN = "ocean"
    SUNSET = "sunset"
    FOREST = "forest"
    PURPLE = "purple"
    CORPORATE = "corporate"
    CYBERPUNK = "cyberpunk"
    PASTEL = "pastel"
    ART_DECO = "art-deco"
    RETRO = "retro"


class FontName(str, Enum):
    """Built-in font stacks"""
    INTER = "inter"
    ROBOTO = "roboto"
    POPPINS = "poppins"
    GEORGIA = "georgia"
    COURIER = "courier"
    SPACE_MONO = "space-mono"
    JETBRAINS_MONO = "jetbrains-mono"
    SPACE_GROTESK = "space-grotesk"


class AnimationSpeed(str, Enum):
    """Transition speed classes"""
    FAST = "fast"
    NORMAL = "normal"
    SLOW = "slow"
    NONE = "none"


class SpacingScale(str, Enum):
    """Spacing density presets"""
    COMPACT = "compact"
    DEFAULT = "default"
    RELAXED = "relaxed"


class PaletteMode(str, Enum):
    """Light or dark palette variant"""
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_dark(cls, dark_mode: bool) -> "PaletteMode":
        return cls.DARK if dark_mode else cls.LIGHT


class ThemeDescriptor(BaseModel):
    """Structural tokens for a single theme"""
    model_config = ConfigDict(frozen=True)

    name: ThemeName
    display_name: str = ""
    description: str = ""
    tokens: Dict[str, str]

    @model_validator(mode='after')
    def validate_tokens(self):
        """Require every structural key and reject empty values"""
        missing = [key for key in STRUCTURAL_TOKEN_KEYS if key not in self.tokens]
        if missing:
            raise ValueError(f"Theme '{self.name.value}' is missing {', '.join(missing)}")
        for key, value in self.tokens.items():
            if not key.startswith('--'):
                raise ValueError(f"Theme token '{key}' must start with '--'")
            if not value:
                raise ValueError(f"Theme token '{key}' has an empty value")
        return self

    @property
    def decorations(self) -> List[str]:
        """Decorative keys this theme carries"""
        return [key for key in self.tokens if key in DECORATIVE_TOKEN_KEYS]


class PaletteDescriptor(BaseModel):
    """Color tokens for one palette in one mode"""
    model_config = ConfigDict(frozen=True)

    name: PaletteName
    mode: PaletteMode
    display_name: str = ""
    tokens: Dict[str, str]

    @field_validator('tokens')
    @classmethod
    def validate_colors(cls, v):
        """Validate required keys and hex color format"""
        missing = [key for key in COLOR_TOKEN_KEYS if key not in v]
        if missing:
            raise ValueError(f"Palette is missing {', '.join(missing)}")
        for key, value in v.items():
            if not HEX_COLOR_PATTERN.match(value):
                raise ValueError(f"Palette token '{key}' is not a hex color: {value!r}")
        return v


class SpacingScaleConfig(BaseModel):
    """Spacing unit and multiplier for a spacing scale preset"""
    model_config = ConfigDict(frozen=True)

    unit: float = Field(..., gt=0)
    scale: float = Field(..., gt=0)


class PresetConfig(BaseModel):
    """Named starting configuration"""
    model_config = ConfigDict(frozen=True)

    theme: ThemeName
    palette: PaletteName
    font: FontName
    dark_mode: bool = False
    base_font_size: Optional[float] = None
    type_scale: Optional[float] = None


class TypographyParameters(BaseModel):
    """Inputs to the typography calculator"""
    model_config = ConfigDict(frozen=True)

    base_font_size: float = Field(16, ge=12, le=24)
    type_scale: float = Field(1.25, ge=1.1, le=1.6)
    spacing_unit: float = Field(4, gt=0)
    animation_speed: str = AnimationSpeed.NORMAL.value


class Selection(BaseModel):
    """The user's current choices.

    Catalog names are kept as plain strings; they are checked against the
    catalog when the selection is resolved.
    """
    model_config = ConfigDict(frozen=True)

    theme: str = ThemeName.FLAT_MODERN.value
    palette: str = PaletteName.DEFAULT.value
    font: str = FontName.INTER.value
    dark_mode: bool = False
    base_font_size: float = Field(16, ge=12, le=24)
    type_scale: float = Field(1.25, ge=1.1, le=1.6)
    spacing_unit: float = Field(4, gt=0)
    animation_speed: str = AnimationSpeed.NORMAL.value

    @field_validator('theme', 'palette', 'font', 'animation_speed', mode='before')
    @classmethod
    def unwrap_enum(cls, v):
        if isinstance(v, Enum):
            return v.value
        return v

    @property
    def mode(self) -> PaletteMode:
        return PaletteMode.from_dark(self.dark_mode)

    @property
    def typography(self) -> TypographyParameters:
        return TypographyParameters(
            base_font_size=self.base_font_size,
            type_scale=self.type_scale,
            spacing_unit=self.spacing_unit,
            animation_speed=self.animation_speed,
        )

    def evolve(self, **changes: Any) -> "Selection":
        """Return a new selection with the given fields replaced"""
        data = self.model_dump()
        data.update(changes)
        return Selection(**data)

    @classmethod
    def from_preset(cls, preset: PresetConfig, base: Optional["Selection"] = None) -> "Selection":
        """Build a selection from a preset, keeping unset sizes from base"""
        base = base or cls()
        changes: Dict[str, Any] = {
            'theme': preset.theme,
            'palette': preset.palette,
            'font': preset.font,
            'dark_mode': preset.dark_mode,
        }
        if preset.base_font_size:
            changes['base_font_size'] = preset.base_font_size
        if preset.type_scale:
            changes['type_scale'] = preset.type_scale
        return base.evolve(**changes)

    @classmethod
    def from_partial(cls, partial: "PartialConfig", fallback: Optional["Selection"] = None) -> "Selection":
        """Fill a selection field by field from a decoded partial config"""
        fallback = fallback or cls()
        return fallback.evolve(**partial.present_fields())


class ResolvedTokenSet(BaseModel):
    """Merged tokens for one selection.

    The namespaces are kept apart so exporters can pick the parts they
    need; ``as_dict`` gives the flat merge in merge order.
    """
    model_config = ConfigDict(frozen=True)

    theme: str
    palette: str
    font: str
    dark_mode: bool = False
    theme_tokens: Dict[str, str] = Field(default_factory=dict)
    palette_tokens: Dict[str, str] = Field(default_factory=dict)
    typography_tokens: Dict[str, str] = Field(default_factory=dict)
    font_tokens: Dict[str, str] = Field(default_factory=dict)

    @property
    def mode(self) -> PaletteMode:
        return PaletteMode.from_dark(self.dark_mode)

    @property
    def name(self) -> str:
        return f"{self.theme}-{self.palette}"

    def as_dict(self) -> Dict[str, str]:
        """Return a fresh flat mapping of every token"""
        merged: Dict[str, str] = {}
        merged.update(self.theme_tokens)
        merged.update(self.palette_tokens)
        merged.update(self.typography_tokens)
        merged.update(self.font_tokens)
        return merged

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.as_dict().get(key, default)

    def keys(self) -> List[str]:
        return list(self.as_dict().keys())

    def __getitem__(self, key: str) -> str:
        return self.as_dict()[key]

    def __contains__(self, key: object) -> bool:
        return key in self.as_dict()

    def __len__(self) -> int:
        return len(self.as_dict())


class ContrastReport(BaseModel):
    """WCAG contrast classification for a color pair"""
    model_config = ConfigDict(frozen=True)

    ratio: float = Field(..., ge=1.0)
    aa: bool
    aaa: bool
    fail: bool

    @property
    def label(self) -> str:
        if self.aaa:
            return "AAA"
        if self.aa:
            return "AA"
        return "FAIL"


class HistoryEntry(BaseModel):
    """Snapshot of an applied configuration"""
    model_config = ConfigDict(frozen=True)

    timestamp: str
    theme: str
    palette: str
    font: str
    dark_mode: bool
    base_font_size: float
    type_scale: float

    @classmethod
    def from_selection(cls, selection: Selection, timestamp: Optional[datetime] = None) -> "HistoryEntry":
        moment = timestamp or datetime.now(timezone.utc)
        return cls(
            timestamp=moment.isoformat(),
            theme=selection.theme,
            palette=selection.palette,
            font=selection.font,
            dark_mode=selection.dark_mode,
            base_font_size=selection.base_font_size,
            type_scale=selection.type_scale,
        )

    def to_partial(self) -> "PartialConfig":
        return PartialConfig(
            theme=self.theme,
            palette=self.palette,
            font=self.font,
            dark_mode=self.dark_mode,
            base_font_size=self.base_font_size,
            type_scale=self.type_scale,
        )


class ShareableConfig(BaseModel):
    """Minimal configuration needed to rebuild a token set"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    theme: str
    palette: str
    font: str
    dark_mode: bool = Field(..., alias='darkMode')
    base_font_size: float = Field(..., alias='baseFontSize')
    type_scale: float = Field(..., alias='typeScale')

    @field_validator('theme', 'palette', 'font', mode='before')
    @classmethod
    def unwrap_enum(cls, v):
        if isinstance(v, Enum):
            return v.value
        return v

    @classmethod
    def from_selection(cls, selection: Selection) -> "ShareableConfig":
        return cls(
            theme=selection.theme,
            palette=selection.palette,
            font=selection.font,
            dark_mode=selection.dark_mode,
            base_font_size=selection.base_font_size,
            type_scale=selection.type_scale,
        )

    def to_partial(self) -> "PartialConfig":
        return PartialConfig(**self.model_dump())


class PartialConfig(BaseModel):
    """Decoded share payload; any field may be missing.

    Values are carried through unvalidated so the resolver can report
    unknown names.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    theme: Optional[Any] = None
    palette: Optional[Any] = None
    font: Optional[Any] = None
    dark_mode: Optional[Any] = Field(None, alias='darkMode')
    base_font_size: Optional[Any] = Field(None, alias='baseFontSize')
    type_scale: Optional[Any] = Field(None, alias='typeScale')

    def present_fields(self) -> Dict[str, Any]:
        """Fields that were present in the payload, by attribute name"""
        return {key: value for key, value in self.model_dump().items() if value is not None}

    def is_empty(self) -> bool:
        return not self.present_fields()

