"""Session controller for Design Lab.

DesignSession owns the mutable parts of a running session: the current
selection, the history of applied configurations, the style sink, and
the degraded-state flag shown when styles could not be applied. Every
change goes through resolve, then apply, then record.
"""

from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError

from .config import ConfigModel
from .preferences import PreferenceStore
from .token_engine import (
    ApplyError,
    ApplyResult,
    ConfigurationHistory,
    ContrastAuditEntry,
    ExportManager,
    HistoryEntry,
    MemoryStyleSink,
    PartialConfig,
    ResolvedTokenSet,
    Selection,
    ShareableConfig,
    StyleSink,
    TokenResolver,
    apply_tokens,
    audit_palette,
    build_share_url,
    config_from_url,
    decode,
    encode,
    generate_shades,
)

logger = logging.getLogger(__name__)


def overlay_partial(selection: Selection, partial: PartialConfig) -> Selection:
    """Apply decoded share fields on top of a selection.

    Absent fields keep their current values. Sizes outside the allowed
    ranges are skipped; catalog names are left for the resolver to
    check.
    """
    for key, value in partial.present_fields().items():
        try:
            selection = selection.evolve(**{key: value})
        except ValidationError as e:
            logger.warning(f"Ignoring shared value for {key}: {value!r} ({e.error_count()} errors)")
    return selection


class DesignSession:
    """Single-writer controller around the token engine."""

    def __init__(self, selection: Optional[Selection] = None,
                 sink: Optional[StyleSink] = None,
                 resolver: Optional[TokenResolver] = None,
                 history: Optional[ConfigurationHistory] = None,
                 preferences: Optional[PreferenceStore] = None):
        self.selection = selection or Selection()
        self.sink = sink if sink is not None else MemoryStyleSink()
        self.resolver = resolver or TokenResolver()
        self.history = history if history is not None else ConfigurationHistory()
        self.preferences = preferences
        self.export_manager = ExportManager()

        self.tokens: Optional[ResolvedTokenSet] = None
        self.last_apply: Optional[ApplyResult] = None

    @classmethod
    def from_config(cls, config: ConfigModel, sink: Optional[StyleSink] = None,
                    preferences: Optional[PreferenceStore] = None) -> "DesignSession":
        """Create a session starting from the configured defaults.

        The saved dark mode preference, when available, decides the
        starting mode.
        """
        preferences = preferences or PreferenceStore(config.get_preferences_path())
        dark_mode = preferences.load_dark_mode()
        return cls(
            selection=config.default_selection(dark_mode=dark_mode),
            sink=sink,
            history=ConfigurationHistory(config.history_capacity),
            preferences=preferences,
        )

    @property
    def has_error(self) -> bool:
        """Whether the last application failed"""
        return self.last_apply is not None and not self.last_apply.ok

    @property
    def last_error(self) -> Optional[ApplyError]:
        return self.last_apply.error if self.last_apply else None

    def commit(self, selection: Selection) -> ResolvedTokenSet:
        """Resolve, apply and record a selection.

        The selection becomes current even when applying fails; only a
        successful application is recorded in the history.

        Raises:
            UnknownIdentifier: If the selection names something outside the catalog
        """
        tokens = self.resolver.resolve(selection)
        result = apply_tokens(tokens, self.sink)

        self.selection = selection
        self.tokens = tokens
        self.last_apply = result

        if result.ok:
            self.history.record(HistoryEntry.from_selection(selection))
        else:
            logger.warning(f"Session in degraded state: {result.error}")
        return tokens

    def start(self) -> ResolvedTokenSet:
        """Apply the starting selection."""
        return self.commit(self.selection)

    def current_tokens(self) -> ResolvedTokenSet:
        """Token set for the current selection, applying it on first use."""
        if self.tokens is None:
            return self.start()
        return self.tokens

    def update(self, **changes: Any) -> ResolvedTokenSet:
        """Change selection fields and re-resolve."""
        return self.commit(self.selection.evolve(**changes))

    def set_dark_mode(self, dark_mode: bool) -> ResolvedTokenSet:
        """Switch mode and remember it as the saved preference."""
        tokens = self.update(dark_mode=dark_mode)
        if self.preferences is not None:
            self.preferences.save_dark_mode(dark_mode)
        return tokens

    def toggle_dark_mode(self) -> ResolvedTokenSet:
        return self.set_dark_mode(not self.selection.dark_mode)

    def apply_preset(self, name: str) -> ResolvedTokenSet:
        """Switch to a named preset, keeping sizes the preset leaves unset.

        Raises:
            UnknownIdentifier: If the preset does not exist
        """
        preset = self.resolver.catalog.preset(name)
        return self.commit(Selection.from_preset(preset, self.selection))

    def apply_spacing_scale(self, name: str) -> ResolvedTokenSet:
        """Use the spacing unit of a named spacing scale."""
        scale = self.resolver.catalog.spacing_scale(name)
        return self.update(spacing_unit=scale.unit)

    def restore(self, index: int) -> ResolvedTokenSet:
        """Re-apply a history entry.

        Raises:
            IndexError: If the history has no entry at index
        """
        entry = self.history.restore(index)
        return self.commit(Selection.from_partial(entry.to_partial(), self.selection))

    def load_partial(self, partial: PartialConfig) -> ResolvedTokenSet:
        """Apply decoded share fields on top of the current selection."""
        return self.commit(overlay_partial(self.selection, partial))

    def load_shared(self, text: str) -> ResolvedTokenSet:
        """Apply an encoded share string; unreadable text keeps the defaults."""
        return self.load_partial(decode(text))

    def load_url(self, url: str) -> ResolvedTokenSet:
        """Apply the ``config`` parameter of a share URL."""
        return self.load_partial(config_from_url(url))

    def shareable_config(self) -> ShareableConfig:
        return ShareableConfig.from_selection(self.selection)

    def share_text(self) -> str:
        return encode(self.shareable_config())

    def share_url(self, base_url: str) -> str:
        return build_share_url(base_url, self.shareable_config())

    def export(self, format: Any, output_path: Optional[str] = None) -> str:
        """Export the current tokens.

        Raises:
            UnsupportedFormat: If the format is unknown or reserved
        """
        return self.export_manager.export(self.current_tokens(), format, output_path)

    def contrast_report(self) -> List[ContrastAuditEntry]:
        tokens = self.current_tokens()
        return audit_palette(tokens.palette_tokens, tokens.dark_mode)

    def primary_shades(self) -> Dict[int, str]:
        return generate_shades(self.current_tokens().palette_tokens['--primary'])
