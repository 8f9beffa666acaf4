"""Tests for the session controller."""

import pytest

from design_lab.config import ConfigModel
from design_lab.preferences import PreferenceStore
from design_lab.session import DesignSession, overlay_partial
from design_lab.token_engine import (
    MemoryStyleSink,
    PartialConfig,
    Selection,
    ShareableConfig,
    UnknownIdentifier,
    UnsupportedFormat,
    encode,
)


class FlakySink(MemoryStyleSink):
    """Memory sink that can be told to fail."""

    def __init__(self):
        super().__init__()
        self.broken = False

    def set_property(self, key, value):
        if self.broken:
            raise RuntimeError("host refused the write")
        super().set_property(key, value)


class ProbeSink(MemoryStyleSink):
    """Records the history length seen while properties are applied."""

    def __init__(self):
        super().__init__()
        self.session = None
        self.seen_history_lengths = set()

    def set_property(self, key, value):
        self.seen_history_lengths.add(len(self.session.history))
        super().set_property(key, value)


@pytest.fixture
def session(memory_sink):
    return DesignSession(sink=memory_sink)


class TestUpdate:
    """Resolve, apply, record."""

    def test_start_applies_defaults(self, session, memory_sink):
        tokens = session.start()

        assert memory_sink.properties == tokens.as_dict()
        assert len(session.history) == 1
        assert not session.has_error

    def test_update_records_history(self, session, memory_sink):
        session.start()
        session.update(theme="cyberpunk", palette="cyberpunk", dark_mode=True)

        assert session.selection.theme == "cyberpunk"
        assert memory_sink.get_property('--primary') == '#00ff9d'
        assert len(session.history) == 2
        assert session.history.latest.theme == "cyberpunk"

    def test_apply_happens_before_record(self):
        sink = ProbeSink()
        session = DesignSession(sink=sink)
        sink.session = session

        session.start()
        session.update(theme="material")

        assert sink.seen_history_lengths == {0, 1}
        assert len(session.history) == 2

    def test_unknown_name_leaves_state(self, session):
        session.start()
        before = session.selection

        with pytest.raises(UnknownIdentifier):
            session.update(theme="vaporwave")

        assert session.selection == before
        assert len(session.history) == 1

    def test_out_of_range_size(self, session):
        with pytest.raises(ValueError):
            session.update(type_scale=3)

    def test_apply_failure_enters_degraded_state(self):
        sink = FlakySink()
        session = DesignSession(sink=sink)
        session.start()

        sink.broken = True
        session.update(palette="sunset")

        assert session.has_error
        assert "host refused the write" in str(session.last_error)
        assert session.selection.palette == "sunset"
        assert len(session.history) == 1

        sink.broken = False
        session.update(palette="forest")

        assert not session.has_error
        assert len(session.history) == 2

    def test_current_tokens_applies_once(self, session):
        first = session.current_tokens()
        second = session.current_tokens()

        assert first is second
        assert len(session.history) == 1


class TestPresetsAndHistory:
    """Presets, spacing scales and history restore."""

    def test_apply_preset(self, session):
        session.apply_preset("dark-cyberpunk")

        assert session.selection.theme == "cyberpunk"
        assert session.selection.font == "jetbrains-mono"
        assert session.selection.dark_mode is True
        assert session.tokens['--surface'] == '#000000'

    def test_unknown_preset(self, session):
        with pytest.raises(UnknownIdentifier):
            session.apply_preset("nope")

    def test_apply_spacing_scale(self, session):
        tokens = session.apply_spacing_scale("relaxed")

        assert session.selection.spacing_unit == 8
        assert tokens['--spacing-1'] == '8px'
        assert tokens['--spacing-6'] == '64px'

    def test_restore(self, session):
        session.update(theme="art-deco", palette="art-deco", base_font_size=18)
        session.update(theme="minimalist", palette="default", base_font_size=14)

        session.restore(1)

        assert session.selection.theme == "art-deco"
        assert session.selection.base_font_size == 18
        assert session.history.latest.theme == "art-deco"

    def test_restore_out_of_range(self, session):
        session.start()
        with pytest.raises(IndexError):
            session.restore(5)


class TestSharing:
    """Share links and decoded configurations."""

    def test_share_url_round_trip(self, session):
        session.update(theme="glassmorphism", palette="purple", font="poppins",
                       dark_mode=True, type_scale=1.5)
        url = session.share_url("http://localhost:5173/")

        other = DesignSession()
        other.load_url(url)

        assert other.selection.theme == "glassmorphism"
        assert other.selection.palette == "purple"
        assert other.selection.font == "poppins"
        assert other.selection.dark_mode is True
        assert other.selection.type_scale == 1.5

    def test_load_shared(self, session):
        text = encode(ShareableConfig(theme="retro-vintage", palette="retro", font="courier",
                                      dark_mode=False, base_font_size=17, type_scale=1.2))
        tokens = session.load_shared(text)

        assert tokens.name == "retro-vintage-retro"
        assert tokens['--body-size'] == '17px'

    def test_unreadable_text_keeps_defaults(self, session):
        tokens = session.load_shared("not-base64!!")

        assert session.selection == Selection()
        assert tokens.name == "flat-modern-default"

    def test_out_of_range_values_skipped(self, session):
        partial = PartialConfig(theme="material", base_font_size=99)
        session.load_partial(partial)

        assert session.selection.theme == "material"
        assert session.selection.base_font_size == 16

    def test_unknown_shared_name_raises(self, session):
        with pytest.raises(UnknownIdentifier):
            session.load_partial(PartialConfig(palette="neon"))

    def test_overlay_partial_keeps_absent_fields(self):
        base = Selection(theme="material", font="roboto")
        selection = overlay_partial(base, PartialConfig(dark_mode=True))

        assert selection.theme == "material"
        assert selection.font == "roboto"
        assert selection.dark_mode is True

    def test_share_text(self, session):
        assert session.share_text() == encode(ShareableConfig.from_selection(Selection()))


class TestOutputs:
    """Exports, contrast audit and shades."""

    def test_export(self, session):
        session.update(theme="cyberpunk", palette="cyberpunk", dark_mode=True)
        assert "  --primary: #00ff9d;" in session.export("css")

    def test_export_reserved(self, session):
        with pytest.raises(UnsupportedFormat):
            session.export("style-dictionary")

    def test_export_to_file(self, session, tmp_path):
        output = tmp_path / "tailwind.config.js"
        content = session.export("tailwind", str(output))
        assert output.read_text(encoding="utf-8") == content

    def test_contrast_report(self, session):
        entries = session.contrast_report()
        assert entries[0].token == '--primary'
        assert entries[0].against == '#000000'

    def test_primary_shades(self, session):
        shades = session.primary_shades()
        assert len(shades) == 9
        assert '#3b82f6' not in shades.values()


class TestPreferences:
    """Dark mode preference handling."""

    def test_set_dark_mode_saves_preference(self, tmp_path):
        store = PreferenceStore(tmp_path / "preferences.yaml")
        session = DesignSession(preferences=store)

        session.set_dark_mode(True)

        assert session.selection.dark_mode is True
        assert store.load_dark_mode() is True

    def test_toggle(self, tmp_path):
        store = PreferenceStore(tmp_path / "preferences.yaml")
        session = DesignSession(preferences=store)

        session.toggle_dark_mode()
        session.toggle_dark_mode()

        assert session.selection.dark_mode is False
        assert store.load_dark_mode() is False

    def test_from_config_reads_preference(self, tmp_path):
        config = ConfigModel(data_dir=str(tmp_path), default_theme="neo-brutalist",
                             default_palette="corporate")
        PreferenceStore(config.get_preferences_path()).save_dark_mode(True)

        session = DesignSession.from_config(config)

        assert session.selection.theme == "neo-brutalist"
        assert session.selection.palette == "corporate"
        assert session.selection.dark_mode is True

    def test_from_config_history_capacity(self, tmp_path):
        config = ConfigModel(data_dir=str(tmp_path), history_capacity=3)
        session = DesignSession.from_config(config)

        for size in (12, 13, 14, 15, 16):
            session.update(base_font_size=size)

        assert len(session.history) == 3
        assert session.history.latest.base_font_size == 16
