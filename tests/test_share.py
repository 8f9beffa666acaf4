"""Tests for the share codec."""

import base64
import itertools
import json

import pytest

from design_lab.token_engine import (
    FontName,
    PaletteName,
    PartialConfig,
    Selection,
    ShareableConfig,
    ThemeName,
    build_share_url,
    config_from_url,
    decode,
    encode,
)


def sample_config(**overrides) -> ShareableConfig:
    data = dict(theme="cyberpunk", palette="cyberpunk", font="space-mono",
                dark_mode=True, base_font_size=18, type_scale=1.333)
    data.update(overrides)
    return ShareableConfig(**data)


def raw_encode(payload) -> str:
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


class TestEncode:
    """Encoding configurations."""

    def test_wire_names(self):
        payload = json.loads(base64.urlsafe_b64decode(encode(sample_config())))

        assert payload == {
            "theme": "cyberpunk",
            "palette": "cyberpunk",
            "font": "space-mono",
            "darkMode": True,
            "baseFontSize": 18,
            "typeScale": 1.333,
        }

    def test_url_safe(self):
        encoded = encode(sample_config(theme="???>>>", palette="~~~"))
        assert "+" not in encoded
        assert "/" not in encoded

    @pytest.mark.parametrize(
        "theme,palette,font,dark_mode",
        list(itertools.product(
            [t.value for t in ThemeName],
            [p.value for p in PaletteName],
            [f.value for f in FontName],
            [False, True],
        )),
    )
    def test_round_trip(self, theme, palette, font, dark_mode):
        config = sample_config(theme=theme, palette=palette, font=font, dark_mode=dark_mode)
        assert decode(encode(config)).present_fields() == config.to_partial().present_fields()

    def test_from_selection(self):
        config = ShareableConfig.from_selection(Selection(theme="material", dark_mode=True))
        decoded = decode(encode(config))

        assert decoded.theme == "material"
        assert decoded.dark_mode is True
        assert decoded.base_font_size == 16


class TestDecode:
    """Decoding shared text."""

    @pytest.mark.parametrize("text", ["not-base64!!", "", "   ", None, 42, "e30"])
    def test_garbage_gives_empty(self, text):
        assert decode(text).is_empty()

    def test_non_object_json(self):
        assert decode(raw_encode([1, 2, 3])).is_empty()
        assert decode(raw_encode("theme")).is_empty()

    def test_deeply_nested_json(self):
        nested = b"[" * 100000 + b"]" * 100000
        assert decode(base64.b64encode(nested).decode("ascii")).is_empty()

    def test_deeply_nested_value(self):
        payload = b'{"theme": ' + b"[" * 100000 + b"]" * 100000 + b"}"
        assert decode(base64.urlsafe_b64encode(payload).decode("ascii")).is_empty()

    def test_standard_alphabet_and_missing_padding(self):
        text = raw_encode({"theme": "minimalist", "darkMode": False}).rstrip("=")
        decoded = decode(f"  {text}\n")

        assert decoded.present_fields() == {"theme": "minimalist", "dark_mode": False}

    def test_partial_payload(self):
        decoded = decode(raw_encode({"palette": "forest"}))

        assert decoded.present_fields() == {"palette": "forest"}
        assert decoded.theme is None

    def test_unknown_keys_ignored(self):
        decoded = decode(raw_encode({"theme": "material", "radius": "4px"}))
        assert decoded.present_fields() == {"theme": "material"}

    def test_values_not_checked(self):
        decoded = decode(raw_encode({"theme": "vaporwave", "baseFontSize": 99}))
        assert decoded.present_fields() == {"theme": "vaporwave", "base_font_size": 99}

    def test_partial_fills_selection(self):
        fallback = Selection(theme="material", palette="ocean")
        selection = Selection.from_partial(decode(raw_encode({"palette": "forest"})), fallback)

        assert selection.theme == "material"
        assert selection.palette == "forest"


class TestShareURL:
    """Share links."""

    def test_build_and_read(self):
        config = sample_config()
        url = build_share_url("http://localhost:5173/", config)

        assert url.startswith("http://localhost:5173/?config=")
        assert config_from_url(url).present_fields() == config.to_partial().present_fields()

    def test_replaces_existing_parameter(self):
        url = build_share_url("https://example.com/app?lang=en&config=old", sample_config())

        assert url.count("config=") == 1
        assert "lang=en" in url

    def test_missing_parameter(self):
        assert config_from_url("https://example.com/app?lang=en").is_empty()

    def test_space_restored_to_plus(self):
        text = raw_encode({"theme": "organic-modern", "palette": "forest", "font": "poppins"})
        url = "https://example.com/?config=" + text.replace("+", " ")

        decoded = config_from_url(url)
        assert not decoded.is_empty()
        assert decoded.present_fields() == decode(text).present_fields()

    def test_empty_partial(self):
        assert PartialConfig().is_empty()
