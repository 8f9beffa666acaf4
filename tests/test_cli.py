"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from design_lab import __version__
from design_lab.cli import token_cmds
from design_lab.cli.app import main
from design_lab.preferences import PreferenceStore
from design_lab.token_engine import config_from_url, decode


@pytest.fixture
def runner(design_home):
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(main, list(args), catch_exceptions=False)


class TestCatalogCommands:
    """Listing commands."""

    def test_themes(self, runner):
        result = invoke(runner, "themes")
        assert result.exit_code == 0
        assert "cyberpunk" in result.output
        assert "claymorphism" in result.output

    def test_palettes(self, runner):
        result = invoke(runner, "palettes", "--dark")
        assert result.exit_code == 0
        assert "Palettes (dark)" in result.output
        assert "forest" in result.output

    def test_fonts(self, runner):
        result = invoke(runner, "fonts")
        assert result.exit_code == 0
        assert "jetbrains-mono" in result.output

    def test_presets(self, runner):
        result = invoke(runner, "presets")
        assert result.exit_code == 0
        assert "dark-cyberpunk" in result.output

    def test_version(self, runner):
        result = invoke(runner, "--version")
        assert __version__ in result.output


class TestResolveCommand:
    """Resolving selections."""

    def test_json_output(self, runner):
        result = invoke(runner, "resolve", "--json")

        assert result.exit_code == 0
        tokens = json.loads(result.output)
        assert tokens["--primary"] == "#3b82f6"
        assert tokens["--h1-size"] == "31.25px"

    def test_table_output(self, runner):
        result = invoke(runner, "resolve", "--theme", "material", "--palette", "ocean")
        assert result.exit_code == 0
        assert "--h1-size" in result.output

    def test_preset_option(self, runner):
        result = invoke(runner, "resolve", "--preset", "dark-cyberpunk", "--json")

        tokens = json.loads(result.output)
        assert tokens["--surface"] == "#000000"
        assert tokens["--font-sans"] == '"JetBrains Mono", monospace'

    def test_explicit_options_override_preset(self, runner):
        result = invoke(runner, "resolve", "--preset", "dark-cyberpunk", "--light", "--json")
        assert json.loads(result.output)["--surface"] == "#0a0a0a"

    def test_unknown_theme(self, runner):
        result = invoke(runner, "resolve", "--theme", "vaporwave")

        assert result.exit_code == 1
        assert "Unknown theme" in result.output

    def test_out_of_range_size(self, runner):
        result = invoke(runner, "resolve", "--base-font-size", "40")
        assert result.exit_code == 1


class TestExportCommand:
    """Exporting tokens."""

    def test_css(self, runner):
        result = invoke(runner, "export", "css", "-t", "cyberpunk", "-p", "cyberpunk", "--dark")

        assert result.exit_code == 0
        assert "  --primary: #00ff9d;" in result.output
        assert "  --radius: 0px;" in result.output

    def test_default_format(self, runner):
        result = invoke(runner, "export")
        assert result.output.startswith(":root {")

    def test_reserved_format(self, runner):
        result = invoke(runner, "export", "scss")

        assert result.exit_code == 1
        assert "not supported" in result.output

    def test_output_file(self, runner, tmp_path):
        output = tmp_path / "tokens.json"
        result = invoke(runner, "export", "figma", "--palette", "pastel", "-o", str(output))

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding="utf-8"))["name"] == "flat-modern-pastel"

    def test_copy(self, runner, monkeypatch):
        copied = []
        monkeypatch.setattr(token_cmds, "copy_to_clipboard", lambda text: copied.append(text) or True)

        result = invoke(runner, "export", "tailwind", "--copy")

        assert result.exit_code == 0
        assert copied and copied[0].startswith("module.exports")
        assert "Copied export" in result.output


class TestColorCommands:
    """Contrast, audit and shades."""

    def test_contrast(self, runner):
        result = invoke(runner, "contrast", "#000000", "#ffffff")

        assert result.exit_code == 0
        assert "21.00:1" in result.output
        assert "AAA" in result.output

    def test_contrast_invalid_color(self, runner):
        result = invoke(runner, "contrast", "red", "#ffffff")

        assert result.exit_code == 1
        assert "Invalid hex color" in result.output

    def test_audit(self, runner):
        result = invoke(runner, "audit", "--palette", "cyberpunk", "--dark")

        assert result.exit_code == 0
        assert "--neon-glow" in result.output
        assert "#ffffff" in result.output

    def test_shades_css(self, runner):
        result = invoke(runner, "shades", "#000000", "--css")

        assert result.exit_code == 0
        assert "  --primary-500: #808080;" in result.output

    def test_shades_of_palette_primary(self, runner):
        result = invoke(runner, "shades", "--palette", "ocean")

        assert result.exit_code == 0
        assert "900" in result.output

    def test_shades_invalid(self, runner):
        result = invoke(runner, "shades", "#12")
        assert result.exit_code == 1


class TestShareCommands:
    """Share links."""

    def test_share_text(self, runner):
        result = invoke(runner, "share", "--text", "--theme", "organic-modern")

        assert result.exit_code == 0
        assert decode(result.output.strip()).theme == "organic-modern"

    def test_share_url(self, runner):
        result = invoke(runner, "share", "--base-url", "https://example.com/", "--theme", "material")

        url = result.output.strip()
        assert url.startswith("https://example.com/?config=")
        assert config_from_url(url).theme == "material"

    def test_share_copy_failure_is_not_fatal(self, runner, monkeypatch):
        monkeypatch.setattr(token_cmds, "copy_to_clipboard", lambda text: False)

        result = invoke(runner, "share", "--copy")

        assert result.exit_code == 0
        assert "Could not copy share link" in result.output

    def test_load_url(self, runner):
        url = invoke(runner, "share", "--preset", "retro-vintage").output.strip()
        result = invoke(runner, "load", url)

        assert result.exit_code == 0
        assert "retro-vintage" in result.output
        assert "courier" in result.output

    def test_load_garbage(self, runner):
        result = invoke(runner, "load", "not-base64!!")

        assert result.exit_code == 0
        assert "No shared configuration found" in result.output
        assert "flat-modern" in result.output

    def test_shared_option(self, runner):
        text = invoke(runner, "share", "--text", "--palette", "sunset").output.strip()
        result = invoke(runner, "resolve", "--shared", text, "--json")

        assert json.loads(result.output)["--primary"] == json.loads(
            invoke(runner, "resolve", "--palette", "sunset", "--json").output
        )["--primary"]


class TestApplyAndMode:
    """Stylesheet application and the saved mode."""

    def test_apply(self, runner, tmp_path):
        stylesheet = tmp_path / "tokens.css"
        result = invoke(runner, "apply", "--stylesheet", str(stylesheet))

        assert result.exit_code == 0
        assert "Applied" in result.output
        assert "  --primary: #3b82f6;" in stylesheet.read_text(encoding="utf-8")

    def test_apply_default_location(self, runner, design_home):
        result = invoke(runner, "apply", "--preset", "material-ocean")

        assert result.exit_code == 0
        assert (design_home / "tokens.css").exists()

    def test_apply_failure(self, runner, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file", encoding="utf-8")

        result = invoke(runner, "apply", "--stylesheet", str(blocker / "tokens.css"))

        assert result.exit_code == 1
        assert "Could not apply tokens" in result.output

    def test_mode(self, runner):
        assert "Current mode: light" in invoke(runner, "mode").output
        assert "Mode set to dark" in invoke(runner, "mode", "dark").output
        assert "Current mode: dark" in invoke(runner, "mode").output

        tokens = json.loads(invoke(runner, "resolve", "--json").output)
        assert tokens["--surface"] == "#1e293b"

        assert "Mode set to light" in invoke(runner, "mode", "toggle").output

    def test_preference_read_once(self, runner, monkeypatch):
        invoke(runner, "mode", "dark")
        calls = []
        original = PreferenceStore.load_dark_mode

        def counting(store):
            calls.append(store)
            return original(store)

        monkeypatch.setattr(PreferenceStore, "load_dark_mode", counting)
        result = invoke(runner, "resolve", "--theme", "material", "--json")

        assert json.loads(result.output)["--surface"] == "#1e293b"
        assert len(calls) == 1

    def test_config_file(self, runner, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("default_theme: neo-brutalist\ndefault_palette: corporate\n",
                               encoding="utf-8")

        result = invoke(runner, "--config", str(config_path), "share", "--text")

        decoded = decode(result.output.strip())
        assert decoded.theme == "neo-brutalist"
        assert decoded.palette == "corporate"
