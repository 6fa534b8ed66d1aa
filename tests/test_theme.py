"""Tests for ThemeContext and its YAML loader."""
import logging

import pytest
from pydantic import ValidationError

from models.theme import Branding, ColorPalette, ThemeContext


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_default_colors(self):
        t = ThemeContext()
        assert t.colors.primary == "#1E40AF"
        assert t.colors.text == "#111827"

    def test_default_heading_is_bold(self):
        assert ThemeContext().typography.heading.weight == "bold"

    def test_palette_get_falls_back_to_text(self):
        palette = ColorPalette()
        assert palette.get("secondary") == "#EFF6FF"
        assert palette.get("nonexistent") == palette.text
        assert palette.get(None) == palette.text

    def test_typography_get_falls_back_to_body(self):
        t = ThemeContext()
        assert t.typography.get("caption") == t.typography.body

    def test_invalid_palette_color_rejected(self):
        with pytest.raises(ValidationError):
            ColorPalette(primary="blue")

    def test_logo_must_be_https(self):
        with pytest.raises(ValidationError):
            Branding(logo_url="http://example.com/logo.png")


# ---------------------------------------------------------------------------
# load()
# ---------------------------------------------------------------------------

class TestLoad:
    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ThemeContext.load(tmp_path / "nonexistent.yaml")

    def test_load_or_default_returns_default_when_missing(self, tmp_path):
        assert ThemeContext.load_or_default(tmp_path / "nonexistent.yaml") == ThemeContext()

    def test_load_or_default_loads_when_present(self, tmp_path):
        yaml_content = """
colors:
  primary: "#FF0000"
typography:
  body: {font: Arial, size_px: 18, weight: normal}
branding:
  shop_name: Corner Store
"""
        path = tmp_path / "theme.yaml"
        path.write_text(yaml_content, encoding="utf-8")
        t = ThemeContext.load_or_default(path)
        assert t.colors.primary == "#FF0000"
        assert t.colors.text == "#111827"
        assert t.typography.body.font == "Arial"
        assert t.branding.shop_name == "Corner Store"

    def test_loads_fixture_theme(self, settings):
        t = ThemeContext.load(settings.theme_yaml_path)
        assert t.colors.primary == "#0F766E"
        assert t.typography.heading.font == "Merriweather"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "theme.yaml"
        path.write_text("", encoding="utf-8")
        assert ThemeContext.load(path) == ThemeContext()


# ---------------------------------------------------------------------------
# with_overrides()
# ---------------------------------------------------------------------------

class TestOverrides:
    def test_no_overrides_returns_same_theme(self):
        t = ThemeContext()
        assert t.with_overrides(None) is t
        assert t.with_overrides({}) is t

    def test_valid_overrides_applied(self):
        t = ThemeContext().with_overrides({
            "colors": {"primary": "#000"},
            "typography": {"heading": {"font": "Lora", "size_px": 40}},
            "branding": {"shop_name": "Acme", "logo_url": "https://cdn.example.com/logo.png"},
        })
        assert t.colors.primary == "#000"
        assert t.typography.heading.font == "Lora"
        assert t.typography.heading.size_px == 40
        assert t.typography.heading.weight == "bold"
        assert t.branding.logo_url == "https://cdn.example.com/logo.png"

    def test_bad_values_keep_base_and_warn(self, caplog):
        base = ThemeContext()
        with caplog.at_level(logging.WARNING, logger="models.theme"):
            t = base.with_overrides({
                "colors": {"primary": "not-a-color", "secondary": "#ABCDEF"},
                "typography": {"body": {"size_px": 500, "weight": "heavy"}},
                "branding": {"logo_url": "http://insecure.example.com/logo.png"},
            })
        assert t.colors.primary == base.colors.primary
        assert t.colors.secondary == "#ABCDEF"
        assert t.typography.body == base.typography.body
        assert t.branding.logo_url is None
        assert "not-a-color" in caplog.text

    def test_unknown_keys_ignored(self):
        t = ThemeContext().with_overrides({"colors": {"sparkle": "#fff"}, "layout": "wide"})
        assert t == ThemeContext()

    def test_base_theme_not_mutated(self):
        base = ThemeContext()
        base.with_overrides({"colors": {"primary": "#000"}})
        assert base.colors.primary == "#1E40AF"
