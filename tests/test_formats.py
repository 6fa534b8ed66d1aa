"""Tests for format predicates and the settings/props renaming adapter."""
import pytest

from utils.formats import is_hex_color, is_https_url, is_non_empty_string
from utils.settings_key import from_storage, rename_settings_key, to_storage


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

class TestHexColor:
    @pytest.mark.parametrize("value", ["#fff", "#FFF", "#1e40af", "#1E40AF"])
    def test_accepts_short_and_long_forms(self, value):
        assert is_hex_color(value)

    @pytest.mark.parametrize("value", ["not-a-color", "fff", "#ffff", "#gggggg", "", None, 123])
    def test_rejects_everything_else(self, value):
        assert not is_hex_color(value)


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

class TestHttpsUrl:
    def test_accepts_https(self):
        assert is_https_url("https://images.unsplash.com/photo.jpg?w=200")

    def test_rejects_http(self):
        assert not is_https_url("http://example.com/logo.png")

    def test_rejects_scheme_relative_and_javascript(self):
        assert not is_https_url("//example.com/logo.png")
        assert not is_https_url("javascript:alert(1)")

    def test_rejects_missing_host(self):
        assert not is_https_url("https://")

    def test_rejects_non_strings(self):
        assert not is_https_url(None)
        assert not is_https_url(42)


def test_non_empty_string_ignores_whitespace():
    assert is_non_empty_string("x")
    assert not is_non_empty_string("   ")
    assert not is_non_empty_string(None)


# ---------------------------------------------------------------------------
# settings <-> props
# ---------------------------------------------------------------------------

class TestSettingsKey:
    def test_to_storage_renames_and_keeps_order(self):
        entries = [
            {"id": "a", "type": "Heading", "variant": "text-only", "settings": {"text": "A"}},
            {"id": "b", "type": "Heading", "variant": "text-only", "settings": {"text": "B"}},
        ]
        stored = to_storage(entries)
        assert [e["id"] for e in stored] == ["a", "b"]
        assert stored[0]["props"] == {"text": "A"}
        assert "settings" not in stored[0]

    def test_input_is_not_mutated(self):
        entries = [{"id": "a", "settings": {}}]
        to_storage(entries)
        assert "settings" in entries[0]

    def test_from_storage_is_inverse(self):
        entries = [{"id": "a", "type": "X", "variant": "v", "settings": {"k": 1}}]
        assert from_storage(to_storage(entries)) == entries

    def test_entries_without_source_key_untouched(self):
        entries = [{"id": "a", "props": {"k": 1}}]
        assert to_storage(entries) == entries

    def test_target_key_is_never_overwritten(self):
        entries = [{"id": "a", "settings": {"k": 1}, "props": {"k": 2}}]
        assert rename_settings_key(entries, "settings", "props") == entries

    def test_non_list_passes_through(self):
        assert from_storage({"not": "a list"}) == {"not": "a list"}
