"""Tests for the default layout provider."""
import pytest

from models.component import EntryStatus
from models.page import PageCategory
from services.defaults import DefaultLayoutProvider, get_default_layout


class TestDefaultLayouts:
    @pytest.mark.parametrize("category", list(PageCategory))
    def test_every_default_entry_is_valid(self, category):
        layout = get_default_layout(category)
        assert not layout.is_empty
        assert all(e.status == EntryStatus.VALID for e in layout.entries), [
            (e.type, [str(i) for i in e.issues]) for e in layout.entries if not e.is_valid
        ]

    @pytest.mark.parametrize("category", list(PageCategory))
    def test_defaults_start_with_header(self, category):
        assert get_default_layout(category).entries[0].type == "HeaderNavigation"

    def test_contact_layout_shape(self):
        layout = get_default_layout("contact")
        assert [e.type for e in layout.entries] == [
            "HeaderNavigation", "Heading", "TextSection", "Heading", "TextSection",
        ]

    def test_catalog_has_pills_and_grid(self):
        types = [e.type for e in get_default_layout(PageCategory.CATALOG).entries]
        assert "CategoryPills" in types
        assert "ProductListGrid" in types

    def test_unknown_category_raises(self):
        with pytest.raises(ValueError):
            get_default_layout("blog")


class TestFreshCopies:
    def test_each_call_has_fresh_ids(self):
        first = get_default_layout("home")
        second = get_default_layout("home")
        assert set(first.ids).isdisjoint(second.ids)
        assert first.content() == second.content()

    def test_injected_id_factory(self, provider):
        layout = provider.get_default_layout("contact")
        assert layout.ids == ["c-001", "c-002", "c-003", "c-004", "c-005"]

    def test_mutating_a_result_does_not_leak(self):
        provider = DefaultLayoutProvider()
        layout = provider.get_default_layout("home")
        layout.entries[0].settings["logoPosition"] = "right"
        assert provider.get_default_layout("home").entries[0].settings["logoPosition"] == "center"

    def test_all_default_layouts(self, provider):
        layouts = provider.get_all_default_layouts()
        assert list(layouts) == list(PageCategory)
        all_ids = [i for layout in layouts.values() for i in layout.ids]
        assert len(all_ids) == len(set(all_ids))
