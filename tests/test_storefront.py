"""Tests for public and preview rendering."""
import pytest

from services.authoring import LayoutAuthoringService
from services.errors import OwnerHasNoShopError, PageNotFoundError, ShopNotFoundError
from services.provisioning import ShopProvisioningService
from services.storefront import StorefrontService
from settings import Settings

_BROKEN = {"id": "broken", "type": "Heading", "variant": "text-only", "settings": {"level": "h2"}}
_OK = {"id": "ok", "type": "Heading", "variant": "text-only", "settings": {"text": "Hi", "level": "h2"}}


@pytest.fixture
def shop(store):
    return ShopProvisioningService(store).provision(
        "alice", "Alice's Goods", {"colors": {"primary": "#222222"}, "branding": {"logo_url": "nope"}},
    )


@pytest.fixture
def storefront(store, tmp_settings) -> StorefrontService:
    return StorefrontService(store, tmp_settings)


class TestTheme:
    def test_shop_name_used_for_branding(self, storefront, shop):
        theme = storefront.theme_for(shop)
        assert theme.branding.shop_name == "Alice's Goods"
        assert theme.colors.primary == "#222222"
        assert theme.branding.logo_url is None

    def test_theme_yaml_is_the_base(self, store, settings, shop):
        theme = StorefrontService(store, settings).theme_for(shop)
        assert theme.typography.heading.font == "Merriweather"
        assert theme.colors.primary == "#222222"


class TestRenderPublic:
    def test_renders_default_page(self, storefront, shop):
        plan = storefront.render_public(shop.id, "home")
        assert len(plan.rendered_ids) == 5
        assert plan.theme.colors.primary == "#222222"

    def test_never_placeholders(self, storefront, shop, store):
        LayoutAuthoringService(store).replace_page_layout("alice", "home", [_BROKEN, _OK])
        plan = storefront.render_public(shop.id, "home")
        assert [i.component_id for i in plan.instructions] == ["ok"]
        assert plan.skipped_ids == ["broken"]

    def test_unknown_shop(self, storefront):
        with pytest.raises(ShopNotFoundError):
            storefront.render_public("missing", "home")

    def test_missing_page(self, storefront, shop, store):
        store.shops.update(lambda doc: doc["pages"].pop("contact"))
        with pytest.raises(PageNotFoundError):
            storefront.render_public(shop.id, "contact")


class TestRenderPreview:
    def test_placeholders_shown(self, storefront, shop, store):
        LayoutAuthoringService(store).replace_page_layout("alice", "home", [_BROKEN, _OK])
        plan = storefront.render_preview("alice", "home")
        assert [i.placeholder for i in plan.instructions] == [True, False]

    def test_placeholders_can_be_disabled(self, store, tmp_path, shop):
        storefront = StorefrontService(store, Settings(data_dir=tmp_path, preview_placeholders=False))
        LayoutAuthoringService(store).replace_page_layout("alice", "home", [_BROKEN, _OK])
        assert storefront.render_preview("alice", "home").rendered_ids == ["ok"]
        assert len(storefront.render_preview("alice", "home").instructions) == 1

    def test_owner_without_shop(self, storefront, shop):
        with pytest.raises(OwnerHasNoShopError):
            storefront.render_preview("mallory", "home")
