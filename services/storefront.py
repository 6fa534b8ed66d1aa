"""Storefront entry points: resolve a page and its theme, then render it.

The public path addresses a page by shop id and never shows placeholders.
The preview path is owner-scoped and shows placeholders for invalid entries
when ``Settings.preview_placeholders`` is on, so authors can see what is broken.
"""
import logging

from models.page import PageCategory, Shop
from models.render_plan import RenderPlan
from models.theme import ThemeContext
from services.errors import OwnerHasNoShopError, PageNotFoundError, ShopNotFoundError
from services.render import LayoutRenderer
from settings import Settings
from storage.page_store import PageStore

logger = logging.getLogger(__name__)


class StorefrontService:
    def __init__(self, store: PageStore, settings: Settings):
        self.store = store
        self.settings = settings
        self._public = LayoutRenderer(store.registry, placeholders=False)
        self._preview = LayoutRenderer(store.registry, placeholders=settings.preview_placeholders)

    def theme_for(self, shop: Shop) -> ThemeContext:
        """Base theme from theme.yaml with the shop's own settings layered on top."""
        base = ThemeContext.load_or_default(self.settings.theme_yaml_path)
        theme = base.with_overrides(shop.theme_settings)
        if not theme.branding.shop_name:
            theme = theme.model_copy(update={
                "branding": theme.branding.model_copy(update={"shop_name": shop.name}),
            })
        return theme

    def render_public(self, shop_id: str, category: PageCategory | str) -> RenderPlan:
        category = PageCategory.parse(category)
        shop = self.store.get_shop(shop_id)
        if shop is None:
            raise ShopNotFoundError(shop_id)
        return self._render(shop, category, self._public)

    def render_preview(self, owner_id: str, category: PageCategory | str) -> RenderPlan:
        category = PageCategory.parse(category)
        shop = self.store.find_shop_by_owner(owner_id)
        if shop is None:
            raise OwnerHasNoShopError(owner_id)
        return self._render(shop, category, self._preview)

    def _render(self, shop: Shop, category: PageCategory, renderer: LayoutRenderer) -> RenderPlan:
        page = self.store.get_layout_for(shop.id, category)
        if page is None:
            raise PageNotFoundError(shop.id, category.value)
        plan = renderer.render(page.layout, self.theme_for(shop))
        logger.info(
            "[%s] %s rendered: %d components, %d skipped",
            shop.id, category.value, len(plan.rendered_ids), len(plan.skipped_ids),
        )
        return plan
