"""Layout authoring: read, replace and reset a shop owner's page layouts.

Every operation first resolves the owner to their own shop; a page is only
ever addressed as (that shop, category), so one owner cannot reach another
owner's page by naming a category.

Replacing a layout checks structure only. Entries that fail their component
schema are saved as-is so in-progress work is never lost; the renderer decides
what is drawn.
"""
import logging
from typing import Any

from models.layout import Layout
from models.page import Page, PageCategory, Shop
from services.defaults import DefaultLayoutProvider
from services.errors import OwnerHasNoShopError, PageNotFoundError
from storage.page_store import PageStore

logger = logging.getLogger(__name__)


class LayoutAuthoringService:
    def __init__(self, store: PageStore, provider: DefaultLayoutProvider | None = None):
        self.store = store
        self.provider = provider or DefaultLayoutProvider(registry=store.registry)

    # ── Reads ─────────────────────────────────────────

    def get_page(self, owner_id: str, category: PageCategory | str) -> Page:
        category = PageCategory.parse(category)
        shop = self._shop_for(owner_id)
        page = self.store.get_layout_for(shop.id, category)
        if page is None:
            raise PageNotFoundError(shop.id, category.value)
        return page

    def get_page_layout(self, owner_id: str, category: PageCategory | str) -> Layout:
        return self.get_page(owner_id, category).layout

    def list_pages(self, owner_id: str) -> list[Page]:
        return self.store.list_pages(self._shop_for(owner_id).id)

    # ── Writes ────────────────────────────────────────

    def replace_page(
        self,
        owner_id: str,
        category: PageCategory | str,
        layout: Layout | list[dict[str, Any]],
    ) -> Page:
        """Overwrite the page's layout. Raw lists are structurally validated first.

        Raises MalformedLayoutError before anything is written.
        """
        category = PageCategory.parse(category)
        if not isinstance(layout, Layout):
            layout = Layout.from_array(layout, self.store.registry)
        return self._write(self._shop_for(owner_id), category, layout)

    def replace_page_layout(
        self,
        owner_id: str,
        category: PageCategory | str,
        layout: Layout | list[dict[str, Any]],
    ) -> Layout:
        return self.replace_page(owner_id, category, layout).layout

    def reset_page_layout(self, owner_id: str, category: PageCategory | str) -> Layout:
        """Replace the page's layout with a fresh copy of the category default."""
        category = PageCategory.parse(category)
        shop = self._shop_for(owner_id)
        page = self._write(shop, category, self.provider.get_default_layout(category))
        logger.info("[%s] %s reset to default layout", shop.id, category.value)
        return page.layout

    def _write(self, shop: Shop, category: PageCategory, layout: Layout) -> Page:
        page = self.store.set_layout_for(shop.id, category, layout)
        if page is None:
            raise PageNotFoundError(shop.id, category.value)
        invalid = [e.id for e in page.layout.entries if not e.is_valid]
        if invalid:
            logger.info(
                "[%s] %s saved with %d entries that will not render: %s",
                shop.id, category.value, len(invalid), ", ".join(invalid),
            )
        return page

    # ── Ownership ─────────────────────────────────────

    def _shop_for(self, owner_id: str) -> Shop:
        shop = self.store.find_shop_by_owner(owner_id)
        if shop is None:
            raise OwnerHasNoShopError(owner_id)
        return shop
