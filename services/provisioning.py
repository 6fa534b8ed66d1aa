"""Shop provisioning: a new shop gets one page per category, all from the defaults."""
import logging
from typing import Any

from models.page import Shop
from services.defaults import DefaultLayoutProvider
from services.errors import ShopAlreadyExistsError
from storage.page_store import PageStore

logger = logging.getLogger(__name__)


class ShopProvisioningService:
    def __init__(self, store: PageStore, provider: DefaultLayoutProvider | None = None):
        self.store = store
        self.provider = provider or DefaultLayoutProvider(registry=store.registry)

    def provision(self, owner_id: str, name: str, theme_settings: dict[str, Any] | None = None) -> Shop:
        """Create ``owner_id``'s shop with the default layout for every page category.

        The shop and its four pages are written in a single store insert, so a
        failure leaves no partial shop behind.
        """
        if self.store.find_shop_by_owner(owner_id) is not None:
            raise ShopAlreadyExistsError(owner_id)
        layouts = self.provider.get_all_default_layouts()
        shop = self.store.create_shop(owner_id, name, layouts, theme_settings)
        logger.info("[%s] Provisioned '%s' for owner %s", shop.id, name, owner_id)
        return shop
