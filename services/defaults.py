"""Default layout provider: the only home of canonical page layouts.

Shop provisioning, demo seeding and "reset this page" all call
``get_default_layout``; no other module may carry its own copy of this content.

Each call returns a new Layout with freshly generated component ids and a deep
copy of the canonical settings, so callers can never mutate the tables below.
"""
import copy
import logging
import uuid
from typing import Any, Callable

from models.layout import Layout
from models.page import PageCategory
from schemas.catalog import DEFAULT_REGISTRY
from schemas.registry import SchemaRegistry

logger = logging.getLogger(__name__)

# (type, variant, settings)
Blueprint = tuple[str, str, dict[str, Any]]

_IMAGES = "https://images.unsplash.com"

_HEADER: Blueprint = (
    "HeaderNavigation",
    "static",
    {
        "logoUrl": f"{_IMAGES}/photo-1599305445671-ac291c95aaa9?w=200",
        "logoPosition": "center",
    },
)

_DEFAULTS: dict[PageCategory, tuple[Blueprint, ...]] = {
    PageCategory.HOME: (
        _HEADER,
        ("Heading", "background-image", {
            "text": "Home",
            "level": "h1",
            "backgroundImageUrl": f"{_IMAGES}/photo-1441986300917-64674bd600d8?w=1200",
            "textColor": "#ffffff",
            "height": 400,
        }),
        ("TextSection", "text-only", {
            "columnCount": 1,
            "columns": [
                {"text": "Welcome to our store! We are passionate about bringing you the finest "
                         "selection of curated products that enhance your everyday life. Our commitment "
                         "to quality and customer satisfaction drives everything we do."},
            ],
        }),
        ("Heading", "text-only", {
            "text": "Why Choose Us",
            "level": "h2",
        }),
        ("TextSection", "with-icons", {
            "columnCount": 3,
            "columns": [
                {"text": "Premium quality products sourced from trusted suppliers worldwide.",
                 "iconUrl": f"{_IMAGES}/photo-1607082348824-0a96f2a4b9da?w=100"},
                {"text": "Fast and reliable shipping with real-time tracking for your peace of mind.",
                 "iconUrl": f"{_IMAGES}/photo-1566576912321-d58ddd7a6088?w=100"},
                {"text": "Dedicated customer support team ready to assist you every step of the way.",
                 "iconUrl": f"{_IMAGES}/photo-1553835973-dec43bfddbeb?w=100"},
            ],
        }),
    ),
    PageCategory.CATALOG: (
        _HEADER,
        ("Heading", "background-color", {
            "text": "Catalog",
            "level": "h1",
            "backgroundColor": "#EFF6FF",
            "textColor": "#1e40af",
            "height": 250,
        }),
        ("CategoryPills", "center", {
            "showAllOption": True,
        }),
        ("ProductListGrid", "3", {
            "productsPerRow": 3,
        }),
        ("TextSection", "text-only", {
            "columnCount": 1,
            "columns": [
                {"text": "Browse our extensive collection of thoughtfully selected products. Each item "
                         "has been carefully chosen to meet our high standards of quality and design."},
            ],
        }),
        ("Heading", "background-color", {
            "text": "Featured Collections",
            "level": "h2",
            "backgroundColor": "#ECFDF5",
            "textColor": "#065f46",
            "height": 200,
        }),
        ("TextSection", "with-images", {
            "columnCount": 2,
            "columns": [
                {"text": "New Arrivals - Discover the latest additions to our collection, featuring "
                         "cutting-edge designs and innovative solutions.",
                 "imageUrl": f"{_IMAGES}/photo-1523275335684-37898b6baf30?w=400"},
                {"text": "Best Sellers - Our most popular items, loved by customers for their "
                         "exceptional quality and value.",
                 "imageUrl": f"{_IMAGES}/photo-1505740420928-5e560c06d30e?w=400"},
            ],
        }),
    ),
    PageCategory.PRODUCT: (
        _HEADER,
        ("Heading", "text-only", {
            "text": "Product",
            "level": "h1",
        }),
        ("TextSection", "text-only", {
            "columnCount": 1,
            "columns": [
                {"text": "Every product in our store comes with detailed specifications, customer "
                         "reviews, and expert recommendations to help you make informed decisions."},
            ],
        }),
        ("Heading", "background-image", {
            "text": "Product Features",
            "level": "h2",
            "backgroundImageUrl": f"{_IMAGES}/photo-1472851294608-062f824d29cc?w=1200",
            "textColor": "#ffffff",
            "height": 300,
        }),
        ("TextSection", "text-only", {
            "columnCount": 4,
            "columns": [
                {"text": "Durable materials built to last for years of reliable use."},
                {"text": "Ergonomic design crafted for maximum comfort and efficiency."},
                {"text": "Eco-friendly production with sustainable practices and materials."},
                {"text": "Warranty included for your complete confidence and protection."},
            ],
        }),
    ),
    PageCategory.CONTACT: (
        _HEADER,
        ("Heading", "background-image", {
            "text": "Contact",
            "level": "h1",
            "backgroundImageUrl": f"{_IMAGES}/photo-1423666639041-f56000c27a9a?w=1200",
            "textColor": "#ffffff",
            "height": 350,
        }),
        ("TextSection", "text-only", {
            "columnCount": 1,
            "columns": [
                {"text": "Have questions or need assistance? Our friendly support team is here to "
                         "help! Reach out to us through any of the channels below."},
            ],
        }),
        ("Heading", "background-color", {
            "text": "Get In Touch",
            "level": "h3",
            "backgroundColor": "#FFFBEB",
            "textColor": "#92400e",
            "height": 180,
        }),
        ("TextSection", "with-icons", {
            "columnCount": 2,
            "columns": [
                {"text": "Email us at support@example.com and we will respond within 24 hours on "
                         "business days.",
                 "iconUrl": f"{_IMAGES}/photo-1596526131083-e8c633c948d2?w=100"},
                {"text": "Call our hotline at +1 (555) 123-4567 Monday through Friday, 9 AM to 6 PM EST.",
                 "iconUrl": f"{_IMAGES}/photo-1557672172-298e090bd0f1?w=100"},
            ],
        }),
    ),
}


def _new_id() -> str:
    return str(uuid.uuid4())


class DefaultLayoutProvider:
    def __init__(
        self,
        id_factory: Callable[[], str] | None = None,
        registry: SchemaRegistry = DEFAULT_REGISTRY,
    ):
        self._id_factory = id_factory or _new_id
        self._registry = registry

    def get_default_layout(self, category: PageCategory | str) -> Layout:
        """Return the canonical layout for ``category`` with fresh component ids."""
        category = PageCategory.parse(category)
        entries = [
            {
                "id": self._id_factory(),
                "type": component_type,
                "variant": variant,
                "settings": copy.deepcopy(settings),
            }
            for component_type, variant, settings in _DEFAULTS[category]
        ]
        layout = Layout.from_array(entries, self._registry)
        logger.debug("Default layout for %s: %d components", category.value, len(layout))
        return layout

    def get_all_default_layouts(self) -> dict[PageCategory, Layout]:
        """One fresh default layout per category, in category order."""
        return {category: self.get_default_layout(category) for category in PageCategory}


_provider = DefaultLayoutProvider()


def get_default_layout(category: PageCategory | str) -> Layout:
    return _provider.get_default_layout(category)
