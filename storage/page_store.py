"""Page persistence on TinyDB.

One document per shop in the ``shops`` table, with its pages embedded under
``pages.<category>``:

    {"id", "owner_id", "name", "theme_settings", "created_at",
     "pages": {"home": {"id", "layout": [...], "created_at", "updated_at"}, ...}}

Embedding makes (shop, category) unique by construction, lets provisioning
write a shop and all its pages in one insert, and removes pages together with
their shop. Layout entries are stored with the ``props`` key and renamed back
to ``settings`` on read.
"""
import copy
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from tinydb import Query, TinyDB
from tinydb.storages import MemoryStorage

from models.layout import Layout
from models.page import Page, PageCategory, Shop
from schemas.catalog import DEFAULT_REGISTRY
from schemas.registry import SchemaRegistry
from utils.settings_key import from_storage, to_storage

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class PageStore:
    """Shop and page persistence; also resolves an owner to their shop."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        registry: SchemaRegistry = DEFAULT_REGISTRY,
    ):
        if db_path is None:
            self.db = TinyDB(storage=MemoryStorage)
            logger.debug("TinyDB page store opened in memory")
        else:
            db_path = Path(db_path)
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self.db = TinyDB(str(db_path), indent=2, ensure_ascii=False)
            logger.info("TinyDB page store opened: %s", db_path)
        self.shops = self.db.table("shops")
        self.registry = registry

    # ── Shops ─────────────────────────────────────────

    def create_shop(
        self,
        owner_id: str,
        name: str,
        layouts: dict[PageCategory, Layout],
        theme_settings: dict[str, Any] | None = None,
    ) -> Shop:
        """Insert a shop together with one page per category, in a single write."""
        missing = [c.value for c in PageCategory if c not in layouts]
        if missing:
            raise ValueError(f"A shop needs a page for every category; missing: {', '.join(missing)}")
        now = now_iso()
        doc = {
            "id": str(uuid.uuid4()),
            "owner_id": owner_id,
            "name": name,
            "theme_settings": copy.deepcopy(theme_settings or {}),
            "created_at": now,
            "pages": {
                category.value: {
                    "id": str(uuid.uuid4()),
                    "layout": to_storage(layouts[category].to_array()),
                    "created_at": now,
                    "updated_at": now,
                }
                for category in PageCategory
            },
        }
        self.shops.insert(doc)
        logger.info("[%s] Shop created for owner %s with %d pages", doc["id"], owner_id, len(doc["pages"]))
        return self._to_shop(doc)

    def get_shop(self, shop_id: str) -> Shop | None:
        ShopDoc = Query()
        doc = self.shops.get(ShopDoc.id == shop_id)
        return self._to_shop(doc) if doc is not None else None

    def find_shop_by_owner(self, owner_id: str) -> Shop | None:
        """Ownership resolver: the shop owned by ``owner_id``, or None."""
        ShopDoc = Query()
        doc = self.shops.get(ShopDoc.owner_id == owner_id)
        return self._to_shop(doc) if doc is not None else None

    def delete_shop(self, shop_id: str) -> bool:
        """Delete a shop and, with it, all of its pages."""
        ShopDoc = Query()
        removed = self.shops.remove(ShopDoc.id == shop_id)
        if removed:
            logger.info("[%s] Shop deleted with its pages", shop_id)
        return bool(removed)

    # ── Pages ─────────────────────────────────────────

    def get_layout_for(self, shop_id: str, category: PageCategory | str) -> Page | None:
        category = PageCategory.parse(category)
        ShopDoc = Query()
        doc = self.shops.get(ShopDoc.id == shop_id)
        if doc is None:
            return None
        raw = (doc.get("pages") or {}).get(category.value)
        return self._to_page(category, raw) if raw is not None else None

    def list_pages(self, shop_id: str) -> list[Page]:
        """All pages of a shop in category order."""
        ShopDoc = Query()
        doc = self.shops.get(ShopDoc.id == shop_id)
        if doc is None:
            return []
        pages = doc.get("pages") or {}
        return [
            self._to_page(category, pages[category.value])
            for category in PageCategory
            if category.value in pages
        ]

    def set_layout_for(self, shop_id: str, category: PageCategory | str, layout: Layout) -> Page | None:
        """Replace a page's layout in one conditional update.

        Returns the stored page, or None when the shop has no page for
        ``category``. Concurrent writers are not serialized: last write wins.
        """
        category = PageCategory.parse(category)
        stored = to_storage(layout.to_array())
        now = now_iso()

        def _replace_layout(doc: dict[str, Any]) -> None:
            page = doc["pages"][category.value]
            page["layout"] = stored
            page["updated_at"] = now

        ShopDoc = Query()
        updated = self.shops.update(
            _replace_layout,
            (ShopDoc.id == shop_id) & (ShopDoc.pages[category.value].exists()),
        )
        if not updated:
            return None
        logger.info("[%s] %s layout replaced (%d components)", shop_id, category.value, len(layout))
        return self.get_layout_for(shop_id, category)

    def close(self) -> None:
        self.db.close()

    # ── Mapping ───────────────────────────────────────

    @staticmethod
    def _to_shop(doc: dict[str, Any]) -> Shop:
        return Shop(
            id=doc["id"],
            owner_id=doc["owner_id"],
            name=doc["name"],
            theme_settings=copy.deepcopy(doc.get("theme_settings") or {}),
            created_at=doc["created_at"],
        )

    def _to_page(self, category: PageCategory, raw: dict[str, Any]) -> Page:
        return Page(
            id=raw["id"],
            category=category,
            layout=Layout.from_array(from_storage(raw.get("layout") or []), self.registry),
            created_at=raw["created_at"],
            updated_at=raw["updated_at"],
        )
