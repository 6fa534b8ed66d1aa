from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from models.layout import Layout


class PageCategory(str, Enum):
    HOME = "home"
    CATALOG = "catalog"
    PRODUCT = "product"
    CONTACT = "contact"

    @classmethod
    def parse(cls, value: "str | PageCategory") -> "PageCategory":
        """Accept an enum member or its string value; raise ValueError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise ValueError(f"Unknown page category '{value}' (expected one of: {allowed})") from None


class Shop(BaseModel):
    id: str
    owner_id: str
    name: str
    theme_settings: dict[str, Any] = Field(default_factory=dict)  # raw, sanitized at render time
    created_at: datetime


class Page(BaseModel):
    """A shop's page for one category, as read back from the store.

    Timestamps belong to the page record, not to the layout value.
    """

    id: str
    category: PageCategory
    layout: Layout
    created_at: datetime
    updated_at: datetime

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.category.value,
            "layout": self.layout.to_array(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
