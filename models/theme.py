"""Theme context: ambient colors, fonts and branding for a page render.

Resolved once per page render and shared by every component renderer, so
individual layout entries never carry their own theme. Base values come from
theme.yaml (or the defaults below); a shop's stored theme settings are layered
on top with ``with_overrides``, where any malformed value keeps the base value
instead of failing the render.
"""
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from utils.formats import is_hex_color, is_https_url, is_non_empty_string

logger = logging.getLogger(__name__)

_MIN_FONT_PX = 8
_MAX_FONT_PX = 96


class ColorPalette(BaseModel):
    primary: str = "#1E40AF"
    secondary: str = "#EFF6FF"
    background: str = "#FFFFFF"
    text: str = "#111827"
    muted: str = "#6B7280"

    @field_validator("*")
    @classmethod
    def must_be_hex(cls, v: str) -> str:
        if not is_hex_color(v):
            raise ValueError(f"{v!r} is not a #RGB or #RRGGBB color")
        return v

    def get(self, key: str | None) -> str:
        """Look up a palette color by name. Falls back to the text color."""
        if key and key in type(self).model_fields:
            return getattr(self, key)
        return self.text


class TextStyle(BaseModel):
    font: str = "Inter"
    size_px: int = Field(default=16, ge=_MIN_FONT_PX, le=_MAX_FONT_PX)
    weight: Literal["normal", "bold"] = "normal"


class Typography(BaseModel):
    heading: TextStyle = Field(default_factory=lambda: TextStyle(size_px=32, weight="bold"))
    body: TextStyle = Field(default_factory=TextStyle)

    def get(self, style_ref: str) -> TextStyle:
        """Look up a TextStyle by key ('heading', 'body'). Unknown keys get the body style."""
        if style_ref in type(self).model_fields:
            return getattr(self, style_ref)
        return self.body


class Branding(BaseModel):
    shop_name: str = ""
    logo_url: str | None = None

    @field_validator("logo_url")
    @classmethod
    def logo_must_be_https(cls, v: str | None) -> str | None:
        if v is not None and not is_https_url(v):
            raise ValueError("logo_url must be an https:// URL")
        return v


class ThemeContext(BaseModel):
    """Complete theme for one page render. Every field has a default."""

    colors: ColorPalette = Field(default_factory=ColorPalette)
    typography: Typography = Field(default_factory=Typography)
    branding: Branding = Field(default_factory=Branding)

    @classmethod
    def load(cls, path: Path) -> "ThemeContext":
        """Load from a YAML file. Missing fields use defaults.

        Raises FileNotFoundError if path does not exist.
        """
        import yaml  # lazy, only needed at load time
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(data)

    @classmethod
    def load_or_default(cls, path: Path) -> "ThemeContext":
        """Load from path if it exists, otherwise return the default theme."""
        if path.exists():
            return cls.load(path)
        return cls()

    def with_overrides(self, raw: dict[str, Any] | None) -> "ThemeContext":
        """Layer a shop's raw theme settings over this theme, field by field.

        Accepts the same shape as theme.yaml. Malformed values are logged and
        ignored; unknown keys are ignored.
        """
        if not raw:
            return self
        colors = self.colors.model_copy(update=_color_overrides(self.colors, raw.get("colors")))

        raw_typography = raw.get("typography")
        if not isinstance(raw_typography, dict):
            raw_typography = {}
        styles = {}
        for ref in type(self.typography).model_fields:
            base_style = getattr(self.typography, ref)
            styles[ref] = base_style.model_copy(update=_text_style_overrides(ref, raw_typography.get(ref)))
        typography = self.typography.model_copy(update=styles)

        branding = self.branding.model_copy(update=_branding_overrides(raw.get("branding")))
        return ThemeContext(colors=colors, typography=typography, branding=branding)


# ---------------------------------------------------------------------------
# Override sanitizing
# ---------------------------------------------------------------------------

def _color_overrides(base: ColorPalette, raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    update: dict[str, str] = {}
    for key, value in raw.items():
        if key not in type(base).model_fields:
            continue
        if is_hex_color(value):
            update[key] = value
        else:
            logger.warning("Theme color %s=%r is not a hex color; keeping %s", key, value, getattr(base, key))
    return update


def _text_style_overrides(ref: str, raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    update: dict[str, Any] = {}
    font = raw.get("font")
    if font is not None:
        if is_non_empty_string(font):
            update["font"] = font.strip()
        else:
            logger.warning("Theme font for %s=%r is invalid; keeping default", ref, font)
    size = raw.get("size_px")
    if size is not None:
        if isinstance(size, int) and not isinstance(size, bool) and _MIN_FONT_PX <= size <= _MAX_FONT_PX:
            update["size_px"] = size
        else:
            logger.warning("Theme size_px for %s=%r is out of range; keeping default", ref, size)
    weight = raw.get("weight")
    if weight is not None:
        if weight in ("normal", "bold"):
            update["weight"] = weight
        else:
            logger.warning("Theme weight for %s=%r is invalid; keeping default", ref, weight)
    return update


def _branding_overrides(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    update: dict[str, Any] = {}
    name = raw.get("shop_name")
    if is_non_empty_string(name):
        update["shop_name"] = name.strip()
    logo = raw.get("logo_url")
    if logo is not None:
        if is_https_url(logo):
            update["logo_url"] = logo
        else:
            logger.warning("Theme logo_url %r is not an https URL; ignoring it", logo)
    return update
