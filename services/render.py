"""Layout rendering: turn a persisted layout plus a theme into a RenderPlan.

Every entry is re-validated against the registry at render time, whatever it
was tagged with when saved:

- unknown type      -> skipped, WARNING diagnostic
- schema-invalid    -> skipped (or a placeholder when previewing)
- recoverable issue -> fallback applied (theme color, image dropped), still rendered

Survivors keep their relative order and carry their original layout index.
``render_html`` draws a plan with the Jinja2 templates in ``templates/``.
"""
import copy
import logging
from pathlib import Path
from typing import Any, Callable, Mapping

import markdown as _markdown_lib
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from models.component import ComponentConfiguration, EntryStatus, classify
from models.layout import Layout
from models.render_plan import Diagnostic, RenderInstruction, RenderPlan
from models.theme import ThemeContext
from schemas.catalog import DEFAULT_REGISTRY
from schemas.fields import ValidationIssue
from schemas.registry import SchemaRegistry

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

# (resolved settings, variant, theme) -> template props
ComponentRenderer = Callable[[dict[str, Any], str, ThemeContext], dict[str, Any]]


# ---------------------------------------------------------------------------
# Per-type renderers
# ---------------------------------------------------------------------------

def render_header_navigation(settings: dict[str, Any], variant: str, theme: ThemeContext) -> dict[str, Any]:
    return {
        "logo_url": settings.get("logoUrl") or theme.branding.logo_url,
        "shop_name": theme.branding.shop_name,
        "logo_position": settings["logoPosition"],
        "sticky": variant == "sticky",
        "slide_in": variant == "slide-in-left",
        "background_color": theme.colors.background,
        "text_color": theme.colors.text,
    }


def render_heading(settings: dict[str, Any], variant: str, theme: ThemeContext) -> dict[str, Any]:
    style = theme.typography.get("heading")
    props = {
        "text": settings["text"],
        "level": settings["level"],
        "text_color": settings.get("textColor") or theme.colors.get("text"),
        "height": None if variant == "text-only" else int(settings["height"]),
        "font": style.font,
        "size_px": style.size_px,
        "weight": style.weight,
        "background_image_url": None,
        "background_color": None,
    }
    if variant == "background-image":
        # without a usable image the heading still renders, just unadorned
        props["background_image_url"] = settings.get("backgroundImageUrl")
    elif variant == "background-color":
        props["background_color"] = settings.get("backgroundColor") or theme.colors.get("secondary")
    return props


def render_text_section(settings: dict[str, Any], variant: str, theme: ThemeContext) -> dict[str, Any]:
    count = int(settings["columnCount"])
    columns = []
    for column in settings["columns"][:count]:
        columns.append({
            "text": column["text"],
            "icon_url": column.get("iconUrl") if variant == "with-icons" else None,
            "image_url": column.get("imageUrl") if variant == "with-images" else None,
        })
    style = theme.typography.get("body")
    return {
        "column_count": count,
        "columns": columns,
        "font": style.font,
        "size_px": style.size_px,
        "text_color": theme.colors.text,
    }


def render_category_pills(settings: dict[str, Any], variant: str, theme: ThemeContext) -> dict[str, Any]:
    return {
        "show_all_option": bool(settings["showAllOption"]),
        "alignment": variant,
        "pill_color": theme.colors.primary,
        "pill_background": theme.colors.secondary,
    }


def render_product_list_grid(settings: dict[str, Any], variant: str, theme: ThemeContext) -> dict[str, Any]:
    per_row = int(settings["productsPerRow"])
    return {
        "products_per_row": per_row,
        # wide cells get the medium image, dense grids the thumbnail
        "image_size": "medium" if per_row <= 3 else "thumbnail",
        "accent_color": theme.colors.primary,
    }


BUILTIN_RENDERERS: Mapping[str, ComponentRenderer] = {
    "HeaderNavigation": render_header_navigation,
    "Heading": render_heading,
    "TextSection": render_text_section,
    "CategoryPills": render_category_pills,
    "ProductListGrid": render_product_list_grid,
}


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class LayoutRenderer:
    """Dispatches layout entries to per-type renderers.

    The dispatch table is checked once at construction: every registered
    schema needs a renderer and every renderer needs a schema.
    """

    def __init__(
        self,
        registry: SchemaRegistry = DEFAULT_REGISTRY,
        renderers: Mapping[str, ComponentRenderer] | None = None,
        placeholders: bool = False,
    ):
        renderers = dict(BUILTIN_RENDERERS if renderers is None else renderers)
        missing = sorted(set(registry.types()) - set(renderers))
        orphans = sorted(set(renderers) - set(registry.types()))
        if missing:
            raise ValueError(f"No renderer registered for: {', '.join(missing)}")
        if orphans:
            raise ValueError(f"Renderer without schema: {', '.join(orphans)}")
        self.registry = registry
        self.renderers = renderers
        self.placeholders = placeholders

    def render(self, layout: Layout, theme: ThemeContext) -> RenderPlan:
        plan = RenderPlan(theme=theme)
        for position, entry in enumerate(layout.entries):
            entry = classify(entry, self.registry)
            if entry.status == EntryStatus.UNKNOWN_TYPE:
                self._skip(plan, entry, position, "unknown-type")
                continue
            if entry.status == EntryStatus.SCHEMA_INVALID:
                self._skip(plan, entry, position, "schema-invalid")
                continue
            settings, fallbacks = self._resolve(entry, theme)
            if fallbacks:
                plan.diagnostics.append(Diagnostic(
                    component_id=entry.id,
                    type=entry.type,
                    position=position,
                    status="fallback",
                    messages=fallbacks,
                ))
                logger.info("[%s] %s rendered with fallbacks: %s", entry.id, entry.type, "; ".join(fallbacks))
            props = self.renderers[entry.type](settings, entry.variant, theme)
            plan.instructions.append(RenderInstruction(
                component_id=entry.id,
                type=entry.type,
                variant=entry.variant,
                position=position,
                props=props,
            ))
        logger.debug(
            "Render plan: %d of %d entries rendered, %d diagnostics",
            len(plan.rendered_ids), len(layout), len(plan.diagnostics),
        )
        return plan

    def _resolve(self, entry: ComponentConfiguration, theme: ThemeContext) -> tuple[dict[str, Any], list[str]]:
        """Schema defaults under a copy of the entry's settings, with fallbacks applied.

        A null value counts as absent, so it gets the declared default too.
        """
        schema = self.registry.lookup(entry.type)
        present = {k: v for k, v in copy.deepcopy(entry.settings).items() if v is not None}
        settings = {**schema.defaults(), **present}
        fallbacks: list[str] = []
        for issue in entry.issues:
            if not issue.recoverable:
                continue
            fallbacks.append(_apply_fallback(settings, issue, theme))
        return settings, fallbacks

    def _skip(self, plan: RenderPlan, entry: ComponentConfiguration, position: int, status: str) -> None:
        messages = [str(issue) for issue in entry.issues if not issue.recoverable]
        plan.diagnostics.append(Diagnostic(
            component_id=entry.id,
            type=entry.type,
            position=position,
            status=status,
            messages=messages,
        ))
        logger.warning("[%s] Skipped %s entry at position %d (%s): %s",
                       entry.id, entry.type, position, status, "; ".join(messages))
        if self.placeholders and status == "schema-invalid":
            plan.instructions.append(RenderInstruction(
                component_id=entry.id,
                type=entry.type,
                variant=entry.variant,
                position=position,
                props={"messages": messages},
                placeholder=True,
            ))


def _apply_fallback(settings: dict[str, Any], issue: ValidationIssue, theme: ThemeContext) -> str:
    """Patch ``settings`` in place for one recoverable issue; return a note."""
    path = issue.path[1:] if issue.path and issue.path[0] == "settings" else issue.path
    container: Any = settings
    for part in path[:-1]:
        container = container[part]
    key = path[-1]
    if issue.fallback == "theme":
        color = theme.colors.get(issue.theme_key)
        container[key] = color
        return f"{issue.path_str}: {issue.message}; using theme {issue.theme_key} {color}"
    container.pop(key, None)
    return f"{issue.path_str}: {issue.message}; ignored"


def render_layout(layout: Layout, theme: ThemeContext, *, placeholders: bool = False) -> RenderPlan:
    return LayoutRenderer(placeholders=placeholders).render(layout, theme)


# ---------------------------------------------------------------------------
# HTML rendering
# ---------------------------------------------------------------------------

def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
    )
    # author text is escaped before Markdown so raw HTML never reaches the page
    env.filters["markdown"] = lambda text: Markup(
        _markdown_lib.markdown(str(escape(text)), extensions=["extra"])
    )
    return env


def render_html(plan: RenderPlan, title: str = "") -> str:
    """Render a RenderPlan to a standalone HTML page."""
    template = _environment().get_template("page.html.j2")
    return template.render(
        instructions=plan.instructions,
        theme=plan.theme,
        title=title or plan.theme.branding.shop_name,
    )
