"""Built-in component schemas and the process-wide default registry.

Type names and variant values are the wire names stored in page layouts and
must stay stable; retiring a type means removing it here, after which old
layouts referencing it render as unknown-type entries.
"""
from typing import Any

from schemas.fields import FieldSpec, ValidationIssue
from schemas.registry import ComponentSchema, SchemaRegistry

HEADER_NAVIGATION = ComponentSchema(
    type="HeaderNavigation",
    description="Main navigation header with configurable logo",
    fields=(
        FieldSpec("logoUrl", "url", on_invalid="omit"),
        FieldSpec("logoPosition", "select", options=("left", "center"), default="left"),
    ),
    variants=("sticky", "static", "slide-in-left"),
    default_variant="static",
)

HEADING = ComponentSchema(
    type="Heading",
    description="Semantic heading with optional background image or color",
    fields=(
        FieldSpec("text", "text", required=True, max_length=500),
        FieldSpec("level", "select", required=True, options=("h1", "h2", "h3")),
        FieldSpec("textColor", "color", on_invalid="theme", theme_key="text"),
        FieldSpec("backgroundImageUrl", "url", on_invalid="omit"),
        FieldSpec("backgroundColor", "color", on_invalid="theme", theme_key="secondary"),
        FieldSpec("height", "number", integer=True, minimum=50, maximum=1000, default=300),
    ),
    variants=("text-only", "background-image", "background-color"),
    default_variant="text-only",
)


def _columns_within_count(settings: dict[str, Any]) -> list[ValidationIssue]:
    columns = settings.get("columns")
    count = settings.get("columnCount")
    if not isinstance(columns, list) or isinstance(count, bool) or not isinstance(count, int):
        return []  # type errors are reported by the field checks
    if len(columns) > count:
        return [ValidationIssue(
            ("settings", "columns"),
            "too_many_columns",
            f"{len(columns)} columns configured but columnCount is {count}",
        )]
    return []


TEXT_SECTION = ComponentSchema(
    type="TextSection",
    description="Multi-column text layout with optional icons or images",
    fields=(
        FieldSpec("columnCount", "number", required=True, integer=True, minimum=1, maximum=4),
        FieldSpec(
            "columns",
            "repeater",
            required=True,
            min_items=1,
            max_items=4,
            item_fields=(
                FieldSpec("text", "text", required=True, max_length=2000),
                FieldSpec("iconUrl", "url", on_invalid="omit"),
                FieldSpec("imageUrl", "url", on_invalid="omit"),
            ),
        ),
    ),
    variants=("text-only", "with-icons", "with-images"),
    default_variant="text-only",
    checks=(_columns_within_count,),
)

CATEGORY_PILLS = ComponentSchema(
    type="CategoryPills",
    description="Category navigation pills for filtering products",
    fields=(
        FieldSpec("showAllOption", "boolean", default=True),
    ),
    variants=("left", "center", "fullWidth"),
    default_variant="left",
)

PRODUCT_LIST_GRID = ComponentSchema(
    type="ProductListGrid",
    # the variant is the editor's preset; productsPerRow decides the grid when they disagree
    description="Products in a grid; productsPerRow sets the columns, the variant is a preset",
    fields=(
        FieldSpec("productsPerRow", "select", options=(2, 3, 4, 6), default=3),
    ),
    variants=("2", "3", "4", "6"),
    default_variant="3",
)

BUILTIN_SCHEMAS = (HEADER_NAVIGATION, HEADING, TEXT_SECTION, CATEGORY_PILLS, PRODUCT_LIST_GRID)

DEFAULT_REGISTRY = SchemaRegistry(BUILTIN_SCHEMAS)
