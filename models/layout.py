"""Layout value object: the ordered component sequence of one page.

``Layout.from_array`` is the only way untyped data (request bodies, stored
JSON) becomes a Layout. It separates two kinds of failure:

- structural problems (not a list, entry without ``id``/``type``, duplicate
  ids, ...) raise ``MalformedLayoutError`` listing every problem found;
- content problems (unknown type, settings that fail the schema) never raise.
  The entry is kept, tagged, and its raw settings survive serialization.

Only ``settings`` is an open map. Top-level entry keys other than ``id``,
``type``, ``variant`` and ``settings`` are not part of an entry and are
dropped on parse.
"""
import copy
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from models.component import ComponentConfiguration, classify
from schemas.catalog import DEFAULT_REGISTRY
from schemas.fields import ValidationIssue
from schemas.registry import SchemaRegistry


class MalformedLayoutError(ValueError):
    """Layout input is not structurally a layout. ``problems`` addresses each field."""

    def __init__(self, problems: list[ValidationIssue]):
        self.problems = problems
        summary = "; ".join(str(p) for p in problems[:5])
        if len(problems) > 5:
            summary += f" (+{len(problems) - 5} more)"
        super().__init__(f"Malformed layout: {summary}")


class Layout(BaseModel):
    model_config = ConfigDict(frozen=True)

    entries: tuple[ComponentConfiguration, ...] = ()

    @model_validator(mode="after")
    def ids_must_be_unique(self) -> "Layout":
        seen: set[str] = set()
        for entry in self.entries:
            if entry.id in seen:
                raise ValueError(f"duplicate component id '{entry.id}'")
            seen.add(entry.id)
        return self

    # ------------------------------------------------------------------
    # Construction / serialization
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "Layout":
        return cls()

    @classmethod
    def from_array(cls, data: Any, registry: SchemaRegistry = DEFAULT_REGISTRY) -> "Layout":
        """Build a Layout from a list of ``{id, type, variant, settings}`` dicts.

        Raises MalformedLayoutError on structural problems only.
        """
        problems = structural_problems(data)
        if problems:
            raise MalformedLayoutError(problems)
        entries = [
            classify(
                ComponentConfiguration(
                    id=item["id"],
                    type=item["type"],
                    variant=item["variant"],
                    settings=copy.deepcopy(item.get("settings") or {}),
                ),
                registry,
            )
            for item in data
        ]
        return cls(entries=tuple(entries))

    def to_array(self) -> list[dict[str, Any]]:
        return [entry.to_array() for entry in self.entries]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def ids(self) -> list[str]:
        return [entry.id for entry in self.entries]

    def get(self, component_id: str) -> ComponentConfiguration | None:
        return next((e for e in self.entries if e.id == component_id), None)

    def content(self) -> list[tuple[str, str, dict[str, Any]]]:
        """Ordered (type, variant, settings) triples, the layout identity without ids."""
        return [entry.content() for entry in self.entries]

    def with_component(self, entry: ComponentConfiguration) -> "Layout":
        return Layout(entries=self.entries + (entry,))

    def without_component(self, component_id: str) -> "Layout":
        return Layout(entries=tuple(e for e in self.entries if e.id != component_id))


def structural_problems(data: Any) -> list[ValidationIssue]:
    """Collect every structural problem in raw layout data (empty list = well-formed)."""
    if not isinstance(data, (list, tuple)):
        return [ValidationIssue((), "not_a_list", "layout must be a list of components")]

    problems: list[ValidationIssue] = []
    seen_ids: dict[str, int] = {}
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            problems.append(ValidationIssue((index,), "invalid_type", "component must be an object"))
            continue
        for key in ("id", "type"):
            if key not in item:
                problems.append(ValidationIssue((index, key), "missing_field", f"component {key} is required"))
            elif not isinstance(item[key], str) or not item[key].strip():
                problems.append(ValidationIssue(
                    (index, key), "invalid_type", f"component {key} must be a non-empty string",
                ))
        if "variant" not in item:
            problems.append(ValidationIssue((index, "variant"), "missing_field", "component variant is required"))
        elif not isinstance(item["variant"], str):
            problems.append(ValidationIssue((index, "variant"), "invalid_type", "component variant must be a string"))
        settings = item.get("settings")
        if settings is not None and not isinstance(settings, dict):
            problems.append(ValidationIssue((index, "settings"), "invalid_type", "component settings must be an object"))

        component_id = item.get("id")
        if isinstance(component_id, str) and component_id.strip():
            if component_id in seen_ids:
                problems.append(ValidationIssue(
                    (index, "id"),
                    "duplicate_id",
                    f"duplicate component id '{component_id}' (first at index {seen_ids[component_id]})",
                ))
            else:
                seen_ids[component_id] = index
    return problems
