"""ComponentSchema registry: the single authority on what a valid entry is.

Both the authoring side (tagging entries when a layout is parsed) and the
rendering side (deciding what to draw) consult the same registry object, so
"valid" means the same thing in both places.

The registry is built once at import time and is read-only afterwards; it is
safe to share between concurrent requests.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from schemas.fields import FieldSpec, ValidationIssue, check_fields

# Cross-field rule: receives the raw settings dict, returns issues
SettingsCheck = Callable[[dict[str, Any]], list[ValidationIssue]]


@dataclass(frozen=True)
class ComponentSchema:
    """Accepted configuration shape for one component type.

    ``variants`` is the closed set of presentation modes. Variants never change
    which fields are required; a different data shape is a different type.
    """

    type: str
    fields: tuple[FieldSpec, ...]
    variants: tuple[str, ...]
    default_variant: str
    description: str = ""
    checks: tuple[SettingsCheck, ...] = ()

    def field(self, name: str) -> FieldSpec | None:
        return next((f for f in self.fields if f.name == name), None)

    def defaults(self) -> dict[str, Any]:
        """Declared defaults for optional fields."""
        return {f.name: f.default for f in self.fields if f.default is not None}

    def validate(self, variant: str, settings: dict[str, Any]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        if variant not in self.variants:
            issues.append(ValidationIssue(
                ("variant",),
                "invalid_variant",
                f"variant '{variant}' is not one of: {', '.join(self.variants)}",
            ))
        issues.extend(check_fields(self.fields, settings, ("settings",)))
        for check in self.checks:
            issues.extend(check(settings))
        return issues


class SchemaRegistry:
    """Immutable ``type -> ComponentSchema`` table."""

    def __init__(self, schemas: Iterable[ComponentSchema]):
        table: dict[str, ComponentSchema] = {}
        for schema in schemas:
            if schema.type in table:
                raise ValueError(f"Duplicate component schema: {schema.type}")
            if schema.default_variant not in schema.variants:
                raise ValueError(
                    f"Default variant '{schema.default_variant}' of {schema.type} is not a declared variant"
                )
            table[schema.type] = schema
        self._schemas: Mapping[str, ComponentSchema] = MappingProxyType(table)

    @property
    def schemas(self) -> Mapping[str, ComponentSchema]:
        return self._schemas

    def types(self) -> tuple[str, ...]:
        return tuple(self._schemas)

    def __contains__(self, component_type: object) -> bool:
        return isinstance(component_type, str) and component_type in self._schemas

    def lookup(self, component_type: str) -> ComponentSchema | None:
        """Return the schema for ``component_type``, or None for retired/unknown types."""
        return self._schemas.get(component_type)

    def validate(
        self,
        component_type: str,
        variant: str,
        settings: dict[str, Any],
    ) -> list[ValidationIssue]:
        """Validate one entry. An empty list means the entry is valid.

        Unknown types produce a single ``unknown_type`` issue rather than raising.
        """
        schema = self.lookup(component_type)
        if schema is None:
            return [ValidationIssue(("type",), "unknown_type", f"unknown component type '{component_type}'")]
        return schema.validate(variant, settings)
