"""Field constraints for component settings.

A ``FieldSpec`` describes one key of a component's settings bag: its primitive
kind (text, number, url, color, select, boolean, repeater) plus format and
range constraints. Checking a value produces ``ValidationIssue`` records, never
exceptions; an empty list means the value is acceptable.

Fields with ``on_invalid`` other than ``"reject"`` are ambient values. Their
issues are marked recoverable and the renderer substitutes a fallback instead
of dropping the whole component:

- ``"theme"``: use the theme color named by ``theme_key``
- ``"omit"``: behave as if the field were absent (e.g. render without image)
"""
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Literal

from utils.formats import is_hex_color, is_https_url, is_non_empty_string

FieldKind = Literal["text", "number", "url", "color", "select", "boolean", "repeater"]
OnInvalid = Literal["reject", "theme", "omit"]
PathPart = str | int


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found in a layout entry.

    ``path`` addresses the offending value, e.g. ``("settings", "columns", 1, "iconUrl")``.
    """

    path: tuple[PathPart, ...]
    code: str
    message: str
    recoverable: bool = False
    fallback: OnInvalid | None = None
    theme_key: str | None = None

    @property
    def path_str(self) -> str:
        return format_path(self.path)

    def __str__(self) -> str:
        return f"{self.path_str}: {self.message}"


def format_path(path: tuple[PathPart, ...]) -> str:
    """Render a path tuple as ``settings.columns[1].iconUrl``."""
    out = ""
    for part in path:
        if isinstance(part, int):
            out += f"[{part}]"
        else:
            out += f".{part}" if out else str(part)
    return out or "<root>"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    required: bool = False
    default: Any = None
    max_length: int | None = None
    minimum: float | None = None
    maximum: float | None = None
    integer: bool = False
    options: tuple[Any, ...] = ()
    min_items: int | None = None
    max_items: int | None = None
    item_fields: tuple["FieldSpec", ...] = ()
    on_invalid: OnInvalid = "reject"
    theme_key: str | None = None

    def check(self, value: Any, path: tuple[PathPart, ...]) -> list[ValidationIssue]:
        issues = _CHECKS[self.kind](self, value, path)
        if self.on_invalid != "reject":
            issues = [
                replace(issue, recoverable=True, fallback=self.on_invalid, theme_key=self.theme_key)
                for issue in issues
            ]
        return issues


def check_fields(
    fields: tuple[FieldSpec, ...],
    values: dict[str, Any],
    path: tuple[PathPart, ...],
) -> list[ValidationIssue]:
    """Check every declared field of ``values``. Undeclared keys are ignored."""
    issues: list[ValidationIssue] = []
    for spec in fields:
        value = values.get(spec.name)
        if value is None:
            if spec.required:
                issues.append(ValidationIssue(
                    path + (spec.name,), "missing_field", f"'{spec.name}' is required",
                ))
            continue
        issues.extend(spec.check(value, path + (spec.name,)))
    return issues


# ---------------------------------------------------------------------------
# Per-kind checks
# ---------------------------------------------------------------------------

def _check_text(spec: FieldSpec, value: Any, path: tuple[PathPart, ...]) -> list[ValidationIssue]:
    if not isinstance(value, str):
        return [ValidationIssue(path, "invalid_type", f"'{spec.name}' must be a string")]
    if not is_non_empty_string(value):
        return [ValidationIssue(path, "empty_string", f"'{spec.name}' must not be empty")]
    if spec.max_length is not None and len(value) > spec.max_length:
        return [ValidationIssue(
            path, "too_long", f"'{spec.name}' exceeds {spec.max_length} characters",
        )]
    return []


def _check_number(spec: FieldSpec, value: Any, path: tuple[PathPart, ...]) -> list[ValidationIssue]:
    # bool is an int subclass; JSON true/false is never a number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return [ValidationIssue(path, "invalid_type", f"'{spec.name}' must be a number")]
    if isinstance(value, float) and not math.isfinite(value):
        return [ValidationIssue(path, "not_finite", f"'{spec.name}' must be a finite number")]
    # ints are compared exactly; float() overflows on very large JSON integers
    if spec.integer and isinstance(value, float) and not value.is_integer():
        return [ValidationIssue(path, "not_integer", f"'{spec.name}' must be a whole number")]
    if spec.minimum is not None and value < spec.minimum:
        return [ValidationIssue(path, "out_of_range", f"'{spec.name}' must be at least {spec.minimum:g}")]
    if spec.maximum is not None and value > spec.maximum:
        return [ValidationIssue(path, "out_of_range", f"'{spec.name}' must be at most {spec.maximum:g}")]
    return []


def _check_url(spec: FieldSpec, value: Any, path: tuple[PathPart, ...]) -> list[ValidationIssue]:
    if not is_https_url(value):
        return [ValidationIssue(path, "insecure_url", f"'{spec.name}' must be an https:// URL")]
    return []


def _check_color(spec: FieldSpec, value: Any, path: tuple[PathPart, ...]) -> list[ValidationIssue]:
    if not is_hex_color(value):
        return [ValidationIssue(path, "invalid_color", f"'{spec.name}' must be #RGB or #RRGGBB")]
    return []


def _check_select(spec: FieldSpec, value: Any, path: tuple[PathPart, ...]) -> list[ValidationIssue]:
    if isinstance(value, bool) or value not in spec.options:
        allowed = ", ".join(str(o) for o in spec.options)
        return [ValidationIssue(path, "invalid_option", f"'{spec.name}' must be one of: {allowed}")]
    return []


def _check_boolean(spec: FieldSpec, value: Any, path: tuple[PathPart, ...]) -> list[ValidationIssue]:
    if not isinstance(value, bool):
        return [ValidationIssue(path, "invalid_type", f"'{spec.name}' must be true or false")]
    return []


def _check_repeater(spec: FieldSpec, value: Any, path: tuple[PathPart, ...]) -> list[ValidationIssue]:
    if not isinstance(value, list):
        return [ValidationIssue(path, "invalid_type", f"'{spec.name}' must be a list")]
    issues: list[ValidationIssue] = []
    if spec.min_items is not None and len(value) < spec.min_items:
        issues.append(ValidationIssue(
            path, "too_few_items", f"'{spec.name}' needs at least {spec.min_items} item(s)",
        ))
    if spec.max_items is not None and len(value) > spec.max_items:
        issues.append(ValidationIssue(
            path, "too_many_items", f"'{spec.name}' allows at most {spec.max_items} item(s)",
        ))
    for index, item in enumerate(value):
        item_path = path + (index,)
        if not isinstance(item, dict):
            issues.append(ValidationIssue(item_path, "invalid_type", "item must be an object"))
            continue
        issues.extend(check_fields(spec.item_fields, item, item_path))
    return issues


_CHECKS: dict[str, Callable[[FieldSpec, Any, tuple[PathPart, ...]], list[ValidationIssue]]] = {
    "text": _check_text,
    "number": _check_number,
    "url": _check_url,
    "color": _check_color,
    "select": _check_select,
    "boolean": _check_boolean,
    "repeater": _check_repeater,
}
