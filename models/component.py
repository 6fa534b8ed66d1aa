import copy
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemas.fields import ValidationIssue
from schemas.registry import SchemaRegistry


class EntryStatus(str, Enum):
    PENDING = "pending"
    VALID = "valid"
    UNKNOWN_TYPE = "unknown-type"
    SCHEMA_INVALID = "schema-invalid"


class ComponentConfiguration(BaseModel):
    """One addressable entry of a page layout.

    ``settings`` is an open map: keys the schema does not declare are kept as-is,
    and invalid values are never stripped, so an author can read back exactly
    what was saved. ``status``/``issues`` are parse-time tags and are not part of
    the serialized form.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    variant: str
    settings: dict[str, Any] = Field(default_factory=dict)
    status: EntryStatus = Field(default=EntryStatus.PENDING, exclude=True)
    issues: tuple[ValidationIssue, ...] = Field(default=(), exclude=True)

    @property
    def is_valid(self) -> bool:
        return self.status == EntryStatus.VALID

    def to_array(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "variant": self.variant,
            "settings": copy.deepcopy(self.settings),
        }

    def content(self) -> tuple[str, str, dict[str, Any]]:
        """Everything but the id, i.e. what two default layouts share."""
        return self.type, self.variant, copy.deepcopy(self.settings)


def classify(entry: ComponentConfiguration, registry: SchemaRegistry) -> ComponentConfiguration:
    """Return ``entry`` tagged with its status against ``registry``.

    Recoverable issues (themed colors, image URLs) are kept on the entry but do
    not make it schema-invalid.
    """
    issues = registry.validate(entry.type, entry.variant, entry.settings)
    if entry.type not in registry:
        status = EntryStatus.UNKNOWN_TYPE
    elif any(not issue.recoverable for issue in issues):
        status = EntryStatus.SCHEMA_INVALID
    else:
        status = EntryStatus.VALID
    return entry.model_copy(update={"status": status, "issues": tuple(issues)})
