from typing import Any, Literal

from pydantic import BaseModel, Field

from models.theme import ThemeContext


class RenderInstruction(BaseModel):
    component_id: str
    type: str
    variant: str
    position: int = Field(ge=0)  # index in the source layout
    props: dict[str, Any] = Field(default_factory=dict)
    placeholder: bool = False  # diagnostic marker standing in for an invalid entry


class Diagnostic(BaseModel):
    """Developer-facing note about an entry that was skipped or degraded."""

    component_id: str
    type: str
    position: int = Field(ge=0)
    status: Literal["unknown-type", "schema-invalid", "fallback"]
    messages: list[str] = Field(default_factory=list)


class RenderPlan(BaseModel):
    instructions: list[RenderInstruction] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    theme: ThemeContext = Field(default_factory=ThemeContext)

    @property
    def rendered_ids(self) -> list[str]:
        return [i.component_id for i in self.instructions if not i.placeholder]

    @property
    def skipped_ids(self) -> list[str]:
        return [d.component_id for d in self.diagnostics if d.status != "fallback"]
