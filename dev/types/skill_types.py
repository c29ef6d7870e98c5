"""
Skill Types: Pydantic v2 Edition

Type definitions for skill development. Skills import these types
for type checking, validation, and JSON-RPC serialization.

Usage:
    from dev.types.skill_types import SkillDefinition, SkillContext, SkillTool
"""

from __future__ import annotations

from typing import Any, Literal, Protocol, runtime_checkable, Callable, Awaitable, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Tool Definition & Result
# ---------------------------------------------------------------------------


class ToolDefinition(BaseModel):
    """Schema for an AI-callable tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Tool name (snake_case, unique per skill)")
    description: str = Field(description="Human-readable description")
    parameters: dict[str, Any] = Field(
        description="JSON Schema for tool parameters",
        default_factory=lambda: {"type": "object", "properties": {}},
    )
    read_only: bool = Field(
        default=False,
        description="Tool does not mutate application state from the host's perspective",
    )


class ToolResult(BaseModel):
    """Result returned by a tool's execute function."""

    content: str
    is_error: bool = False


# ---------------------------------------------------------------------------
# Skill Tool
# ---------------------------------------------------------------------------


class SkillTool(BaseModel):
    """A tool the skill exposes to the AI."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    definition: ToolDefinition
    execute: Callable[..., Awaitable[ToolResult]] = Field(
        description="Async function that executes the tool"
    )


# ---------------------------------------------------------------------------
# Skill Options
# ---------------------------------------------------------------------------


class SkillOptionDefinition(BaseModel):
    """A user-tunable option the host renders in the skill settings."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Option key (snake_case)")
    type: Literal["boolean"] = "boolean"
    label: str
    description: str = ""
    default: bool = False
    group: str | None = None


# ---------------------------------------------------------------------------
# Skill Context (Protocol: passed to every hook)
# ---------------------------------------------------------------------------


@runtime_checkable
class SkillContext(Protocol):
    """Context object passed to skill lifecycle hooks."""

    data_dir: str

    async def read_data(self, filename: str) -> str: ...
    async def write_data(self, filename: str, content: str) -> None: ...
    def log(self, message: str) -> None: ...
    def get_options(self) -> dict[str, Any]: ...


# ---------------------------------------------------------------------------
# Hook type aliases
# ---------------------------------------------------------------------------

LoadHook = Callable[[SkillContext], Awaitable[None]]
UnloadHook = Callable[[SkillContext], Awaitable[None]]
StatusHook = Callable[[SkillContext], Awaitable[dict[str, Any]]]
OptionsChangeHook = Callable[[SkillContext, dict[str, Any]], Awaitable[None]]


# ---------------------------------------------------------------------------
# Skill Hooks
# ---------------------------------------------------------------------------


class SkillHooks(BaseModel):
    """Lifecycle hooks for a skill."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    on_load: Optional[LoadHook] = None
    on_unload: Optional[UnloadHook] = None
    on_status: StatusHook = Field(description="Returns current skill status information")
    on_options_change: Optional[OptionsChangeHook] = None


# ---------------------------------------------------------------------------
# Skill Definition (the main export from skill.py)
# ---------------------------------------------------------------------------


class SkillDefinition(BaseModel):
    """Top-level skill definition: the `skill` object exported by skill.py."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(description="Skill name (lowercase-hyphens, matches directory)")
    description: str = Field(description="Brief description")
    version: str = Field(default="1.0.0", description="Semver version string")
    hooks: SkillHooks | None = None
    tools: list[SkillTool] = Field(default_factory=list)
    options: list[SkillOptionDefinition] = Field(default_factory=list)
