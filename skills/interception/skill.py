"""
Interception SkillDefinition: wires tools, options and lifecycle hooks
into the unified SkillServer protocol.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from dev.types.skill_types import (
  SkillDefinition,
  SkillHooks,
  SkillOptionDefinition,
  SkillTool,
  ToolDefinition,
)
from dev.types.skill_types import (
  ToolResult as SkillToolResult,
)

from .client.browser_client import BrowserClient
from .handlers import dispatch_tool, get_browser_client, set_browser_client
from .tools import ALL_TOOLS

log = logging.getLogger("skill.interception.skill")

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


# ---------------------------------------------------------------------------
# Convert MCP Tool objects → SkillTool objects
# ---------------------------------------------------------------------------


def _make_execute(tool_name: str):
  """Create an async execute function for a given tool name."""

  async def execute(args: dict[str, Any]) -> SkillToolResult:
    result = await dispatch_tool(tool_name, args)
    return SkillToolResult(content=result.content, is_error=result.is_error)

  return execute


def _convert_tools() -> list[SkillTool]:
  """Convert MCP Tool definitions to SkillTool objects."""
  skill_tools: list[SkillTool] = []
  for mcp_tool in ALL_TOOLS:
    schema = mcp_tool.inputSchema if isinstance(mcp_tool.inputSchema, dict) else {}
    annotations = mcp_tool.annotations
    definition = ToolDefinition(
      name=mcp_tool.name,
      description=mcp_tool.description or "",
      parameters=schema,
      read_only=bool(annotations and annotations.readOnlyHint),
    )
    skill_tools.append(
      SkillTool(
        definition=definition,
        execute=_make_execute(mcp_tool.name),
      )
    )
  return skill_tools


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

OPTIONS: list[SkillOptionDefinition] = [
  SkillOptionDefinition(
    name="match_any_method_when_unset",
    type="boolean",
    label="Match any method when none is given",
    description=(
      "When off, a mock without a method compares the request method against "
      "an unset value and never fulfils a request"
    ),
    default=True,
    group="matching",
  ),
  SkillOptionDefinition(
    name="clear_all_when_no_url",
    type="boolean",
    label="Clear all mocks when no URL is given",
    description=(
      "When off, clearing without a URL only records the attempt and leaves "
      "active mocks in place"
    ),
    default=True,
    group="matching",
  ),
]


def _apply_options(client: BrowserClient, options: dict[str, Any]) -> None:
  client.configure_interception(
    match_any_method_when_unset=options.get("match_any_method_when_unset"),
    clear_all_when_no_url=options.get("clear_all_when_no_url"),
  )


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------


async def _read_config(ctx: Any) -> dict[str, Any]:
  try:
    raw = await ctx.read_data("config.json")
  except Exception as exc:
    log.info("No config.json found, using defaults: %s", exc)
    return {}
  if not raw:
    return {}
  try:
    config = json.loads(raw)
  except json.JSONDecodeError as exc:
    log.warning("Ignoring malformed config.json: %s", exc)
    return {}
  return config if isinstance(config, dict) else {}


async def _on_load(ctx: Any) -> None:
  """Initialize browser client from config."""
  config = await _read_config(ctx)
  headless = bool(config.get("headless", True))
  browser_type = config.get("browser_type", "chromium")
  lazy_start = bool(config.get("lazy_start", False))

  if browser_type not in SUPPORTED_BROWSERS:
    log.warning("Unsupported browser_type %r, falling back to chromium", browser_type)
    browser_type = "chromium"

  log.info(
    "Loaded config: headless=%s, browser_type=%s, lazy_start=%s",
    headless,
    browser_type,
    lazy_start,
  )

  client = BrowserClient(headless=headless, browser_type=browser_type)
  _apply_options(client, ctx.get_options())

  if not lazy_start:
    try:
      await client.start()
    except Exception as exc:
      log.error("Failed to initialize browser client: %s", exc)
      ctx.log(f"browser failed to start: {exc}")
      set_browser_client(None)
      return

  set_browser_client(client)
  log.info("Browser client initialized: %s (headless=%s)", browser_type, headless)
  ctx.log(f"interception loaded: {browser_type}, lazy_start={lazy_start}")


async def _on_unload(ctx: Any) -> None:
  """Clean up on unload."""
  client = get_browser_client()
  if client:
    try:
      await client.stop()
    except Exception as exc:
      log.error("Error stopping browser: %s", exc)
    set_browser_client(None)

  log.info("Interception skill unloaded")
  ctx.log("interception unloaded")


async def _on_options_change(ctx: Any, options: dict[str, Any]) -> None:
  client = get_browser_client()
  if client:
    _apply_options(client, options)
    log.info("Interception options updated: %s", options)


async def _on_status(ctx: Any) -> dict[str, Any]:
  """Return current skill status."""
  client = get_browser_client()
  if not client:
    return {
      "status": "not_initialized",
      "message": "Browser not initialized",
    }

  if not client.is_started:
    return {
      "status": "idle",
      "browser_type": client.browser_type,
      "headless": client.headless,
      "message": "Browser starts on first tool call",
    }

  return {
    "status": "ready",
    "browser_type": client.browser_type,
    "headless": client.headless,
    "pages": len(client.pages),
    "active_mocks": sum(len(m) for m in client.interception_managers.values()),
    "match_any_method_when_unset": client.match_any_method_when_unset,
    "clear_all_when_no_url": client.clear_all_when_no_url,
  }


# ---------------------------------------------------------------------------
# Skill Definition
# ---------------------------------------------------------------------------

skill = SkillDefinition(
  name="interception",
  description="Browser request interception on the live Playwright page: mocked API responses and extra HTTP headers.",
  version="1.0.0",
  hooks=SkillHooks(
    on_load=_on_load,
    on_unload=_on_unload,
    on_status=_on_status,
    on_options_change=_on_options_change,
  ),
  tools=_convert_tools(),
  options=OPTIONS,
)
