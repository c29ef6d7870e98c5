"""Handler dispatch table: maps tool names to handler functions."""

from __future__ import annotations

from typing import Any

from dev.types.skill_types import ToolResult

from . import interception
from .interception import get_browser_client, set_browser_client

DISPATCH: dict[str, Any] = {
  name: getattr(interception, name)
  for name in (
    "browser_mock_api",
    "browser_clear_mock_api",
    "browser_set_headers",
    "browser_list_mocks",
  )
}


async def dispatch_tool(name: str, arguments: dict[str, Any]) -> ToolResult:
  """Look up and execute a tool handler by name."""
  handler = DISPATCH.get(name)
  if handler is None:
    return ToolResult(content=f"Unknown tool: {name}", is_error=True)
  result: ToolResult = await handler(arguments or {})
  return result


__all__ = ["DISPATCH", "dispatch_tool", "get_browser_client", "set_browser_client"]
