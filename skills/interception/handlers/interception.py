"""Interception tool handlers.

Each handler validates its arguments into a model first, then calls the
browser client; validation failures never reach the page.
"""

from __future__ import annotations

import logging
from typing import Any

from dev.types.skill_types import ToolResult

from ..client.browser_client_base import BrowserNotStartedError
from ..helpers import ErrorCategory, log_and_format_error
from ..models import ClearMockRequest, GlobalHeaderSet, InterceptionRule

log = logging.getLogger("skill.interception.handlers")

# Global browser client (set during on_load)
_browser_client: Any = None


def set_browser_client(client: Any) -> None:
  """Set the global browser client."""
  global _browser_client
  _browser_client = client


def get_browser_client() -> Any:
  return _browser_client


def _require_client() -> Any:
  if _browser_client is None:
    raise BrowserNotStartedError("Browser not initialized. Please wait for browser to start.")
  return _browser_client


async def browser_mock_api(args: dict[str, Any]) -> ToolResult:
  try:
    rule = InterceptionRule.model_validate(args)
    outcome = await _require_client().mock_api(rule)
    return ToolResult(content=outcome.to_json())
  except Exception as e:
    return log_and_format_error("browser_mock_api", e, ErrorCategory.MOCK)


async def browser_clear_mock_api(args: dict[str, Any]) -> ToolResult:
  try:
    request = ClearMockRequest.model_validate(args)
    outcome = await _require_client().clear_mock_api(request.url)
    return ToolResult(content=outcome.to_json())
  except Exception as e:
    return log_and_format_error("browser_clear_mock_api", e, ErrorCategory.MOCK)


async def browser_set_headers(args: dict[str, Any]) -> ToolResult:
  try:
    header_set = GlobalHeaderSet.model_validate(args)
    outcome = await _require_client().set_headers(header_set)
    return ToolResult(content=outcome.to_json())
  except Exception as e:
    return log_and_format_error("browser_set_headers", e, ErrorCategory.HEADERS)


async def browser_list_mocks(args: dict[str, Any]) -> ToolResult:
  try:
    outcome = await _require_client().list_mocks()
    return ToolResult(content=outcome.to_json())
  except Exception as e:
    return log_and_format_error("browser_list_mocks", e, ErrorCategory.BROWSER)
