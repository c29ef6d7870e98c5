"""
Tool definitions for the interception skill.

Mock API responses, clear mocks and set extra HTTP headers on the live
browser page. None of these tools change application state from the
orchestrator's point of view, so all carry ``readOnlyHint``.
"""

from __future__ import annotations

from mcp.types import Tool, ToolAnnotations

from .models import HttpMethod

_READ_ONLY = ToolAnnotations(readOnlyHint=True)

ALL_TOOLS: list[Tool] = [
  Tool(
    name="browser_mock_api",
    title="Mock API responses",
    description="Mock API responses by intercepting network requests",
    inputSchema={
      "type": "object",
      "properties": {
        "url": {
          "type": "string",
          "minLength": 1,
          "description": "URL pattern to match for interception (glob; set regex=true for a regular expression)",
        },
        "regex": {
          "type": "boolean",
          "description": "Treat url as a Python regular expression instead of a glob",
          "default": False,
        },
        "method": {
          "type": "string",
          "enum": [m.value for m in HttpMethod],
          "description": "HTTP method to match (omit to match any method)",
        },
        "status": {
          "type": "integer",
          "minimum": 100,
          "maximum": 599,
          "description": "HTTP status code to return",
          "default": 200,
        },
        "contentType": {
          "type": "string",
          "description": "Content-Type header for the response",
          "default": "application/json",
        },
        "body": {
          "type": "string",
          "description": "Response body content (typically JSON formatted as a string)",
        },
        "headers": {
          "type": "object",
          "additionalProperties": {"type": "string"},
          "description": "Additional response headers to include",
        },
      },
      "required": ["url", "body"],
    },
    annotations=_READ_ONLY,
  ),
  Tool(
    name="browser_clear_mock_api",
    title="Clear Mock API responses",
    description="Clear Mock API responses",
    inputSchema={
      "type": "object",
      "properties": {
        "url": {
          "type": "string",
          "description": "URL pattern to remove mocking for. If not provided, all mocks will be cleared",
        },
      },
      "required": [],
    },
    annotations=_READ_ONLY,
  ),
  Tool(
    name="browser_set_headers",
    title="Set Extra HTTP Headers",
    description=(
      "Set Extra HTTP Headers for all outgoing requests (key-value pairs, e.g., "
      '{"Authorization": "Bearer token", "X-Custom-Header": "value"}). '
      "Replaces any previously set headers; pass {} to clear them."
    ),
    inputSchema={
      "type": "object",
      "properties": {
        "headers": {
          "type": "object",
          "additionalProperties": {"type": "string"},
          "description": "Additional HTTP headers to include in all outgoing requests",
        },
      },
      "required": ["headers"],
    },
    annotations=_READ_ONLY,
  ),
  Tool(
    name="browser_list_mocks",
    title="List Mock API responses",
    description="List the active API mocks and the names of the extra HTTP headers on the current page",
    inputSchema={
      "type": "object",
      "properties": {},
      "required": [],
    },
    annotations=_READ_ONLY,
  ),
]
