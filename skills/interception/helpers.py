"""
Shared error handling helpers for the interception skill.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import ValidationError

from dev.types.skill_types import ToolResult

log = logging.getLogger("skill.interception.helpers")


class ErrorCategory(str, Enum):
  MOCK = "MOCK"
  HEADERS = "HEADERS"
  BROWSER = "BROWSER"
  VALIDATION = "VALIDATION"


def format_validation_error(error: ValidationError) -> str:
  """One line per offending field, e.g. ``Invalid argument 'status': ...``."""
  lines = []
  for err in error.errors():
    field = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
    lines.append(f"Invalid argument '{field}': {err.get('msg', 'invalid value')}")
  return "\n".join(lines)


def log_and_format_error(
  function_name: str,
  error: Exception,
  category: str | ErrorCategory | None = None,
) -> ToolResult:
  if isinstance(error, ValidationError):
    log.info("[INTERCEPT] Rejected %s arguments: %s", function_name, error.error_count())
    return ToolResult(content=format_validation_error(error), is_error=True)

  prefix = category.value if isinstance(category, ErrorCategory) else (category or "GEN")
  hash_val = sum(ord(c) for c in function_name) % 1000
  error_code = f"{prefix}-ERR-{hash_val:03d}"

  log.error("[INTERCEPT] Error in %s - Code: %s - %s", function_name, error_code, error)
  return ToolResult(content=f"Error ({error_code}): {error}", is_error=True)
