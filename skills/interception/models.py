"""
Validated argument models for the interception tools.

Every tool call is parsed into one of these models before the page is
touched, so a malformed request never mutates the routing table.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class HttpMethod(str, Enum):
  GET = "GET"
  POST = "POST"
  PUT = "PUT"
  DELETE = "DELETE"
  PATCH = "PATCH"
  HEAD = "HEAD"
  OPTIONS = "OPTIONS"


class InterceptionRule(BaseModel):
  """A single mocked response keyed by its URL pattern."""

  model_config = ConfigDict(frozen=True, populate_by_name=True)

  url: str = Field(description="Glob pattern, or a regular expression when `regex` is set")
  method: HttpMethod | None = Field(default=None, description="Absent means any method")
  status: int = Field(default=200, ge=100, le=599)
  content_type: str = Field(default="application/json", alias="contentType")
  body: str
  headers: dict[str, str] | None = None
  regex: bool = False

  @field_validator("url")
  @classmethod
  def _url_not_blank(cls, v: str) -> str:
    if not v.strip():
      raise ValueError("URL pattern must not be empty")
    return v

  @field_validator("method", mode="before")
  @classmethod
  def _upper_method(cls, v: Any) -> Any:
    if isinstance(v, str):
      return v.strip().upper()
    return v

  @field_validator("status", mode="before")
  @classmethod
  def _integral_status(cls, v: Any) -> Any:
    # JSON numbers arrive as float from some hosts
    if isinstance(v, float) and v.is_integer():
      return int(v)
    return v

  @field_validator("regex")
  @classmethod
  def _url_compiles(cls, v: bool, info: ValidationInfo) -> bool:
    url = info.data.get("url")
    if v and url:
      try:
        re.compile(url)
      except re.error as exc:
        raise ValueError(f"URL is not a valid regular expression: {exc}") from exc
    return v

  @property
  def matcher(self) -> str | re.Pattern[str]:
    """URL matcher handed to ``page.route``/``page.unroute``."""
    return re.compile(self.url) if self.regex else self.url

  def matches_method(self, request_method: str, match_any_when_unset: bool = True) -> bool:
    """Whether a live request with ``request_method`` should be fulfilled.

    With ``match_any_when_unset`` false an unset method is compared by
    strict equality, which no real request method satisfies.
    """
    if self.method is None:
      return match_any_when_unset
    return request_method.upper() == self.method.value

  def summary(self) -> dict[str, Any]:
    return {
      "url": self.url,
      "regex": self.regex,
      "method": self.method.value if self.method else None,
      "status": self.status,
      "contentType": self.content_type,
    }


class ClearMockRequest(BaseModel):
  model_config = ConfigDict(frozen=True)

  url: str | None = None

  @field_validator("url", mode="before")
  @classmethod
  def _empty_is_absent(cls, v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
      return None
    return v


class GlobalHeaderSet(BaseModel):
  """Extra headers sent with every request from the page."""

  model_config = ConfigDict(frozen=True)

  headers: dict[str, str]


class ToolOutcome(BaseModel):
  """Payload returned to the host for every interception tool.

  ``code`` is the equivalent Playwright script, one line per entry. The
  two flags tell the orchestrator that no snapshot or network-idle wait is
  needed after the call.
  """

  model_config = ConfigDict(populate_by_name=True)

  code: list[str]
  capture_snapshot: bool = Field(default=False, alias="captureSnapshot")
  wait_for_network: bool = Field(default=False, alias="waitForNetwork")
  details: dict[str, Any] = Field(default_factory=dict)

  def to_json(self) -> str:
    return json.dumps(self.model_dump(by_alias=True), indent=2)
