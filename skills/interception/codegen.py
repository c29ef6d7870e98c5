"""
Render the Playwright (Python, async API) script equivalent to each tool call.

The transcript is built from the same validated model the client executes,
so the recorded script and the live behaviour cannot drift apart.
"""

from __future__ import annotations

from .models import GlobalHeaderSet, InterceptionRule

_INDENT = "    "


def _matcher_literal(rule: InterceptionRule) -> str:
  if rule.regex:
    return f"re.compile({rule.url!r})"
  return repr(rule.url)


def _fulfill_lines(rule: InterceptionRule, depth: int) -> list[str]:
  pad = _INDENT * depth
  inner = _INDENT * (depth + 1)
  return [
    f"{pad}await route.fulfill(",
    f"{inner}status={rule.status},",
    f"{inner}content_type={rule.content_type!r},",
    f"{inner}body={rule.body!r},",
    f"{inner}headers={dict(rule.headers or {})!r},",
    f"{pad})",
  ]


def mock_api_code(rule: InterceptionRule, match_any_when_unset: bool = True) -> list[str]:
  """Script for registering ``rule`` on ``page``."""
  lines = [f"# Mock API response for {rule.url!r}"]
  if rule.regex:
    lines.append("import re")
  lines.append("async def handle_route(route):")

  guarded = rule.method is not None or not match_any_when_unset
  if guarded:
    expected = rule.method.value if rule.method else None
    lines.append(f"{_INDENT}if route.request.method == {expected!r}:")
    lines.extend(_fulfill_lines(rule, 2))
    lines.append(f"{_INDENT}else:")
    lines.append(f"{_INDENT * 2}await route.continue_()")
  else:
    lines.extend(_fulfill_lines(rule, 1))

  lines.append(f"await page.route({_matcher_literal(rule)}, handle_route)")
  return lines


def clear_mock_code(url: str | None, rule: InterceptionRule | None = None) -> list[str]:
  """Script for removing the mock registered for ``url``.

  ``None`` is rendered literally: it records a removal of an absent pattern.
  """
  lines = [f"# Clear mock API response for {url!r}"]
  if rule is not None and rule.regex:
    lines.append("import re")
  target = _matcher_literal(rule) if rule is not None else repr(url)
  lines.append(f"await page.unroute({target})")
  return lines


def clear_all_mocks_code(rules: list[InterceptionRule]) -> list[str]:
  lines = ["# Clear all mock API responses"]
  if any(r.regex for r in rules):
    lines.append("import re")
  lines.extend(f"await page.unroute({_matcher_literal(r)})" for r in rules)
  return lines


def set_headers_code(header_set: GlobalHeaderSet) -> list[str]:
  return [
    "# Set extra HTTP headers",
    f"await page.set_extra_http_headers({dict(header_set.headers)!r})",
  ]
