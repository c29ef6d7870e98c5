"""Tests for transcript rendering."""

from __future__ import annotations

from skills.interception import codegen
from skills.interception.models import GlobalHeaderSet, HttpMethod, InterceptionRule


def test_mock_with_method_has_guard():
  rule = InterceptionRule(url="/api/users", method=HttpMethod.GET, body='{"ok":true}')
  assert codegen.mock_api_code(rule) == [
    "# Mock API response for '/api/users'",
    "async def handle_route(route):",
    "    if route.request.method == 'GET':",
    "        await route.fulfill(",
    "            status=200,",
    "            content_type='application/json',",
    "            body='{\"ok\":true}',",
    "            headers={},",
    "        )",
    "    else:",
    "        await route.continue_()",
    "await page.route('/api/users', handle_route)",
  ]


def test_mock_without_method_fulfils_unconditionally():
  rule = InterceptionRule(url="/api/x", body="", headers={"X-Mock": "1"}, status=201)
  lines = codegen.mock_api_code(rule)
  assert not any("route.request.method" in line for line in lines)
  assert "        status=201," in lines
  assert "        headers={'X-Mock': '1'}," in lines
  assert lines[-1] == "await page.route('/api/x', handle_route)"


def test_mock_without_method_strict_mode_records_none_comparison():
  rule = InterceptionRule(url="/api/x", body="")
  lines = codegen.mock_api_code(rule, match_any_when_unset=False)
  assert "    if route.request.method == None:" in lines
  assert "        await route.continue_()" in lines


def test_literals_are_quoted_safely():
  rule = InterceptionRule(url="/it's", body="line1\nline2 'quoted'")
  lines = codegen.mock_api_code(rule)
  assert lines[0] == '# Mock API response for "/it\'s"'
  assert "        body=\"line1\\nline2 'quoted'\"," in lines


def test_regex_mock_imports_re():
  rule = InterceptionRule(url=r"/api/\d+", body="", regex=True)
  lines = codegen.mock_api_code(rule)
  assert "import re" in lines
  assert lines[-1] == "await page.route(re.compile('/api/\\\\d+'), handle_route)"


def test_clear_single_pattern():
  assert codegen.clear_mock_code("/api/users") == [
    "# Clear mock API response for '/api/users'",
    "await page.unroute('/api/users')",
  ]


def test_clear_without_url_references_none():
  assert codegen.clear_mock_code(None) == [
    "# Clear mock API response for None",
    "await page.unroute(None)",
  ]


def test_clear_all_lists_each_pattern():
  rules = [InterceptionRule(url="/a", body=""), InterceptionRule(url="/b", body="")]
  assert codegen.clear_all_mocks_code(rules) == [
    "# Clear all mock API responses",
    "await page.unroute('/a')",
    "await page.unroute('/b')",
  ]


def test_set_headers():
  header_set = GlobalHeaderSet(headers={"Authorization": "Bearer t"})
  assert codegen.set_headers_code(header_set) == [
    "# Set extra HTTP headers",
    "await page.set_extra_http_headers({'Authorization': 'Bearer t'})",
  ]
