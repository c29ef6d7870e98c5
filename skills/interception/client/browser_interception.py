"""
Interception mixin for browser client.
"""

from __future__ import annotations

from typing import Any

from .. import codegen
from ..manager import InterceptionManager
from ..models import GlobalHeaderSet, InterceptionRule, ToolOutcome


class BrowserInterceptionMixin:
  """Mixin providing request mocking and extra-header methods.

  Expects ``ensure_page()`` and the interception settings from the base
  client. Errors raised by the page propagate to the caller unchanged.
  """

  def configure_interception(
    self,
    match_any_method_when_unset: bool | None = None,
    clear_all_when_no_url: bool | None = None,
  ) -> None:
    if match_any_method_when_unset is not None:
      self.match_any_method_when_unset = match_any_method_when_unset
      for manager in self.interception_managers.values():
        manager.match_any_method_when_unset = match_any_method_when_unset
    if clear_all_when_no_url is not None:
      self.clear_all_when_no_url = clear_all_when_no_url

  def manager_for(self, page: Any) -> InterceptionManager:
    """Interception state for ``page``, created on first use."""
    manager = self.interception_managers.get(page)
    if manager is None:
      manager = InterceptionManager(page, self.match_any_method_when_unset)
      self.interception_managers[page] = manager
    return manager

  async def _current_manager(self) -> InterceptionManager:
    page = await self.ensure_page()
    return self.manager_for(page)

  # ------------------------------------------------------------------ #
  # Operations
  # ------------------------------------------------------------------ #

  async def mock_api(self, rule: InterceptionRule) -> ToolOutcome:
    """Register (or replace) the mock for ``rule.url``."""
    manager = await self._current_manager()
    replaced = await manager.register(rule)
    return ToolOutcome(
      code=codegen.mock_api_code(rule, manager.match_any_method_when_unset),
      details={"rule": rule.summary(), "replaced": replaced is not None},
    )

  async def clear_mock_api(self, url: str | None = None) -> ToolOutcome:
    """Remove the mock for ``url``, or every mock when ``url`` is absent."""
    manager = await self._current_manager()
    if url is not None:
      removed = await manager.remove(url)
      return ToolOutcome(
        code=codegen.clear_mock_code(url, removed),
        details={"cleared": [url] if removed is not None else []},
      )

    if not self.clear_all_when_no_url:
      # Records the attempt only; active mocks stay in place.
      return ToolOutcome(code=codegen.clear_mock_code(None), details={"cleared": []})

    removed_rules = await manager.clear()
    return ToolOutcome(
      code=codegen.clear_all_mocks_code(removed_rules),
      details={"cleared": [r.url for r in removed_rules]},
    )

  async def set_headers(self, header_set: GlobalHeaderSet) -> ToolOutcome:
    """Replace the extra headers sent with every request."""
    manager = await self._current_manager()
    await manager.set_extra_headers(header_set)
    return ToolOutcome(
      code=codegen.set_headers_code(header_set),
      details={"headers": sorted(header_set.headers)},
    )

  async def list_mocks(self) -> ToolOutcome:
    manager = await self._current_manager()
    return ToolOutcome(
      code=[],
      details={
        "mocks": [r.summary() for r in manager.rules],
        "extraHeaders": sorted(manager.extra_headers.headers),
      },
    )
