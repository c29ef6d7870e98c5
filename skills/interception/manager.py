"""
Per-page interception state.

Playwright keeps its own routing list on the page and stacks handlers
registered for the same pattern. ``InterceptionManager`` keeps an explicit
``url -> InterceptionRule`` map next to it so each pattern has at most one
live handler and every registration can be listed or removed by name.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from .models import GlobalHeaderSet, InterceptionRule

log = logging.getLogger("skill.interception.manager")

RouteHandler = Callable[[Any], Awaitable[None]]


class InterceptionManager:
  """Routing table and extra-header set owned by one page."""

  def __init__(self, page: Any, match_any_method_when_unset: bool = True) -> None:
    self.page = page
    self.match_any_method_when_unset = match_any_method_when_unset
    self._rules: dict[str, InterceptionRule] = {}
    self._handlers: dict[str, RouteHandler] = {}
    self._extra_headers = GlobalHeaderSet(headers={})
    # Replacement is unroute-then-route; keep it atomic per page
    self._lock = asyncio.Lock()

  # ------------------------------------------------------------------ #
  # Queries
  # ------------------------------------------------------------------ #

  @property
  def rules(self) -> list[InterceptionRule]:
    return list(self._rules.values())

  @property
  def extra_headers(self) -> GlobalHeaderSet:
    return self._extra_headers

  def get(self, url: str) -> InterceptionRule | None:
    return self._rules.get(url)

  def __contains__(self, url: object) -> bool:
    return url in self._rules

  def __len__(self) -> int:
    return len(self._rules)

  # ------------------------------------------------------------------ #
  # Mutations
  # ------------------------------------------------------------------ #

  async def register(self, rule: InterceptionRule) -> InterceptionRule | None:
    """Route ``rule.url`` to ``rule``; returns the rule it replaced, if any.

    The table only changes after the page call that justifies it succeeds,
    so a failed unroute leaves the old mock listed and live, and a failed
    route after a successful unroute leaves the pattern unmocked.
    """
    async with self._lock:
      replaced = self._rules.get(rule.url)
      if replaced is not None:
        await self.page.unroute(replaced.matcher, self._handlers[rule.url])
        del self._rules[rule.url]
        del self._handlers[rule.url]
        log.info("Replacing mock for %s", rule.url)

      handler = self._make_handler(rule)
      await self.page.route(rule.matcher, handler)
      self._rules[rule.url] = rule
      self._handlers[rule.url] = handler
      log.info(
        "Mock registered: %s method=%s status=%s",
        rule.url,
        rule.method.value if rule.method else "*",
        rule.status,
      )
      return replaced

  async def remove(self, url: str) -> InterceptionRule | None:
    """Drop every route on ``url``. Unknown patterns are a no-op."""
    async with self._lock:
      existing = self._rules.get(url)
      await self.page.unroute(existing.matcher if existing is not None else url)
      removed = self._rules.pop(url, None)
      self._handlers.pop(url, None)
      if removed is None:
        log.debug("No mock registered for %s", url)
      else:
        log.info("Mock cleared: %s", url)
      return removed

  async def clear(self) -> list[InterceptionRule]:
    """Remove every registered mock and return them in registration order."""
    async with self._lock:
      removed: list[InterceptionRule] = []
      for url, rule in list(self._rules.items()):
        await self.page.unroute(rule.matcher, self._handlers[url])
        del self._rules[url]
        del self._handlers[url]
        removed.append(rule)
      log.info("Cleared %d mock(s)", len(removed))
      return removed

  async def set_extra_headers(self, header_set: GlobalHeaderSet) -> None:
    """Replace (never merge) the page's extra HTTP headers."""
    await self.page.set_extra_http_headers(dict(header_set.headers))
    self._extra_headers = header_set
    log.info("Extra HTTP headers set: %s", sorted(header_set.headers))

  # ------------------------------------------------------------------ #
  # Internal
  # ------------------------------------------------------------------ #

  def _make_handler(self, rule: InterceptionRule) -> RouteHandler:
    manager = self

    async def handle_route(route: Any) -> None:
      method = route.request.method
      if rule.matches_method(method, manager.match_any_method_when_unset):
        log.debug("Fulfilling %s %s with mock (%s)", method, route.request.url, rule.status)
        await route.fulfill(
          status=rule.status,
          content_type=rule.content_type,
          body=rule.body,
          headers=dict(rule.headers) if rule.headers else None,
        )
      else:
        await route.continue_()

    return handle_route
