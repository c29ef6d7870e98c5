"""
Shared fixtures: in-memory stand-ins for Playwright's Page, Route and
Request so the interception logic runs without launching a browser.
"""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass, field
from typing import Any

import pytest

from skills.interception.client.browser_client import BrowserClient
from skills.interception.handlers import set_browser_client


@dataclass
class FakeRequest:
  method: str
  url: str


@dataclass
class FakeRoute:
  request: FakeRequest
  fulfilled: dict[str, Any] | None = None
  continued: bool = False

  async def fulfill(self, **kwargs: Any) -> None:
    self.fulfilled = kwargs

  async def continue_(self) -> None:
    self.continued = True


def _url_matches(matcher: Any, url: str) -> bool:
  if isinstance(matcher, re.Pattern):
    return matcher.search(url) is not None
  return matcher == url or fnmatch.fnmatchcase(url, matcher)


@dataclass(eq=False)
class FakePage:
  routes: list[tuple[Any, Any]] = field(default_factory=list)
  extra_headers: dict[str, str] = field(default_factory=dict)
  route_calls: list[Any] = field(default_factory=list)
  unroute_calls: list[Any] = field(default_factory=list)
  fail_with: Exception | None = None
  unroute_fail_with: Exception | None = None

  async def route(self, matcher: Any, handler: Any) -> None:
    if self.fail_with:
      raise self.fail_with
    self.route_calls.append(matcher)
    self.routes.append((matcher, handler))

  async def unroute(self, matcher: Any, handler: Any = None) -> None:
    if self.unroute_fail_with:
      raise self.unroute_fail_with
    self.unroute_calls.append(matcher)
    self.routes = [
      (m, h) for (m, h) in self.routes if not (m == matcher and (handler is None or h is handler))
    ]

  async def set_extra_http_headers(self, headers: dict[str, str]) -> None:
    if self.fail_with:
      raise self.fail_with
    self.extra_headers = dict(headers)

  def handlers_for(self, matcher: Any) -> list[Any]:
    return [h for (m, h) in self.routes if m == matcher]

  async def request(self, method: str, url: str) -> FakeRoute:
    """Send a request through the routing list, newest handler first."""
    route = FakeRoute(FakeRequest(method=method, url=url))
    for matcher, handler in reversed(self.routes):
      if _url_matches(matcher, url):
        await handler(route)
        return route
    route.continued = True
    return route


@dataclass(eq=False)
class FakeContext:
  opened: list[FakePage] = field(default_factory=list)
  closed: bool = False

  async def new_page(self) -> FakePage:
    page = FakePage()
    self.opened.append(page)
    return page

  async def close(self) -> None:
    self.closed = True


@dataclass(eq=False)
class FakeBrowser:
  contexts: list[FakeContext] = field(default_factory=list)
  closed: bool = False

  async def new_context(self) -> FakeContext:
    context = FakeContext()
    self.contexts.append(context)
    return context

  async def close(self) -> None:
    self.closed = True


@dataclass(eq=False)
class FakePlaywright:
  stopped: bool = False

  async def stop(self) -> None:
    self.stopped = True


class FakeBrowserClient(BrowserClient):
  """BrowserClient whose launch step hands out in-memory browser objects."""

  async def start(self) -> None:
    if self.playwright is None:
      self.playwright = FakePlaywright()
      self.browser = FakeBrowser()
      self.context = await self.browser.new_context()
      self.pages.append(await self.context.new_page())
      self.current_page_index = 0


@pytest.fixture
def client():
  fake = FakeBrowserClient()
  fake.playwright = FakePlaywright()
  fake.browser = FakeBrowser()
  fake.context = FakeContext()
  fake.pages.append(FakePage())
  set_browser_client(fake)
  yield fake
  set_browser_client(None)


@pytest.fixture
def page(client) -> FakePage:
  return client.pages[0]
