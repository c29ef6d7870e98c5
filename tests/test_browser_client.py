"""Tests for browser lifecycle and page acquisition."""

from __future__ import annotations

import pytest

from skills.interception.client import browser_client_base
from skills.interception.client.browser_client import BrowserClient
from skills.interception.client.browser_client_base import BrowserNotStartedError

from .conftest import FakeBrowser, FakeBrowserClient, FakePlaywright


class _Launcher:
  def __init__(self, failures: list[Exception] | None = None) -> None:
    self.failures = list(failures or [])
    self.calls: list[bool] = []

  async def launch(self, headless: bool) -> FakeBrowser:
    self.calls.append(headless)
    if self.failures:
      raise self.failures.pop(0)
    return FakeBrowser()


class _Driver(FakePlaywright):
  def __init__(self, launcher: _Launcher) -> None:
    super().__init__()
    self.chromium = launcher


@pytest.fixture
def driver(monkeypatch):
  """Route ``async_playwright()`` to an in-memory driver."""
  holder = _Driver(_Launcher())

  class _Manager:
    async def start(self) -> _Driver:
      return holder

  monkeypatch.setattr(browser_client_base, "async_playwright", lambda: _Manager())
  return holder


class TestEnsurePage:
  @pytest.mark.asyncio
  async def test_lazy_start_on_first_use(self):
    client = FakeBrowserClient()
    assert not client.is_started

    page = await client.ensure_page()

    assert client.is_started
    assert page is client.pages[0]
    assert await client.ensure_page() is page
    assert len(client.context.opened) == 1

  @pytest.mark.asyncio
  async def test_reopens_page_when_all_closed(self):
    client = FakeBrowserClient()
    first = await client.ensure_page()
    client.pages = []

    page = await client.ensure_page()

    assert page is not first
    assert client.pages == [page]
    assert client.context.opened == [first, page]

  @pytest.mark.asyncio
  async def test_missing_context_raises(self):
    client = FakeBrowserClient()
    client.playwright = FakePlaywright()

    with pytest.raises(BrowserNotStartedError, match="context not initialized"):
      await client.ensure_page()

  def test_current_page_without_pages_raises(self):
    with pytest.raises(BrowserNotStartedError):
      FakeBrowserClient()._get_current_page()

  @pytest.mark.asyncio
  async def test_stop_forgets_interception_state(self):
    client = FakeBrowserClient()
    page = await client.ensure_page()
    client.manager_for(page)
    context = client.context

    await client.stop()

    assert context.closed
    assert client.interception_managers == {}
    assert not client.is_started


class TestStart:
  @pytest.mark.asyncio
  async def test_launches_and_opens_one_page(self, driver):
    client = BrowserClient(headless=False)
    await client.start()

    assert driver.chromium.calls == [False]
    assert client.context.opened == client.pages
    assert len(client.pages) == 1

  @pytest.mark.asyncio
  async def test_missing_executable_installs_then_retries(self, driver, monkeypatch):
    driver.chromium.failures = [RuntimeError("Executable doesn't exist at /ms-playwright")]
    client = BrowserClient()
    installs: list[str] = []

    async def install() -> None:
      installs.append(client.browser_type)

    monkeypatch.setattr(client, "_ensure_browsers_installed", install)
    await client.start()

    assert installs == ["chromium"]
    assert len(driver.chromium.calls) == 2
    assert client.is_started

  @pytest.mark.asyncio
  async def test_failed_install_stops_driver(self, driver, monkeypatch):
    driver.chromium.failures = [RuntimeError("Executable doesn't exist at /ms-playwright")]
    client = BrowserClient()

    async def install() -> None:
      raise RuntimeError("network down")

    monkeypatch.setattr(client, "_ensure_browsers_installed", install)
    with pytest.raises(BrowserNotStartedError, match="auto-installation failed"):
      await client.start()

    assert driver.stopped
    assert not client.is_started

  @pytest.mark.asyncio
  async def test_other_launch_errors_propagate(self, driver):
    driver.chromium.failures = [RuntimeError("sandbox violation")]
    client = BrowserClient()

    with pytest.raises(RuntimeError, match="sandbox violation"):
      await client.start()

    assert driver.stopped
    assert client.playwright is None
