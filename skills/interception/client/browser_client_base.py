"""
Base browser client with initialization and lifecycle management.
"""

from __future__ import annotations

import asyncio
import logging

from playwright.async_api import (
  Browser,
  BrowserContext,
  Page,
  async_playwright,
)

from ..manager import InterceptionManager

log = logging.getLogger("skill.interception.client")


class BrowserNotStartedError(RuntimeError):
  pass


class BrowserClientBase:
  """Base browser client with initialization and lifecycle."""

  def __init__(self, headless: bool = True, browser_type: str = "chromium"):
    """
    Initialize browser client.

    Args:
      headless: Run browser in headless mode
      browser_type: Browser type ('chromium', 'firefox', 'webkit')
    """
    self.headless = headless
    self.browser_type = browser_type
    self.playwright = None
    self.browser: Browser | None = None
    self.context: BrowserContext | None = None
    self.pages: list[Page] = []
    self.current_page_index = 0
    self.interception_managers: dict[Page, InterceptionManager] = {}
    self.match_any_method_when_unset = True
    self.clear_all_when_no_url = True

  @property
  def is_started(self) -> bool:
    return self.playwright is not None

  async def start(self) -> None:
    """Start the browser."""
    if self.playwright is None:
      self.playwright = await async_playwright().start()
      browser_launcher = getattr(self.playwright, self.browser_type)

      try:
        self.browser = await browser_launcher.launch(headless=self.headless)
      except Exception as e:
        error_msg = str(e).lower()
        # Check if error is related to missing browsers
        if "executable doesn't exist" in error_msg:
          log.info("Browser not found, installing %s...", self.browser_type)
          try:
            await self._ensure_browsers_installed()
            self.browser = await browser_launcher.launch(headless=self.headless)
            log.info("Browser launched successfully after installation")
          except Exception as install_error:
            log.error("Failed to install browser: %s", install_error)
            await self.playwright.stop()
            self.playwright = None
            raise BrowserNotStartedError(
              f"Browser '{self.browser_type}' not installed and auto-installation failed. "
              f"Error: {install_error}. "
              f"Please install manually with: python -m playwright install {self.browser_type}"
            ) from install_error
        else:
          await self.playwright.stop()
          self.playwright = None
          raise

      self.context = await self.browser.new_context()
      page = await self.context.new_page()
      self.pages.append(page)
      self.current_page_index = 0
      log.info("Browser started: %s (headless=%s)", self.browser_type, self.headless)

  async def _ensure_browsers_installed(self) -> None:
    """
    Ensure Playwright browsers are installed.

    Runs ``playwright install`` in a subprocess on a worker thread so the
    event loop keeps serving other requests while the download runs.
    """
    import subprocess
    import sys

    log.info(
      "Installing Playwright browser '%s' (this may take a few minutes)...", self.browser_type
    )
    loop = asyncio.get_running_loop()

    def install() -> None:
      try:
        result = subprocess.run(
          [sys.executable, "-m", "playwright", "install", self.browser_type],
          capture_output=True,
          text=True,
          timeout=600,  # browsers are large
        )
      except subprocess.TimeoutExpired as e:
        log.error("Playwright install timed out after 10 minutes")
        raise RuntimeError(
          "Browser installation timed out. "
          "Please try installing manually: python -m playwright install " + self.browser_type
        ) from e
      if result.returncode != 0:
        error_msg = result.stderr or result.stdout or "Unknown error"
        log.error("Playwright install failed: %s", error_msg)
        raise RuntimeError(f"Failed to install browser: {error_msg}")
      log.info("Playwright browser '%s' installed successfully", self.browser_type)
      if result.stdout:
        log.debug("Install output: %s", result.stdout)

    await loop.run_in_executor(None, install)

  async def stop(self) -> None:
    """Stop the browser and clean up."""
    if self.context:
      await self.context.close()
    if self.browser:
      await self.browser.close()
    if self.playwright:
      await self.playwright.stop()
    self.browser = None
    self.context = None
    self.playwright = None
    self.pages = []
    self.current_page_index = 0
    self.interception_managers = {}
    log.info("Browser stopped")

  async def ensure_page(self) -> Page:
    """Return the current page, starting the browser or opening a tab if needed."""
    if not self.is_started:
      await self.start()
    if not self.pages:
      if self.context is None:
        raise BrowserNotStartedError("Browser context not initialized")
      self.pages.append(await self.context.new_page())
      self.current_page_index = 0
    return self._get_current_page()

  def _get_current_page(self) -> Page:
    """Get the current active page."""
    if not self.pages:
      raise BrowserNotStartedError("No pages available. Call start() first.")
    return self.pages[self.current_page_index]
