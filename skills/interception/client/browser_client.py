"""
Browser client using Playwright for request interception.

Owns the browser/page lifecycle and the per-page interception state.
"""

from __future__ import annotations

from .browser_client_base import BrowserClientBase
from .browser_interception import BrowserInterceptionMixin


class BrowserClient(
  BrowserClientBase,
  BrowserInterceptionMixin,
):
  """Playwright-based request interception client."""
