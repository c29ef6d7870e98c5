"""Playwright browser client for the interception skill."""
