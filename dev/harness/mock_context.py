"""
In-memory SkillContext for exercising skill hooks without a host.

Usage:
    from dev.harness.mock_context import MockContextOptions, create_mock_context

    ctx, inspect = create_mock_context(
        MockContextOptions(initial_data={"config.json": '{"lazy_start": true}'})
    )
    await skill.hooks.on_load(ctx)
    assert "loaded" in inspect.get_logs()[-1]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class MockContextOptions:
  """Seed data for a mock context."""

  initial_data: dict[str, str] = field(default_factory=dict)
  initial_options: dict[str, Any] = field(default_factory=dict)
  data_dir: str = "/mock/data"


class MockInspector:
  """Test-side handle on what the skill logged and which options it sees."""

  def __init__(self, logs: list[str], options: dict[str, Any]) -> None:
    self._logs = logs
    self._options = options

  def get_logs(self) -> list[str]:
    return list(self._logs)

  def set_option(self, name: str, value: Any) -> None:
    """Change an option the way the host would before ``on_options_change``."""
    self._options[name] = value


def create_mock_context(
  options: MockContextOptions | None = None,
) -> tuple[Any, MockInspector]:
  opts = options or MockContextOptions()
  data_store = dict(opts.initial_data)
  skill_options = dict(opts.initial_options)
  logs: list[str] = []

  class _Context:
    data_dir = opts.data_dir

    async def read_data(self, filename: str) -> str:
      if filename not in data_store:
        raise FileNotFoundError(f"No such file: '{filename}'")
      return data_store[filename]

    async def write_data(self, filename: str, content: str) -> None:
      data_store[filename] = content

    def log(self, message: str) -> None:
      logs.append(message)

    def get_options(self) -> dict[str, Any]:
      return dict(skill_options)

  return _Context(), MockInspector(logs, skill_options)
