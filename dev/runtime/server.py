"""
Asyncio JSON-RPC 2.0 server for runtime skills.

The host writes one JSON request per line to stdin and reads responses from
stdout. Lifecycle hooks can read and write the skill's data files, which the
server fetches from the host with reverse RPC requests on the same pipe.

Usage:
    from dev.runtime.server import SkillServer

    SkillServer(skill_definition).start()
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TYPE_CHECKING, Any, Awaitable, Callable

if TYPE_CHECKING:
  from dev.types.skill_types import SkillDefinition

OPTIONS_FILE = "options.json"
INTERNAL_ERROR = -32603

Handler = Callable[[dict[str, Any]], Awaitable[Any]]


class SkillServer:
  """JSON-RPC 2.0 server that bridges a Python skill to the host."""

  def __init__(self, skill: SkillDefinition) -> None:
    self._skill = skill
    self._hooks = skill.hooks
    self._tools = {t.definition.name: t for t in skill.tools}
    self._option_defs = {o.name: o for o in skill.options}
    self._options: dict[str, Any] = self._default_options()
    self._pending: dict[int | str, asyncio.Future[Any]] = {}
    self._next_id = 1
    self._data_dir = ""
    self._writer: asyncio.StreamWriter | None = None
    self._methods: dict[str, Handler] = {
      "tools/list": self._tools_list,
      "tools/call": self._tools_call,
      "skill/load": self._skill_load,
      "skill/unload": self._skill_unload,
      "skill/status": self._skill_status,
      "skill/shutdown": self._skill_shutdown,
      "options/list": self._options_list,
      "options/get": self._options_get,
      "options/set": self._options_set,
      "options/reset": self._options_reset,
    }

  def start(self) -> None:
    """Serve stdin until the host closes it (blocking)."""
    asyncio.run(self._run())

  # --------------------------------------------------------------------- #
  # Host data access (reverse RPC)
  # --------------------------------------------------------------------- #

  async def read_data(self, filename: str) -> str:
    result = await self._reverse_rpc("data/read", {"filename": filename})
    return result["content"] if isinstance(result, dict) else str(result)

  async def write_data(self, filename: str, content: str) -> None:
    await self._reverse_rpc("data/write", {"filename": filename, "content": content})

  def log(self, message: str) -> None:
    sys.stderr.write(f"[skill:{self._skill.name}] {message}\n")
    sys.stderr.flush()

  # --------------------------------------------------------------------- #
  # Main loop
  # --------------------------------------------------------------------- #

  async def _run(self) -> None:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    transport, _ = await loop.connect_write_pipe(asyncio.BaseProtocol, sys.stdout)
    self._writer = asyncio.StreamWriter(transport, protocol, reader, loop)

    while True:
      line = await reader.readline()
      if not line:
        break
      text = line.decode().strip()
      if not text:
        continue
      try:
        message = json.loads(text)
      except json.JSONDecodeError:
        self.log(f"Failed to parse JSON-RPC message: {text}")
        continue

      # Replies to reverse RPC resolve inline; handlers awaiting them would
      # otherwise block the loop that reads the reply.
      if "result" in message or "error" in message:
        self._resolve_pending(message)
      else:
        _ = asyncio.create_task(self._handle_message(message))  # noqa: RUF006

  def _resolve_pending(self, message: dict[str, Any]) -> None:
    future = self._pending.pop(message.get("id"), None)
    if future is None or future.done():
      return
    if "error" in message:
      future.set_exception(RuntimeError(message["error"].get("message", "Reverse RPC error")))
    else:
      future.set_result(message.get("result"))

  async def _handle_message(self, message: dict[str, Any]) -> None:
    msg_id = message.get("id")
    try:
      result = await self._dispatch(message.get("method", ""), message.get("params"))
    except Exception as exc:
      if msg_id is None:
        self.log(f"Notification handler error: {exc}")
      else:
        self._send_error(msg_id, INTERNAL_ERROR, str(exc))
      return
    if msg_id is not None:
      self._send_response(msg_id, result)

  async def _dispatch(self, method: str, params: Any) -> Any:
    handler = self._methods.get(method)
    if handler is None:
      raise ValueError(f"Unknown method: {method}")
    return await handler(params if isinstance(params, dict) else {})

  # --------------------------------------------------------------------- #
  # Tools
  # --------------------------------------------------------------------- #

  async def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
    tools = []
    for tool in self._tools.values():
      d = tool.definition
      tools.append(
        {
          "name": d.name,
          "description": d.description,
          "inputSchema": {
            "type": "object",
            "properties": d.parameters.get("properties", {}),
            "required": d.parameters.get("required"),
          },
          "annotations": {"readOnlyHint": d.read_only},
        }
      )
    return {"tools": tools}

  async def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
    name = params.get("name", "")
    tool = self._tools.get(name)
    if tool is None:
      raise ValueError(f"Unknown tool: {name}")
    result = await tool.execute(params.get("arguments") or {})
    return {
      "content": [{"type": "text", "text": result.content}],
      "isError": result.is_error,
    }

  # --------------------------------------------------------------------- #
  # Lifecycle
  # --------------------------------------------------------------------- #

  async def _skill_load(self, params: dict[str, Any]) -> dict[str, Any]:
    if params.get("dataDir"):
      self._data_dir = params["dataDir"]
    await self._load_options()
    if self._hooks and self._hooks.on_load:
      await self._hooks.on_load(self._create_context())
    return {"ok": True}

  async def _skill_unload(self, params: dict[str, Any]) -> dict[str, Any]:
    if self._hooks and self._hooks.on_unload:
      await self._hooks.on_unload(self._create_context())
    return {"ok": True}

  async def _skill_status(self, params: dict[str, Any]) -> dict[str, Any]:
    if not self._hooks:
      raise ValueError("Skill must implement on_status hook")
    return {"status": await self._hooks.on_status(self._create_context())}

  async def _skill_shutdown(self, params: dict[str, Any]) -> dict[str, Any]:
    # Exit once the response has been flushed
    asyncio.get_running_loop().call_later(0.1, sys.exit, 0)
    return {"ok": True}

  # --------------------------------------------------------------------- #
  # Options
  # --------------------------------------------------------------------- #

  def _default_options(self) -> dict[str, Any]:
    return {name: od.default for name, od in self._option_defs.items()}

  async def _options_list(self, params: dict[str, Any]) -> dict[str, Any]:
    return {
      "options": [
        {
          "name": od.name,
          "type": od.type,
          "label": od.label,
          "description": od.description,
          "default": od.default,
          "group": od.group,
          "value": self._options[od.name],
        }
        for od in self._option_defs.values()
      ]
    }

  async def _options_get(self, params: dict[str, Any]) -> dict[str, Any]:
    return {"options": dict(self._options)}

  async def _options_set(self, params: dict[str, Any]) -> dict[str, Any]:
    name = params.get("name", "")
    value = params.get("value")
    if name not in self._option_defs:
      raise ValueError(f"Unknown option: {name}")
    if not isinstance(value, bool):
      raise ValueError(f"Option '{name}' requires a boolean value")
    self._options[name] = value
    await self._options_changed()
    return {"ok": True}

  async def _options_reset(self, params: dict[str, Any]) -> dict[str, Any]:
    self._options = self._default_options()
    await self._options_changed()
    return {"ok": True}

  async def _options_changed(self) -> None:
    try:
      await self.write_data(OPTIONS_FILE, json.dumps(self._options))
    except Exception as exc:
      self.log(f"Failed to persist options: {exc}")
    if self._hooks and self._hooks.on_options_change:
      await self._hooks.on_options_change(self._create_context(), dict(self._options))

  async def _load_options(self) -> None:
    """Merge persisted values from options.json over the defaults."""
    self._options = self._default_options()
    if not self._option_defs:
      return
    try:
      raw = await self.read_data(OPTIONS_FILE)
      persisted = json.loads(raw) if raw else {}
    except Exception:
      persisted = {}
    for name, value in persisted.items():
      if name in self._option_defs and isinstance(value, bool):
        self._options[name] = value

  # --------------------------------------------------------------------- #
  # Context handed to hooks
  # --------------------------------------------------------------------- #

  def _create_context(self) -> Any:
    server = self

    class _Context:
      @property
      def data_dir(self) -> str:
        return server._data_dir or f"skills/{server._skill.name}/data"

      async def read_data(self, filename: str) -> str:
        return await server.read_data(filename)

      async def write_data(self, filename: str, content: str) -> None:
        await server.write_data(filename, content)

      def log(self, message: str) -> None:
        server.log(message)

      def get_options(self) -> dict[str, Any]:
        return dict(server._options)

    return _Context()

  # --------------------------------------------------------------------- #
  # JSON-RPC I/O
  # --------------------------------------------------------------------- #

  def _send_response(self, msg_id: int | str, result: Any) -> None:
    self._write_message({"jsonrpc": "2.0", "id": msg_id, "result": result})

  def _send_error(self, msg_id: int | str, code: int, message: str) -> None:
    self._write_message(
      {"jsonrpc": "2.0", "id": msg_id, "error": {"code": code, "message": message}}
    )

  def _write_message(self, message: dict[str, Any]) -> None:
    data = json.dumps(message) + "\n"
    if self._writer:
      self._writer.write(data.encode())
    else:
      sys.stdout.write(data)
      sys.stdout.flush()

  async def _reverse_rpc(self, method: str, params: Any = None, timeout: float = 30.0) -> Any:
    msg_id = self._next_id
    self._next_id += 1
    request: dict[str, Any] = {"jsonrpc": "2.0", "id": msg_id, "method": method}
    if params is not None:
      request["params"] = params

    future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
    self._pending[msg_id] = future
    self._write_message(request)
    try:
      return await asyncio.wait_for(future, timeout=timeout)
    except TimeoutError:
      self._pending.pop(msg_id, None)
      raise RuntimeError(f"Reverse RPC timeout: {method}") from None
