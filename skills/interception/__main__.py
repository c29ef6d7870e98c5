"""
Interception skill entry point.

Runs the skill server using the standard runtime. Logs go to stderr;
stdout carries the JSON-RPC stream.
"""

import logging
import sys

from dev.runtime.server import SkillServer

from .skill import skill

if __name__ == "__main__":
  logging.basicConfig(
    level=logging.INFO,
    format="[%(name)s] %(message)s",
    stream=sys.stderr,
  )
  server = SkillServer(skill)
  server.start()
