from __future__ import annotations

import json
import logging
import time
from typing import Dict, List, Optional

from cognition.errors import CognitionError, ToolFailure, ToolNotFound
from cognition.tools.base import Tool, ToolResponse

logger = logging.getLogger(__name__)


class ToolRegistry:
    def __init__(self, tools: Optional[List[Tool]] = None):
        self._tools: Dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        if tool.id in self._tools:
            raise ValueError(f"Tool already registered: {tool.id}")
        self._tools[tool.id] = tool

    def get(self, tool_id: str) -> Optional[Tool]:
        return self._tools.get(tool_id)

    def require(self, tool_id: str) -> Tool:
        tool = self.get(tool_id)
        if tool is None:
            raise ToolNotFound(tool_id)
        return tool

    def list(self) -> List[Tool]:
        return list(self._tools.values())

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def run(self, tool_id: str, input: str, *, node_id: str | None = None) -> Optional[ToolResponse]:
        tool = self.require(tool_id)
        logger.info(json.dumps({"event": "tool_call_start", "tool": tool_id, "node": node_id}, ensure_ascii=False))
        start = time.perf_counter()
        try:
            result = await tool.run(input)
        except CognitionError:
            logger.error(
                json.dumps({"event": "tool_call_error", "tool": tool_id, "node": node_id}, ensure_ascii=False)
            )
            raise
        except Exception as exc:
            logger.error(
                json.dumps({"event": "tool_call_error", "tool": tool_id, "node": node_id}, ensure_ascii=False)
            )
            raise ToolFailure(f"Tool '{tool_id}' failed: {exc}") from exc

        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            json.dumps(
                {
                    "event": "tool_call_success",
                    "tool": tool_id,
                    "node": node_id,
                    "latency_ms": latency_ms,
                    "has_response": result is not None,
                },
                ensure_ascii=False,
            )
        )
        return result
