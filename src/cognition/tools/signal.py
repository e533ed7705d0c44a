from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from cognition.tools.base import Tool, ToolResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Signal(Tool):
    """Stub tool: answers every call with the same fixed signal."""

    tool_id: str
    tool_name: str
    tool_description: str
    signal: str

    @property
    def id(self) -> str:
        return self.tool_id

    @property
    def name(self) -> str:
        return self.tool_name

    @property
    def description(self) -> str:
        return self.tool_description

    async def run(self, input: str) -> Optional[ToolResponse]:
        logger.debug("%s: %s", self.tool_id, input)
        return ToolResponse(id=self.tool_id, response=self.signal)


def signal_book() -> Signal:
    return Signal(
        tool_id="signal_book",
        tool_name="Signal Book",
        tool_description="Signal Book",
        signal="Beep!",
    )
