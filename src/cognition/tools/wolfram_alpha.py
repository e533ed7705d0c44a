from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from cognition.errors import ToolFailure
from cognition.tools.base import Tool, ToolResponse

logger = logging.getLogger(__name__)

WOLFRAM_ALPHA_ENDPOINT = "https://api.wolframalpha.com/v1/result"


class WolframAlpha(Tool):
    """Short-answer lookups against the Wolfram|Alpha computational knowledge engine."""

    def __init__(
        self,
        app_id: str,
        *,
        endpoint: str = WOLFRAM_ALPHA_ENDPOINT,
        timeout_s: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.params: Dict[str, str] = {"appid": app_id}
        self.timeout_s = timeout_s
        self._transport = transport

    @property
    def id(self) -> str:
        return "wolfram_alpha"

    @property
    def name(self) -> str:
        return "Wolfram|Alpha"

    @property
    def description(self) -> str:
        return "Wolfram Alpha is a computational knowledge engine"

    async def run(self, input: str) -> Optional[ToolResponse]:
        params = dict(self.params)
        params["i"] = input
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                response = await client.get(self.endpoint, params=params)
        except httpx.RequestError as e:
            raise ToolFailure(f"Failed to send request to tool: {e}") from e

        # the short-answer API reports "did not understand" as a 501 with a readable body
        text = response.text
        logger.debug("%s: %s", self.id, text)
        return ToolResponse(id=self.id, response=text)
