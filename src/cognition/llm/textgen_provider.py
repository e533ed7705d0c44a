from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from cognition.llm.base import LLMProvider
from cognition.llm.errors import LLMBadResponse, LLMProviderError, LLMTimeout, LLMUnavailable
from cognition.llm.types import LLMRequest, LLMResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextgenParams:
    """Generation parameters, in the positional order the textgen endpoint expects."""
    max_new_tokens: int = 200
    do_sample: bool = True
    temperature: float = 0.5
    top_p: float = 0.9
    typical_p: float = 1.0
    repetition_penalty: float = 1.05
    encoder_repetition_penalty: float = 1.0
    top_k: int = 0
    min_length: int = 0
    no_repeat_ngram_size: int = 0
    num_beams: int = 1
    penalty_alpha: float = 0.0
    length_penalty: float = 1.0
    early_stopping: bool = True

    def to_json_data(self, prompt: str) -> Dict[str, List[Any]]:
        return {
            "data": [
                prompt,
                self.max_new_tokens,
                self.do_sample,
                self.temperature,
                self.top_p,
                self.typical_p,
                self.repetition_penalty,
                self.encoder_repetition_penalty,
                self.top_k,
                self.min_length,
                self.no_repeat_ngram_size,
                self.num_beams,
                self.penalty_alpha,
                self.length_penalty,
                self.early_stopping,
            ]
        }


@dataclass
class TextgenProvider(LLMProvider):
    """Provider for a self-hosted text-generation-webui server (`/run/textgen`)."""
    server: str = "http://localhost:7860"
    name: str = "textgen"
    timeout_s: float = 60.0
    defaults: TextgenParams = field(default_factory=TextgenParams)
    transport: Optional[httpx.AsyncBaseTransport] = None

    def _params(self, req: LLMRequest) -> TextgenParams:
        return TextgenParams(
            max_new_tokens=req.max_tokens,
            do_sample=self.defaults.do_sample,
            temperature=req.temperature,
            top_p=self.defaults.top_p,
            typical_p=self.defaults.typical_p,
            repetition_penalty=self.defaults.repetition_penalty,
            encoder_repetition_penalty=self.defaults.encoder_repetition_penalty,
            top_k=self.defaults.top_k,
            min_length=self.defaults.min_length,
            no_repeat_ngram_size=self.defaults.no_repeat_ngram_size,
            num_beams=self.defaults.num_beams,
            penalty_alpha=self.defaults.penalty_alpha,
            length_penalty=self.defaults.length_penalty,
            early_stopping=self.defaults.early_stopping,
        )

    async def generate(self, req: LLMRequest) -> LLMResponse:
        url = f"{self.server.rstrip('/')}/run/textgen"
        body = self._params(req).to_json_data(req.prompt)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
                response = await client.post(url, json=body)
        except httpx.TimeoutException as e:
            raise LLMTimeout(f"HTTP request error: {e}") from e
        except httpx.RequestError as e:
            raise LLMUnavailable(f"HTTP request error: {e}") from e

        if response.status_code != 200:
            error_body = response.text or "No error details"
            logger.warning("textgen error body: %s", error_body)
            raise LLMProviderError(f"Error {response.status_code}: {error_body}")

        try:
            payload = response.json()
            data = payload["data"]
        except (ValueError, KeyError, TypeError) as e:
            raise LLMBadResponse(f"JSON parsing error: {e}") from e

        text = data[0] if data and data[0] is not None else "No data found"
        return LLMResponse(
            text=str(text),
            model=req.model or "textgen",
            provider=self.name,
        )
