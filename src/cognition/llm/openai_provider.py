from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Any

from cognition.llm.base import LLMProvider
from cognition.llm.types import LLMRequest, LLMResponse, LLMUsage
from cognition.llm.errors import (
    LLMAuthError,
    LLMBadResponse,
    LLMInvalidRequest,
    LLMProviderError,
    LLMRateLimited,
    LLMTimeout,
    LLMUnavailable,
)


@dataclass
class OpenAICompletionProvider(LLMProvider):
    """
    Text completion provider over the OpenAI `/v1/completions` endpoint.

    The engine needs plain prompt-in/text-out, so this talks to the legacy
    completions API rather than chat completions. The api key never leaves
    the client object and is never logged.
    """
    name: str = "openai"
    api_key: Optional[str] = None
    model: str = "gpt-3.5-turbo-instruct"
    timeout_s: float = 20.0
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    base_url: Optional[str] = None

    _client: Optional[Any] = None

    def __post_init__(self):
        if self.api_key:
            self._client = self._make_client(self.api_key)

    def _make_client(self, api_key: str) -> Any:
        from openai import AsyncOpenAI
        return AsyncOpenAI(api_key=api_key, base_url=self.base_url, timeout=self.timeout_s, max_retries=0)

    def _get_client(self) -> Any:
        if self._client is None:
            raise LLMInvalidRequest("No OpenAI key configured", code="NO_OPENAI_KEY")
        return self._client

    async def generate(self, req: LLMRequest) -> LLMResponse:
        import openai

        client = self._get_client()
        model = req.model or self.model
        try:
            resp = await client.completions.create(
                model=model,
                prompt=req.prompt,
                temperature=req.temperature,
                max_tokens=req.max_tokens,
                top_p=self.top_p,
                frequency_penalty=self.frequency_penalty,
                presence_penalty=self.presence_penalty,
            )
        except openai.APITimeoutError as e:
            raise LLMTimeout(f"HTTP request error: {e}") from e
        except openai.APIConnectionError as e:
            raise LLMUnavailable(f"HTTP request error: {e}") from e
        except openai.RateLimitError as e:
            raise LLMRateLimited(str(e)) from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise LLMAuthError(str(e)) from e
        except openai.BadRequestError as e:
            raise LLMInvalidRequest(str(e)) from e
        except openai.APIStatusError as e:
            raise LLMProviderError(f"Error {e.status_code}: {e.message}") from e

        if not resp.choices:
            raise LLMBadResponse("No choices found")
        choice = resp.choices[0]
        usage = getattr(resp, "usage", None)

        return LLMResponse(
            text=choice.text or "",
            model=getattr(resp, "model", None) or model,
            provider=self.name,
            usage=LLMUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) if usage else 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) if usage else 0,
                total_tokens=getattr(usage, "total_tokens", 0) if usage else 0,
            ),
            finish_reason=getattr(choice, "finish_reason", None),
        )
