from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional
from uuid import uuid4

from cognition.llm.base import LLMProvider
from cognition.llm.errors import (
    LLMError,
    LLMAuthError,
    LLMBadResponse,
    LLMInvalidRequest,
    LLMProviderError,
    LLMRateLimited,
    LLMTimeout,
    LLMUnavailable,
)
from cognition.llm.retry import RetryPolicy, with_retries
from cognition.llm.types import LLMRequest, LLMResponse
from cognition.utils.hashing import text_fingerprint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMCallContext:
    node_id: str | None = None
    task: str | None = None


class LLMClient:
    """
    Single entry-point for completion calls.

    `generate(prompt, max_tokens, temperature) -> str` is the whole contract
    the decision engine relies on. Provider selection, retries and logging
    live here so that engine code never sees a provider object.
    """

    def __init__(
        self,
        *,
        providers: Dict[str, LLMProvider],
        default_provider: str,
        default_model: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        if default_provider not in providers:
            raise ValueError(f"Unknown default provider: {default_provider}")
        self._providers = providers
        self._default_provider = default_provider
        self._default_model = default_model
        self._retry_policy = retry_policy or RetryPolicy()

    @property
    def provider(self) -> LLMProvider:
        return self._providers[self._default_provider]

    def _classify_error(self, err: Exception) -> str:
        if isinstance(err, LLMTimeout):
            return "timeout"
        if isinstance(err, LLMRateLimited):
            return "rate_limit"
        if isinstance(err, LLMInvalidRequest):
            return "invalid_request"
        if isinstance(err, LLMAuthError):
            return "auth_error"
        if isinstance(err, LLMBadResponse):
            return "parse_error"
        if isinstance(err, LLMProviderError):
            return "provider_error"
        if isinstance(err, LLMUnavailable):
            return "unavailable"
        if isinstance(err, LLMError):
            return "llm_error"
        return "unknown"

    def _debug_enabled(self) -> bool:
        return os.getenv("COGNITION_DEBUG_LOGGING", "false").lower() in {"1", "true", "yes"}

    def _build_payload(self, *, call_id: str, context: LLMCallContext | None, prompt: str) -> Dict[str, Any]:
        return {
            "call_id": call_id,
            "node": context.node_id if context else None,
            "task": context.task if context else None,
            "provider": self._default_provider,
            "model": self._default_model,
            "prompt": text_fingerprint(prompt),
        }

    async def generate(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        *,
        context: LLMCallContext | None = None,
    ) -> str:
        resp = await self.generate_response(
            prompt,
            max_tokens=max_tokens,
            temperature=temperature,
            context=context,
        )
        return resp.text

    async def generate_response(
        self,
        prompt: str,
        *,
        max_tokens: int,
        temperature: float,
        context: LLMCallContext | None = None,
    ) -> LLMResponse:
        call_id = uuid4().hex[:12]
        payload = self._build_payload(call_id=call_id, context=context, prompt=prompt)
        logger.info(json.dumps({"event": "llm_call_start", **payload}, ensure_ascii=False))

        req = LLMRequest(
            prompt=prompt,
            model=self._default_model,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        attempts = 0

        async def _call() -> LLMResponse:
            nonlocal attempts
            attempts += 1
            return await self.provider.generate(req)

        start = time.perf_counter()
        try:
            resp = await with_retries(_call, policy=self._retry_policy)
        except Exception as e:
            latency_ms = int((time.perf_counter() - start) * 1000)
            logger.error(
                json.dumps(
                    {
                        "event": "llm_call_error",
                        **payload,
                        "latency_ms": latency_ms,
                        "attempts": attempts,
                        "outcome": "error",
                        "error_kind": self._classify_error(e),
                    },
                    ensure_ascii=False,
                )
            )
            raise
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.info(
            json.dumps(
                {
                    "event": "llm_call_success",
                    **payload,
                    "latency_ms": latency_ms,
                    "attempts": attempts,
                    "finish_reason": resp.finish_reason,
                    "usage_total_tokens": resp.usage.total_tokens,
                    "output_chars": len(resp.text),
                    "outcome": "success",
                },
                ensure_ascii=False,
            )
        )
        if self._debug_enabled():
            logger.info(
                json.dumps(
                    {"event": "llm_debug_messages", "call_id": call_id, "prompt": prompt, "response": resp.text},
                    ensure_ascii=False,
                )
            )
        if not resp.latency_ms:
            resp = LLMResponse(
                text=resp.text,
                model=resp.model,
                provider=resp.provider,
                usage=resp.usage,
                latency_ms=latency_ms,
                finish_reason=resp.finish_reason,
            )
        return resp
