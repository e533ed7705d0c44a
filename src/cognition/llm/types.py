from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

FinishReason = Optional[str]


@dataclass(frozen=True)
class LLMUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class LLMRequest:
    prompt: str
    model: Optional[str] = None
    max_tokens: int = 200
    temperature: float = 0.5


@dataclass(frozen=True)
class LLMResponse:
    text: str
    model: str
    provider: str
    usage: LLMUsage = field(default_factory=LLMUsage)
    latency_ms: int = 0
    finish_reason: FinishReason = None
