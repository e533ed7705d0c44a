from types import SimpleNamespace

import httpx
import openai
import pytest

from cognition.llm.errors import LLMBadResponse, LLMInvalidRequest, LLMRateLimited
from cognition.llm.openai_provider import OpenAICompletionProvider
from cognition.llm.types import LLMRequest


class FakeCompletions:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


def make_provider(completions):
    provider = OpenAICompletionProvider(model="gpt-3.5-turbo-instruct")
    provider._client = SimpleNamespace(completions=completions)
    return provider


@pytest.mark.asyncio
async def test_completion_request_and_response_mapping():
    completions = FakeCompletions(
        result=SimpleNamespace(
            model="gpt-3.5-turbo-instruct",
            choices=[SimpleNamespace(text="yes", finish_reason="stop")],
            usage=SimpleNamespace(prompt_tokens=10, completion_tokens=1, total_tokens=11),
        )
    )
    provider = make_provider(completions)

    resp = await provider.generate(LLMRequest(prompt="p", max_tokens=200, temperature=0.5))

    assert resp.text == "yes"
    assert resp.usage.total_tokens == 11
    assert resp.finish_reason == "stop"
    call = completions.calls[0]
    assert call["prompt"] == "p"
    assert call["max_tokens"] == 200
    assert call["temperature"] == 0.5
    assert call["top_p"] == 1.0
    assert call["model"] == "gpt-3.5-turbo-instruct"


@pytest.mark.asyncio
async def test_empty_choices_is_bad_response():
    provider = make_provider(FakeCompletions(result=SimpleNamespace(model="m", choices=[], usage=None)))

    with pytest.raises(LLMBadResponse):
        await provider.generate(LLMRequest(prompt="p"))


@pytest.mark.asyncio
async def test_sdk_errors_are_mapped():
    request = httpx.Request("POST", "https://api.openai.com/v1/completions")
    rate_limited = openai.RateLimitError(
        "slow down", response=httpx.Response(429, request=request), body=None
    )
    provider = make_provider(FakeCompletions(error=rate_limited))

    with pytest.raises(LLMRateLimited):
        await provider.generate(LLMRequest(prompt="p"))


@pytest.mark.asyncio
async def test_missing_key_is_invalid_request():
    provider = OpenAICompletionProvider()

    with pytest.raises(LLMInvalidRequest) as exc_info:
        await provider.generate(LLMRequest(prompt="p"))

    assert exc_info.value.code == "NO_OPENAI_KEY"
