import httpx
import pytest

from cognition.errors import ToolFailure
from cognition.tools import ToolResponse, WolframAlpha


@pytest.mark.asyncio
async def test_wolfram_alpha_sends_query_and_returns_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, text="6 meters")

    tool = WolframAlpha("APP-123", transport=httpx.MockTransport(handler))

    res = await tool.run("height of a giraffe")

    assert res == ToolResponse(id="wolfram_alpha", response="6 meters")
    assert seen["url"].host == "api.wolframalpha.com"
    assert seen["url"].path == "/v1/result"
    assert seen["url"].params["appid"] == "APP-123"
    assert seen["url"].params["i"] == "height of a giraffe"


@pytest.mark.asyncio
async def test_wolfram_alpha_returns_body_of_unanswerable_query():
    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(501, text="Wolfram|Alpha did not understand your input")

    tool = WolframAlpha("APP-123", transport=httpx.MockTransport(handler))

    res = await tool.run("blorp")

    assert res.response == "Wolfram|Alpha did not understand your input"


@pytest.mark.asyncio
async def test_wolfram_alpha_connection_error_is_tool_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    tool = WolframAlpha("APP-123", transport=httpx.MockTransport(handler))

    with pytest.raises(ToolFailure):
        await tool.run("x")
