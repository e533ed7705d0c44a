import sys
from pathlib import Path

# чтобы видеть src/
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import asyncio
from dataclasses import dataclass, field
from typing import Any, List

import pytest

from cognition.engine import DecisionState
from cognition.graph.store import GraphStore
from cognition.llm.base import LLMProvider
from cognition.llm.client import LLMClient
from cognition.llm.types import LLMRequest, LLMResponse, LLMUsage
from cognition.prompts.decision import DecisionPromptTemplate
from cognition.tools import ToolRegistry

TEMPLATE = "H:{{history}}|Q:{{decision_prompt}}|C:{{choices}}|U:{{user_input}}|A:"


@dataclass
class FakeLLMProvider(LLMProvider):
    name: str = "fake"
    script: List[Any] = field(default_factory=list)
    requests: List[LLMRequest] = field(default_factory=list)

    async def generate(self, req: LLMRequest) -> LLMResponse:
        await asyncio.sleep(0)
        self.requests.append(req)
        item = self.script.pop(0) if self.script else ""
        if isinstance(item, Exception):
            raise item
        return LLMResponse(
            text=str(item),
            model=req.model or "fake-model",
            provider=self.name,
            usage=LLMUsage(prompt_tokens=1, completion_tokens=1, total_tokens=2),
            finish_reason="stop",
        )


@pytest.fixture
def fake_provider():
    return FakeLLMProvider()


@pytest.fixture
def template():
    return DecisionPromptTemplate(TEMPLATE)


@pytest.fixture
def yes_no_graph():
    return GraphStore.from_records(
        [
            {
                "id": "start",
                "text": "Hi",
                "choices": [{"choice": "yes", "next_id": "a"}, {"choice": "no", "next_id": "b"}],
            },
            {"id": "a", "text": "Great", "choices": []},
            {"id": "b", "text": "Too bad"},
        ]
    )


@pytest.fixture
def make_state(template):
    """Build a session over `graph` whose model answers from `script`."""

    def _make(graph, script=None, *, tools=None, max_depth=5):
        provider = FakeLLMProvider(script=list(script or []))
        client = LLMClient(providers={"fake": provider}, default_provider="fake")
        state = DecisionState(
            model=client,
            graph=graph if isinstance(graph, GraphStore) else GraphStore.from_records(graph),
            template=template,
            tools=tools if tools is not None else ToolRegistry(),
            max_depth=max_depth,
        )
        return state, provider

    return _make


@pytest.fixture
def chain_records():
    """start -> n1 -> ... -> n7, every node single-choice; n7 is terminal."""
    records = [{"id": "start", "text": "step start", "choices": [{"choice": "go", "next_id": "n1"}]}]
    for i in range(1, 7):
        records.append({"id": f"n{i}", "text": f"step {i}", "choices": [{"choice": "go", "next_id": f"n{i + 1}"}]})
    records.append({"id": "n7", "text": "done"})
    return records


@pytest.fixture
def tmp_secrets_dir(tmp_path, monkeypatch):
    secrets_dir = tmp_path / "secrets"
    secrets_dir.mkdir()
    monkeypatch.setenv("COGNITION_SECRETS_DIR", str(secrets_dir))
    return secrets_dir
