from __future__ import annotations

from typing import Awaitable, Optional, Protocol

from cognition.graph.models import DecisionNode
from cognition.graph.store import ROOT_ID, GraphStore
from cognition.llm.client import LLMCallContext
from cognition.prompts.decision import DecisionPromptTemplate
from cognition.tools.base import Tool
from cognition.tools.registry import ToolRegistry

MAX_CHAIN_DEPTH = 5
HISTORY_SEPARATOR = "\n  "


class CompletionModel(Protocol):
    def generate(
        self,
        prompt: str,
        max_tokens: int,
        temperature: float,
        *,
        context: Optional[LLMCallContext] = None,
    ) -> Awaitable[str]: ...


class DecisionState:
    """
    One conversation session: the graph cursor plus the rolling history.

    Only `run_decision` moves `current_id` or touches `history`; everything
    else here is read-only after construction.
    """

    def __init__(
        self,
        *,
        model: CompletionModel,
        graph: GraphStore,
        template: DecisionPromptTemplate,
        tools: Optional[ToolRegistry] = None,
        agent: str = "Agent",
        user: str = "User",
        current_id: str = ROOT_ID,
        max_depth: int = MAX_CHAIN_DEPTH,
    ):
        if max_depth < 1:
            raise ValueError("max_depth must be positive")
        self.model = model
        self.graph = graph
        self.template = template
        self.tools = tools if tools is not None else ToolRegistry()
        self.agent = agent
        self.user = user
        self.history = ""
        self.current_id = current_id
        self.max_depth = max_depth

    def add_tool(self, tool: Tool) -> None:
        self.tools.register(tool)

    def current_node(self) -> DecisionNode:
        return self.graph.lookup(self.current_id)

    def record_exchange(self, agent_text: str, user_input: str) -> None:
        if self.history:
            self.history += HISTORY_SEPARATOR
        self.history += f"- {self.agent}: {agent_text}"
        self.history += f"{HISTORY_SEPARATOR}- {self.user}: {user_input}"

    def reset_history(self) -> None:
        self.history = ""
