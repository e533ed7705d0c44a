from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from cognition.graph.models import DecisionNode
from cognition.tools.base import ToolResponse


@dataclass(frozen=True)
class Prediction:
    choice: str
    id: str
    # response of the tool run on the node this prediction left from
    tool_response: Optional[ToolResponse] = None


@dataclass
class DecisionResult:
    user_input: Optional[str]
    decision_prompt: Optional[str]
    choice: Optional[str]
    current_id: str
    decision_node: DecisionNode
    predictions: List[Prediction] = field(default_factory=list)
    tool_response: Optional[ToolResponse] = None

    @property
    def is_terminal(self) -> bool:
        return self.decision_node.is_terminal

    @property
    def display_text(self) -> str:
        if self.predictions and self.decision_node.predicted_text:
            return self.decision_node.predicted_text
        return self.decision_node.text
