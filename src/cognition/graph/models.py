from __future__ import annotations

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Choice(BaseModel):
    """A labeled edge. `text` is both the display label and the literal match key."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., alias="choice")
    next_id: str


class DecisionNode(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    text: str
    # shown instead of `text` when the node was reached by a predicted choice
    predicted_text: Optional[str] = None
    tool: Optional[str] = None
    predict: Optional[bool] = None
    reset: Optional[bool] = None
    choices: Optional[Tuple[Choice, ...]] = None

    @field_validator("predict", "reset", mode="before")
    @classmethod
    def _flag_from_text(cls, value: Any) -> Any:
        # the graph loader keeps YAML scalars as text ("true", "False", "yes")
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def choice_list(self) -> List[Choice]:
        return list(self.choices or ())

    @property
    def is_terminal(self) -> bool:
        return not self.choices

    @property
    def suppresses_prediction(self) -> bool:
        return self.predict is False

    @property
    def resets_history(self) -> bool:
        return self.reset is True
