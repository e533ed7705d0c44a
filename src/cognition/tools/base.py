from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ToolResponse:
    id: str
    response: str


class Tool(ABC):
    """A named side-effecting lookup a decision node can trigger with the raw user input."""

    @property
    @abstractmethod
    def id(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def description(self) -> str:
        raise NotImplementedError

    @abstractmethod
    async def run(self, input: str) -> Optional[ToolResponse]:
        raise NotImplementedError
