import argparse
import asyncio
import json
import logging
from pathlib import Path

from cognition.engine import DecisionState, run_decision
from cognition.graph.store import GraphStore
from cognition.llm.base import LLMProvider
from cognition.llm.client import LLMClient
from cognition.llm.types import LLMRequest, LLMResponse
from cognition.prompts.decision import DecisionPromptTemplate
from cognition.tools import Signal, ToolRegistry, signal_book

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


class ScriptedProvider(LLMProvider):
    """Answers predictions from a fixed list, so a graph can be walked offline."""

    name = "scripted"

    def __init__(self, answers):
        self._answers = list(answers)

    async def generate(self, req: LLMRequest) -> LLMResponse:
        text = self._answers.pop(0) if self._answers else ""
        return LLMResponse(text=text, model="scripted", provider=self.name)


async def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    parser = argparse.ArgumentParser(description="Walk a decision graph offline with scripted predictions.")
    parser.add_argument("--graph", type=str, default=str(DATA_DIR / "decision_tree.yaml"))
    parser.add_argument("--template", type=str, default=str(DATA_DIR / "decision_prompt_template.yaml"))
    parser.add_argument("--input", action="append", default=[], help="User input for one turn (repeatable)")
    parser.add_argument("--answer", action="append", default=[], help="Scripted model output (repeatable)")
    args = parser.parse_args()

    tools = ToolRegistry([signal_book(), Signal("wolfram_alpha", "Wolfram|Alpha", "offline stub", "42")])
    state = DecisionState(
        model=LLMClient(providers={"scripted": ScriptedProvider(args.answer)}, default_provider="scripted"),
        graph=GraphStore.from_file(args.graph),
        template=DecisionPromptTemplate.from_file(args.template),
        tools=tools,
    )

    for user_input in [None, *args.input]:
        result = await run_decision(user_input, state)
        print(
            json.dumps(
                {
                    "user_input": result.user_input,
                    "choice": result.choice,
                    "current_id": result.current_id,
                    "predictions": [{"id": p.id, "choice": p.choice} for p in result.predictions],
                    "tool_response": result.tool_response.__dict__ if result.tool_response else None,
                    "history": state.history,
                },
                ensure_ascii=False,
            )
        )
        if result.is_terminal:
            break


if __name__ == "__main__":
    asyncio.run(main())
