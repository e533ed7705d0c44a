from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from typing import Callable, List, Optional

from cognition.config import CognitionSettings
from cognition.engine import DecisionResult, DecisionState, run_decision
from cognition.errors import CognitionError
from cognition.graph.store import GraphStore
from cognition.llm.client import LLMClient
from cognition.llm.openai_provider import OpenAICompletionProvider
from cognition.llm.textgen_provider import TextgenProvider
from cognition.prompts.decision import DecisionPromptTemplate
from cognition.tools import ToolRegistry, WolframAlpha, signal_book

logger = logging.getLogger(__name__)


def build_llm(settings: CognitionSettings) -> LLMClient:
    if settings.backend == "openai":
        if not settings.openai_api_key:
            raise CognitionError("OPENAI_API_KEY is not configured", code="config_error")
        provider = OpenAICompletionProvider(
            api_key=settings.openai_api_key,
            model=settings.model,
            timeout_s=settings.timeout_s,
        )
    elif settings.backend == "textgen":
        if not settings.textgen_server:
            raise CognitionError("TEXTGEN_SERVER is not configured", code="config_error")
        provider = TextgenProvider(server=settings.textgen_server, timeout_s=settings.timeout_s)
    else:
        raise CognitionError(f"Unknown backend: {settings.backend}", code="config_error")
    return LLMClient(
        providers={provider.name: provider},
        default_provider=provider.name,
        default_model=settings.model if settings.backend == "openai" else None,
    )


def build_tools(settings: CognitionSettings) -> ToolRegistry:
    registry = ToolRegistry()
    if settings.wolfram_app_id:
        registry.register(WolframAlpha(settings.wolfram_app_id, timeout_s=settings.timeout_s))
    else:
        logger.warning("WOLFRAM_APP_ID is not configured, wolfram_alpha tool is disabled")
    registry.register(signal_book())
    return registry


def build_state(settings: CognitionSettings, *, llm=None, tools: Optional[ToolRegistry] = None) -> DecisionState:
    return DecisionState(
        model=llm if llm is not None else build_llm(settings),
        graph=GraphStore.from_file(settings.graph_path, strict=settings.strict_graph),
        template=DecisionPromptTemplate.from_file(settings.template_path),
        tools=tools if tools is not None else build_tools(settings),
        agent=settings.agent_name,
        user=settings.user_name,
    )


def format_result(result: DecisionResult, state: DecisionState) -> List[str]:
    lines: List[str] = []
    if result.decision_prompt is not None:
        lines.append("\n++++++ PROMPT ++++++")
        lines.append(result.decision_prompt)
        lines.append("--------------------")

    if result.choice is not None:
        lines.append(f"\nCHOICE: {result.choice}")

    if result.tool_response is not None:
        lines.append(f"\nTOOL: [{result.tool_response.id}] {result.tool_response.response}")

    if result.predictions:
        lines.append("\nPREDICTIONS:")
        for prediction in result.predictions:
            lines.append(f"  [✓] {prediction.id}: {prediction.choice}")

    node = result.decision_node
    lines.append(f"\nDECISION: {node.id}: {node.text}")
    lines.append(f"\n{state.agent}: {result.display_text}")
    for choice in node.choice_list():
        lines.append(f"- {choice.text}")
    return lines


async def run_session(
    state: DecisionState,
    *,
    read_input: Optional[Callable[[str], str]] = None,
    write: Callable[[str], None] = print,
) -> int:
    """Interactive loop. Returns the process exit code. `read_input` defaults to `input`."""
    if read_input is None:
        read_input = input
    user_input: Optional[str] = None
    while True:
        try:
            result = await run_decision(user_input, state)
        except CognitionError as e:
            if user_input is None:
                logger.error("Failed to start the conversation: %s", e)
                write(f"\n[!] {e}")
                return 1
            logger.error("Turn failed: %s", e)
            write(f"\n[!] {e}")
            # show where the conversation stands before asking again
            user_input = None
            continue
        else:
            for line in format_result(result, state):
                write(line)
            if result.is_terminal:
                write("\n[!] No choices available. Exiting.")
                return 0

        try:
            user_input = read_input(f"{state.user}: ").strip()
        except (EOFError, KeyboardInterrupt):
            write("\nExiting.")
            return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Walk a decision graph, predicting choices with an LLM.")
    parser.add_argument("--graph", help="Decision graph YAML file")
    parser.add_argument("--template", help="Decision prompt template file")
    parser.add_argument("--backend", choices=["openai", "textgen"], help="Completion backend")
    parser.add_argument("--model", help="Completion model id")
    parser.add_argument("--strict", action="store_true", help="Fail on dangling choice targets at load time")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    settings = CognitionSettings.from_env()
    overrides = {
        "graph_path": args.graph,
        "template_path": args.template,
        "backend": args.backend,
        "model": args.model,
        "strict_graph": True if args.strict else None,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        state = build_state(settings)
    except (CognitionError, OSError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return asyncio.run(run_session(state))


if __name__ == "__main__":
    sys.exit(main())
