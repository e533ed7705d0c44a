from __future__ import annotations

import json
import logging
from typing import List, Optional

from cognition.engine.result import DecisionResult, Prediction
from cognition.engine.state import DecisionState
from cognition.errors import CognitionError, InferenceFailure
from cognition.graph.models import Choice, DecisionNode
from cognition.llm.client import LLMCallContext
from cognition.prompts.decision import join_choices
from cognition.tools.base import ToolResponse

logger = logging.getLogger(__name__)

PREDICTION_MAX_TOKENS = 200
PREDICTION_TEMPERATURE = 0.5


async def predict_choice(
    state: DecisionState,
    node: DecisionNode,
    choices: List[Choice],
    user_input: str,
) -> tuple[Optional[int], str]:
    """
    Ask the model which choice `user_input` means.

    Returns the index of the matched choice (or None) and the prediction
    prompt with the model output appended. Matching is exact string equality
    between the raw output and the trimmed choice texts.
    """
    choice_texts = [choice.text.strip() for choice in choices]
    prompt = state.template.format(state.history, node.text, join_choices(choice_texts), user_input)

    try:
        response = await state.model.generate(
            prompt,
            PREDICTION_MAX_TOKENS,
            PREDICTION_TEMPERATURE,
            context=LLMCallContext(node_id=node.id, task="predict_choice"),
        )
    except CognitionError:
        raise
    except Exception as err:
        raise InferenceFailure(f"Failed to generate choice: {err}") from err

    shown = prompt + response
    logger.debug(shown)
    try:
        return choice_texts.index(response), shown
    except ValueError:
        logger.info("No choice matches the model output at node %s", node.id)
        return None, shown


async def run_decision(user_input: Optional[str], state: DecisionState) -> DecisionResult:
    """
    Process one turn.

    Starting at `state.current_id`, select a choice (the only one, or the
    one the model predicts from `user_input`), follow it, and keep going while
    choices keep being taken, the entered node allows prediction, and the
    depth budget lasts. Call with `user_input=None` to only display the
    current node.
    """
    predicting_choice = False
    tool_response: Optional[ToolResponse] = None
    decision_prompt: Optional[str] = None
    choice: Optional[str] = None
    predictions: List[Prediction] = []
    depth = state.max_depth

    while True:
        node = state.current_node()
        choices = node.choice_list()

        if not choices:
            break

        next_index: Optional[int] = None
        if user_input is None:
            next_index = None
        elif len(choices) == 1:
            logger.debug("Only one choice, skip prediction")
            next_index = 0
        else:
            logger.info("User input: %r", user_input)
            next_index, decision_prompt = await predict_choice(state, node, choices, user_input)
            if next_index is not None:
                choice = choices[next_index].text

        if user_input is not None and not predicting_choice:
            state.record_exchange(node.text, user_input)

        if next_index is not None:
            next_choice = choices[next_index]
            target = state.graph.follow(node.id, next_index)
            logger.info("Predicting the user's next choice... %s %s", node.id, node.text)
            predictions.append(
                Prediction(choice=next_choice.text, id=next_choice.next_id, tool_response=tool_response)
            )
            predicting_choice = True
            state.current_id = target.id

        node = state.current_node()

        if node.resets_history:
            state.reset_history()

        if node.suppresses_prediction:
            predicting_choice = False

        if next_index is None:
            predicting_choice = False

        if user_input is not None and node.tool:
            tool_response = await state.tools.run(node.tool, user_input, node_id=node.id)

        depth -= 1
        if not predicting_choice or depth == 0:
            break

    node = state.current_node()
    logger.info(
        json.dumps(
            {
                "event": "decision_turn_end",
                "current_id": state.current_id,
                "predictions": len(predictions),
                "inference": decision_prompt is not None,
                "terminal": node.is_terminal,
            },
            ensure_ascii=False,
        )
    )
    return DecisionResult(
        user_input=user_input,
        decision_prompt=decision_prompt,
        choice=choice,
        current_id=state.current_id,
        decision_node=node,
        predictions=predictions,
        tool_response=tool_response,
    )
