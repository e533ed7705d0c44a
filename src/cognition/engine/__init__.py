from .decision import PREDICTION_MAX_TOKENS, PREDICTION_TEMPERATURE, predict_choice, run_decision
from .result import DecisionResult, Prediction
from .state import MAX_CHAIN_DEPTH, DecisionState

__all__ = [
    "DecisionResult",
    "DecisionState",
    "MAX_CHAIN_DEPTH",
    "PREDICTION_MAX_TOKENS",
    "PREDICTION_TEMPERATURE",
    "Prediction",
    "predict_choice",
    "run_decision",
]
