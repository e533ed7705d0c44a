from .base import Tool, ToolResponse
from .registry import ToolRegistry
from .signal import Signal, signal_book
from .wolfram_alpha import WolframAlpha

__all__ = [
    "Signal",
    "Tool",
    "ToolRegistry",
    "ToolResponse",
    "WolframAlpha",
    "signal_book",
]
