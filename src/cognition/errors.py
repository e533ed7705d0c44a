from __future__ import annotations


class CognitionError(Exception):
    """Base error of the decision engine. Every failed turn surfaces as one of these."""
    code: str = "cognition_error"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"Cognition error: {self.args[0] if self.args else ''}"


class NodeNotFound(CognitionError):
    code = "node_not_found"

    def __init__(self, node_id: str, *, source: str | None = None):
        if source:
            message = f"Decision node with ID '{node_id}' not found (referenced by '{source}')"
        else:
            message = f"Decision node with ID '{node_id}' not found"
        super().__init__(message)
        self.node_id = node_id
        self.source = source


class ToolNotFound(CognitionError):
    code = "tool_not_found"

    def __init__(self, tool_id: str):
        super().__init__(f"Could not find tool: {tool_id}")
        self.tool_id = tool_id


class ToolFailure(CognitionError):
    code = "tool_failure"


class InferenceFailure(CognitionError):
    code = "inference_failure"
