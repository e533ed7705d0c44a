from __future__ import annotations

from pathlib import Path

CHOICE_SEPARATOR = "\n  - "


class DecisionPromptTemplate:
    """
    Prediction prompt template with four placeholders:
    `{{history}}`, `{{decision_prompt}}`, `{{choices}}`, `{{user_input}}`.

    Rendering is plain substitution; anything else that looks like a
    placeholder is left as it is.
    """

    def __init__(self, content: str):
        self.content = content

    @classmethod
    def from_file(cls, path: str | Path) -> "DecisionPromptTemplate":
        return cls(Path(path).read_text(encoding="utf-8"))

    def format(self, history: str, decision_prompt: str, choices: str, user_input: str) -> str:
        return (
            self.content.replace("{{history}}", history)
            .replace("{{decision_prompt}}", decision_prompt)
            .replace("{{choices}}", choices)
            .replace("{{user_input}}", user_input)
        )


def join_choices(texts: list[str]) -> str:
    return CHOICE_SEPARATOR.join(texts)
