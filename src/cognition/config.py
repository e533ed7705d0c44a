from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from cognition.secrets import get_secret

_TRUTHY = {"1", "true", "yes"}


def object_by_path(config: Any, search_path: str) -> Any:
    """Walk a parsed config document by dotted path; None when any segment is missing."""
    current = config
    for part in search_path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def string_by_path(config: Any, search_path: str) -> Optional[str]:
    value = object_by_path(config, search_path)
    return value if isinstance(value, str) else None


def load_config_file(path: str | Path | None) -> dict:
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


@dataclass(frozen=True)
class CognitionSettings:
    graph_path: str = "decision_tree.yaml"
    template_path: str = "decision_prompt_template.yaml"
    backend: str = "openai"
    model: str = "gpt-3.5-turbo-instruct"
    textgen_server: str | None = None
    agent_name: str = "Agent"
    user_name: str = "User"
    timeout_s: float = 20.0
    strict_graph: bool = False
    log_level: str = "warning"
    openai_api_key: str | None = None
    wolfram_app_id: str | None = None

    @classmethod
    def from_env(cls) -> "CognitionSettings":
        load_dotenv()
        file_config = load_config_file(os.getenv("COGNITION_CONFIG"))
        return cls(
            graph_path=os.getenv("COGNITION_GRAPH_PATH", "decision_tree.yaml"),
            template_path=os.getenv("COGNITION_TEMPLATE_PATH", "decision_prompt_template.yaml"),
            backend=os.getenv("COGNITION_BACKEND", "openai").lower(),
            model=os.getenv("COGNITION_MODEL", "gpt-3.5-turbo-instruct"),
            textgen_server=os.getenv("TEXTGEN_SERVER") or string_by_path(file_config, "models.textgen.server"),
            agent_name=os.getenv("COGNITION_AGENT_NAME", "Agent"),
            user_name=os.getenv("COGNITION_USER_NAME", "User"),
            timeout_s=float(os.getenv("COGNITION_TIMEOUT_S", "20")),
            strict_graph=os.getenv("COGNITION_STRICT_GRAPH", "false").lower() in _TRUTHY,
            log_level=os.getenv("COGNITION_LOG_LEVEL", "warning"),
            openai_api_key=get_secret("OPENAI_API_KEY") or string_by_path(file_config, "models.openai.api_key"),
            wolfram_app_id=get_secret("WOLFRAM_APP_ID") or string_by_path(file_config, "tools.wolfram_alpha.app_id"),
        )
