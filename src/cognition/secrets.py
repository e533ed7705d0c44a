from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional

from dotenv import dotenv_values


def default_secrets_dir() -> Path:
    """
    Where API keys are looked up when they are not in the environment.

    `COGNITION_SECRETS_DIR` when set; otherwise a `secrets/` directory next to
    the `COGNITION_CONFIG` file, or under the working directory when no config
    file is used.
    """
    override = (os.getenv("COGNITION_SECRETS_DIR") or "").strip()
    if override:
        return Path(override).expanduser()
    config_path = (os.getenv("COGNITION_CONFIG") or "").strip()
    base = Path(config_path).expanduser().parent if config_path else Path.cwd()
    return base / "secrets"


def _candidates(name: str, secrets_dir: Path) -> Iterator[Optional[str]]:
    yield os.getenv(name)

    env_file = secrets_dir / ".env"
    if env_file.is_file():
        yield dotenv_values(env_file).get(name)

    # one file per secret, as docker/k8s mount them
    secret_file = secrets_dir / name
    if secret_file.is_file():
        yield secret_file.read_text(encoding="utf-8")


def get_secret(name: str, *, secrets_dir: Path | None = None) -> Optional[str]:
    """First non-blank value of: env var, `<secrets_dir>/.env`, `<secrets_dir>/<name>`."""
    for value in _candidates(name, secrets_dir or default_secrets_dir()):
        value = (value or "").strip()
        if value:
            return value
    return None
