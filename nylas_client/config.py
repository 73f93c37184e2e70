"""Client configuration — env vars, YAML file, defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings

DEFAULT_API_SERVER = "https://api.nylas.com"


def _repo_root() -> Path:
    """Find the repository root (directory containing pyproject.toml)."""
    current = Path(__file__).resolve().parent.parent
    if (current / "pyproject.toml").exists():
        return current
    return Path.cwd()


REPO_ROOT = _repo_root()


class NylasConfig(BaseSettings):
    """Application credentials and connection settings."""

    app_id: str = ""
    app_secret: str = ""
    access_token: str | None = None
    api_server: str = DEFAULT_API_SERVER
    api_root: str = "n"
    timeout: float = 30.0

    # CLI only
    log_level: str = "info"
    environment: str = "development"
    sentry_dsn: str = ""

    model_config = {"env_prefix": "NYLAS_"}

    @classmethod
    def from_yaml(cls, path: Path | None = None) -> NylasConfig:
        """Load config from YAML file, with env var overrides."""
        if path is None:
            path = REPO_ROOT / "config" / "nylas.yml"

        values: dict[str, Any] = {}
        if path.exists():
            with open(path) as f:
                values = yaml.safe_load(f) or {}

        # Init kwargs beat env vars in pydantic-settings; keep env on top
        env = cls()
        for name in env.model_fields_set:
            values.pop(name, None)
        return cls(**values)
