from __future__ import annotations

from pathlib import Path
from typing import Any, List

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_PATH = Path(__file__).parent / "data" / "seed_catalog.yaml"


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    api_prefix: str = "/api"
    session_header: str = "x-session-id"
    anonymous_session: str = "anonymous"
    seed_path: Path = DEFAULT_SEED_PATH
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file="config/.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def load_settings() -> Settings:
    """Provide a fresh settings object."""

    return Settings()


def load_seed_catalog(path: str | Path | None = None) -> dict[str, Any]:
    """Load the startup catalog (categories, medicines, reviews) from YAML."""

    cfg_path = Path(path) if path is not None else settings.seed_path
    if not cfg_path.exists():
        raise FileNotFoundError(f"Seed catalog not found at {cfg_path}")

    with cfg_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    if not isinstance(data, dict):
        raise ValueError("seed catalog must be a mapping at the top level.")

    if not isinstance(data.get("categories"), list):
        raise ValueError("seed catalog must contain a 'categories' list.")

    data.setdefault("medicines", [])
    data.setdefault("reviews", [])
    return data


settings = load_settings()
