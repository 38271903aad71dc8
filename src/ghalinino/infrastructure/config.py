"""Application settings, read from the environment or a ``.env`` file.

Only the composition root and the CLI read these; the domain and
application layers receive everything they need as arguments.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GHALININO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = _PROJECT_ROOT / "data"
    log_level: str = "WARNING"


def get_settings() -> Settings:
    return Settings()
