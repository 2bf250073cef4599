"""Runtime configuration."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

CONTEXT_FILE_NAME = "project.json"
METADATA_FILE_NAME = "__metadata.json"
TEMPLATE_DIR_NAME = "template"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="KILN_", case_sensitive=False)

    template_dir: Path = Path.home() / ".config" / "kiln" / "templates"
    scratch_prefix: str = "kiln-use-template"
    dir_mode: int = 0o755
    answer_file_mode: int = 0o644


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
