from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment/.env."""

    api_key: str | None = Field(default=None, alias="api_key")
    api_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    model: str = Field(default="gemini-2.5-flash")
    api_timeout: float = Field(default=60.0)
    user_agent: str = Field(default="ecourts-causelist/0.1")
    data_source: Literal["gemini", "fixture"] = Field(default="gemini")
    fixture_path: Path = Field(default=Path("data/fixtures/cause_lists.json"))
    output_dir: Path = Field(default=Path("outputs/causelists"))
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="CAUSELIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),
    )
