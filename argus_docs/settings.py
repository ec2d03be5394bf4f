from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the docs sync + validation tooling.

    Values are loaded from environment variables and `.env`.

    Notes:
    - DOCS_ROOT is the docs tree; sync destinations and validation are relative to it.
    - DOCS_CONFIG optionally points at a YAML file overriding the static tables.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DOCS_ROOT: Path = Field(default=Path("."))
    DOCS_CONFIG: Path | None = Field(default=None)

    # Validation
    # Strict mode requires `description` in addition to `title`.
    DOCS_STRICT: bool = Field(default=True)
    DOCS_CHECK_LINKS: bool = Field(default=True)

    # Logging (file log is off unless set; relative dirs resolve against the working directory)
    DOCS_LOG_DIR: Path | None = Field(default=None)
    DOCS_LOG_LEVEL: str = Field(default="INFO")
    DOCS_LOG_BACKUP_COUNT: int = Field(default=14)

    @field_validator("DOCS_CONFIG", "DOCS_LOG_DIR", mode="before")
    @classmethod
    def _blank_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def load_settings() -> Settings:
    return Settings()
