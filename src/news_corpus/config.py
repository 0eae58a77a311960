"""Configuration helpers for the corpus builder."""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .locales import LOCALES


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="NEWS_CORPUS_", env_file=".env", env_file_encoding="utf-8"
    )

    input_dir: Optional[str] = Field(
        None, description="Directory holding one exported article per file."
    )
    extension: str = Field(".rtf", description="File extension filter for article files.")
    locale: str = Field(
        "english", description="Month-name locale for dates: english, dutch or french."
    )
    french_outlets: List[str] = Field(
        default_factory=list,
        description=(
            "Outlet identifiers tagged as French. Empty means no outlet is assumed "
            "French; every row then gets the default language tag."
        ),
    )
    missing_source_column: str = Field(
        "unknown_source",
        description="Indicator column for articles whose outlet could not be parsed.",
    )
    max_workers: int = Field(1, ge=1, description="Threads used for per-article extraction.")
    output_path: Optional[str] = Field(
        None, description="Default destination for the corpus table (.csv, .json, .parquet)."
    )

    @field_validator("locale")
    @classmethod
    def _known_locale(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in LOCALES:
            raise ValueError(f"locale must be one of: {', '.join(sorted(LOCALES))}")
        return value

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        value = value.strip().lower()
        return value if value.startswith(".") else f".{value}"


def get_settings() -> Settings:
    """Return a settings instance read from the current environment."""
    return Settings()
