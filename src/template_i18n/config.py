"""Configuration management for the template i18n extractor."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXTENSIONS = [".html", ".htm", ".tmpl", ".gohtml", ".txt", ".tpl", ".jinja", ".j2"]
DEFAULT_PACKAGE = "main"
DEFAULT_STUB_FILE = "i18n_stub.py"


def normalize_extensions(extensions: list[str] | tuple[str, ...]) -> frozenset[str]:
    """Lower-case extensions and make sure each carries a leading dot.

    Blank entries are dropped, so an empty input matches nothing.
    """
    normalized = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        normalized.add(ext)
    return frozenset(normalized)


class Settings(BaseSettings):
    """Extractor defaults loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="I18N_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dir: str = Field(default=".", description="Directory to scan for templates")
    out: str = Field(default="", description="JSON output path (empty disables it)")
    stub_file: str = Field(
        default=DEFAULT_STUB_FILE,
        description="Synthetic Python module generated for pybabel extract",
    )
    package: str = Field(default=DEFAULT_PACKAGE, description="Package name used in the stub")
    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Template extensions to consider",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level",
    )

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, value: list[str]) -> list[str]:
        """Normalize extensions, keeping a stable sorted order."""
        return sorted(normalize_extensions(value))


# Global settings instance
settings = Settings()
