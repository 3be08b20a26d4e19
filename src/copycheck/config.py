"""Configuration management for copycheck."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REPORT_NAME = "missing_files.txt"
DEFAULT_CHUNK_SIZE = 1024 * 1024


class CopycheckConfig(BaseSettings):
    """Settings for a copycheck run."""

    report_name: str = Field(
        default=REPORT_NAME,
        description="Name of the missing files report written inside the source root",
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        description="Number of bytes read at a time while hashing a file",
    )
    # The size of a file is added once stat succeeds, even if reading it fails later
    count_failed_reads: bool = Field(
        default=True,
        description="Count the size of files that could be stat'ed but not read",
    )
    show_progress: bool = Field(
        default=True,
        description="Print every directory visited during a scan",
    )
    log_level: str = Field(default="INFO", description="Log level for stderr output")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    model_config = SettingsConfigDict(
        env_prefix="COPYCHECK_",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("chunk_size")
    @classmethod
    def ensure_positive_chunk(cls, v: int) -> int:
        """Chunk size must allow progress."""
        if v <= 0:
            raise ValueError("chunk_size must be positive")
        return v

    @field_validator("report_name")
    @classmethod
    def ensure_bare_name(cls, v: str) -> str:
        """The report always lands in the source root, so no directories allowed."""
        if not v or v in (".", "..") or "/" in v or "\\" in v:
            raise ValueError(f"report_name must be a plain file name: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper()


def get_config(**overrides) -> CopycheckConfig:
    """Load settings from the environment; non-None overrides take precedence."""
    return CopycheckConfig(**{k: v for k, v in overrides.items() if v is not None})
