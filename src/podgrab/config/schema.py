"""Configuration schema models using Pydantic."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from podgrab import __version__

DEFAULT_USER_AGENT = f"podgrab/{__version__}"


class GlobalConfig(BaseModel):
    """Global podgrab configuration."""

    version: str = "1"
    default_output_dir: Path | None = None  # None means the current directory
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = Field(default=30.0, gt=0)

    # Chunked downloader
    chunk_count: int = Field(default=8, ge=1)
    parallel_download: bool = True

    @field_validator("default_output_dir")
    @classmethod
    def expand_user(cls, value: Path | None) -> Path | None:
        """Expand ``~`` so paths from YAML behave like shell paths."""
        if value is None:
            return None
        return value.expanduser()

    @field_validator("user_agent")
    @classmethod
    def user_agent_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("user_agent must not be empty")
        return value.strip()
