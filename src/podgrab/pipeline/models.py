"""Result models for a download run."""

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

EpisodeStatus = Literal["downloaded", "skipped", "failed"]


class RunOutcome(str, Enum):
    """How a run ended."""

    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def exit_code(self) -> int:
        return {
            RunOutcome.COMPLETED: 0,
            RunOutcome.FAILED: 1,
            RunOutcome.CANCELLED: 130,
        }[self]


class EpisodeOutcome(BaseModel):
    """What happened to one feed item."""

    title: str
    status: EpisodeStatus
    path: Path | None = None
    reason: str | None = None


class RunReport(BaseModel):
    """Summary of a complete run."""

    url: str
    outcome: RunOutcome = RunOutcome.COMPLETED
    feed_title: str | None = None
    output_directory: Path | None = None
    error: str | None = None
    episodes: list[EpisodeOutcome] = Field(default_factory=list)

    def _count(self, status: EpisodeStatus) -> int:
        return sum(1 for episode in self.episodes if episode.status == status)

    @property
    def downloaded(self) -> int:
        return self._count("downloaded")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")

    @property
    def attempted(self) -> list[str]:
        """Titles of episodes that reached the downloader, in order."""
        return [e.title for e in self.episodes if e.status != "skipped"]
