"""Download pipeline orchestration."""

from podgrab.pipeline.models import EpisodeOutcome, RunOutcome, RunReport
from podgrab.pipeline.orchestrator import (
    DownloadPipeline,
    EpisodePlan,
    plan_episode,
    resolve_output_directory,
)

__all__ = [
    "DownloadPipeline",
    "EpisodePlan",
    "EpisodeOutcome",
    "RunOutcome",
    "RunReport",
    "plan_episode",
    "resolve_output_directory",
]
