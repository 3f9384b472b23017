"""Feed-to-disk download pipeline.

Fetches a feed, resolves the output directory from its title and downloads
every media item oldest first, one at a time.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from podgrab.audio.downloader import PART_SUFFIX, ChunkedDownloader, DownloadResult
from podgrab.config.schema import GlobalConfig
from podgrab.feeds.fetcher import FeedFetcher
from podgrab.feeds.models import Feed, FeedItem
from podgrab.feeds.parser import RSSParser
from podgrab.pipeline.models import EpisodeOutcome, RunOutcome, RunReport
from podgrab.utils.errors import (
    DirectoryError,
    FeedParseError,
    MissingFeedTitleError,
    OperationCancelledError,
    PodgrabError,
)
from podgrab.utils.files import (
    MAX_FILENAME_LENGTH,
    fit_filename,
    sanitize_filename,
    stamp_file_times,
)

# Leaves room for the partial-download suffix.
MAX_EPISODE_NAME_BYTES = MAX_FILENAME_LENGTH - len(PART_SUFFIX)


class Downloader(Protocol):
    async def download(
        self, url: str, destination: Path, cancel_event: asyncio.Event | None = None
    ) -> DownloadResult: ...


@dataclass
class EpisodePlan:
    """Decision for one feed item: where to download it, or why not."""

    item: FeedItem
    url: str | None = None
    target: Path | None = None
    skip_reason: str | None = None

    @property
    def eligible(self) -> bool:
        return self.skip_reason is None


def resolve_output_directory(feed: Feed, base_dir: Path) -> Path:
    """Create ``base_dir/<sanitized feed title>`` and return it.

    Raises:
        DirectoryError: If the directory cannot be created
    """
    directory = base_dir / sanitize_filename(feed.title)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryError(f"Failed to create directory {directory}: {e}") from e

    if not directory.is_dir():
        raise DirectoryError(f"Failed to create directory {directory}")

    return directory


def plan_episode(item: FeedItem, output_directory: Path) -> EpisodePlan:
    """Decide whether ``item`` should be downloaded and name its file."""
    title = item.title.strip()
    if not title:
        return EpisodePlan(item=item, skip_reason="Item has no title")

    if item.payload.kind != "media":
        return EpisodePlan(item=item, skip_reason=f"Item is not a media item: {title}")

    enclosure = item.payload.enclosure
    if not enclosure.url:
        return EpisodePlan(item=item, skip_reason=f"Item has no enclosure: {title}")

    name = fit_filename(
        sanitize_filename(title), enclosure.extension, MAX_EPISODE_NAME_BYTES
    )
    target = output_directory / name
    if target.exists():
        return EpisodePlan(
            item=item, target=target, skip_reason=f"File already exists: {title}"
        )

    return EpisodePlan(item=item, url=enclosure.url, target=target)


class DownloadPipeline:
    """Runs one feed through fetch, parse, directory setup and downloads.

    Example:
        >>> pipeline = DownloadPipeline(GlobalConfig(), logger)
        >>> report = await pipeline.run("https://example.com/feed.xml")
        >>> report.downloaded
        12
    """

    def __init__(
        self,
        config: GlobalConfig,
        logger: logging.Logger,
        fetcher: FeedFetcher | None = None,
        parser: RSSParser | None = None,
        downloader: Downloader | None = None,
    ) -> None:
        self.config = config
        self.logger = logger
        self.fetcher = fetcher or FeedFetcher(
            user_agent=config.user_agent, timeout=config.request_timeout
        )
        self.parser = parser or RSSParser()
        self.downloader = downloader or ChunkedDownloader(
            chunk_count=config.chunk_count,
            parallel=config.parallel_download,
            user_agent=config.user_agent,
            timeout=config.request_timeout,
        )

    async def run(
        self,
        url: str,
        base_dir: Path | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> RunReport:
        """Download every episode of the feed at ``url``.

        Args:
            url: Feed URL
            base_dir: Parent of the per-feed directory (defaults to config,
                then the current directory)
            cancel_event: Set to stop the run at the next episode boundary

        Returns:
            RunReport describing the outcome and every episode
        """
        cancel_event = cancel_event or asyncio.Event()
        report = RunReport(url=url)

        try:
            feed = await self._load_feed(url, cancel_event)
            report.feed_title = feed.title
            report.output_directory = resolve_output_directory(
                feed, base_dir or self.config.default_output_dir or Path.cwd()
            )
        except OperationCancelledError:
            self.logger.warning("Download cancelled.")
            report.outcome = RunOutcome.CANCELLED
            return report
        except PodgrabError as e:
            self.logger.error(str(e))
            report.outcome = RunOutcome.FAILED
            report.error = str(e)
            return report

        self.logger.info(f"Output Directory: {report.output_directory}")
        await self._download_items(feed, report.output_directory, cancel_event, report)
        return report

    async def _load_feed(self, url: str, cancel_event: asyncio.Event) -> Feed:
        self.logger.info(f"Downloading {url}")
        body = await self.fetcher.fetch(url, cancel_event)

        feed = self.parser.parse(body)
        if feed is None:
            raise FeedParseError(f"Failed to parse {url}")

        if not feed.title.strip():
            raise MissingFeedTitleError(f"Failed to get feed title for {url}")

        self.logger.info(f"Feed Title: {feed.title}")
        return feed

    async def _download_items(
        self,
        feed: Feed,
        output_directory: Path,
        cancel_event: asyncio.Event,
        report: RunReport,
    ) -> None:
        # Feeds list newest first; download oldest first.
        for item in reversed(feed.items):
            if cancel_event.is_set():
                self.logger.warning("Download cancelled.")
                report.outcome = RunOutcome.CANCELLED
                return

            try:
                report.episodes.append(
                    await self._process_item(item, output_directory, cancel_event)
                )
            except OSError as e:
                # Filesystem errors (such as a rejected name) fail only this item.
                self.logger.error(f"Failed to download {item.title}: {e}")
                report.episodes.append(
                    EpisodeOutcome(title=item.title, status="failed", reason=str(e))
                )

        # Cancelled while the last download was in flight.
        if cancel_event.is_set():
            report.outcome = RunOutcome.CANCELLED

    async def _process_item(
        self, item: FeedItem, output_directory: Path, cancel_event: asyncio.Event
    ) -> EpisodeOutcome:
        plan = plan_episode(item, output_directory)
        if not plan.eligible:
            self.logger.warning(plan.skip_reason)
            return EpisodeOutcome(
                title=item.title,
                status="skipped",
                path=plan.target,
                reason=plan.skip_reason,
            )

        return await self._download_episode(plan, cancel_event)

    async def _download_episode(
        self, plan: EpisodePlan, cancel_event: asyncio.Event
    ) -> EpisodeOutcome:
        title = plan.item.title
        target = plan.target

        self.logger.info(f"Downloading {title}")
        result = await self.downloader.download(plan.url, target, cancel_event)
        self._log_result(result)

        if not target.exists():
            self.logger.error(f"Failed to download {title}")
            return EpisodeOutcome(
                title=title,
                status="failed",
                path=target,
                reason=result.error or f"Download {result.status}",
            )

        if plan.item.published is not None:
            try:
                stamp_file_times(target, plan.item.published)
            except (OSError, OverflowError, ValueError) as e:
                self.logger.warning(f"Failed to set file date for {title}: {e}")

        return EpisodeOutcome(title=title, status="downloaded", path=target)

    def _log_result(self, result: DownloadResult) -> None:
        if result.status == "error":
            self.logger.error(f"Download failed: {result.error}")
        elif result.status == "cancelled":
            self.logger.warning("Download cancelled")
        else:
            self.logger.info(f"Downloaded {result.destination.name}")
