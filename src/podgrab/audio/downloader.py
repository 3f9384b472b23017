"""Chunked episode downloader using httpx.

Large files are fetched as several byte ranges in parallel when the server
supports it, otherwise streamed in a single request. Data is written to a
``.part`` file that only replaces the destination once the transfer is
complete.
"""

import asyncio
import contextlib
from collections.abc import Callable
from pathlib import Path
from typing import Literal

import aiofiles
import httpx
from pydantic import BaseModel, Field

from podgrab.config.schema import DEFAULT_USER_AGENT
from podgrab.utils.cancellation import raise_if_cancelled
from podgrab.utils.errors import (
    DownloadError,
    OperationCancelledError,
    RangeNotSupportedError,
)

PART_SUFFIX = ".part"
READ_SIZE = 64 * 1024

DownloadStatus = Literal["success", "error", "cancelled"]


class DownloadProgress(BaseModel):
    """Progress information for an episode download."""

    status: str = Field(..., description="Current download status")
    filename: str | None = Field(default=None, description="Name of the file being written")
    downloaded_bytes: int = Field(default=0, ge=0, description="Bytes downloaded so far")
    total_bytes: int | None = Field(
        default=None, ge=0, description="Total bytes to download (if known)"
    )

    @property
    def percentage(self) -> float | None:
        """Calculate download percentage if total is known."""
        if self.total_bytes and self.total_bytes > 0:
            return (self.downloaded_bytes / self.total_bytes) * 100
        return None


class DownloadResult(BaseModel):
    """Outcome of a single download call."""

    status: DownloadStatus
    destination: Path
    bytes_downloaded: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


def split_ranges(total: int, count: int) -> list[tuple[int, int]]:
    """Split ``total`` bytes into ``count`` inclusive ranges.

    The last range absorbs the remainder.

    Example:
        >>> split_ranges(10, 3)
        [(0, 2), (3, 5), (6, 9)]
    """
    size = total // count
    ranges = []
    for index in range(count):
        start = index * size
        end = total - 1 if index == count - 1 else start + size - 1
        ranges.append((start, end))
    return ranges


def _discard(part_path: Path) -> None:
    """Remove a partial download, ignoring paths that cannot be touched."""
    with contextlib.suppress(OSError):
        part_path.unlink(missing_ok=True)


class ChunkedDownloader:
    """Download files over HTTP, splitting them into parallel ranges."""

    def __init__(
        self,
        chunk_count: int = 8,
        parallel: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        progress_callback: Callable[[DownloadProgress], None] | None = None,
    ):
        """Initialize the downloader.

        Args:
            chunk_count: Number of byte ranges fetched concurrently per file
            parallel: Disable to always stream files in a single request
            user_agent: Value of the User-Agent header
            timeout: HTTP timeout in seconds
            client: Optional httpx client (mainly for testing)
            progress_callback: Optional callback for progress updates
        """
        if chunk_count < 1:
            raise ValueError("chunk_count must be at least 1")

        self.chunk_count = chunk_count
        self.parallel = parallel
        self.user_agent = user_agent
        self.timeout = timeout
        self.client = client
        self.progress_callback = progress_callback

        self._downloaded = 0
        self._total: int | None = None
        self._filename: str | None = None

    async def download(
        self,
        url: str,
        destination: Path,
        cancel_event: asyncio.Event | None = None,
    ) -> DownloadResult:
        """Download ``url`` to ``destination``.

        Never raises for transfer problems; the outcome is reported in the
        returned DownloadResult. On error or cancellation no file is left at
        ``destination``.

        Args:
            url: Media URL
            destination: Final file path
            cancel_event: Run-level cancellation signal, checked between reads

        Returns:
            DownloadResult with status success, error or cancelled
        """
        part_path = destination.with_name(destination.name + PART_SUFFIX)
        self._downloaded = 0
        self._total = None
        self._filename = destination.name

        owns_client = self.client is None
        client = self.client or httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=True
        )

        try:
            await self._transfer(client, url, part_path, cancel_event)
            part_path.replace(destination)
        except OperationCancelledError:
            _discard(part_path)
            return DownloadResult(
                status="cancelled",
                destination=destination,
                bytes_downloaded=self._downloaded,
            )
        except httpx.HTTPStatusError as e:
            _discard(part_path)
            return self._failure(destination, f"HTTP {e.response.status_code} from {url}")
        except httpx.RequestError as e:
            _discard(part_path)
            return self._failure(destination, f"Failed to connect to {url}: {e}")
        except DownloadError as e:
            _discard(part_path)
            return self._failure(destination, str(e))
        except OSError as e:
            _discard(part_path)
            return self._failure(destination, f"Failed to write {destination}: {e}")
        finally:
            if owns_client:
                await client.aclose()

        return DownloadResult(
            status="success",
            destination=destination,
            bytes_downloaded=self._downloaded,
        )

    def _failure(self, destination: Path, message: str) -> DownloadResult:
        return DownloadResult(
            status="error",
            destination=destination,
            bytes_downloaded=self._downloaded,
            error=message,
        )

    async def _transfer(
        self,
        client: httpx.AsyncClient,
        url: str,
        part_path: Path,
        cancel_event: asyncio.Event | None,
    ) -> None:
        raise_if_cancelled(cancel_event)

        total, supports_ranges = await self._probe(client, url)
        self._total = total

        if (
            self.parallel
            and self.chunk_count > 1
            and supports_ranges
            and total is not None
            and total >= self.chunk_count
        ):
            try:
                await self._download_ranges(client, url, part_path, total, cancel_event)
            except RangeNotSupportedError:
                self._downloaded = 0
                await self._download_stream(client, url, part_path, cancel_event)
        else:
            await self._download_stream(client, url, part_path, cancel_event)

        self._report("finished")

    async def _probe(self, client: httpx.AsyncClient, url: str) -> tuple[int | None, bool]:
        """Ask the server for the file size and range support."""
        try:
            response = await client.head(url, headers=self._headers())
        except httpx.RequestError:
            # Some hosts reject HEAD; the GET that follows reports real failures.
            return None, False

        if not response.is_success:
            return None, False

        length = response.headers.get("content-length", "")
        total = int(length) if length.isdigit() else None
        supports_ranges = response.headers.get("accept-ranges", "").lower() == "bytes"
        return total, supports_ranges

    async def _download_stream(
        self,
        client: httpx.AsyncClient,
        url: str,
        part_path: Path,
        cancel_event: asyncio.Event | None,
    ) -> None:
        async with client.stream("GET", url, headers=self._headers()) as response:
            response.raise_for_status()
            if self._total is None:
                length = response.headers.get("content-length", "")
                self._total = int(length) if length.isdigit() else None

            async with aiofiles.open(part_path, "wb") as f:
                async for data in response.aiter_bytes(READ_SIZE):
                    raise_if_cancelled(cancel_event)
                    await f.write(data)
                    self._advance(len(data))

    async def _download_ranges(
        self,
        client: httpx.AsyncClient,
        url: str,
        part_path: Path,
        total: int,
        cancel_event: asyncio.Event | None,
    ) -> None:
        async with aiofiles.open(part_path, "wb") as f:
            await f.truncate(total)

        tasks = [
            asyncio.create_task(
                self._download_range(client, url, part_path, start, end, cancel_event)
            )
            for start, end in split_ranges(total, self.chunk_count)
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _download_range(
        self,
        client: httpx.AsyncClient,
        url: str,
        part_path: Path,
        start: int,
        end: int,
        cancel_event: asyncio.Event | None,
    ) -> None:
        headers = self._headers({"Range": f"bytes={start}-{end}"})
        expected = end - start + 1
        written = 0

        async with client.stream("GET", url, headers=headers) as response:
            response.raise_for_status()
            if response.status_code != 206:
                raise RangeNotSupportedError(f"Server ignored range request for {url}")

            async with aiofiles.open(part_path, "r+b") as f:
                await f.seek(start)
                async for data in response.aiter_bytes(READ_SIZE):
                    raise_if_cancelled(cancel_event)
                    data = data[: expected - written]
                    await f.write(data)
                    written += len(data)
                    self._advance(len(data))

        if written != expected:
            raise DownloadError(
                f"Incomplete range {start}-{end} from {url}: got {written} of {expected} bytes"
            )

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if extra:
            headers.update(extra)
        return headers

    def _advance(self, count: int) -> None:
        self._downloaded += count
        self._report("downloading")

    def _report(self, status: str) -> None:
        if not self.progress_callback:
            return
        self.progress_callback(
            DownloadProgress(
                status=status,
                filename=self._filename,
                downloaded_bytes=self._downloaded,
                total_bytes=self._total,
            )
        )
