"""Episode download module for podgrab."""

from podgrab.audio.downloader import (
    ChunkedDownloader,
    DownloadProgress,
    DownloadResult,
    split_ranges,
)

__all__ = [
    "ChunkedDownloader",
    "DownloadProgress",
    "DownloadResult",
    "split_ranges",
]
