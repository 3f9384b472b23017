"""Utility functions and helpers for podgrab."""

from podgrab.utils.errors import (
    ConfigError,
    DirectoryError,
    DownloadError,
    FeedError,
    FeedParseError,
    FetchError,
    InvalidConfigError,
    MissingFeedTitleError,
    OperationCancelledError,
    PodgrabError,
    RangeNotSupportedError,
)
from podgrab.utils.files import (
    fit_filename,
    sanitize_filename,
    stamp_file_times,
    truncate_utf8,
)
from podgrab.utils.paths import get_config_dir, get_config_file

__all__ = [
    # Errors
    "PodgrabError",
    "ConfigError",
    "InvalidConfigError",
    "FeedError",
    "FetchError",
    "FeedParseError",
    "MissingFeedTitleError",
    "DirectoryError",
    "DownloadError",
    "RangeNotSupportedError",
    "OperationCancelledError",
    # Files
    "sanitize_filename",
    "fit_filename",
    "truncate_utf8",
    "stamp_file_times",
    # Paths
    "get_config_dir",
    "get_config_file",
]
