"""Custom exceptions for podgrab."""


class PodgrabError(Exception):
    """Base exception for all podgrab errors."""

    pass


class ConfigError(PodgrabError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class FeedError(PodgrabError):
    """Feed retrieval and parsing errors."""

    pass


class FetchError(FeedError):
    """Feed could not be fetched (bad status or transport failure)."""

    pass


class FeedParseError(FeedError):
    """Feed body is not a recognizable RSS/Atom document."""

    pass


class MissingFeedTitleError(FeedError):
    """Feed has no usable title to name the output directory after."""

    pass


class DirectoryError(PodgrabError):
    """Output directory could not be created."""

    pass


class DownloadError(PodgrabError):
    """Episode download failed."""

    pass


class RangeNotSupportedError(DownloadError):
    """Server answered a byte range request with the whole file."""

    pass


class OperationCancelledError(PodgrabError):
    """The run was cancelled by the user."""

    pass
