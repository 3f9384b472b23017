"""Feed retrieval and RSS parsing for podgrab."""

from podgrab.feeds.fetcher import FeedFetcher
from podgrab.feeds.models import (
    Enclosure,
    Feed,
    FeedItem,
    MediaPayload,
    OtherPayload,
    extension_for,
)
from podgrab.feeds.parser import RSSParser

__all__ = [
    "FeedFetcher",
    "RSSParser",
    "Feed",
    "FeedItem",
    "Enclosure",
    "MediaPayload",
    "OtherPayload",
    "extension_for",
]
