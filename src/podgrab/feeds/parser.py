"""RSS feed parser using feedparser."""

import calendar
import time
from datetime import datetime, timezone
from typing import Any

import feedparser

from podgrab.feeds.models import (
    Enclosure,
    Feed,
    FeedItem,
    ItemPayload,
    MediaPayload,
    OtherPayload,
)


class RSSParser:
    """Parses RSS/Atom documents into Feed models."""

    def parse(self, body: bytes | str) -> Feed | None:
        """Parse a feed document.

        Args:
            body: Raw feed document; bytes are decoded using the XML prolog

        Returns:
            Parsed Feed, or None if the body is not a recognizable feed
        """
        parsed = feedparser.parse(body)

        # Malformed-but-recognized feeds are still used (bozo with a version).
        if not parsed.get("version") and not parsed.entries:
            return None

        return Feed(
            title=parsed.feed.get("title", "") or "",
            items=[self._parse_entry(entry) for entry in parsed.entries],
        )

    def _parse_entry(self, entry: Any) -> FeedItem:
        return FeedItem(
            title=entry.get("title", "") or "",
            published=self._parse_date(entry),
            payload=self._parse_payload(entry),
        )

    def _parse_payload(self, entry: Any) -> ItemPayload:
        """Classify an entry as media (has an enclosure) or other."""
        enclosures = entry.get("enclosures") or []
        if enclosures:
            first = enclosures[0]
            return MediaPayload(
                enclosure=Enclosure(
                    url=first.get("href") or first.get("url") or None,
                    media_type=first.get("type", "") or "",
                )
            )

        media_content = entry.get("media_content") or []
        if media_content:
            first = media_content[0]
            return MediaPayload(
                enclosure=Enclosure(
                    url=first.get("url") or None,
                    media_type=first.get("type", "") or "",
                )
            )

        return OtherPayload()

    def _parse_date(self, entry: Any) -> datetime | None:
        """Published date as an aware UTC datetime.

        feedparser normalizes parsed dates to UTC ``struct_time`` values.
        """
        parsed: time.struct_time | None = entry.get("published_parsed") or entry.get(
            "updated_parsed"
        )
        if not parsed:
            return None
        return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
