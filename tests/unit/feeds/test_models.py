"""Tests for feed data models."""

import pytest

from podgrab.feeds.models import (
    DEFAULT_EXTENSION,
    MEDIA_EXTENSIONS,
    Enclosure,
    FeedItem,
    MediaPayload,
    OtherPayload,
    extension_for,
)


class TestExtensionFor:
    """Tests for the MIME type to extension table."""

    @pytest.mark.parametrize(
        ("media_type", "extension"),
        [
            ("audio/mpeg", ".mp3"),
            ("audio/x-m4a", ".m4a"),
            ("audio/x-wav", ".wav"),
            ("audio/ogg", ".ogg"),
            ("audio/flac", ".flac"),
            ("audio/aac", ".aac"),
            ("audio/x-ms-wma", ".wma"),
            ("audio/x-ms-wax", ".wax"),
            ("audio/x-ms-wmv", ".wmv"),
        ],
    )
    def test_known_types(self, media_type: str, extension: str) -> None:
        assert extension_for(media_type) == extension

    def test_table_size(self) -> None:
        assert len(MEDIA_EXTENSIONS) == 9

    @pytest.mark.parametrize("media_type", ["video/mp4", "audio/mp4", "application/octet-stream", ""])
    def test_unknown_types_fall_back_to_bin(self, media_type: str) -> None:
        assert extension_for(media_type) == DEFAULT_EXTENSION == ".bin"

    def test_none(self) -> None:
        assert extension_for(None) == ".bin"

    def test_case_and_parameters_ignored(self) -> None:
        assert extension_for("Audio/MPEG") == ".mp3"
        assert extension_for("audio/ogg; codecs=opus") == ".ogg"


class TestFeedItem:
    """Tests for the item payload union."""

    def test_default_payload_is_other(self) -> None:
        item = FeedItem(title="Announcement")
        assert item.payload.kind == "other"
        assert isinstance(item.payload, OtherPayload)

    def test_media_payload(self) -> None:
        item = FeedItem(
            title="Episode 1",
            payload=MediaPayload(
                enclosure=Enclosure(url="https://example.com/1.mp3", media_type="audio/mpeg")
            ),
        )
        assert item.payload.kind == "media"
        assert item.payload.enclosure.extension == ".mp3"

    def test_payload_from_dict_uses_tag(self) -> None:
        item = FeedItem.model_validate(
            {
                "title": "Episode 2",
                "payload": {
                    "kind": "media",
                    "enclosure": {"url": "https://example.com/2.flac", "media_type": "audio/flac"},
                },
            }
        )
        assert isinstance(item.payload, MediaPayload)
        assert item.payload.enclosure.url == "https://example.com/2.flac"

    def test_unknown_tag_rejected(self) -> None:
        with pytest.raises(ValueError):
            FeedItem.model_validate({"title": "x", "payload": {"kind": "video"}})
