"""Data models for parsed podcast feeds."""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field

DEFAULT_EXTENSION = ".bin"

MEDIA_EXTENSIONS: dict[str, str] = {
    "audio/mpeg": ".mp3",
    "audio/x-m4a": ".m4a",
    "audio/x-wav": ".wav",
    "audio/ogg": ".ogg",
    "audio/flac": ".flac",
    "audio/aac": ".aac",
    "audio/x-ms-wma": ".wma",
    "audio/x-ms-wax": ".wax",
    "audio/x-ms-wmv": ".wmv",
}


def extension_for(media_type: str | None) -> str:
    """Map a MIME type to a file extension.

    Matching ignores case and MIME parameters; unknown or missing
    types map to ``.bin``.

    Examples:
        >>> extension_for("audio/mpeg")
        '.mp3'
        >>> extension_for("video/mp4")
        '.bin'
    """
    if not media_type:
        return DEFAULT_EXTENSION
    essence = media_type.split(";", 1)[0].strip().lower()
    return MEDIA_EXTENSIONS.get(essence, DEFAULT_EXTENSION)


class Enclosure(BaseModel):
    """Media attachment of a feed item."""

    url: str | None = None
    media_type: str = ""

    @property
    def extension(self) -> str:
        return extension_for(self.media_type)


class MediaPayload(BaseModel):
    """Item carrying a media enclosure."""

    kind: Literal["media"] = "media"
    enclosure: Enclosure = Field(default_factory=Enclosure)


class OtherPayload(BaseModel):
    """Item without any media attachment (blog post, announcement...)."""

    kind: Literal["other"] = "other"


ItemPayload = Annotated[MediaPayload | OtherPayload, Field(discriminator="kind")]


class FeedItem(BaseModel):
    """A single entry of a feed."""

    title: str = ""
    published: datetime | None = None
    payload: ItemPayload = Field(default_factory=OtherPayload)


class Feed(BaseModel):
    """A parsed feed: its title and items in document order."""

    title: str = ""
    items: list[FeedItem] = Field(default_factory=list)
