"""Filename sanitation and file metadata helpers."""

import os
import re
from datetime import datetime
from pathlib import Path

# Most filesystems limit a single path component to 255 bytes.
MAX_FILENAME_LENGTH = 255

# Characters rejected by at least one common filesystem, plus whitespace.
_INVALID_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f\x7f\s]')


def truncate_utf8(text: str, max_bytes: int) -> str:
    """Cut ``text`` so its UTF-8 encoding fits in ``max_bytes``.

    Never splits a multi-byte character.
    """
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def sanitize_filename(text: str) -> str:
    """Make ``text`` safe to use as a single path component.

    Surrounding whitespace is stripped, every remaining invalid character
    (reserved punctuation, control characters, whitespace) becomes ``_``,
    and the result is cut to 255 bytes of UTF-8. Names made only of dots
    would point at the current or parent directory and become ``_``.

    Examples:
        >>> sanitize_filename("My Show: Ep")
        'My_Show__Ep'
        >>> sanitize_filename("Ep 1/2")
        'Ep_1_2'
        >>> sanitize_filename("..")
        '_'
    """
    name = _INVALID_CHARS.sub("_", text.strip())
    if name and not name.strip("."):
        return "_"
    return truncate_utf8(name, MAX_FILENAME_LENGTH)


def fit_filename(stem: str, extension: str, max_bytes: int = MAX_FILENAME_LENGTH) -> str:
    """Join ``stem`` and ``extension``, shortening the stem to fit ``max_bytes``.

    Example:
        >>> fit_filename("x" * 300, ".mp3", 10)
        'xxxxxx.mp3'
    """
    room = max_bytes - len(extension.encode("utf-8"))
    return truncate_utf8(stem, room) + extension


def stamp_file_times(path: Path, when: datetime) -> None:
    """Set the access and modification times of ``path`` to ``when``.

    Naive datetimes are interpreted as local time.

    Raises:
        OSError: If the timestamps cannot be changed
    """
    timestamp = when.timestamp()
    os.utime(path, (timestamp, timestamp))
