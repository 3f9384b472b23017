"""Shared fixtures for podgrab tests."""

from collections.abc import Callable
from pathlib import Path

import pytest


def build_rss(title: str, items: list[dict]) -> str:
    """Render a minimal RSS 2.0 document.

    Each item dict may contain ``title``, ``url``, ``type`` and ``pubdate``.
    Items without ``url`` and ``type`` get no enclosure element.
    """
    entries = []
    for item in items:
        parts = []
        if "title" in item:
            parts.append(f"<title>{item['title']}</title>")
        if "pubdate" in item:
            parts.append(f"<pubDate>{item['pubdate']}</pubDate>")
        if "url" in item or "type" in item:
            attrs = ""
            if "url" in item:
                attrs += f' url="{item["url"]}"'
            if "type" in item:
                attrs += f' type="{item["type"]}"'
            parts.append(f'<enclosure{attrs} length="0"/>')
        entries.append("<item>" + "".join(parts) + "</item>")

    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"<title>{title}</title>"
        "<link>https://example.com</link>"
        "<description>Test feed</description>"
        + "".join(entries)
        + "</channel></rss>"
    )


@pytest.fixture
def rss_builder() -> Callable[[str, list[dict]], str]:
    """Factory for RSS documents."""
    return build_rss


@pytest.fixture
def sample_config_dict(tmp_path: Path) -> dict:
    """Valid configuration data."""
    return {
        "version": "1",
        "default_output_dir": str(tmp_path / "podcasts"),
        "user_agent": "podgrab-tests",
        "request_timeout": 10.0,
        "chunk_count": 4,
        "parallel_download": False,
    }


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real user config directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("PODGRAB_CONFIG_DIR", str(config_dir))
    return config_dir
