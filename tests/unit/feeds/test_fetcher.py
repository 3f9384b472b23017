"""Tests for FeedFetcher."""

import asyncio

import httpx
import pytest

from podgrab.feeds.fetcher import FeedFetcher
from podgrab.utils.errors import FetchError, OperationCancelledError

FEED_URL = "https://example.com/feed.xml"


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestFeedFetcher:
    """Tests for FeedFetcher.fetch."""

    @pytest.mark.asyncio
    async def test_returns_body_and_sends_user_agent(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="<rss>ok</rss>")

        async with make_client(handler) as client:
            fetcher = FeedFetcher(user_agent="podgrab-tests", client=client)
            body = await fetcher.fetch(FEED_URL)

        assert body == b"<rss>ok</rss>"
        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert seen[0].headers["User-Agent"] == "podgrab-tests"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [301, 404, 500])
    async def test_non_success_status_raises(self, status: int) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, text="nope")

        async with make_client(handler) as client:
            fetcher = FeedFetcher(client=client)
            with pytest.raises(FetchError, match=f"HTTP {status}"):
                await fetcher.fetch(FEED_URL)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            fetcher = FeedFetcher(client=client)
            with pytest.raises(FetchError, match="connection refused"):
                await fetcher.fetch(FEED_URL)

    @pytest.mark.asyncio
    async def test_cancelled_before_request(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(200, text="<rss/>")

        event = asyncio.Event()
        event.set()

        async with make_client(handler) as client:
            fetcher = FeedFetcher(client=client)
            with pytest.raises(OperationCancelledError):
                await fetcher.fetch(FEED_URL, event)

        assert calls == 0

    @pytest.mark.asyncio
    async def test_cancelled_while_waiting(self) -> None:
        event = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            event.set()
            await asyncio.sleep(10)
            return httpx.Response(200, text="<rss/>")

        async with make_client(handler) as client:
            fetcher = FeedFetcher(client=client)
            with pytest.raises(OperationCancelledError):
                await fetcher.fetch(FEED_URL, event)
