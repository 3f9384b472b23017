"""HTTP retrieval of feed documents."""

import asyncio

import httpx

from podgrab.config.schema import DEFAULT_USER_AGENT
from podgrab.utils.cancellation import wait_or_cancel
from podgrab.utils.errors import FetchError


class FeedFetcher:
    """Fetches raw feed documents over HTTP."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            user_agent: Value of the User-Agent header sent with every request
            timeout: HTTP request timeout in seconds
            client: Optional httpx client (mainly for testing)
        """
        self.user_agent = user_agent
        self.timeout = timeout
        self.client = client

    async def fetch(self, url: str, cancel_event: asyncio.Event | None = None) -> bytes:
        """Fetch the feed at ``url`` and return its raw body.

        The body is left undecoded so the parser can honor the encoding
        declared in the XML prolog.

        Args:
            url: Feed URL
            cancel_event: Run-level cancellation signal

        Returns:
            Response body bytes

        Raises:
            FetchError: On a non-success status or a transport failure
            OperationCancelledError: If cancelled while waiting
        """
        return await wait_or_cancel(self._get(url), cancel_event)

    async def _get(self, url: str) -> bytes:
        headers = {"User-Agent": self.user_agent}

        owns_client = self.client is None
        client = self.client or httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=True
        )
        try:
            response = await client.get(url, headers=headers)
        except httpx.RequestError as e:
            raise FetchError(f"Failed to download {url}: {e}") from e
        finally:
            if owns_client:
                await client.aclose()

        if not response.is_success:
            raise FetchError(
                f"Failed to download {url}: HTTP {response.status_code}"
            )

        return response.content
