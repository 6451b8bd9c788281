"""HTTP page fetching with httpx."""

import time
from typing import Any
from urllib.parse import urlparse

import httpx

from scraperx.core.config import settings
from scraperx.core.exceptions import FetchError
from scraperx.monitoring.logger import get_logger, log_fetch_event

logger = get_logger(__name__)


def is_absolute_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class HTTPFetcher:
    """Fetches page bodies over HTTP.

    No retries: any transport error or non-2xx status raises FetchError.
    """

    def __init__(
        self,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        follow_redirects: bool | None = None,
        verify: bool | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize fetcher.

        Args:
            timeout: Request timeout in seconds
            headers: Extra request headers
            follow_redirects: Follow HTTP redirects
            verify: Verify TLS certificates
            client: Shared client to use instead of one client per request
            transport: Transport for per-request clients (used by tests)
        """
        self.timeout = timeout or settings.http_timeout
        self.headers = {"User-Agent": settings.http_user_agent, **(headers or {})}
        self.follow_redirects = (
            settings.http_follow_redirects if follow_redirects is None else follow_redirects
        )
        self.verify = settings.http_verify_ssl if verify is None else verify
        self._client = client
        self._transport = transport

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "timeout": self.timeout,
            "headers": self.headers,
            "follow_redirects": self.follow_redirects,
            "verify": self.verify,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return kwargs

    async def fetch(self, url: str) -> str:
        """Fetch a page and return its body text.

        Args:
            url: Absolute http(s) URL

        Returns:
            Response body

        Raises:
            FetchError: On invalid URL, transport error or non-2xx status
        """
        if not is_absolute_url(url):
            raise FetchError(url, "Cannot fetch non-absolute URL")

        start_time = time.time()
        status_code = None

        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(**self._client_kwargs()) as client:
                    response = await client.get(url)
            status_code = response.status_code
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            log_fetch_event(url, status_code, time.time() - start_time, success=False)
            raise FetchError(url, f"HTTP {status_code}", status_code=status_code) from e
        except httpx.TimeoutException as e:
            log_fetch_event(url, None, time.time() - start_time, success=False)
            raise FetchError(url, "Request timed out") from e
        except httpx.HTTPError as e:
            log_fetch_event(url, None, time.time() - start_time, success=False)
            raise FetchError(url, f"Request failed: {e}") from e

        log_fetch_event(url, status_code, time.time() - start_time)
        return response.text
