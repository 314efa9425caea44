"""
Transport
Shared HTTP session: pacing, headers, proxy, timeout and status classification
"""
import logging
from typing import Any, Dict, Optional

import requests

from .errors import RateLimited, SearchFailed, SearchTimeout
from .rate_limiter import RateLimiter
from .settings import ClientSettings


logger = logging.getLogger(__name__)


class Transport:
    """Executes paced requests on one cookie-keeping session"""

    # Upstream's assorted throttling / soft-block answers
    RATE_LIMIT_STATUSES = frozenset({202, 301, 400, 403, 418, 429})

    def __init__(
        self,
        settings: ClientSettings,
        rate_limiter: Optional[RateLimiter] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings
        self.timeout = settings.timeout
        self.rate_limiter = rate_limiter or RateLimiter(
            sleep_duration=settings.sleep_duration,
            window=settings.sleep_window,
        )
        # The session's cookie jar carries upstream session cookies between calls.
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(settings.headers)
        proxies = settings.proxies()
        if proxies:
            self.session.proxies.update(proxies)

    def execute(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """
        Pace, send and classify one request.

        The client timeout is handed to requests as ``timeout=``, so it bounds
        the connect and each socket read separately, not the total transfer
        time. A server that keeps trickling bytes can take longer than the
        timeout without raising ``SearchTimeout``.

        Args:
            headers: Per-request extras (Referer, Sec-Fetch-*); never written
                back into the shared session headers.

        Returns:
            The response when upstream answered 200

        Raises:
            RateLimited: throttling/soft-block status
            SearchTimeout: the request exceeded the client timeout
            SearchFailed: any other status or transport failure
        """
        self.rate_limiter.wait()
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
                timeout=self.timeout,
                allow_redirects=False,
            )
        except requests.Timeout as exc:
            raise SearchTimeout(
                f"{method} {url} timed out after {self.timeout:.1f}s",
                metadata={"url": url},
            ) from exc
        except requests.RequestException as exc:
            raise SearchFailed(f"{method} {url} failed: {exc}", metadata={"url": url}) from exc
        return self._classify(method, url, response)

    def _classify(self, method: str, url: str, response: requests.Response) -> requests.Response:
        status = response.status_code
        if status == 200:
            return response
        if status in self.RATE_LIMIT_STATUSES:
            logger.warning("Rate limited by upstream (%s %s -> %s)", method, url, status)
            raise RateLimited(
                f"{method} {url} rate limited with status {status}",
                status_code=status,
                metadata={"url": url},
            )
        raise SearchFailed(
            f"{method} {url} returned status {status}",
            status_code=status,
            metadata={"url": url},
        )

    def close(self):
        self.session.close()
