"""HTTP client with rate limiting, retry, and raw response caching."""

from __future__ import annotations

import hashlib
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Any

import requests

from .config import Settings
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

USER_AGENT = "etherealpost/0.1"


def _retry_after(exc: requests.RequestException) -> float | None:
    """Seconds to wait from a 429 response's ``Retry-After`` header, if given."""
    response = exc.response
    if response is None or response.status_code != 429:
        return None
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class HTTPClient:
    """HTTP client wrapping requests for the Battle.net API.

    Features:
    - Rate limiting, honouring ``Retry-After`` on 429 responses
    - Automatic retries with exponential backoff
    - Raw response caching for audit trail
    """

    BACKOFF_BASE = 2.0

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings.load()
        self._rate_limiter = RateLimiter(self.settings.http.rate_limit_rpm)
        self._session = requests.Session()
        self._session.headers["User-Agent"] = USER_AGENT

        if self.settings.http.cache_raw_json:
            self.settings.raw_cache_abs_dir.mkdir(parents=True, exist_ok=True)

    @property
    def max_retries(self) -> int:
        return max(self.settings.http.max_retries, 1)

    def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        cache_key: str | None = None,
    ) -> requests.Response:
        """Send a GET request with rate limiting, retries, and caching.

        Args:
            url: Target URL.
            params: Query parameters.
            headers: Extra headers (merged with session defaults).
            cache_key: Optional key for raw response caching. Only used
                       when ``http.cache_raw_json`` is enabled.

        Returns:
            requests.Response object.

        Raises:
            requests.RequestException: After all retries exhausted.
        """
        resp = self._request("GET", url, params=params, headers=headers)
        if cache_key and self.settings.http.cache_raw_json:
            self._cache_response(cache_key, resp.text)
        return resp

    def post(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> requests.Response:
        """Send a POST request with rate limiting and retries."""
        return self._request("POST", url, data=data, auth=auth)

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        last_exc: Exception | None = None
        for attempt in range(self.max_retries):
            self._rate_limiter.wait()
            try:
                resp = self._session.request(
                    method,
                    url,
                    timeout=self.settings.http.request_timeout,
                    **kwargs,
                )
                resp.raise_for_status()
                return resp

            except requests.RequestException as exc:
                last_exc = exc

                # 4xx other than 429 are permanent failures
                if (
                    isinstance(exc, requests.HTTPError)
                    and exc.response is not None
                    and 400 <= exc.response.status_code < 500
                    and exc.response.status_code != 429
                ):
                    logger.warning("Request failed (4xx, no retry): %s", exc)
                    raise

                if attempt + 1 >= self.max_retries:
                    break

                retry_after = _retry_after(exc)
                if retry_after is not None:
                    # the rate limiter sleeps before the next attempt
                    self._rate_limiter.defer(retry_after)
                    logger.warning(
                        "%s %s rate limited (attempt %d/%d); retrying in %.1fs",
                        method,
                        url,
                        attempt + 1,
                        self.max_retries,
                        retry_after,
                    )
                    continue

                wait_time = self.BACKOFF_BASE ** attempt
                logger.warning(
                    "%s %s failed (attempt %d/%d): %s; retrying in %.1fs",
                    method,
                    url,
                    attempt + 1,
                    self.max_retries,
                    exc,
                    wait_time,
                )
                time.sleep(wait_time)

        logger.error("%s %s failed after %d attempts", method, url, self.max_retries)
        raise last_exc  # type: ignore[misc]

    def _cache_response(self, cache_key: str, body: str) -> Path:
        """Save a raw response body to the cache directory.

        File naming: {cache_key}_{date}_{hash}.json
        """
        date_str = datetime.now().strftime("%Y%m%d")
        content_hash = hashlib.md5(body.encode()).hexdigest()[:8]
        safe_key = "".join(c if c.isalnum() or c in "-_" else "_" for c in cache_key)
        filename = f"{safe_key}_{date_str}_{content_hash}.json"
        path = self.settings.raw_cache_abs_dir / filename
        path.write_text(body, encoding="utf-8")
        logger.debug("Cached response: %s", path)
        return path

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
