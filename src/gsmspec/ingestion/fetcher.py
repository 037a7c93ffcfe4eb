import threading
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable, Optional

import requests
from bs4 import BeautifulSoup

from ..config.settings import DEFAULT_HEADERS, FETCH_COOLDOWN, REQUEST_TIMEOUT
from ..errors import ForbiddenError, HttpError, RateLimitedError, TooManyRequestsError
from ..processing.dom import make_soup
from ..utils.logging import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """Fetch gate shared by everything that talks to the site.

    The gate is closed while the fixed cooldown before each request runs and
    after a 429 until the server's Retry-After has passed. A request made
    while it is closed fails immediately instead of queueing.
    """

    def __init__(
        self,
        cooldown: float = FETCH_COOLDOWN,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cooldown_seconds = max(0.0, cooldown)
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()
        self._open = True
        self._blocked_until = 0.0

    @property
    def is_open(self) -> bool:
        with self._lock:
            return self._open and self._clock() >= self._blocked_until

    def acquire(self) -> None:
        if not self.is_open:
            raise RateLimitedError("currently rate limited, wait before retrying")

    def cooldown(self) -> None:
        """Close the gate for the fixed cooldown, then reopen it."""
        with self._lock:
            self._open = False
        try:
            if self.cooldown_seconds:
                self._sleep(self.cooldown_seconds)
        finally:
            with self._lock:
                self._open = True

    def block(self, seconds: float) -> None:
        """Keep the gate closed for ``seconds`` from now."""
        with self._lock:
            self._blocked_until = max(self._blocked_until, self._clock() + max(0.0, seconds))
        logger.warning("Rate limited, requests blocked for %.0f seconds", seconds)


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Retry-After is either delta-seconds or an HTTP date."""
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        return float(value)
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


class Fetcher:
    """Sequential HTTP transport returning parsed documents."""

    def __init__(
        self,
        limiter: Optional[RateLimiter] = None,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.limiter = limiter or RateLimiter()
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.timeout = timeout

    def _check(self, response: requests.Response, url: str) -> None:
        status = response.status_code
        if status < 400:
            return
        reason = response.reason or ""
        if status == 403:
            raise ForbiddenError(
                f"access forbidden, the server may be blocking us. status: {status} {reason} ({url})"
            )
        if status == 429:
            retry_after = parse_retry_after(response.headers.get("Retry-After"))
            if retry_after is None:
                wait = "a few seconds"
            else:
                wait = f"{int(retry_after + 0.999)} seconds"
                self.limiter.block(retry_after)
            raise TooManyRequestsError(
                f"too many requests. status: {status} {reason}. Need to wait for {wait}.",
                retry_after=retry_after,
            )
        raise HttpError(f"HTTP error! status: {status} {reason} ({url})", status=status)

    def get_html(self, url: str) -> str:
        self.limiter.acquire()
        self.limiter.cooldown()
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise HttpError(f"network error for {url}: {exc}") from exc
        self._check(response, url)
        return response.text

    def fetch(self, url: str) -> BeautifulSoup:
        return make_soup(self.get_html(url))
