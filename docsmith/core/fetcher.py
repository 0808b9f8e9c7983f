"""Base HTTP fetching logic."""

import threading
import time
from typing import Optional

import requests

from docsmith import config
from docsmith.core.errors import FetchError


class Fetcher:
    """HTTP fetcher with rate limiting and retry logic.

    Safe to share between download workers: the rate limiter is guarded by a
    lock and requests.Session handles concurrent GETs.
    """

    def __init__(
        self,
        delay: float = config.REQUEST_DELAY,
        max_retries: int = config.MAX_RETRIES,
        timeout: float = config.REQUEST_TIMEOUT,
    ):
        self.delay = delay
        self.max_retries = max_retries
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": config.USER_AGENT})
        self._last_request_time: Optional[float] = None
        self._lock = threading.Lock()

    def _rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        if not self.delay:
            return
        with self._lock:
            if self._last_request_time is not None:
                elapsed = time.time() - self._last_request_time
                if elapsed < self.delay:
                    time.sleep(self.delay - elapsed)
            self._last_request_time = time.time()

    def fetch(self, url: str) -> bytes:
        """Fetch the raw body of a URL, raising FetchError after the last retry."""
        self._rate_limit()

        for attempt in range(self.max_retries):
            try:
                response = self.session.get(url, timeout=self.timeout)
                response.raise_for_status()
                return response.content
            except requests.RequestException as e:
                if attempt == self.max_retries - 1:
                    raise FetchError(url, str(e)) from e
                print(f"Retry {attempt + 1}/{self.max_retries} for {url}: {e}")
                time.sleep(2 ** attempt)  # Exponential backoff

        raise FetchError(url, "no attempts made")

    def fetch_text(self, url: str, encoding: str = "utf-8") -> str:
        """Fetch a URL and decode it as text."""
        return self.fetch(url).decode(encoding, errors="replace")
