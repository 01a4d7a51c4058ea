"""HTTP transport built on requests with rate limiting."""

import time
import logging
import threading
from typing import Callable, Dict, Optional

import requests

from ..config.settings import TRANSPORT_DEFAULTS
from ..core.interfaces import HttpTransport
from ..core.exceptions import (
    BrokerConnectionError,
    RateLimitError,
    TimeoutError,
)


logger = logging.getLogger(__name__)

ErrorHandler = Callable[[int, str], None]


class RequestsTransport(HttpTransport):
    """
    HTTP transport backed by a requests.Session.

    Features:
    - Minimum interval between requests (rate limiting)
    - Request timeout
    - Optional retries with exponential backoff on network failures
      (disabled by default, one attempt per call)
    - Error hook that sees the raw body of failed responses before the
      generic HTTP status error is raised
    """

    def __init__(
        self,
        rate_limit_ms: int = TRANSPORT_DEFAULTS.rate_limit_ms,
        timeout: float = TRANSPORT_DEFAULTS.timeout_seconds,
        max_retries: int = TRANSPORT_DEFAULTS.max_retries,
        error_handler: Optional[ErrorHandler] = None,
        broker_id: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize transport.

        Args:
            rate_limit_ms: Minimum milliseconds between requests
            timeout: Request timeout in seconds
            max_retries: Attempts per call on network failure (1 = no retry)
            error_handler: Called with (status_code, body) for HTTP errors
            broker_id: Exchange id attached to raised errors
            session: Pre-built session (a new one is created otherwise)
        """
        self.rate_limit_ms = rate_limit_ms
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.error_handler = error_handler
        self.broker_id = broker_id

        self._last_request_time = 0.0
        self._rate_lock = threading.Lock()
        self._min_request_interval = rate_limit_ms / 1000.0

        self._session = session or requests.Session()
        self._setup_session()

    def _setup_session(self) -> None:
        """Configure session with default headers."""
        self._session.headers.update({
            "Accept": "application/json",
            "User-Agent": TRANSPORT_DEFAULTS.user_agent,
        })

    def _rate_limit(self) -> None:
        """Enforce rate limiting between requests (safe across threads)."""
        with self._rate_lock:
            elapsed = time.time() - self._last_request_time
            if elapsed < self._min_request_interval:
                sleep_time = self._min_request_interval - elapsed
                logger.debug(f"Rate limiting: sleeping for {sleep_time:.3f}s")
                time.sleep(sleep_time)
            self._last_request_time = time.time()

    def _check_status(self, response: requests.Response, url: str) -> None:
        """Raise for HTTP error statuses, letting the error hook go first."""
        status = response.status_code
        if status < 400:
            return

        if self.error_handler is not None:
            self.error_handler(status, response.text)

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                f"Rate limit exceeded: {response.text}",
                broker_id=self.broker_id,
                retry_after=float(retry_after) if retry_after else None,
            )
        raise BrokerConnectionError(
            f"HTTP {status} {response.reason}: {response.text}",
            broker_id=self.broker_id,
            status_code=status,
            url=url,
        )

    def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> str:
        """
        Make HTTP request and return the raw body.

        Args:
            url: Full URL including query string
            method: HTTP method (GET, POST, DELETE)
            headers: Additional headers
            body: Serialized request body

        Returns:
            Response body as text

        Raises:
            BrokerConnectionError: On network failure or HTTP error status
            RateLimitError: On HTTP 429
            TimeoutError: On request timeout
        """
        self._rate_limit()
        logger.debug(f"{method} {url}")

        last_error: Optional[BrokerConnectionError] = None
        for attempt in range(self.max_retries):
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    data=body,
                    headers=headers,
                    timeout=self.timeout,
                )
            except requests.exceptions.Timeout as e:
                last_error = TimeoutError(
                    f"Request timed out: {e}",
                    timeout_seconds=self.timeout,
                    broker_id=self.broker_id,
                )
            except requests.exceptions.RequestException as e:
                last_error = BrokerConnectionError(
                    f"Request failed: {e}",
                    broker_id=self.broker_id,
                    url=url,
                )
            else:
                self._check_status(response, url)
                return response.text

            if attempt < self.max_retries - 1:
                # Exponential backoff
                sleep_time = (2 ** attempt) * 0.5
                logger.warning(
                    f"Request failed, retrying in {sleep_time}s: {last_error}"
                )
                time.sleep(sleep_time)

        raise last_error or BrokerConnectionError(
            "Request failed after retries", broker_id=self.broker_id
        )

    def close(self) -> None:
        """Close the session."""
        self._session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
