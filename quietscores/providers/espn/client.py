"""ESPN API HTTP client.

Handles raw HTTP requests to ESPN endpoints.
No data transformation - just fetch and return JSON.

Scoreboard, summary and standings failures raise FeedUnavailableError.
Team endpoints are best-effort and return None on failure.
"""

import logging
import ssl
import threading
import time
from datetime import date

import httpx

from quietscores.config import Settings, get_settings
from quietscores.core.exceptions import FeedCancelledError, FeedError, FeedUnavailableError
from quietscores.core.interfaces import CancelToken
from quietscores.providers.espn.constants import (
    ESPN_SITE_URL,
    ESPN_STANDINGS_URL,
    SCOREBOARD_PARAMS,
    get_sport_path,
)

logger = logging.getLogger(__name__)


class RateLimiter:
    """Token bucket rate limiter for API requests.

    Allows bursts up to bucket_size, then limits to rate requests/second.
    Thread-safe for concurrent use.
    """

    def __init__(self, rate: float, bucket_size: int):
        self._rate = rate
        self._bucket_size = bucket_size
        self._tokens = float(bucket_size)
        self._last_update = time.monotonic()
        self._lock = threading.Lock()

    def acquire(self) -> None:
        """Block until a token is available."""
        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_update
            self._tokens = min(self._bucket_size, self._tokens + elapsed * self._rate)
            self._last_update = now

            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return

            wait_time = (1.0 - self._tokens) / self._rate
            self._tokens = 0.0

        # Wait outside the lock
        time.sleep(wait_time)


class ESPNClient:
    """Low-level ESPN API client with rate limiting and retries."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = settings or get_settings()
        self._timeout = settings.request_timeout_seconds
        self._retry_count = settings.retry_count
        self._retry_delay = settings.retry_delay_seconds
        self._transport = transport
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()
        self._rate_limiter = RateLimiter(
            rate=settings.requests_per_second, bucket_size=settings.burst_size
        )

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            with self._lock:
                # Double-check after acquiring lock
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._timeout,
                        transport=self._transport,
                        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                    )
        return self._client

    def _is_ssl_error(self, error: Exception) -> bool:
        """Check if an error is SSL-related."""
        if isinstance(error, ssl.SSLError):
            return True
        error_str = str(error).lower()
        return "ssl" in error_str or "eof occurred" in error_str

    def _request(
        self,
        url: str,
        params: dict | None = None,
        cancel: CancelToken | None = None,
    ) -> dict:
        """Make HTTP request with retry logic and rate limiting.

        Raises:
            FeedCancelledError: cancel token fired before or after the call
            FeedUnavailableError: every attempt failed
        """
        last_status: int | None = None
        last_error = "no attempts made"

        for attempt in range(self._retry_count):
            if cancel is not None:
                cancel.raise_if_cancelled(url)
            try:
                self._rate_limiter.acquire()

                client = self._get_client()
                response = client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
                if cancel is not None:
                    cancel.raise_if_cancelled(url)
                return data
            except httpx.HTTPStatusError as e:
                last_status = e.response.status_code
                last_error = f"HTTP {last_status}"
                logger.warning("[ESPN] HTTP %d for %s", last_status, url)
            except ValueError as e:
                # Body was not JSON
                last_error = f"invalid JSON: {e}"
                logger.warning("[ESPN] Invalid JSON from %s: %s", url, e)
            except (httpx.RequestError, RuntimeError, OSError) as e:
                # RuntimeError: "Cannot send a request, as the client has been closed"
                # OSError: "Bad file descriptor" from stale connections
                last_error = str(e)
                logger.warning("[ESPN] Request failed for %s: %s", url, e)

                if self._is_ssl_error(e):
                    logger.info("[ESPN] SSL error detected, resetting connection pool")
                    self._reset_client()

            if attempt < self._retry_count - 1:
                time.sleep(self._retry_delay * (attempt + 1))

        raise FeedUnavailableError(
            f"Feed request failed: {last_error}", url=url, status_code=last_status
        )

    def _request_optional(
        self,
        url: str,
        params: dict | None = None,
        cancel: CancelToken | None = None,
    ) -> dict | None:
        """Best-effort request: None on failure, cancellation still propagates."""
        try:
            return self._request(url, params, cancel)
        except FeedCancelledError:
            raise
        except FeedError as e:
            logger.debug("[ESPN] Optional request gave up: %s", e)
            return None

    def _reset_client(self) -> None:
        """Reset the HTTP client to clear stale connections."""
        with self._lock:
            if self._client:
                try:
                    self._client.close()
                except (httpx.HTTPError, RuntimeError, OSError) as e:
                    logger.debug("[ESPN] Error closing stale client: %s", e)
                self._client = None

    def _site_url(self, sport: str, *parts: str) -> str:
        return "/".join([ESPN_SITE_URL, get_sport_path(sport), *parts])

    def get_scoreboard(
        self,
        sport: str,
        target_date: date,
        cancel: CancelToken | None = None,
    ) -> dict:
        """Fetch the scoreboard for a sport on a given date.

        Args:
            sport: Sport key (e.g., 'nfl', 'college-basketball')
            target_date: Calendar date to fetch
            cancel: Optional abort signal

        Returns:
            Raw ESPN response
        """
        url = self._site_url(sport, "scoreboard")
        params = {"dates": target_date.strftime("%Y%m%d")}
        params.update(SCOREBOARD_PARAMS.get(sport, {}))
        return self._request(url, params, cancel)

    def get_summary(self, sport: str, event_id: str, cancel: CancelToken | None = None) -> dict:
        """Fetch the summary/boxscore document for one event."""
        url = self._site_url(sport, "summary")
        return self._request(url, {"event": event_id}, cancel)

    def get_standings(self, sport: str, cancel: CancelToken | None = None) -> dict:
        """Fetch the full league standings tree."""
        url = f"{ESPN_STANDINGS_URL}/{get_sport_path(sport)}/standings"
        return self._request(url, None, cancel)

    def get_team(self, sport: str, team_id: str, cancel: CancelToken | None = None) -> dict | None:
        """Fetch team information. Returns None on error."""
        return self._request_optional(self._site_url(sport, "teams", str(team_id)), None, cancel)

    def get_roster(
        self, sport: str, team_id: str, cancel: CancelToken | None = None
    ) -> dict | None:
        """Fetch a team roster. Returns None on error."""
        url = self._site_url(sport, "teams", str(team_id), "roster")
        return self._request_optional(url, None, cancel)

    def get_team_schedule(
        self, sport: str, team_id: str, cancel: CancelToken | None = None
    ) -> dict | None:
        """Fetch a team schedule. Returns None on error."""
        url = self._site_url(sport, "teams", str(team_id), "schedule")
        return self._request_optional(url, None, cancel)

    def get_teams(self, sport: str, cancel: CancelToken | None = None) -> dict | None:
        """Fetch all teams for a sport (used for conference lookups)."""
        return self._request_optional(self._site_url(sport, "teams"), {"limit": 1000}, cancel)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None
