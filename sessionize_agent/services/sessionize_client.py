"""HTTP client for the public Sessionize API v2 with retry logic and
timeout handling.

Sessionize serves each event as a set of read-only JSON "views":
``https://sessionize.com/api/v2/{EVENT_ID}/view/{VIEW}``.  No authentication
is needed; the event ID itself is the only credential.

Sessionize docs: https://sessionize.com/api-documentation
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any

import httpx
from pydantic import TypeAdapter

from sessionize_agent.config import SESSIONIZE_BASE_URL
from sessionize_agent.models import (
    SCHEDULE_ADAPTER,
    SESSION_GROUPS_ADAPTER,
    SPEAKERS_ADAPTER,
    ScheduleDay,
    SessionGroup,
    Speaker,
)
from sessionize_agent.services.metrics import metrics

logger = logging.getLogger(__name__)

# ── Retry configuration ─────────────────────────────────────────────
MAX_RETRIES = 3
INITIAL_BACKOFF_SECONDS = 1.0
REQUEST_TIMEOUT_SECONDS = 15.0

# ── Views ───────────────────────────────────────────────────────────
VIEW_SPEAKERS = "Speakers"
VIEW_SESSIONS = "Sessions"
VIEW_SCHEDULE = "GridSmart"


class SessionizeAPIError(Exception):
    """Raised when a Sessionize API call fails (after retries, where retried)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class SessionizeClient:
    """Thin wrapper around the Sessionize view endpoints.

    Timeouts, connection errors and 5xx responses are retried with
    exponential backoff; 4xx responses and other transport failures fail
    immediately.  Every failure surfaces as ``SessionizeAPIError``.  Responses are
    never cached: every call goes to the network.
    """

    def __init__(self, base_url: str | None = None, *, timeout: float = REQUEST_TIMEOUT_SECONDS):
        self._base_url = base_url or SESSIONIZE_BASE_URL
        self._client = httpx.Client(
            base_url=self._base_url,
            headers={
                "Accept": "application/json",
                "Cache-Control": "no-cache, no-store, must-revalidate",
                "Pragma": "no-cache",
            },
            timeout=timeout,
        )

    # ── Internal helpers ─────────────────────────────────────────────

    def _get(self, path: str) -> Any:
        """GET *path* and return the decoded JSON body (which may be ``None``)."""
        last_error: Exception | None = None
        last_status: int | None = None
        operation = "GET " + path.rsplit("/", 1)[-1]
        for attempt in range(1, MAX_RETRIES + 1):
            t0 = time.perf_counter()
            try:
                response = self._client.request("GET", path)
                if response.status_code >= 500:
                    raise SessionizeAPIError(
                        f"Server error {response.status_code}: {response.text}",
                        status_code=response.status_code,
                    )
                if response.status_code >= 400:
                    raise SessionizeAPIError(
                        f"Client error {response.status_code}: {response.text}",
                        status_code=response.status_code,
                    )
                metrics.record_upstream(operation, latency_ms=(time.perf_counter() - t0) * 1000)
                return response.json()

            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                last_error = exc
                metrics.record_upstream(
                    operation,
                    latency_ms=(time.perf_counter() - t0) * 1000,
                    error_type=type(exc).__name__,
                )
                logger.warning(
                    "Sessionize attempt %d/%d failed (%s). Retrying in %.1fs…",
                    attempt,
                    MAX_RETRIES,
                    type(exc).__name__,
                    INITIAL_BACKOFF_SECONDS * (2 ** (attempt - 1)),
                )
            except httpx.TransportError as exc:
                # Protocol, read/write and proxy failures are not retried
                metrics.record_upstream(
                    operation,
                    latency_ms=(time.perf_counter() - t0) * 1000,
                    error_type=type(exc).__name__,
                )
                raise SessionizeAPIError(f"Sessionize transport error: {exc}") from exc
            except SessionizeAPIError as exc:
                metrics.record_upstream(
                    operation,
                    latency_ms=(time.perf_counter() - t0) * 1000,
                    error_type=str(exc.status_code),
                )
                if exc.status_code and exc.status_code >= 500:
                    last_error = exc
                    last_status = exc.status_code
                    logger.warning(
                        "Sessionize server error on attempt %d/%d. Retrying…",
                        attempt,
                        MAX_RETRIES,
                    )
                else:
                    raise  # 4xx errors are not retried

            if attempt < MAX_RETRIES:
                time.sleep(INITIAL_BACKOFF_SECONDS * (2 ** (attempt - 1)))

        raise SessionizeAPIError(
            f"Sessionize request failed after {MAX_RETRIES} attempts: {last_error}",
            status_code=last_status,
        )

    def _view(self, event_id: str, view: str, adapter: TypeAdapter) -> Any:
        data = self._get(f"/api/v2/{event_id}/view/{view}")
        return adapter.validate_python(data)

    # ── Public API methods ───────────────────────────────────────────

    def get_speakers(self, event_id: str) -> list[Speaker | None] | None:
        """List all speakers of an event (``None`` when the event has none)."""
        return self._view(event_id, VIEW_SPEAKERS, SPEAKERS_ADAPTER)

    def get_sessions(self, event_id: str) -> list[SessionGroup | None] | None:
        """List the session groups of an event."""
        return self._view(event_id, VIEW_SESSIONS, SESSION_GROUPS_ADAPTER)

    def get_schedule(self, event_id: str) -> list[ScheduleDay | None] | None:
        """List the schedule grid of an event, one entry per day.

        Empty until the organizer assigns times and rooms to sessions.
        """
        return self._view(event_id, VIEW_SCHEDULE, SCHEDULE_ADAPTER)

    def close(self) -> None:
        self._client.close()


# ── Module-level singleton (thread-safe) ────────────────────────────
_client: SessionizeClient | None = None
_client_lock = threading.Lock()


def get_sessionize_client() -> SessionizeClient:
    """Return a module-level SessionizeClient singleton.

    Uses double-checked locking so that the lock is only acquired during
    the first initialisation, not on every subsequent call.
    """
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                _client = SessionizeClient()
    return _client
