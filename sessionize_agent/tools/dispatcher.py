"""Tool dispatcher: the single entry point for every Sessionize tool call.

Each invocation goes through the same steps:

1. **Resolve the event ID** — the caller's value if non-blank, otherwise the
   configured default.  Both are sanitized to ``[A-Za-z0-9]``.
2. **Validate** the operation's required argument (name, query, ...).
3. **Execute** the query.  Sessionize errors are mapped to a short message,
   anything else is reported with its own message.
4. **Return** a ``ToolResult`` — success or error, never an exception.

Steps 1-2 run on the caller's thread.  The async entry points run step 3 in
a worker thread (``asyncio.to_thread``) so the blocking HTTP call never
stalls the event loop.
"""

from __future__ import annotations

import asyncio
import logging
import re
import threading
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from sessionize_agent.config import SESSIONIZE_EVENT_ID
from sessionize_agent.services.metrics import metrics
from sessionize_agent.services.sessionize_client import SessionizeAPIError, get_sessionize_client
from sessionize_agent.tools import queries
from sessionize_agent.tools.formatter import is_blank
from sessionize_agent.tools.queries import EventSource

logger = logging.getLogger(__name__)

EVENT_ID_REQUIRED = (
    "Event ID is required. Provide event_id parameter "
    "or set SESSIONIZE_EVENT_ID environment variable."
)
API_ERROR_PREFIX = "Sessionize API error: "

_UNSAFE_EVENT_ID_CHARS = re.compile(r"[^A-Za-z0-9]")

# Receives (severity, message); severity is one of debug/info/warning/error.
Notifier = Callable[[str, str], None]


_SEVERITY_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def log_notifier(severity: str, message: str) -> None:
    """Default notification sink: forward to this module's logger."""
    logger.log(_SEVERITY_LEVELS.get(severity, logging.INFO), message)


class ToolResult(BaseModel):
    """Tagged outcome of a tool invocation."""

    model_config = ConfigDict(frozen=True)

    is_error: bool
    text: str

    @classmethod
    def success(cls, text: str) -> ToolResult:
        return cls(is_error=False, text=text)

    @classmethod
    def error(cls, text: str) -> ToolResult:
        return cls(is_error=True, text=text)


@dataclass(frozen=True)
class Operation:
    """One tool: its name, what it needs and which query answers it."""

    name: str
    description: str
    run: Callable[..., str]
    argument: str | None = None
    argument_description: str | None = None
    progress: str = "Fetching data for event: {event_id}"


@dataclass(frozen=True)
class _Invocation:
    operation: Operation
    event_id: str
    argument: str | None


OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        Operation(
            name="get_speakers",
            description=(
                "List all speakers for a Sessionize event. Returns speaker names, "
                "bios and taglines. Use this when the user asks 'who are the speakers?'."
            ),
            run=queries.list_speakers,
            progress="Fetching speakers for event: {event_id}",
        ),
        Operation(
            name="find_speaker",
            description=(
                "Search for a speaker by name. Returns matching speakers with full "
                "details including bio, social links and sessions."
            ),
            run=queries.find_speakers,
            argument="name",
            argument_description="Speaker name to search for",
            progress="Searching speaker '{argument}' in event: {event_id}",
        ),
        Operation(
            name="get_sessions_by_speaker",
            description=(
                "Get the sessions a specific speaker is presenting. Use this when the "
                "user asks 'what is speaker X presenting?'."
            ),
            run=queries.sessions_by_speaker,
            argument="speaker_name",
            argument_description="Speaker name to search for",
            progress="Getting sessions for speaker '{argument}' in event: {event_id}",
        ),
        Operation(
            name="get_sessions",
            description=(
                "List all sessions for a Sessionize event with titles, descriptions, "
                "speakers, rooms and times."
            ),
            run=queries.list_sessions,
            progress="Fetching sessions for event: {event_id}",
        ),
        Operation(
            name="find_session",
            description=(
                "Search sessions by title or description, e.g. 'sessions about "
                "Kubernetes'. Returns matching sessions with full details."
            ),
            run=queries.find_sessions,
            argument="query",
            argument_description="Text to search in session titles and descriptions",
            progress="Searching sessions for '{argument}' in event: {event_id}",
        ),
        Operation(
            name="get_schedule",
            description=(
                "Get the event schedule organized by day, time slot and room. May be "
                "empty if the organizer has not assigned session times yet."
            ),
            run=queries.full_schedule,
            progress="Fetching schedule for event: {event_id}",
        ),
    )
}


def sanitize_event_id(event_id: str) -> str:
    """Strip every character outside ``[A-Za-z0-9]``."""
    return _UNSAFE_EVENT_ID_CHARS.sub("", event_id)


def describe_api_error(exc: SessionizeAPIError) -> str:
    """Map an upstream failure to a short, caller-friendly message."""
    status = exc.status_code
    if status == 404:
        return "Event not found"
    if status == 403:
        return "Access denied"
    if status == 429:
        return "Rate limit exceeded"
    if status is not None and 500 <= status < 600:
        return "Sessionize service unavailable"
    return str(exc)


class ToolDispatcher:
    """Validates, executes and wraps Sessionize tool calls.

    Holds no per-call state, so one instance can serve any number of
    concurrent invocations.
    """

    def __init__(
        self,
        client: EventSource | None = None,
        default_event_id: str | None = None,
        notify: Notifier | None = None,
    ):
        self._client = client or get_sessionize_client()
        self._default_event_id = default_event_id
        self._notify = notify or log_notifier

    # ── Validation ───────────────────────────────────────────────────

    def resolve_event_id(self, event_id: str | None) -> str:
        """Return the sanitized event ID to use, or ``""`` if there is none."""
        if not is_blank(event_id):
            return sanitize_event_id(event_id)
        if not is_blank(self._default_event_id):
            return sanitize_event_id(self._default_event_id)
        return ""

    def prepare(
        self, operation: str, event_id: str | None, arguments: dict[str, str | None],
    ) -> _Invocation | ToolResult:
        """Run the pre-network checks; returns an error result on usage errors."""
        op = OPERATIONS.get(operation)
        if op is None:
            return ToolResult.error(f"Unknown tool: {operation}")

        resolved = self.resolve_event_id(event_id)
        if not resolved:
            logger.debug("%s rejected: no event ID", operation)
            metrics.record_tool(operation, outcome="usage_error")
            return ToolResult.error(EVENT_ID_REQUIRED)

        argument = None
        if op.argument is not None:
            argument = arguments.get(op.argument)
            if is_blank(argument):
                logger.debug("%s rejected: missing %s", operation, op.argument)
                metrics.record_tool(operation, outcome="usage_error")
                return ToolResult.error(f"Required parameter is missing: {op.argument}.")

        return _Invocation(operation=op, event_id=resolved, argument=argument)

    # ── Execution ────────────────────────────────────────────────────

    def execute(self, invocation: _Invocation, notify: Notifier | None = None) -> ToolResult:
        """Run the query and convert every outcome into a ``ToolResult``."""
        notify = notify or self._notify
        op, event_id = invocation.operation, invocation.event_id
        try:
            self._send(notify, "info", op.progress.format(event_id=event_id, argument=invocation.argument))
            if op.argument is None:
                text = op.run(self._client, event_id)
            else:
                text = op.run(self._client, event_id, invocation.argument)
        except SessionizeAPIError as exc:
            message = describe_api_error(exc)
            logger.warning("API error for event %s: %s", event_id, exc)
            self._send(notify, "warning", f"API error: {message}")
            metrics.record_tool(op.name, outcome="api_error")
            return ToolResult.error(API_ERROR_PREFIX + message)
        except Exception as exc:
            logger.exception("Unexpected error for event: %s", event_id)
            self._send(notify, "error", f"Error processing request for event: {event_id}")
            metrics.record_tool(op.name, outcome="internal_error")
            return ToolResult.error(f"Error: {exc}")

        metrics.record_tool(op.name, outcome="success")
        return ToolResult.success(text)

    @staticmethod
    def _send(notify: Notifier, severity: str, message: str) -> None:
        # Sink failures are logged, never raised
        try:
            notify(severity, message)
        except Exception:
            logger.warning("Notification sink failed for %r", message, exc_info=True)

    # ── Entry points ─────────────────────────────────────────────────

    def call(
        self,
        operation: str,
        event_id: str | None = "",
        notify: Notifier | None = None,
        **arguments: str | None,
    ) -> ToolResult:
        """Invoke a tool synchronously (validation and fetch on this thread)."""
        prepared = self.prepare(operation, event_id, arguments)
        if isinstance(prepared, ToolResult):
            return prepared
        return self.execute(prepared, notify)

    async def acall(
        self,
        operation: str,
        event_id: str | None = "",
        notify: Notifier | None = None,
        **arguments: str | None,
    ) -> ToolResult:
        """Invoke a tool: validate here, then fetch and render in a worker thread."""
        prepared = self.prepare(operation, event_id, arguments)
        if isinstance(prepared, ToolResult):
            return prepared
        return await asyncio.to_thread(self.execute, prepared, notify)

    async def get_speakers(self, event_id: str = "", notify: Notifier | None = None) -> ToolResult:
        return await self.acall("get_speakers", event_id, notify)

    async def find_speaker(
        self, name: str, event_id: str = "", notify: Notifier | None = None,
    ) -> ToolResult:
        return await self.acall("find_speaker", event_id, notify, name=name)

    async def get_sessions_by_speaker(
        self, speaker_name: str, event_id: str = "", notify: Notifier | None = None,
    ) -> ToolResult:
        return await self.acall("get_sessions_by_speaker", event_id, notify, speaker_name=speaker_name)

    async def get_sessions(self, event_id: str = "", notify: Notifier | None = None) -> ToolResult:
        return await self.acall("get_sessions", event_id, notify)

    async def find_session(
        self, query: str, event_id: str = "", notify: Notifier | None = None,
    ) -> ToolResult:
        return await self.acall("find_session", event_id, notify, query=query)

    async def get_schedule(self, event_id: str = "", notify: Notifier | None = None) -> ToolResult:
        return await self.acall("get_schedule", event_id, notify)


# ── Module-level singleton (thread-safe) ────────────────────────────
_dispatcher: ToolDispatcher | None = None
_dispatcher_lock = threading.Lock()


def get_dispatcher() -> ToolDispatcher:
    """Return the process-wide dispatcher using the configured default event."""
    global _dispatcher
    if _dispatcher is None:
        with _dispatcher_lock:
            if _dispatcher is None:
                _dispatcher = ToolDispatcher(default_event_id=SESSIONIZE_EVENT_ID)
    return _dispatcher
