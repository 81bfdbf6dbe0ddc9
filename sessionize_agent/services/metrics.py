"""CloudWatch custom metrics with background batching.

Two families of data points are collected:

* ``Upstream/*`` — one set per Sessionize HTTP call (count, latency, errors).
* ``Tool/InvocationCount`` — one per tool invocation, dimensioned by the
  tool name and its outcome (``success``, ``usage_error``, ``api_error``,
  ``internal_error``).

Data points are buffered in memory.  With ``METRICS_ENABLED=true`` a daemon
thread pushes them to CloudWatch every ``FLUSH_INTERVAL_SECONDS``; otherwise
they are only logged at DEBUG level and never buffered.

Usage
-----
>>> from sessionize_agent.services.metrics import metrics
>>> metrics.record_upstream("GET Speakers", latency_ms=84.2)
>>> metrics.record_upstream("GET Sessions", latency_ms=12.0, error_type="404")
>>> metrics.record_tool("find_speaker", outcome="success")
"""

from __future__ import annotations

import atexit
import logging
import os
import threading
import time
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

NAMESPACE = "SessionizeAgent"
FLUSH_INTERVAL_SECONDS = 60
MAX_BATCH_SIZE = 1_000  # CloudWatch API limit per PutMetricData call


def _dims(**pairs: str) -> list[dict[str, str]]:
    return [{"Name": name, "Value": value} for name, value in pairs.items()]


class MetricsClient:
    """Batched CloudWatch metrics publisher."""

    def __init__(self) -> None:
        self._enabled = os.getenv("METRICS_ENABLED", "false").lower() == "true"
        self._buffer: list[dict[str, Any]] = []
        self._lock = threading.Lock()
        self._cw_client = None

        if self._enabled:
            self._start_flush_thread()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _get_cw_client(self):
        if self._cw_client is None:
            import boto3

            self._cw_client = boto3.client("cloudwatch")
        return self._cw_client

    # ── Public API ────────────────────────────────────────────────────

    def record_upstream(
        self,
        operation: str,
        latency_ms: float,
        error_type: str | None = None,
    ) -> None:
        """Record one Sessionize HTTP call; ``error_type`` marks a failure."""
        now = datetime.now(UTC)
        status = "failure" if error_type else "success"

        self._append("Upstream/RequestCount", _dims(Status=status), 1, "Count", now)
        self._append(
            "Upstream/Latency", _dims(Operation=operation), latency_ms, "Milliseconds", now,
        )
        if error_type:
            self._append("Upstream/ErrorCount", _dims(ErrorType=error_type), 1, "Count", now)

        logger.debug(
            "Metric: sessionize %s %s latency=%.1fms", operation, error_type or "ok", latency_ms,
        )

    def record_tool(self, tool_name: str, outcome: str) -> None:
        """Record one tool invocation and how it ended."""
        self._append(
            "Tool/InvocationCount",
            _dims(Tool=tool_name, Outcome=outcome),
            1,
            "Count",
            datetime.now(UTC),
        )
        logger.debug("Metric: tool %s outcome=%s", tool_name, outcome)

    def flush(self) -> int:
        """Send buffered metrics to CloudWatch.  Returns count sent."""
        with self._lock:
            if not self._buffer:
                return 0
            batch = self._buffer[:]
            self._buffer.clear()

        if not self._enabled:
            logger.debug("Metrics flush skipped (not enabled): %d items", len(batch))
            return 0

        sent = 0
        try:
            cw = self._get_cw_client()
            for i in range(0, len(batch), MAX_BATCH_SIZE):
                chunk = batch[i : i + MAX_BATCH_SIZE]
                cw.put_metric_data(Namespace=NAMESPACE, MetricData=chunk)
                sent += len(chunk)
            logger.info("Flushed %d metrics to CloudWatch", sent)
        except Exception:
            logger.exception("Failed to flush metrics to CloudWatch")
        return sent

    # ── Internal ──────────────────────────────────────────────────────

    def _append(
        self,
        name: str,
        dimensions: list[dict[str, str]],
        value: float,
        unit: str,
        timestamp: datetime,
    ) -> None:
        if not self._enabled:
            return
        point = {
            "MetricName": name,
            "Dimensions": dimensions,
            "Timestamp": timestamp,
            "Value": value,
            "Unit": unit,
        }
        with self._lock:
            self._buffer.append(point)

    def _start_flush_thread(self) -> None:
        def _loop():
            while True:
                time.sleep(FLUSH_INTERVAL_SECONDS)
                try:
                    self.flush()
                except Exception:
                    logger.exception("Metrics flush thread error")

        t = threading.Thread(target=_loop, daemon=True, name="metrics-flush")
        t.start()
        atexit.register(self.flush)
        logger.info("Metrics flush thread started (interval=%ds)", FLUSH_INTERVAL_SECONDS)


# ── Module-level singleton ──────────────────────────────────────────
metrics = MetricsClient()
