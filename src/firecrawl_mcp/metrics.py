"""Metrics tracking for tool invocations."""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class InvocationMetrics:
    """Metrics for a single invocation."""

    operation: str
    timestamp: datetime
    success: bool
    elapsed_ms: float | None = None
    error_kind: str | None = None
    error: str | None = None


@dataclass
class ServerMetrics:
    """Global server metrics."""

    start_time: datetime = field(default_factory=datetime.now)
    total_invocations: int = 0
    successful_invocations: int = 0
    failed_invocations: int = 0
    by_operation: Counter[str] = field(default_factory=Counter)
    by_error_kind: Counter[str] = field(default_factory=Counter)
    recent_invocations: deque[InvocationMetrics] = field(default_factory=lambda: deque(maxlen=50))
    recent_errors: deque[InvocationMetrics] = field(default_factory=lambda: deque(maxlen=20))

    def record_invocation(
        self,
        operation: str,
        success: bool,
        elapsed_ms: float | None = None,
        error_kind: str | None = None,
        error: str | None = None,
    ) -> None:
        """Record an invocation in the metrics.

        Args:
            operation: Name of the invoked tool
            success: Whether the invocation succeeded
            elapsed_ms: Time taken in milliseconds
            error_kind: Failure kind (validation_error, backend_transport_fault, ...)
            error: Error message if failed
        """
        self.total_invocations += 1
        self.by_operation[operation] += 1

        if success:
            self.successful_invocations += 1
        else:
            self.failed_invocations += 1
            if error_kind:
                self.by_error_kind[error_kind] += 1

        metrics = InvocationMetrics(
            operation=operation,
            timestamp=datetime.now(),
            success=success,
            elapsed_ms=elapsed_ms,
            error_kind=error_kind,
            error=error,
        )
        self.recent_invocations.append(metrics)

        # Add to recent errors if failed
        if not success:
            self.recent_errors.append(metrics)

    def get_uptime_seconds(self) -> float:
        """Get server uptime in seconds."""
        return (datetime.now() - self.start_time).total_seconds()

    def get_success_rate(self) -> float:
        """Get success rate as percentage."""
        if self.total_invocations == 0:
            return 0.0
        return (self.successful_invocations / self.total_invocations) * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for JSON serialization."""
        uptime_seconds = self.get_uptime_seconds()

        return {
            "status": "healthy",
            "uptime": {
                "seconds": uptime_seconds,
                "formatted": self._format_uptime(uptime_seconds),
            },
            "start_time": self.start_time.isoformat(),
            "invocations": {
                "total": self.total_invocations,
                "successful": self.successful_invocations,
                "failed": self.failed_invocations,
                "success_rate": round(self.get_success_rate(), 2),
                "by_operation": dict(self.by_operation),
                "by_error_kind": dict(self.by_error_kind),
            },
            "recent_invocations": [
                {
                    "operation": r.operation,
                    "timestamp": r.timestamp.isoformat(),
                    "success": r.success,
                    "elapsed_ms": r.elapsed_ms,
                    "error_kind": r.error_kind,
                }
                for r in list(self.recent_invocations)[-10:][::-1]  # Last 10, newest first
            ],
            "recent_errors": [
                {
                    "operation": r.operation,
                    "timestamp": r.timestamp.isoformat(),
                    "error_kind": r.error_kind,
                    "error": r.error,
                }
                for r in list(self.recent_errors)[-10:][::-1]  # Last 10 errors, newest first
            ],
        }

    @staticmethod
    def _format_uptime(seconds: float) -> str:
        """Format uptime in human-readable format."""
        if seconds < 60:
            return f"{int(seconds)}s"
        elif seconds < 3600:
            minutes = int(seconds / 60)
            secs = int(seconds % 60)
            return f"{minutes}m {secs}s"
        elif seconds < 86400:
            hours = int(seconds / 3600)
            minutes = int((seconds % 3600) / 60)
            return f"{hours}h {minutes}m"
        else:
            days = int(seconds / 86400)
            hours = int((seconds % 86400) / 3600)
            return f"{days}d {hours}h"


# Global metrics instance
_metrics = ServerMetrics()


def get_metrics() -> ServerMetrics:
    """Get the global metrics instance."""
    return _metrics


def reset_metrics() -> None:
    """Replace the global metrics with a fresh instance."""
    global _metrics
    _metrics = ServerMetrics()


def record_invocation(
    operation: str,
    success: bool,
    elapsed_ms: float | None = None,
    error_kind: str | None = None,
    error: str | None = None,
) -> None:
    """Record an invocation in the global metrics."""
    _metrics.record_invocation(operation, success, elapsed_ms, error_kind, error)
