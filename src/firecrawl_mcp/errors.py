"""Error taxonomy for tool invocations.

Every failure that can end an invocation is one of the classes below. They
are turned into a ``Failure`` result by the dispatcher and never escape
``Gateway.invoke``.
"""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base class for invocation failures."""

    kind = "gateway_error"

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation


class ValidationError(GatewayError):
    """Caller input does not satisfy an operation's parameter schema."""

    kind = "validation_error"

    def __init__(self, operation: str, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        details = "; ".join(f"{_format_loc(e['loc'])}: {e['msg']}" for e in errors)
        super().__init__(
            f"Invalid arguments for {operation}: {details}", operation=operation
        )


class UnknownOperation(GatewayError):
    """The requested operation is not in the catalog."""

    kind = "unknown_operation"

    def __init__(self, operation: str) -> None:
        super().__init__(f"Unknown operation: {operation}", operation=operation)


class BackendTransportFault(GatewayError):
    """Network, connection or timeout failure while talking to Firecrawl."""

    kind = "backend_transport_fault"


class BackendLogicalFailure(GatewayError):
    """Firecrawl answered but reported a failure in the response body."""

    kind = "backend_logical_failure"


class SchemaViolation(GatewayError):
    """Adapter output does not match the operation's declared result schema.

    This is an internal error: the adapter broke its contract, the caller
    did nothing wrong.
    """

    kind = "schema_violation"

    def __init__(self, operation: str, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        details = "; ".join(f"{_format_loc(e['loc'])}: {e['msg']}" for e in errors)
        super().__init__(
            f"Internal error: {operation} produced a malformed result ({details})",
            operation=operation,
        )


class InternalError(GatewayError):
    """An unexpected exception escaped the adapter."""

    kind = "internal_error"

    def __init__(self, operation: str, error: Exception) -> None:
        super().__init__(
            f"Internal error: {operation} failed unexpectedly "
            f"({type(error).__name__}: {error})",
            operation=operation,
        )


def _format_loc(loc: tuple[Any, ...] | list[Any]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"
