"""Runs one invocation: validate input, call the adapter, validate output."""

from __future__ import annotations

import logging
import time
from typing import Any, NamedTuple

from firecrawl_mcp.errors import (
    BackendLogicalFailure,
    BackendTransportFault,
    GatewayError,
    InternalError,
    SchemaViolation,
    ValidationError,
)
from firecrawl_mcp.metrics import record_invocation
from firecrawl_mcp.models import Failure, InvocationResult, Success
from firecrawl_mcp.tools.catalog import Operation, dump_model
from firecrawl_mcp.tools.service import Handler

logger = logging.getLogger(__name__)


class Route(NamedTuple):
    """An operation paired with the adapter function that executes it."""

    operation: Operation
    handler: Handler


async def dispatch(route: Route, raw_params: Any) -> InvocationResult:
    """Execute one invocation.

    Invocations share no state, so any number of them may run concurrently.

    Args:
        route: Operation and adapter function to run
        raw_params: Untrusted parameters from the caller (None means no parameters)

    Returns:
        Success with the validated payload, or Failure describing what went wrong
    """
    operation = route.operation
    start = time.perf_counter()

    try:
        params = operation.validate_params({} if raw_params is None else raw_params)
        raw_result = await route.handler(params)
        payload = dump_model(operation.validate_result(raw_result))
    except ValidationError as e:
        logger.info(f"{operation.name}: rejected invalid arguments: {e.message}")
        return _failed(operation.name, e, start)
    except (BackendTransportFault, BackendLogicalFailure) as e:
        return _failed(operation.name, e, start)
    except SchemaViolation as e:
        logger.exception(f"{operation.name}: adapter result does not match the result schema")
        return _failed(operation.name, e, start)
    except Exception as e:
        logger.exception(f"{operation.name}: unexpected error while handling the invocation")
        return _failed(operation.name, InternalError(operation.name, e), start)

    record_invocation(operation.name, success=True, elapsed_ms=_elapsed_ms(start))
    return Success(payload)


def _failed(operation: str, error: GatewayError, start: float) -> Failure:
    record_invocation(
        operation,
        success=False,
        elapsed_ms=_elapsed_ms(start),
        error_kind=error.kind,
        error=error.message,
    )
    return Failure.from_error(error)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
