"""Outcome of a single tool invocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from firecrawl_mcp.errors import GatewayError


@dataclass(frozen=True)
class Success:
    """Invocation finished and ``payload`` satisfies the result schema."""

    payload: dict[str, Any]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Invocation failed; ``cause`` tells which kind of failure it was."""

    message: str
    cause: GatewayError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> str:
        return self.cause.kind

    @classmethod
    def from_error(cls, error: GatewayError) -> Failure:
        return cls(message=error.message, cause=error)


InvocationResult = Union[Success, Failure]
