"""Gateway assembly: one backend handle, one catalog, one routing table."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any

from firecrawl_mcp.config import DEFAULT_TIMEOUT, Settings
from firecrawl_mcp.errors import UnknownOperation
from firecrawl_mcp.metrics import record_invocation
from firecrawl_mcp.models import Failure, InvocationResult
from firecrawl_mcp.providers import FirecrawlAppBackend, FirecrawlBackend
from firecrawl_mcp.tools.catalog import Catalog, build_catalog
from firecrawl_mcp.tools.dispatcher import Route, dispatch
from firecrawl_mcp.tools.service import BackendAdapter

logger = logging.getLogger(__name__)


class Gateway:
    """Routes tool invocations by name to the Firecrawl adapter.

    The backend client is created once here and shared by every invocation.
    Pass ``backend`` to use an existing client instead (the API key is then
    not needed).
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        *,
        backend: FirecrawlBackend | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        invocation_timeout: float | None = None,
    ) -> None:
        if backend is None:
            if not api_key:
                raise ValueError("A Firecrawl API key is required")
            backend = FirecrawlAppBackend(api_key, api_url=api_url, timeout=timeout)

        self.backend = backend
        self.catalog: Catalog = build_catalog()

        adapter = BackendAdapter(backend, invocation_timeout=invocation_timeout)
        handlers = adapter.handlers()
        self._routes = MappingProxyType(
            {name: Route(operation, handlers[name]) for name, operation in self.catalog.items()}
        )

        logger.info(
            f"Gateway initialized with {len(self._routes)} operations "
            f"(api_url={api_url or 'default'})"
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Gateway:
        return cls(
            settings.api_key,
            settings.api_url,
            timeout=settings.timeout,
            invocation_timeout=settings.invocation_timeout,
        )

    @property
    def operations(self) -> Catalog:
        return self.catalog

    async def invoke(self, operation: str, raw_params: Any = None) -> InvocationResult:
        """Invoke an operation by name.

        Args:
            operation: Tool name, e.g. ``firecrawl_scrape``
            raw_params: Untrusted parameter mapping from the caller

        Returns:
            Success or Failure; this method does not raise for invocation errors
        """
        route = self._routes.get(operation)
        if route is None:
            error = UnknownOperation(operation)
            logger.info(error.message)
            record_invocation(operation, success=False, error_kind=error.kind, error=error.message)
            return Failure.from_error(error)

        return await dispatch(route, raw_params)
