"""Tests for gateway assembly and the invocation pipeline."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
import requests

from firecrawl_mcp.core.gateway import Gateway
from firecrawl_mcp.errors import (
    BackendLogicalFailure,
    BackendTransportFault,
    InternalError,
    SchemaViolation,
    UnknownOperation,
    ValidationError,
)
from firecrawl_mcp.metrics import get_metrics
from firecrawl_mcp.models import Failure, Success
from firecrawl_mcp.providers import FirecrawlAppBackend
from firecrawl_mcp.tools.catalog import build_catalog
from firecrawl_mcp.tools.dispatcher import Route, dispatch

# Minimal valid arguments and the backend call they must produce.
REQUIRED_ONLY = [
    ("firecrawl_scrape", {"url": "https://example.com"}, "scrape_url",
     ("https://example.com", {"formats": ["markdown"]})),
    ("firecrawl_map", {"url": "https://example.com"}, "map_url", ("https://example.com", {})),
    ("firecrawl_crawl", {"url": "https://example.com"}, "async_crawl_url", ("https://example.com", {})),
    ("firecrawl_check_crawl_status", {"id": "job-1"}, "check_crawl_status", ("job-1",)),
    ("firecrawl_search", {"query": "firecrawl"}, "search", ("firecrawl", {})),
    ("firecrawl_extract", {"urls": ["https://example.com"]}, "extract", (["https://example.com"], {})),
]

OPERATIONS = [name for name, *_ in REQUIRED_ONLY]

BACKEND_METHODS = ("scrape_url", "map_url", "async_crawl_url", "check_crawl_status", "search", "extract")


def backend_calls(backend: Mock) -> int:
    """Total number of calls made to any backend method."""
    return sum(getattr(backend, name).await_count for name in BACKEND_METHODS)


class TestGatewayConstruction:
    """Tests for building the gateway."""

    def test_requires_api_key(self) -> None:
        """Test that a gateway without key or backend cannot be built."""
        with pytest.raises(ValueError, match="API key"):
            Gateway()

    def test_creates_single_backend(self) -> None:
        """Test that the gateway builds one authenticated client."""
        gateway = Gateway("fc-test-key", "https://firecrawl.internal/")

        assert isinstance(gateway.backend, FirecrawlAppBackend)
        assert gateway.backend.api_url == "https://firecrawl.internal"
        assert gateway.backend.app.api_key == "fc-test-key"

    def test_operations(self, gateway: Gateway) -> None:
        """Test that the gateway exposes the catalog."""
        assert gateway.operations.names() == OPERATIONS

    @pytest.mark.asyncio
    async def test_backend_reused_across_invocations(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that every invocation goes through the same backend handle."""
        mock_backend.map_url.return_value = {"success": True, "links": []}

        await gateway.invoke("firecrawl_map", {"url": "https://a.example"})
        await gateway.invoke("firecrawl_map", {"url": "https://b.example"})

        assert gateway.backend is mock_backend
        assert mock_backend.map_url.await_count == 2


class TestValidation:
    """Tests for the validation stage."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", OPERATIONS)
    async def test_missing_required_never_calls_backend(
        self, gateway: Gateway, mock_backend: Mock, operation: str
    ) -> None:
        """Test that invalid input fails before reaching the backend."""
        result = await gateway.invoke(operation, {})

        assert isinstance(result, Failure)
        assert isinstance(result.cause, ValidationError)
        assert backend_calls(mock_backend) == 0

    @pytest.mark.asyncio
    async def test_none_params(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that missing arguments are treated as an empty mapping."""
        result = await gateway.invoke("firecrawl_scrape", None)

        assert result.kind == "validation_error"
        assert "url" in result.message
        assert backend_calls(mock_backend) == 0

    @pytest.mark.asyncio
    async def test_fractional_numbers_and_extra_keys(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that float numbers are forwarded and unknown keys dropped."""
        mock_backend.scrape_url.return_value = {"success": True, "markdown": "# T"}

        result = await gateway.invoke(
            "firecrawl_scrape",
            {"url": "https://example.com", "waitFor": 1500.5, "maxAge": 3.6e6, "extraKey": 1},
        )

        assert result.ok
        mock_backend.scrape_url.assert_awaited_once_with(
            "https://example.com",
            {"formats": ["markdown"], "waitFor": 1500.5, "maxAge": 3600000.0},
        )


class TestRequiredOnly:
    """Tests that minimal input sends only the declared defaults."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation,params,method,expected_args", REQUIRED_ONLY)
    async def test_backend_arguments(
        self,
        gateway: Gateway,
        mock_backend: Mock,
        operation: str,
        params: dict,
        method: str,
        expected_args: tuple,
    ) -> None:
        """Test the exact backend call for required-only input."""
        getattr(mock_backend, method).return_value = {"success": False, "error": "stop here"}

        await gateway.invoke(operation, params)

        getattr(mock_backend, method).assert_awaited_once_with(*expected_args)
        assert backend_calls(mock_backend) == 1


class TestScenarios:
    """End-to-end invocation scenarios."""

    @pytest.mark.asyncio
    async def test_scrape(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test a default scrape."""
        mock_backend.scrape_url.return_value = {
            "success": True,
            "markdown": "# Test Content",
            "url": "https://example.com",
        }

        result = await gateway.invoke("firecrawl_scrape", {"url": "https://example.com"})

        mock_backend.scrape_url.assert_awaited_once_with(
            "https://example.com", {"formats": ["markdown"]}
        )
        assert result == Success({"url": "https://example.com", "markdown": "# Test Content"})
        assert result.ok

    @pytest.mark.asyncio
    async def test_map_failure(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that an explicit map error is surfaced."""
        mock_backend.map_url.return_value = {"success": False, "error": "not found"}

        result = await gateway.invoke("firecrawl_map", {"url": "https://example.com"})

        assert isinstance(result, Failure)
        assert "not found" in result.message
        assert isinstance(result.cause, BackendLogicalFailure)

    @pytest.mark.asyncio
    async def test_map_without_links(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that a map without links is a distinct failure."""
        mock_backend.map_url.return_value = {"success": True}

        result = await gateway.invoke("firecrawl_map", {"url": "https://example.com"})

        assert isinstance(result, Failure)
        assert result.message == "No links received from Firecrawl API"

    @pytest.mark.asyncio
    async def test_search_title_from_metadata(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that the search title falls back to metadata."""
        mock_backend.search.return_value = {
            "success": True,
            "data": [{"url": "https://example.com", "metadata": {"title": "T"}}],
        }

        result = await gateway.invoke("firecrawl_search", {"query": "test"})

        assert result.ok
        assert result.payload["data"][0]["title"] == "T"

    @pytest.mark.asyncio
    async def test_unknown_operation(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that unknown operations fail without touching the backend."""
        result = await gateway.invoke("firecrawl_delete", {})

        assert isinstance(result, Failure)
        assert isinstance(result.cause, UnknownOperation)
        assert result.kind == "unknown_operation"
        assert backend_calls(mock_backend) == 0

    @pytest.mark.asyncio
    async def test_crawl(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test starting a crawl."""
        mock_backend.async_crawl_url.return_value = {"success": True, "id": "job-123"}

        result = await gateway.invoke(
            "firecrawl_crawl", {"url": "https://example.com/blog", "maxDepth": 2}
        )

        mock_backend.async_crawl_url.assert_awaited_once_with(
            "https://example.com/blog", {"maxDepth": 2}
        )
        assert result == Success({"id": "job-123", "url": "https://example.com/blog", "success": True})

    @pytest.mark.asyncio
    async def test_check_crawl_status(
        self, gateway: Gateway, mock_backend: Mock, crawl_status_response: dict
    ) -> None:
        """Test reporting a crawl job snapshot."""
        mock_backend.check_crawl_status.return_value = crawl_status_response

        result = await gateway.invoke("firecrawl_check_crawl_status", {"id": "job-123"})

        assert result.ok
        assert result.payload["status"] == "completed"
        assert result.payload["expiresAt"] == "2025-01-02T03:04:05+00:00"
        assert len(result.payload["data"]) == 2

    @pytest.mark.asyncio
    async def test_extract(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test structured extraction."""
        mock_backend.extract.return_value = {
            "success": True,
            "data": {"title": "Test Title", "content": "Test Content"},
        }

        result = await gateway.invoke(
            "firecrawl_extract",
            {"urls": ["https://example.com"], "prompt": "Title and content"},
        )

        assert result == Success(
            {"success": True, "data": {"title": "Test Title", "content": "Test Content"}}
        )


class TestFailures:
    """Tests for failure normalization."""

    @pytest.mark.asyncio
    async def test_transport_fault(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that a network error fails only this invocation."""
        mock_backend.scrape_url.side_effect = requests.Timeout("read timed out")

        result = await gateway.invoke("firecrawl_scrape", {"url": "https://example.com"})

        assert isinstance(result, Failure)
        assert isinstance(result.cause, BackendTransportFault)
        assert "read timed out" in result.message

    @pytest.mark.asyncio
    async def test_schema_violation(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that malformed backend data never reaches the caller as success."""
        mock_backend.scrape_url.return_value = {"success": True, "links": "https://example.com"}

        result = await gateway.invoke("firecrawl_scrape", {"url": "https://example.com"})

        assert isinstance(result, Failure)
        assert isinstance(result.cause, SchemaViolation)
        assert result.kind == "schema_violation"

    @pytest.mark.asyncio
    async def test_status_without_status_field(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that a status snapshot without a status string is rejected."""
        mock_backend.check_crawl_status.return_value = {"success": True, "completed": 1}

        result = await gateway.invoke("firecrawl_check_crawl_status", {"id": "job-1"})

        assert result.kind == "schema_violation"

    @pytest.mark.asyncio
    async def test_odd_search_results(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that oddly shaped search data never escapes invoke."""
        mock_backend.search.return_value = {"success": True, "data": [{"url": "u", "metadata": "oops"}]}

        result = await gateway.invoke("firecrawl_search", {"query": "q"})

        assert result == Success({"success": True, "data": [{"url": "u"}]})

        mock_backend.search.return_value = {"success": True, "data": {"web": [{"url": "u"}]}}

        result = await gateway.invoke("firecrawl_search", {"query": "q"})

        assert isinstance(result.cause, BackendLogicalFailure)

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_failure(self) -> None:
        """Test that an unexpected adapter exception is returned as an internal error."""
        route = Route(build_catalog()["firecrawl_map"], AsyncMock(side_effect=KeyError("links")))

        result = await dispatch(route, {"url": "https://example.com"})

        assert isinstance(result, Failure)
        assert isinstance(result.cause, InternalError)
        assert result.message.startswith("Internal error: firecrawl_map failed unexpectedly (KeyError")
        assert get_metrics().by_error_kind["internal_error"] == 1

    @pytest.mark.asyncio
    async def test_failure_after_failure(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that a failed invocation does not affect the next one."""
        mock_backend.map_url.side_effect = [
            requests.ConnectionError("boom"),
            {"success": True, "links": ["https://example.com/a"]},
        ]

        first = await gateway.invoke("firecrawl_map", {"url": "https://example.com"})
        second = await gateway.invoke("firecrawl_map", {"url": "https://example.com"})

        assert not first.ok
        assert second == Success({"links": ["https://example.com/a"]})


class TestConcurrency:
    """Tests for concurrent invocations."""

    @pytest.mark.asyncio
    async def test_parallel_invocations(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test that invocations for the same URL run concurrently."""
        in_flight = 0
        peak = 0

        async def scrape(url, options):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return {"success": True, "url": url, "markdown": "# Same"}

        mock_backend.scrape_url.side_effect = scrape

        results = await asyncio.gather(
            *(gateway.invoke("firecrawl_scrape", {"url": "https://example.com"}) for _ in range(5))
        )

        assert all(result.ok for result in results)
        assert peak == 5


class TestMetricsRecording:
    """Tests that invocations are recorded in the metrics."""

    @pytest.mark.asyncio
    async def test_outcomes_recorded(self, gateway: Gateway, mock_backend: Mock) -> None:
        """Test success and failure counters."""
        mock_backend.map_url.return_value = {"success": True, "links": []}

        await gateway.invoke("firecrawl_map", {"url": "https://example.com"})
        await gateway.invoke("firecrawl_map", {})
        await gateway.invoke("firecrawl_delete", {})

        metrics = get_metrics()
        assert metrics.total_invocations == 3
        assert metrics.successful_invocations == 1
        assert metrics.failed_invocations == 2
        assert metrics.by_error_kind == {"validation_error": 1, "unknown_operation": 1}
        assert metrics.by_operation["firecrawl_map"] == 2
