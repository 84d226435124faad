"""Adapter between tool parameters and the Firecrawl backend."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime
from typing import Any

from firecrawl_mcp.errors import BackendLogicalFailure, BackendTransportFault
from firecrawl_mcp.models import (
    CrawlParams,
    CrawlStatusParams,
    ExtractParams,
    MapParams,
    ScrapeParams,
    SearchParams,
    ToolParams,
)
from firecrawl_mcp.providers import FirecrawlBackend
from firecrawl_mcp.tools.catalog import (
    CHECK_CRAWL_STATUS,
    CRAWL,
    EXTRACT,
    MAP,
    SCRAPE,
    SEARCH,
)

logger = logging.getLogger(__name__)

DEFAULT_SCRAPE_FORMATS = ["markdown"]

Handler = Callable[[Any], Awaitable[dict[str, Any]]]


def build_options(
    params: ToolParams, *positional: str, drop_empty: tuple[str, ...] = ()
) -> dict[str, Any]:
    """Collect the parameters the caller actually provided.

    Args:
        params: Validated parameters
        *positional: Fields passed to the backend as positional arguments
        drop_empty: Fields forwarded only when truthy (empty strings and
            empty schemas mean "not given")

    Returns:
        Backend options without unset or null parameters
    """
    options = params.model_dump(
        by_alias=True,
        exclude_unset=True,
        exclude_none=True,
        exclude=set(positional),
    )
    return {
        key: value for key, value in options.items() if value or key not in drop_empty
    }


def isoformat(value: Any) -> Any:
    """Render date/time values as ISO-8601 strings, leave anything else alone."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def compact(**fields: Any) -> dict[str, Any]:
    """Drop fields the backend did not return."""
    return {key: value for key, value in fields.items() if value is not None}


class BackendAdapter:
    """Maps each tool onto one Firecrawl call and back.

    Every handler takes validated parameters and returns a dict shaped like
    the tool's result model, or raises BackendTransportFault /
    BackendLogicalFailure.
    """

    def __init__(
        self, backend: FirecrawlBackend, invocation_timeout: float | None = None
    ) -> None:
        self.backend = backend
        self.invocation_timeout = invocation_timeout

    def handlers(self) -> dict[str, Handler]:
        return {
            SCRAPE: self.scrape,
            MAP: self.map,
            CRAWL: self.crawl,
            CHECK_CRAWL_STATUS: self.check_crawl_status,
            SEARCH: self.search,
            EXTRACT: self.extract,
        }

    async def _call(self, operation: str, call: Awaitable[Any]) -> dict[str, Any]:
        """Await one backend call, converting any fault into BackendTransportFault."""
        try:
            response = await asyncio.wait_for(call, timeout=self.invocation_timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"{operation}: backend call timed out after {self.invocation_timeout}s")
            raise BackendTransportFault(
                f"Firecrawl request for {operation} timed out after {self.invocation_timeout}s",
                operation=operation,
            ) from e
        except Exception as e:
            error_msg = f"{type(e).__name__}: {str(e)}"
            logger.warning(f"{operation}: backend call failed: {error_msg}")
            raise BackendTransportFault(
                f"Firecrawl request for {operation} failed: {error_msg}",
                operation=operation,
            ) from e

        if not isinstance(response, dict):
            raise BackendLogicalFailure(
                f"Unexpected response from Firecrawl for {operation}",
                operation=operation,
            )
        return response

    @staticmethod
    def _fail(
        operation: str, label: str, response: dict[str, Any], fallback: str | None = None
    ) -> BackendLogicalFailure:
        error = response.get("error") or fallback or f"no error details returned for {operation}"
        logger.warning(f"{operation}: Firecrawl reported failure: {error}")
        return BackendLogicalFailure(f"{label} failed: {error}", operation=operation)

    async def scrape(self, params: ScrapeParams) -> dict[str, Any]:
        options = {"formats": list(DEFAULT_SCRAPE_FORMATS), **build_options(params, "url")}

        response = await self._call(SCRAPE, self.backend.scrape_url(params.url, options))

        if "success" in response and not response["success"]:
            raise self._fail(SCRAPE, "Scraping", response)

        return compact(
            url=response.get("url"),
            markdown=response.get("markdown"),
            html=response.get("html"),
            rawHtml=response.get("rawHtml"),
            links=response.get("links"),
            screenshot=response.get("screenshot"),
            extract=response.get("extract"),
            metadata=response.get("metadata"),
            warning=response.get("warning"),
        )

    async def map(self, params: MapParams) -> dict[str, Any]:
        options = build_options(params, "url", drop_empty=("search",))

        response = await self._call(MAP, self.backend.map_url(params.url, options))

        if response.get("error") or not response.get("success", True):
            raise self._fail(MAP, "Map", response)

        links = response.get("links")
        if not isinstance(links, list):
            logger.warning(f"{MAP}: response without links for {params.url}")
            raise BackendLogicalFailure("No links received from Firecrawl API", operation=MAP)

        return {"links": links}

    async def crawl(self, params: CrawlParams) -> dict[str, Any]:
        options = build_options(params, "url")

        response = await self._call(CRAWL, self.backend.async_crawl_url(params.url, options))

        if not response.get("success"):
            raise self._fail(CRAWL, "Crawl", response)

        # The job ID is the only thing returned; page content comes from the status check.
        return {
            "id": response.get("id") or "",
            "url": params.url,
            "success": True,
        }

    async def check_crawl_status(self, params: CrawlStatusParams) -> dict[str, Any]:
        response = await self._call(
            CHECK_CRAWL_STATUS, self.backend.check_crawl_status(params.id)
        )

        if not response.get("success"):
            raise self._fail(CHECK_CRAWL_STATUS, "Status check", response)

        return {
            **compact(
                status=response.get("status"),
                completed=response.get("completed"),
                total=response.get("total"),
                creditsUsed=response.get("creditsUsed"),
                expiresAt=isoformat(response.get("expiresAt")),
                data=response.get("data"),
            ),
            "success": True,
        }

    async def search(self, params: SearchParams) -> dict[str, Any]:
        options = build_options(params, "query", drop_empty=("lang", "country"))

        response = await self._call(SEARCH, self.backend.search(params.query, options))

        if not response.get("success"):
            raise self._fail(SEARCH, "Search", response, fallback="Search failed")

        documents = response.get("data") or []
        if not isinstance(documents, list):
            logger.warning(f"{SEARCH}: expected a list of results, got {type(documents).__name__}")
            raise BackendLogicalFailure(
                "Search failed: unexpected result list from Firecrawl API", operation=SEARCH
            )

        return {
            "success": True,
            "data": [self._search_result(doc) for doc in documents if isinstance(doc, dict)],
        }

    @staticmethod
    def _search_result(doc: dict[str, Any]) -> dict[str, Any]:
        metadata = doc.get("metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        return {
            "url": doc.get("url") or "",
            **compact(
                title=metadata.get("title") or doc.get("title"),
                description=metadata.get("description") or doc.get("description"),
                markdown=doc.get("markdown"),
            ),
        }

    async def extract(self, params: ExtractParams) -> dict[str, Any]:
        # The schema is passed through untouched; Firecrawl interprets it.
        options = build_options(
            params, "urls", drop_empty=("prompt", "systemPrompt", "schema")
        )

        response = await self._call(EXTRACT, self.backend.extract(list(params.urls), options))

        if not response.get("success"):
            raise self._fail(EXTRACT, "Extraction", response, fallback="Unknown error")

        result = {"success": True, "data": response.get("data")}
        if response.get("warning"):
            result["warning"] = response["warning"]
        return result
