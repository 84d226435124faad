"""Firecrawl backend built on the official firecrawl-py SDK."""

from __future__ import annotations

import asyncio
import functools
import logging
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import requests
from firecrawl import FirecrawlApp, ScrapeOptions
from pydantic import BaseModel

from firecrawl_mcp.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from firecrawl_mcp.providers.base import FirecrawlBackend

# Configure logging
logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def sdk_kwargs(options: dict[str, Any]) -> dict[str, Any]:
    """Rename wire options to SDK keyword arguments (``onlyMainContent`` -> ``only_main_content``)."""
    return {_CAMEL_BOUNDARY.sub("_", key).lower(): value for key, value in options.items()}


def to_dict(response: Any) -> Any:
    """Convert an SDK response model to a plain dict without unset fields."""
    if isinstance(response, BaseModel):
        return response.model_dump(exclude_none=True)
    return response


class FirecrawlAppBackend(FirecrawlBackend):
    """Firecrawl client wrapping one ``FirecrawlApp`` instance.

    The SDK is synchronous, so each call runs in the event loop's default
    executor and concurrent invocations do not block each other. Firecrawl
    error responses (``requests.HTTPError`` with a JSON body) come back
    in-band as ``{"success": False, "error": ...}``; anything else the SDK
    raises propagates to the caller.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Firecrawl API key
            api_url: Base URL override for self-hosted Firecrawl (default: hosted API)
            timeout: Seconds to wait for one SDK call, extract job polling
                included (default: 300)
        """
        if not api_key:
            raise ValueError("A Firecrawl API key is required")

        self.api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout
        self.app = FirecrawlApp(api_key=api_key, api_url=self.api_url)

        logger.info(f"FirecrawlAppBackend initialized for {self.api_url}")

    async def _run(
        self, action: str, method: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Any:
        """Run one blocking SDK call in the executor.

        Raises:
            requests.RequestException: On connection errors or error statuses
                without a JSON body
            asyncio.TimeoutError: If the call takes longer than ``timeout``
        """
        logger.debug(f"Firecrawl {action} {args!r}")

        # Run the SDK in thread pool to avoid blocking
        loop = asyncio.get_event_loop()
        call = functools.partial(method, *args, **kwargs)
        try:
            response = await asyncio.wait_for(
                loop.run_in_executor(None, call), timeout=self.timeout
            )
        except requests.HTTPError as e:
            body = _error_body(e.response)
            if body is None:
                raise
            return {"success": False, "error": body.get("error") or str(e)}

        return to_dict(response)

    async def scrape_url(self, url: str, options: dict[str, Any]) -> dict[str, Any]:
        return await self._run("scrape_url", self.app.scrape_url, url, **sdk_kwargs(options))

    async def map_url(self, url: str, options: dict[str, Any]) -> dict[str, Any]:
        return await self._run("map_url", self.app.map_url, url, **sdk_kwargs(options))

    async def async_crawl_url(self, url: str, options: dict[str, Any]) -> dict[str, Any]:
        return await self._run(
            "async_crawl_url", self.app.async_crawl_url, url, **sdk_kwargs(options)
        )

    async def check_crawl_status(self, job_id: str) -> dict[str, Any]:
        # The SDK puts the ID into the URL path as is
        return await self._run(
            "check_crawl_status", self.app.check_crawl_status, quote(job_id, safe="")
        )

    async def search(self, query: str, options: dict[str, Any]) -> dict[str, Any]:
        kwargs = sdk_kwargs(options)
        if "scrape_options" in kwargs:
            kwargs["scrape_options"] = ScrapeOptions(**kwargs["scrape_options"])
        return await self._run("search", self.app.search, query, **kwargs)

    async def extract(self, urls: list[str], options: dict[str, Any]) -> dict[str, Any]:
        # The SDK starts the extract job and polls it until it finishes
        return await self._run("extract", self.app.extract, urls, **sdk_kwargs(options))


def _error_body(response: requests.Response | None) -> dict[str, Any] | None:
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None
