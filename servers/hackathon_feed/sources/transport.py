"""
Fetch transports shared by all source adapters.

- fetch_feed: RSS/Atom via httpx + feedparser
- fetch_json: JSON and GraphQL endpoints via httpx
- fetch_html: static pages via httpx + BeautifulSoup
- fetch_rendered_dom: JavaScript-rendered pages via Playwright (headless Chromium)

Every call opens and closes its own client or browser, so nothing is held
between runs.
"""

from typing import Any, Optional

import feedparser
import httpx
import structlog
from bs4 import BeautifulSoup
from playwright.async_api import async_playwright

logger = structlog.get_logger()


DEFAULT_TIMEOUT = 30.0
DEFAULT_RENDER_TIMEOUT = 45.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
]


class TransportError(Exception):
    """Raised when content was retrieved but cannot be used."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url


class FetchTransport:
    """Retrieval mechanisms used by source adapters."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        render_timeout: float = DEFAULT_RENDER_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """Initialize transport.

        Args:
            timeout: Per-request timeout for HTTP calls in seconds
            render_timeout: Navigation timeout for rendered pages in seconds
            user_agent: User-Agent header sent with every request
        """
        self.timeout = timeout
        self.render_timeout = render_timeout
        self.user_agent = user_agent

    def _headers(self, accept: str, extra: Optional[dict[str, str]] = None) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent, "Accept": accept}
        if extra:
            headers.update(extra)
        return headers

    async def fetch_feed(self, url: str) -> list[Any]:
        """
        Fetch and parse an RSS/Atom feed.

        Returns:
            List of feedparser entries

        Raises:
            httpx.HTTPError: On network or HTTP status failure
            TransportError: If the document is not a usable feed
        """
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(
                url,
                headers=self._headers("application/rss+xml, application/xml, text/xml"),
            )
            response.raise_for_status()
            body = response.text

        parsed = feedparser.parse(body)
        if parsed.bozo and not parsed.entries:
            raise TransportError(url, f"Malformed feed: {parsed.get('bozo_exception')}")
        if not parsed.get("version") and not parsed.entries:
            raise TransportError(url, "Response is not an RSS or Atom feed")

        logger.debug("feed_fetched", url=url, entries=len(parsed.entries))
        return list(parsed.entries)

    async def fetch_json(
        self,
        url: str,
        method: str = "GET",
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        Fetch a JSON document (GET) or call a JSON/GraphQL endpoint (POST).

        Raises:
            httpx.HTTPError: On network or HTTP status failure
            ValueError: If the body is not valid JSON
        """
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=self._headers("application/json", headers),
            )
            response.raise_for_status()
            return response.json()

    async def fetch_html(self, url: str, headers: Optional[dict[str, str]] = None) -> BeautifulSoup:
        """Fetch a static HTML page and return a queryable document."""
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(url, headers=self._headers("text/html", headers))
            response.raise_for_status()
            html = response.text

        return BeautifulSoup(html, "html.parser")

    async def fetch_rendered_dom(
        self,
        url: str,
        wait_for: Optional[str] = None,
        wait_timeout: float = 10.0,
    ) -> BeautifulSoup:
        """
        Render a page in headless Chromium and return the resulting DOM.

        Args:
            url: Page to render
            wait_for: CSS selector that must appear before the DOM is captured
            wait_timeout: Seconds to wait for the selector

        Raises:
            playwright.async_api.Error: On navigation or selector timeout
        """
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(headless=True, args=BROWSER_ARGS)
            try:
                context = await browser.new_context(
                    viewport={"width": 1920, "height": 1080},
                    user_agent=self.user_agent,
                )
                page = await context.new_page()
                await page.goto(
                    url,
                    wait_until="networkidle",
                    timeout=self.render_timeout * 1000,
                )
                if wait_for:
                    await page.wait_for_selector(wait_for, timeout=wait_timeout * 1000)
                html = await page.content()
            finally:
                await browser.close()

        logger.debug("page_rendered", url=url, size=len(html))
        return BeautifulSoup(html, "html.parser")
