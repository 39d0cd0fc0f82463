"""Tests for the shared fetch transport with mocked HTTP and browser."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from servers.hackathon_feed.sources.transport import (
    BROWSER_ARGS,
    FetchTransport,
    TransportError,
)


RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Devpost hackathons</title>
    <link>https://devpost.com</link>
    <description>Open hackathons</description>
    <item>
      <title>AI Hack</title>
      <link>https://ai-hack.devpost.com/</link>
      <description>&lt;p&gt;Build with LLMs&lt;/p&gt;</description>
      <pubDate>Mon, 03 Mar 2025 10:00:00 +0000</pubDate>
    </item>
    <item>
      <title>Web3 Jam</title>
      <link>https://web3-jam.devpost.com/</link>
    </item>
  </channel>
</rss>
"""


def _mock_client(mock_client_cls, response):
    client = AsyncMock()
    client.get.return_value = response
    client.request.return_value = response
    mock_client_cls.return_value.__aenter__.return_value = client
    return client


def _response(text="", json_data=None, error=None):
    response = MagicMock()
    response.text = text
    response.json.return_value = json_data
    response.raise_for_status = MagicMock(side_effect=error)
    return response


class TestFetchJson:

    @pytest.mark.asyncio
    async def test_get(self):
        with patch("httpx.AsyncClient") as mock_client_cls:
            client = _mock_client(mock_client_cls, _response(json_data={"response": []}))

            data = await FetchTransport(timeout=12).fetch_json(
                "https://www.hackerearth.com/chrome-extension/events/"
            )

        assert data == {"response": []}
        mock_client_cls.assert_called_once_with(timeout=12, follow_redirects=True)
        method, url = client.request.await_args.args
        assert method == "GET"
        assert url == "https://www.hackerearth.com/chrome-extension/events/"

    @pytest.mark.asyncio
    async def test_post_with_body_and_headers(self):
        with patch("httpx.AsyncClient") as mock_client_cls:
            client = _mock_client(mock_client_cls, _response(json_data={"data": {}}))

            await FetchTransport(user_agent="test-agent").fetch_json(
                "https://api.dorahacks.io/graphql",
                method="POST",
                json_body={"query": "{ x }"},
                headers={"Content-Type": "application/json"},
            )

        kwargs = client.request.await_args.kwargs
        assert client.request.await_args.args[0] == "POST"
        assert kwargs["json"] == {"query": "{ x }"}
        assert kwargs["headers"]["User-Agent"] == "test-agent"
        assert kwargs["headers"]["Accept"] == "application/json"
        assert kwargs["headers"]["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        request = httpx.Request("GET", "https://unstop.com")
        error = httpx.HTTPStatusError(
            "Forbidden", request=request, response=httpx.Response(403, request=request)
        )
        with patch("httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, _response(error=error))

            with pytest.raises(httpx.HTTPStatusError):
                await FetchTransport().fetch_json("https://unstop.com")


class TestFetchFeed:

    @pytest.mark.asyncio
    async def test_parses_rss(self):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, _response(text=RSS_FEED))

            entries = await FetchTransport().fetch_feed("https://devpost.com/api/hackathons")

        assert [e.get("title") for e in entries] == ["AI Hack", "Web3 Jam"]
        assert entries[0].get("link") == "https://ai-hack.devpost.com/"
        assert "Build with LLMs" in entries[0].get("summary")
        assert entries[0].get("published") == "Mon, 03 Mar 2025 10:00:00 +0000"

    @pytest.mark.asyncio
    async def test_json_body_is_not_a_feed(self):
        with patch("httpx.AsyncClient") as mock_client_cls:
            _mock_client(mock_client_cls, _response(text='{"hackathons": []}'))

            with pytest.raises(TransportError):
                await FetchTransport().fetch_feed("https://devpost.com/api/hackathons")


class TestFetchHtml:

    @pytest.mark.asyncio
    async def test_returns_queryable_document(self):
        with patch("httpx.AsyncClient") as mock_client_cls:
            client = _mock_client(
                mock_client_cls, _response(text='<div class="event"><h3>HackMIT</h3></div>')
            )

            soup = await FetchTransport().fetch_html("https://mlh.io/seasons/2025/events")

        assert soup.select_one(".event h3").get_text() == "HackMIT"
        assert client.get.await_args.kwargs["headers"]["Accept"] == "text/html"


def _mock_browser(html="<html><body><h3>ETHIndia</h3></body></html>"):
    page = MagicMock()
    page.goto = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.content = AsyncMock(return_value=html)

    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    return playwright, browser, page


class TestFetchRenderedDom:

    @pytest.mark.asyncio
    async def test_renders_and_closes_browser(self):
        playwright, browser, page = _mock_browser()

        with patch("servers.hackathon_feed.sources.transport.async_playwright") as mock_pw:
            mock_pw.return_value.__aenter__.return_value = playwright

            soup = await FetchTransport(render_timeout=20).fetch_rendered_dom(
                "https://devfolio.co/hackathons", wait_for="h3"
            )

        assert soup.select_one("h3").get_text() == "ETHIndia"
        playwright.chromium.launch.assert_awaited_once_with(headless=True, args=BROWSER_ARGS)
        page.goto.assert_awaited_once_with(
            "https://devfolio.co/hackathons", wait_until="networkidle", timeout=20000
        )
        page.wait_for_selector.assert_awaited_once_with("h3", timeout=10000.0)
        browser.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_wait_selector(self):
        playwright, browser, page = _mock_browser()

        with patch("servers.hackathon_feed.sources.transport.async_playwright") as mock_pw:
            mock_pw.return_value.__aenter__.return_value = playwright

            await FetchTransport().fetch_rendered_dom("https://devfolio.co/hackathons")

        page.wait_for_selector.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_browser_closed_when_navigation_fails(self):
        playwright, browser, page = _mock_browser()
        page.goto.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")

        with patch("servers.hackathon_feed.sources.transport.async_playwright") as mock_pw:
            mock_pw.return_value.__aenter__.return_value = playwright

            with pytest.raises(RuntimeError, match="ERR_NAME_NOT_RESOLVED"):
                await FetchTransport().fetch_rendered_dom("https://devfolio.co/hackathons")

        browser.close.assert_awaited_once()
