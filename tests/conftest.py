# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web

from keyword_scout.crawler.models import PageData


def html_page(body: str) -> web.Response:
    return web.Response(text=f"<html><body>{body}</body></html>", content_type="text/html")


async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on an ephemeral localhost port, yield its base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def site_server() -> AsyncIterator[str]:
    """
    Small site: a home page linking to two same-site pages (one twice),
    an external page and a relative path.
    """
    app = web.Application()

    async def handle_root(request):
        base = f"http://{request.host}"
        return html_page(
            "<h1>Welcome</h1>\n"
            '<p class="tagline">Connect with friends\r\nand the world around you</p>\n'
            f'<a href="{base}/team/about">About</a>'
            f'<a href="{base}/team/emails">Emails</a>'
            f'<a href="{base}/team/about">About again</a>'
            '<a href="https://elsewhere.org/">Elsewhere</a>'
            '<a href="/team/relative">Relative</a>'
        )

    async def handle_about(_):
        return html_page("<div>About the team</div>")

    async def handle_emails(_):
        return html_page(
            "<p>Mail jane.doe@example.com or press at example dot org</p>"
            "<p>noreply@example.com</p>"
        )

    app.router.add_get("/", handle_root)
    app.router.add_get("/team/about", handle_about)
    app.router.add_get("/team/emails", handle_emails)

    async for url in serve_app(app):
        yield url


@pytest.fixture()
def url_list(tmp_path: Path) -> Path:
    """CSV file in the ``rank,"url"`` layout."""
    path = tmp_path / "urls.csv"
    path.write_text('1,"found.example.com"\n2,"other.example.com"\n3,"broken"\n', encoding="utf-8")
    return path


@pytest.fixture()
def mock_page_data() -> PageData:
    """PageData with same-site, duplicate, external and relative links."""
    html = (
        "<html><body>"
        '<a href="http://example.com/a/one">1</a>'
        '<a href="http://example.com/a/two">2</a>'
        '<a href="http://example.com/a/one">1 again</a>'
        '<a href="http://external.com/a/one">X</a>'
        '<a href="/a/three">relative</a>'
        '<a href="http://example.com/a/four">4</a>'
        "</body></html>"
    )
    return PageData(url="http://example.com", content=html.encode())
