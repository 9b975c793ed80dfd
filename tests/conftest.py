from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("GSMARENA_BASE_URL", "https://www.gsmarena.com")


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c


@pytest.fixture
def page():
    page = MagicMock()
    page.route = AsyncMock()
    page.goto = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.content = AsyncMock(return_value="<html><body></body></html>")
    page.close = AsyncMock()
    return page


@pytest.fixture
def browser(page):
    browser = MagicMock()
    browser.new_page = AsyncMock(return_value=page)
    browser.close = AsyncMock()
    browser.contexts = [MagicMock(pages=[page])]
    return browser


@pytest.fixture
def playwright():
    playwright = MagicMock()
    playwright.stop = AsyncMock()
    return playwright


@pytest.fixture
def launcher(playwright, browser):
    """Stands in for launching Chromium through Playwright."""
    return AsyncMock(return_value=(playwright, browser))
