"""Tests for the background browser teardown."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, PropertyMock

from app.services.browser_teardown import close_browser, close_browser_in_background


async def _hang(*args, **kwargs):
    await asyncio.Event().wait()


def _page(close_error: Exception | None = None):
    page = MagicMock()
    page.close = AsyncMock(side_effect=close_error)
    return page


def _browser(pages, close=None):
    browser = MagicMock()
    browser.close = close or AsyncMock()
    contexts = PropertyMock(return_value=[MagicMock(pages=pages)])
    type(browser).contexts = contexts
    return browser, contexts


async def test_graceful_close_skips_page_enumeration():
    page = _page()
    browser, contexts = _browser([page])

    await close_browser(browser, close_timeout=0.5, force_close_timeout=0.05)

    browser.close.assert_awaited_once()
    assert contexts.call_count == 0
    page.close.assert_not_awaited()


async def test_hanging_close_forces_every_page_closed():
    failing = _page(close_error=RuntimeError("Target closed"))
    ok_1 = _page()
    ok_2 = _page()
    browser, contexts = _browser([failing, ok_1, ok_2], close=AsyncMock(side_effect=_hang))

    await close_browser(browser, close_timeout=0.01, force_close_timeout=0.01)

    assert contexts.call_count == 1
    failing.close.assert_awaited_once()
    ok_1.close.assert_awaited_once()
    ok_2.close.assert_awaited_once()
    # Graceful attempt plus one retry after the pages are gone
    assert browser.close.await_count == 2


async def test_close_error_triggers_force_path():
    page = _page()
    browser, contexts = _browser([page], close=AsyncMock(side_effect=RuntimeError("boom")))

    await close_browser(browser, close_timeout=0.5, force_close_timeout=0.05)

    page.close.assert_awaited_once()
    assert browser.close.await_count == 2


async def test_page_enumeration_failure_still_retries_close():
    browser = MagicMock()
    browser.close = AsyncMock(side_effect=_hang)
    type(browser).contexts = PropertyMock(side_effect=RuntimeError("Browser has been closed"))

    await close_browser(browser, close_timeout=0.01, force_close_timeout=0.01)

    assert browser.close.await_count == 2


async def test_stops_playwright_driver():
    browser, _ = _browser([])
    playwright = MagicMock()
    playwright.stop = AsyncMock()

    await close_browser(browser, playwright, close_timeout=0.5)

    playwright.stop.assert_awaited_once()


async def test_playwright_stop_failure_is_swallowed():
    browser, _ = _browser([], close=AsyncMock(side_effect=_hang))
    playwright = MagicMock()
    playwright.stop = AsyncMock(side_effect=RuntimeError("driver gone"))

    await close_browser(browser, playwright, close_timeout=0.01, force_close_timeout=0.01)

    playwright.stop.assert_awaited_once()


async def test_background_close_returns_task_without_waiting():
    browser, _ = _browser([], close=AsyncMock(side_effect=_hang))

    task = close_browser_in_background(browser, close_timeout=0.01, force_close_timeout=0.01)
    assert isinstance(task, asyncio.Task)
    assert not task.done()

    await task
    assert task.exception() is None
