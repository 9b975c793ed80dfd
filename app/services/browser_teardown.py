"""Best-effort shutdown of a Playwright browser.

Teardown runs detached from the request that launched the browser. Nothing in
here reports back to the caller: every failure is logged at debug level and
dropped.
"""

import asyncio
import logging

from playwright.async_api import Browser, Page, Playwright

logger = logging.getLogger(__name__)

CLOSE_TIMEOUT = 3.0
FORCE_CLOSE_TIMEOUT = 1.0


def _open_pages(browser: Browser) -> list[Page]:
    try:
        return [page for context in browser.contexts for page in context.pages]
    except Exception:
        logger.debug("Could not enumerate open pages", exc_info=True)
        return []


async def _close_page(page: Page) -> None:
    try:
        await page.close()
    except Exception:
        logger.debug("Page close failed", exc_info=True)


async def _force_close(browser: Browser, timeout: float) -> None:
    pages = _open_pages(browser)
    await asyncio.gather(*(_close_page(page) for page in pages))
    try:
        await asyncio.wait_for(browser.close(), timeout=timeout)
    except Exception:
        logger.debug("Forced browser close did not finish cleanly", exc_info=True)


async def close_browser(
    browser: Browser,
    playwright: Playwright | None = None,
    *,
    close_timeout: float = CLOSE_TIMEOUT,
    force_close_timeout: float = FORCE_CLOSE_TIMEOUT,
) -> None:
    """Close the browser gracefully, falling back to closing its pages first.

    If ``browser.close()`` finishes within ``close_timeout`` the open pages are
    never touched. Otherwise every page is closed in parallel, each failure
    isolated from the others, and ``browser.close()`` is retried once within
    ``force_close_timeout``. Never raises.
    """
    try:
        await asyncio.wait_for(browser.close(), timeout=close_timeout)
    except Exception:
        logger.debug("Graceful browser close failed, forcing page close")
        try:
            await _force_close(browser, force_close_timeout)
        except Exception:
            logger.debug("Forced browser close failed", exc_info=True)

    if playwright is not None:
        try:
            await asyncio.wait_for(playwright.stop(), timeout=force_close_timeout)
        except Exception:
            logger.debug("Playwright driver did not stop cleanly", exc_info=True)


def close_browser_in_background(
    browser: Browser,
    playwright: Playwright | None = None,
    *,
    close_timeout: float = CLOSE_TIMEOUT,
    force_close_timeout: float = FORCE_CLOSE_TIMEOUT,
) -> asyncio.Task:
    """Schedule close_browser() without waiting for it."""
    return asyncio.create_task(
        close_browser(
            browser,
            playwright,
            close_timeout=close_timeout,
            force_close_timeout=force_close_timeout,
        )
    )
