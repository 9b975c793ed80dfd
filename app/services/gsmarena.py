import asyncio
import logging
from collections.abc import Awaitable, Callable

from bs4 import BeautifulSoup
from playwright.async_api import (
    Browser,
    Page,
    Playwright,
    Route,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from app.exceptions.custom import ResultsNotFoundError
from app.schemas.gsm import LaunchConfig, PhoneEntry
from app.services.browser_provisioner import BrowserProvisioner
from app.services.browser_teardown import (
    CLOSE_TIMEOUT,
    FORCE_CLOSE_TIMEOUT,
    close_browser_in_background,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://www.gsmarena.com"
NAVIGATION_TIMEOUT_MS = 20_000
RESULTS_TIMEOUT_MS = 15_000

_RESULTS_SELECTOR = "#decrypted"
_ITEM_SELECTOR = "div#review-body > .makers > ul > li"

# Sub-resources the DOM extraction never needs
_BLOCKED_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font", "media"})

Launcher = Callable[[LaunchConfig], Awaitable[tuple[Playwright, Browser]]]


def parse_search_results(html: str) -> list[PhoneEntry]:
    """Extract phone entries from a GSMArena results page, in document order.

    Items missing their link, thumbnail or name element are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    entries: list[PhoneEntry] = []
    for item in soup.select(_ITEM_SELECTOR):
        link = item.select_one("a")
        img = item.select_one("a > img")
        name_el = item.select_one("a > strong > span")
        if link is None or img is None or name_el is None:
            continue
        entries.append(
            PhoneEntry(
                id=link.get("href") or "",
                name=name_el.get_text().strip(),
                image=img.get("src") or "",
            )
        )
    return entries


async def _launch_browser(config: LaunchConfig) -> tuple[Playwright, Browser]:
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(
            executable_path=config.executable_path,
            args=config.args,
            headless=config.headless,
        )
    except Exception:
        await playwright.stop()
        raise
    return playwright, browser


async def _block_heavy_resources(route: Route) -> None:
    if route.request.resource_type in _BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


class GsmArenaService:
    def __init__(
        self,
        provisioner: BrowserProvisioner,
        *,
        base_url: str = BASE_URL,
        navigation_timeout_ms: int = NAVIGATION_TIMEOUT_MS,
        results_timeout_ms: int = RESULTS_TIMEOUT_MS,
        close_timeout: float = CLOSE_TIMEOUT,
        force_close_timeout: float = FORCE_CLOSE_TIMEOUT,
        launcher: Launcher | None = None,
    ):
        self._provisioner = provisioner
        self._base_url = base_url.rstrip("/")
        self._navigation_timeout_ms = navigation_timeout_ms
        self._results_timeout_ms = results_timeout_ms
        self._close_timeout = close_timeout
        self._force_close_timeout = force_close_timeout
        self._launcher = launcher or _launch_browser
        self._teardowns: set[asyncio.Task] = set()

    def search_url(self, query: str) -> str:
        return f"{self._base_url}/res.php3?sSearch={query}"

    async def search(
        self, query: str, existing: list[PhoneEntry] | None = None
    ) -> list[PhoneEntry]:
        """Search GSMArena for phones matching an already formatted query.

        ``query`` is used verbatim in ``sSearch``; callers pass it through
        format_query() first.

        New entries are appended to ``existing`` in place. Best-effort, never
        raises: on any failure ``existing`` comes back without new entries.
        The browser is closed in the background after returning.
        """
        entries = existing if existing is not None else []
        playwright: Playwright | None = None
        browser: Browser | None = None
        try:
            config = self._provisioner.launch_config()
            playwright, browser = await self._launcher(config)
            found = await self._scrape(browser, config, query)
        except ResultsNotFoundError as exc:
            logger.warning("%s (no results, captcha or markup change)", exc.message)
        except Exception:
            logger.exception("GSMArena search failed for %r", query)
        else:
            entries.extend(found)
            logger.info("GSMArena search %r: %d results", query, len(found))
        finally:
            if browser is not None:
                self._schedule_teardown(browser, playwright)
        return entries

    async def wait_closed(self) -> None:
        """Wait for every pending background browser teardown to finish."""
        if self._teardowns:
            await asyncio.gather(*self._teardowns, return_exceptions=True)

    async def _scrape(
        self, browser: Browser, config: LaunchConfig, query: str
    ) -> list[PhoneEntry]:
        viewport = config.viewport.model_dump() if config.viewport else None
        page = await browser.new_page(viewport=viewport)
        page.set_default_navigation_timeout(self._navigation_timeout_ms)
        await page.route("**/*", _block_heavy_resources)

        await page.goto(self.search_url(query), wait_until="domcontentloaded")
        await self._wait_for_results(page, query)
        return parse_search_results(await page.content())

    async def _wait_for_results(self, page: Page, query: str) -> None:
        try:
            await page.wait_for_selector(
                _RESULTS_SELECTOR, timeout=self._results_timeout_ms, state="attached"
            )
        except PlaywrightTimeoutError as exc:
            raise ResultsNotFoundError(query) from exc

    def _schedule_teardown(self, browser: Browser, playwright: Playwright | None) -> None:
        task = close_browser_in_background(
            browser,
            playwright,
            close_timeout=self._close_timeout,
            force_close_timeout=self._force_close_timeout,
        )
        self._teardowns.add(task)
        task.add_done_callback(self._teardowns.discard)
