"""Shared Playwright browser for the marketplace adapters.

One Chromium process serves every adapter. Each platform gets its own
long-lived context so cookies and consent banners survive between
searches on the same storefront.
"""

import asyncio
from typing import Dict, Optional

import structlog
from playwright.async_api import Browser, BrowserContext, Playwright, async_playwright

from pricehub.config import settings
from pricehub.scrapers.utils.user_agents import get_extra_headers, get_random_user_agent

logger = structlog.get_logger(__name__)


LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
    "--no-sandbox",
]

# Fonts and video never affect the parsed HTML
BLOCKED_RESOURCES = "**/*.{woff,woff2,ttf,otf,eot,mp4,webm}"

# Hides the most common headless-automation signals
STEALTH_JS = """
Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
Object.defineProperty(navigator, 'languages', { get: () => ['en-IN', 'en-US', 'en'] });
Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3, 4, 5] });
window.chrome = { runtime: {} };
"""


class BrowserManager:
    """Owns the Chromium process and one context per platform."""

    def __init__(self, headless: bool = True, block_resources: bool = True):
        self._headless = headless
        self._block_resources = block_resources
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: Dict[str, BrowserContext] = {}
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        async with self._lock:
            if self._browser is not None:
                return
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self._headless,
                args=LAUNCH_ARGS,
            )
            logger.info("browser_started", headless=self._headless)

    async def stop(self) -> None:
        """Close every platform context, then the browser itself."""
        async with self._lock:
            while self._contexts:
                platform, context = self._contexts.popitem()
                try:
                    await context.close()
                except Exception as e:
                    logger.warning("browser_context_close_failed", platform=platform, error=str(e))

            if self._browser is not None:
                await self._browser.close()
                self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
            logger.info("browser_stopped")

    async def get_context(self, platform: str) -> BrowserContext:
        """Return the platform's context, launching the browser on first use."""
        context = self._contexts.get(platform)
        if context is not None:
            return context

        if not self.is_running:
            await self.start()

        context = await self._new_context()
        self._contexts[platform] = context
        logger.info("browser_context_created", platform=platform)
        return context

    async def _new_context(self) -> BrowserContext:
        context = await self._browser.new_context(
            user_agent=get_random_user_agent(),
            viewport={"width": 1920, "height": 1080},
            locale=settings.BROWSER_LOCALE,
            timezone_id=settings.BROWSER_TIMEZONE,
            extra_http_headers=get_extra_headers(settings.BROWSER_LOCALE),
        )
        await context.add_init_script(STEALTH_JS)

        if self._block_resources:
            await context.route(BLOCKED_RESOURCES, lambda route: route.abort())

        return context


_browser_manager: Optional[BrowserManager] = None


def get_browser_manager() -> BrowserManager:
    """Process-wide BrowserManager, created with the configured headless mode."""
    global _browser_manager
    if _browser_manager is None:
        _browser_manager = BrowserManager(headless=settings.BROWSER_HEADLESS)
    return _browser_manager
