"""
Browser Session - Shared stealth Chromium with one isolated context per request
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from loguru import logger
from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright
from playwright_stealth import Stealth

from ..config import DEFAULT_CONFIG
from ..exceptions import BrowserLaunchError


class BrowserSession:
    """Own a Playwright instance and a single Chromium browser."""

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize browser session.

        Args:
            config: Configuration dictionary (uses the 'browser' section)
        """
        defaults = DEFAULT_CONFIG['browser']
        browser_config = config.get('browser', {})

        self.headless = browser_config.get('headless', defaults['headless'])
        self.launch_args = list(browser_config.get('args', defaults['args']))
        self.user_agent = browser_config.get('user_agent', defaults['user_agent'])

        viewport = browser_config.get('viewport', {})
        self.viewport = {
            'width': viewport.get('width', defaults['viewport']['width']),
            'height': viewport.get('height', defaults['viewport']['height'])
        }

        self.timeout = browser_config.get('timeout', defaults['timeout']) * 1000  # Convert to milliseconds
        self.max_sessions = browser_config.get('max_concurrent_sessions', defaults['max_concurrent_sessions'])

        self._stealth = Stealth()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()
        self._semaphore = asyncio.Semaphore(self.max_sessions)

    @property
    def is_running(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def start(self) -> Browser:
        """Launch Chromium on first use; relaunch if the browser has disconnected."""
        async with self._lock:
            if self._browser is not None and not self._browser.is_connected():
                logger.warning("Chromium disconnected, relaunching")
                await self._shutdown()

            if self._browser is None:
                logger.info(f"Launching Chromium (headless={self.headless})")
                try:
                    self._playwright = await async_playwright().start()
                    self._browser = await self._playwright.chromium.launch(
                        headless=self.headless,
                        args=self.launch_args,
                        timeout=self.timeout
                    )
                except Exception as e:
                    await self._shutdown()
                    raise BrowserLaunchError(f"Could not launch Chromium: {e}") from e

        return self._browser

    async def new_context(self) -> BrowserContext:
        """Create a new stealth browser context."""
        browser = await self.start()

        context = await browser.new_context(
            user_agent=self.user_agent,
            viewport=self.viewport
        )
        context.set_default_timeout(self.timeout)
        await self._stealth.apply_stealth_async(context)

        return context

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """
        Yield a fresh page in its own context.

        At most max_concurrent_sessions pages are open at once; the
        context is closed when the block exits.
        """
        async with self._semaphore:
            context = await self.new_context()
            try:
                page = await context.new_page()
                yield page
            finally:
                try:
                    await context.close()
                except Exception as e:
                    logger.debug(f"Could not close browser context: {e}")

    async def _shutdown(self) -> None:
        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug(f"Could not close browser: {e}")
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.debug(f"Could not stop Playwright: {e}")
            self._playwright = None

    async def close(self) -> None:
        """Close browser and cleanup resources."""
        async with self._lock:
            await self._shutdown()
