"""Playwright-based PNG snapshot of the generated map page."""

import logging
import os
from pathlib import Path

from playwright.async_api import async_playwright, Page, Browser, TimeoutError as PlaywrightTimeoutError

from config import LAYER_WAIT_MS, PAGE_LOAD_TIMEOUT_MS, VIEWPORT

logger = logging.getLogger(__name__)

# Leaflet draws each choropleth polygon as an interactive SVG path
LAYER_SELECTOR = "path.leaflet-interactive"


class MapSnapshotter:
    def __init__(self, headless: bool = True):
        self.headless = headless
        self._playwright = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    async def start(self):
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless)
        context = await self._browser.new_context(viewport=VIEWPORT)
        self._page = await context.new_page()

    async def stop(self):
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()

    async def capture(self, html_path: str, png_path: str) -> str:
        """Open a generated map page and save a full-page screenshot."""
        page = self._page
        url = Path(html_path).resolve().as_uri()
        logger.info("Opening %s", url)
        await page.goto(url, wait_until="load", timeout=PAGE_LOAD_TIMEOUT_MS)

        try:
            await page.wait_for_selector(LAYER_SELECTOR, state="attached", timeout=LAYER_WAIT_MS)
        except PlaywrightTimeoutError:
            logger.warning("No choropleth layer drawn after %d ms; capturing basemap only.", LAYER_WAIT_MS)

        try:
            await page.wait_for_load_state("networkidle", timeout=LAYER_WAIT_MS)
        except PlaywrightTimeoutError:
            logger.info("Tiles still loading after %d ms; capturing anyway.", LAYER_WAIT_MS)

        os.makedirs(os.path.dirname(png_path) or ".", exist_ok=True)
        await page.screenshot(path=png_path, full_page=True)
        logger.info("Snapshot saved to %s", png_path)
        return png_path
