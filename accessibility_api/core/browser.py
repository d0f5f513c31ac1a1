import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Browser, Error as PlaywrightError, async_playwright

from accessibility_api import config
from .errors import AuditError, ErrorKind

log = logging.getLogger("accessibility-audit")


@asynccontextmanager
async def launch_browser() -> AsyncIterator[Browser]:
    """Launch a sandbox-friendly headless Chromium and close it on exit, whatever happens."""
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(
                headless=True,
                args=config.BROWSER_ARGS,
                executable_path=config.BROWSER_EXECUTABLE_PATH or None,
            )
        except PlaywrightError as e:
            raise AuditError(ErrorKind.LAUNCH_FAILURE, f"browser launch failed: {e}") from e
        log.debug("Browser launched (%s)", browser.version)
        try:
            yield browser
        finally:
            try:
                await browser.close()
                log.debug("Browser closed")
            except PlaywrightError as e:
                log.warning("Browser close failed: %s", e)
