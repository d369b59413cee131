"""
================================================================================
Browser Manager
================================================================================

Browser session lifecycle management for UI automation.

Features:
    - One session per worker, reused across passing tests
    - Liveness probe and transparent re-provisioning
    - Cheap state reset (cookies + storage) after a passing test
    - Disposal after a failing test
    - Console message buffer for failure triage

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    ConsoleMessage,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from .config_loader import RunConfig


# Chromium flags for CI containers
CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]

CLEAR_STORAGE_SCRIPT = "() => { localStorage.clear(); sessionStorage.clear(); }"

# Console messages kept per session
CONSOLE_BUFFER_SIZE = 500


class BrowserSession:
    """
    One live browser plus its navigation and storage state.

    Owned by BrowserManager; page objects hold a non-owning reference.
    """

    def __init__(
        self,
        browser: Browser,
        context: BrowserContext,
        page: Page,
        browser_kind: str,
        headless: bool,
        window_size: Tuple[int, int],
    ):
        self.browser = browser
        self.context = context
        self.page = page
        self.browser_kind = browser_kind
        self.headless = headless
        self.window_size = window_size
        self._console: Deque[str] = deque(maxlen=CONSOLE_BUFFER_SIZE)
        page.on("console", self._on_console)

    def _on_console(self, message: ConsoleMessage) -> None:
        self._console.append(f"[{message.type.upper()}] {message.text}")

    @property
    def current_url(self) -> str:
        try:
            return self.page.url
        except PlaywrightError as e:
            logger.warning(f"Could not get current URL: {e}")
            return ""

    @property
    def title(self) -> str:
        try:
            return self.page.title()
        except PlaywrightError as e:
            logger.warning(f"Could not get page title: {e}")
            return ""

    def console_messages(self, levels: Optional[Tuple[str, ...]] = None) -> List[str]:
        """
        Buffered console messages, optionally filtered by level.

        Args:
            levels: e.g. ("ERROR", "WARNING"); playwright reports "warning"
        """
        if not levels:
            return list(self._console)
        wanted = tuple(f"[{level.upper()}]" for level in levels)
        return [line for line in self._console if line.startswith(wanted)]

    def is_alive(self) -> bool:
        """Liveness probe via a script round trip. Never raises."""
        try:
            if self.page.is_closed() or not self.browser.is_connected():
                return False
            self.page.evaluate("() => window.location.href")
            return True
        except PlaywrightError as e:
            logger.debug(f"Browser session is no longer valid: {e}")
            return False

    def reset_state(self) -> None:
        """Clear cookies and local/session storage, keeping the browser open."""
        try:
            self.context.clear_cookies()
        except PlaywrightError as e:
            logger.warning(f"Error clearing cookies: {e}")
        try:
            self.page.evaluate(CLEAR_STORAGE_SCRIPT)
        except PlaywrightError as e:
            logger.debug(f"Could not clear browser storage: {e}")
        self._console.clear()
        logger.debug("Browser state cleared for next test")

    def close(self) -> None:
        """Close context and browser; errors are logged."""
        for closable in (self.context, self.browser):
            try:
                closable.close()
            except PlaywrightError as e:
                logger.debug(f"Error while closing {type(closable).__name__}: {e}")


class BrowserManager:
    """
    Manages the browser session of one worker.

    Usage:
        with BrowserManager(config) as manager:
            session = manager.acquire()
            session.page.goto("https://example.com")
            manager.release(failed=False)
    """

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
    }

    def __init__(self, config: RunConfig):
        """
        Args:
            config: Resolved run configuration (browser, headless, window size)
        """
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._session: Optional[BrowserSession] = None

    def __enter__(self) -> "BrowserManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def session(self) -> Optional[BrowserSession]:
        return self._session

    def acquire(self) -> BrowserSession:
        """
        Return the live session, provisioning a new one when needed.

        An unresponsive session is disposed and replaced; the condition
        is logged and never propagated.
        """
        if self._session is not None:
            if self._session.is_alive():
                logger.info("Reusing existing browser session")
                return self._session
            logger.warning("⚠️ Browser session unresponsive, starting a new one")
            self.dispose()

        self._session = self._provision()
        return self._session

    def release(self, failed: bool) -> None:
        """
        End a test's use of the session.

        Args:
            failed: Dispose the session when True, reset its state otherwise
        """
        if self._session is None:
            return
        if failed:
            self.dispose()
        else:
            self._session.reset_state()

    def dispose(self) -> None:
        """Close the current session so the next test starts a fresh browser."""
        if self._session is None:
            return
        logger.info("Closing browser session")
        self._session.close()
        self._session = None

    def close(self) -> None:
        """Dispose the session and stop the Playwright driver."""
        self.dispose()
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except PlaywrightError as e:
                logger.debug(f"Error stopping Playwright: {e}")
            self._playwright = None
        logger.debug("Browser manager closed")

    def _provision(self) -> BrowserSession:
        config = self.config
        logger.info(
            f"Starting new browser session: {config.browser} (headless: {config.headless})"
        )

        if self._playwright is None:
            self._playwright = sync_playwright().start()

        if config.browser == "firefox":
            launcher = self._playwright.firefox
            launch_options: Dict[str, Any] = {"headless": config.headless}
        else:
            launcher = self._playwright.chromium
            launch_options = {"headless": config.headless, "args": list(CHROMIUM_ARGS)}

        browser = launcher.launch(**launch_options)
        window_size = (config.window_width, config.window_height)
        context = browser.new_context(
            viewport={"width": window_size[0], "height": window_size[1]},
            **self.DEFAULT_CONTEXT_OPTIONS,
        )
        context.set_default_timeout(config.timeout_ms)
        page = context.new_page()

        logger.info("Browser session initialized successfully")
        return BrowserSession(
            browser=browser,
            context=context,
            page=page,
            browser_kind=config.browser,
            headless=config.headless,
            window_size=window_size,
        )


__all__ = [
    "BrowserManager",
    "BrowserSession",
]
