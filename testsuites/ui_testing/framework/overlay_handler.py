"""
================================================================================
Overlay Handler
================================================================================

Best-effort dismissal of transient overlays (cookie/consent banners) that
block interaction with the page underneath.

Features:
    - Declarative overlay descriptors (container + ordered dismissal actions)
    - Delayed-render tolerance (repeated probes)
    - Escalation: accept -> reject -> close -> keyboard -> body click
    - Never raises; an overlay left on screen is logged, not fatal

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional, Tuple

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from .smart_locator import SelectorStrategy, SmartLocator


@dataclass(frozen=True)
class OverlayDescriptor:
    """
    Describes one kind of blocking overlay.

    Attributes:
        name: Human-readable overlay name for logs
        container: Selectors identifying the overlay itself
        actions: (description, selectors) pairs tried in priority order
        keyboard_key: Key pressed when every action failed (None to skip)
        body_click: Click an empty body region as the last resort
    """
    name: str
    container: SelectorStrategy
    actions: Tuple[Tuple[str, SelectorStrategy], ...]
    keyboard_key: Optional[str] = "Escape"
    body_click: bool = True


COOKIE_CONSENT_OVERLAY = OverlayDescriptor(
    name="cookie consent panel",
    container=SelectorStrategy.of(
        "cookie consent panel",
        "xpath=//*[contains(@id, 'CybotCookiebot') or contains(@class, 'cookie') "
        "or contains(@class, 'privacy') or contains(@class, 'consent')]",
    ),
    actions=(
        ("Accept cookies (Cookiebot)", SelectorStrategy.of(
            "cookiebot allow all",
            "#CybotCookiebotDialogBodyLevelButtonLevelOptinAllowAll",
        )),
        ("Accept cookies (generic)", SelectorStrategy.of(
            "generic accept button",
            "xpath=//button[contains(text(), 'Allow all') or contains(text(), 'Accept') "
            "or contains(text(), 'OK') or contains(text(), 'Agree')]",
        )),
        ("Reject cookies", SelectorStrategy.of(
            "reject button",
            "xpath=//button[contains(text(), 'Reject') or contains(text(), 'Decline') "
            "or contains(@id, 'reject')]",
        )),
        ("Close cookie panel", SelectorStrategy.of(
            "close button",
            "xpath=//button[contains(@aria-label, 'close') or contains(@class, 'close') "
            "or text()='×']",
        )),
    ),
)


class OverlayDismisser:
    """
    Runs the dismissal protocol for one overlay descriptor.

    Usage:
        >>> OverlayDismisser(page).dismiss()
        True

    dismiss() is idempotent: with nothing on screen it only probes.
    """

    # Upper bound on container matches inspected per visibility probe
    MAX_PROBED_MATCHES = 10

    def __init__(
        self,
        page: Page,
        descriptor: OverlayDescriptor = COOKIE_CONSENT_OVERLAY,
        probe_attempts: int = 2,
        probe_interval: float = 0.5,
        click_timeout: float = 2.0,
        hide_timeout: float = 3.0,
        fallback_hide_timeout: float = 1.0,
    ):
        """
        Args:
            page: Playwright Page object
            descriptor: Overlay to dismiss
            probe_attempts: Probes made before concluding the overlay is absent
            probe_interval: Pause between probes in seconds
            click_timeout: Actionability wait per dismissal click in seconds
            hide_timeout: Wait for the overlay to disappear after a click in seconds
            fallback_hide_timeout: Same wait after keyboard/body fallbacks
        """
        self.page = page
        self.descriptor = descriptor
        self.probe_attempts = max(1, probe_attempts)
        self.probe_interval = probe_interval
        self.click_timeout = click_timeout
        self.hide_timeout = hide_timeout
        self.fallback_hide_timeout = fallback_hide_timeout
        self._locator = SmartLocator(page)

    @allure.step("Dismiss blocking overlays")
    def dismiss(self) -> bool:
        """
        Dismiss the overlay if it is showing.

        Returns:
            True when no overlay is left on screen, False otherwise.
            Never raises.
        """
        try:
            return self._dismiss()
        except PlaywrightError as e:
            logger.warning(f"⚠️ Overlay handling aborted for {self.descriptor.name}: {e}")
            return False

    def _dismiss(self) -> bool:
        name = self.descriptor.name
        seen = False

        for attempt in range(self.probe_attempts):
            if not self.is_showing():
                if attempt < self.probe_attempts - 1:
                    self.page.wait_for_timeout(self.probe_interval * 1000)
                continue

            seen = True
            logger.info(f"{name} detected (attempt {attempt + 1}), attempting to dismiss")
            for description, strategy in self.descriptor.actions:
                if self._try_click(strategy, description) and self._wait_hidden(self.hide_timeout):
                    logger.info(f"✅ {name} dismissed: {description}")
                    return True

        if not self.is_showing():
            if not seen:
                logger.debug(f"No {name} present")
            return True

        logger.warning(f"⚠️ {name} still present, trying last resort methods")
        if self.descriptor.keyboard_key and self._press_key(self.descriptor.keyboard_key):
            logger.info(f"✅ {name} dismissed with {self.descriptor.keyboard_key} key")
            return True
        if self.descriptor.body_click and self._click_body():
            logger.info(f"✅ {name} dismissed by clicking body")
            return True

        logger.warning(f"⚠️ OverlayDismissalIncomplete: {name} could not be dismissed, continuing")
        return False

    def is_showing(self) -> bool:
        """No-wait check whether any container match is visible."""
        for selector in self.descriptor.container.selectors:
            try:
                matches = self.page.locator(selector)
                for index in range(min(matches.count(), self.MAX_PROBED_MATCHES)):
                    if matches.nth(index).is_visible():
                        return True
            except PlaywrightError as e:
                logger.debug(f"Overlay probe failed ({selector}): {e}")
        return False

    def _try_click(self, strategy: SelectorStrategy, description: str) -> bool:
        if not self._locator.exists(strategy):
            logger.debug(f"Could not click {description}: not present")
            return False
        for selector in strategy.selectors:
            try:
                self.page.locator(selector).first.click(timeout=self.click_timeout * 1000)
                logger.info(f"Successfully clicked: {description}")
                return True
            except PlaywrightError as e:
                logger.debug(f"Could not click {description} ({selector}): {e}")
        return False

    def _wait_hidden(self, timeout: float) -> bool:
        deadline = time.monotonic() + timeout
        while True:
            if not self.is_showing():
                return True
            if time.monotonic() >= deadline:
                logger.debug(f"{self.descriptor.name} might still be visible")
                return False
            self.page.wait_for_timeout(100)

    def _press_key(self, key: str) -> bool:
        try:
            self.page.keyboard.press(key)
        except PlaywrightError as e:
            logger.warning(f"{key} key method failed: {e}")
            return False
        return self._wait_hidden(self.fallback_hide_timeout)

    def _click_body(self) -> bool:
        try:
            self.page.locator("body").click(
                position={"x": 5, "y": 5}, timeout=self.click_timeout * 1000
            )
        except PlaywrightError as e:
            logger.warning(f"Body click method failed: {e}")
            return False
        return self._wait_hidden(self.fallback_hide_timeout)


__all__ = [
    "OverlayDescriptor",
    "OverlayDismisser",
    "COOKIE_CONSENT_OVERLAY",
]
