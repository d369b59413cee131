"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation and URL helpers
    - Smart element location with ordered fallbacks
    - Overlay dismissal before primary actions
    - Submission diagnostics when a form did not navigate
    - Non-raising visibility/state queries
    - Screenshot and debugging utilities

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator

from .browser_manager import BrowserSession
from .config_loader import RunConfig
from .element_actions import ElementActions, InteractionResult
from .overlay_handler import COOKIE_CONSENT_OVERLAY, OverlayDismisser
from .smart_locator import LocationFailure, SelectorStrategy, SmartLocator


# Per-candidate wait for non-raising queries (is_displayed, get_text, ...)
QUERY_TIMEOUT_MS = 3000


class BasePage:
    """
    Base class for all page objects.

    Provides common functionality for:
        - Navigation and URL handling
        - Smart element interaction
        - Form submission with overlay handling and diagnostics
        - Screenshot capture

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/sign-in"

            EMAIL = SelectorStrategy.of("email field", "#email", "input[type='email']")

            def enter_email(self, email: str) -> None:
                self.fill(self.EMAIL, email)
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_NAME: str = "page"

    SIGN_IN_LINK = SelectorStrategy.of(
        "sign-in link",
        "xpath=//a[contains(text(), 'Sign in') or contains(text(), 'Login') or contains(text(), 'Log in')]",
        "xpath=//button[contains(text(), 'Sign in') or contains(text(), 'Login') or contains(text(), 'Log in')]",
        "xpath=//*[contains(@href, 'sign-in') or contains(@href, 'login')]",
    )

    ERROR_MESSAGES = SelectorStrategy.of(
        "error message",
        "xpath=//*[@role='alert']",
        "xpath=//*[contains(@class, 'error') and contains(text(), '.')]",
        "xpath=//*[contains(@class, 'message') and contains(@class, 'error')]",
    )

    def __init__(
        self,
        session: BrowserSession,
        config: RunConfig,
        base_url: Optional[str] = None,
    ):
        """
        Initialize page object.

        Args:
            session: Browser session the page is bound to (not owned)
            config: Resolved run configuration
            base_url: Base URL override; defaults to config.base_url
        """
        self.session = session
        self.page = session.page
        self.config = config
        self.base_url = (base_url or config.base_url).rstrip("/")
        self.smart = SmartLocator(self.page, default_timeout=config.timeout_ms)
        self.actions = ElementActions(
            self.page,
            default_timeout=config.timeout_ms,
            settle_timeout=config.click_settle_timeout,
        )
        self.overlays = OverlayDismisser(
            self.page,
            COOKIE_CONSENT_OVERLAY,
            probe_attempts=config.overlay_probe_attempts,
            hide_timeout=config.overlay_hide_timeout,
        )

    @property
    def url(self) -> str:
        """Get full page URL (locale-aware)."""
        return f"{self.base_url}{self.config.locale_prefix}{self.URL_PATH}"

    @property
    def current_url(self) -> str:
        return self.session.current_url

    @property
    def title(self) -> str:
        return self.session.title

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, wait_for: str = "load") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        with allure.step(f"Navigate to {self.PAGE_NAME}"):
            logger.info(f"Navigating to {self.PAGE_NAME}: {self.url}")
            self.page.goto(self.url, wait_until=wait_for)

    def open(self) -> "BasePage":
        """Navigate to the page and wait until it is usable."""
        self.navigate()
        self.wait_for_page_to_load()
        return self

    def wait_for_page_to_load(self) -> None:
        """Readiness check; pages override this with their own markers."""
        self.page.wait_for_load_state("domcontentloaded", timeout=self.config.timeout_ms)

    def reload(self) -> None:
        self.page.reload(wait_until="load")
        self.wait_for_page_to_load()

    def dismiss_overlays(self) -> bool:
        return self.overlays.dismiss()

    def navigate_to_sign_in_via_homepage(self) -> InteractionResult:
        """
        Open the homepage and follow its sign-in link (realistic user flow).
        """
        home_url = f"{self.base_url}{self.config.locale_prefix or '/en'}"
        with allure.step("Navigate to sign-in via homepage"):
            logger.info(f"Navigating to homepage to find sign-in link: {home_url}")
            self.page.goto(home_url, wait_until="load")
            self.dismiss_overlays()
            result = self.click(self.SIGN_IN_LINK)
            logger.info("Successfully clicked sign-in link from homepage")
            return result

    # =========================================================================
    # Smart Element Interactions
    # =========================================================================

    def locate(self, strategy: SelectorStrategy, timeout: Optional[float] = None) -> Locator:
        return self.smart.locate(strategy, timeout=timeout)

    def fill(self, strategy: SelectorStrategy, value: str) -> None:
        """Locate a field, wait for it, clear it and type the value."""
        self.actions.fill(self.locate(strategy), value, strategy.name)

    def click(self, strategy: SelectorStrategy) -> InteractionResult:
        """Locate an element and click it with the multi-strategy primitive."""
        return self.actions.click(self.locate(strategy), strategy.name)

    def submit(self, strategy: SelectorStrategy) -> InteractionResult:
        """
        Primary form action.

        Dismisses overlays, clicks the button, and when the URL did not
        change logs form diagnostics (never raises for those).
        """
        with allure.step(f"Submit: {strategy.name}"):
            self.dismiss_overlays()
            result = self.click(strategy)
            if not result.url_changed:
                self.log_form_diagnostics()
            return result

    # =========================================================================
    # Non-raising queries
    # =========================================================================

    def is_present(self, strategy: SelectorStrategy) -> bool:
        present = self.smart.exists(strategy)
        logger.info(f"{strategy.name} present: {present}")
        return present

    def is_displayed(self, strategy: SelectorStrategy, timeout: float = QUERY_TIMEOUT_MS) -> bool:
        try:
            return self.locate(strategy, timeout=timeout).is_visible()
        except (LocationFailure, PlaywrightError) as e:
            logger.warning(f"{strategy.name} not visible: {_first_line(e)}")
            return False

    def is_enabled(self, strategy: SelectorStrategy, timeout: float = QUERY_TIMEOUT_MS) -> bool:
        """Enabled and visible."""
        try:
            element = self.locate(strategy, timeout=timeout)
            enabled = element.is_enabled() and element.is_visible()
        except (LocationFailure, PlaywrightError) as e:
            logger.warning(f"{strategy.name} not found: {_first_line(e)}")
            return False
        logger.info(f"{strategy.name} enabled and visible: {enabled}")
        return enabled

    def is_checked(self, strategy: SelectorStrategy, timeout: float = QUERY_TIMEOUT_MS) -> bool:
        try:
            checked = self.locate(strategy, timeout=timeout).is_checked()
        except (LocationFailure, PlaywrightError) as e:
            logger.warning(f"{strategy.name} not found: {_first_line(e)}")
            return False
        logger.info(f"{strategy.name} checked: {checked}")
        return checked

    def get_text(self, strategy: SelectorStrategy, timeout: float = QUERY_TIMEOUT_MS) -> str:
        try:
            return self.locate(strategy, timeout=timeout).inner_text().strip()
        except (LocationFailure, PlaywrightError) as e:
            logger.warning(f"Could not read {strategy.name}: {_first_line(e)}")
            return ""

    # =========================================================================
    # Error messages
    # =========================================================================

    def get_error_message(self) -> str:
        """Text of the first visible error message, or ""."""
        for selector in self.ERROR_MESSAGES.selectors:
            try:
                first = self.page.locator(selector).first
                if first.count() and first.is_visible():
                    text = first.inner_text().strip()
                    logger.info(f"Error message found: {text}")
                    return text
            except PlaywrightError as e:
                logger.warning(f"Error finding error message: {_first_line(e)}")
        return ""

    def find_error_message(self, terms: Sequence[str], label: str = "error") -> str:
        """
        First error message containing any of `terms` (case-insensitive), or "".
        """
        lowered = [term.lower() for term in terms]
        for selector in self.ERROR_MESSAGES.selectors:
            try:
                for element in self.page.locator(selector).all():
                    text = element.inner_text().strip()
                    if any(term in text.lower() for term in lowered):
                        logger.info(f"{label.capitalize()} message: {text}")
                        return text
            except PlaywrightError as e:
                logger.warning(f"Error finding {label} message: {_first_line(e)}")
        logger.debug(f"No {label}-specific error message found")
        return ""

    def wait_for_error_message(self, terms: Optional[Sequence[str]] = None, timeout: float = 2.0) -> str:
        """
        Poll for an error message for up to `timeout` seconds.

        Args:
            terms: Only accept messages containing one of these terms
            timeout: Seconds to wait

        Returns:
            The message text, or "" when none appeared in time
        """
        deadline = time.monotonic() + timeout
        while True:
            text = self.find_error_message(terms) if terms else self.get_error_message()
            if text or time.monotonic() >= deadline:
                return text
            self.page.wait_for_timeout(250)

    # =========================================================================
    # URL helpers
    # =========================================================================

    def url_contains(self, *segments: str) -> bool:
        current = self.current_url.lower()
        return any(segment.lower() in current for segment in segments)

    def wait_for_url_change(self, original_url: str, timeout: float = 5.0) -> bool:
        """Wait up to `timeout` seconds for the URL to differ from `original_url`."""
        try:
            self.page.wait_for_url(lambda url: url != original_url, timeout=timeout * 1000)
            return True
        except PlaywrightError:
            logger.debug(f"URL did not change from: {original_url}")
            return False

    def wait_for_url_without(self, segment: str, timeout: float = 5.0) -> bool:
        """Wait up to `timeout` seconds for the URL to stop containing `segment`."""
        try:
            self.page.wait_for_url(lambda url: segment not in url, timeout=timeout * 1000)
        except PlaywrightError as e:
            logger.warning(f"No redirect detected: {_first_line(e)}")
            return False
        logger.info(f"Redirected to: {self.current_url}")
        return True

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def log_form_diagnostics(self) -> None:
        """
        Log field values, validation errors and console problems.

        Used when a submission left the URL unchanged. Each part is
        collected independently and never raises.
        """
        lines: List[str] = [f"URL unchanged after submit: {self.current_url}"]

        try:
            for field in self.page.locator("input").all():
                name = field.get_attribute("name") or field.get_attribute("id") or "?"
                kind = field.get_attribute("type") or "text"
                value = field.input_value()
                shown = "*" * len(value) if kind == "password" else value
                lines.append(f"field {name} ({kind}): '{shown}'")
        except PlaywrightError as e:
            lines.append(f"field values unavailable: {_first_line(e)}")

        try:
            errors = [
                element.inner_text().strip()
                for selector in self.ERROR_MESSAGES.selectors
                for element in self.page.locator(selector).all()
            ]
            lines.extend(f"validation: {text}" for text in errors if text)
        except PlaywrightError as e:
            lines.append(f"validation messages unavailable: {_first_line(e)}")

        lines.extend(
            f"console: {line}" for line in self.session.console_messages(("error", "warning"))
        )

        report = "\n".join(lines)
        logger.warning(f"⚠️ Form diagnostics for {self.PAGE_NAME}:\n{report}")
        allure.attach(report, name="Form diagnostics", attachment_type=allure.attachment_type.TEXT)

    def screenshot(self, name: str, full_page: bool = False, attach_to_allure: bool = True) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        screenshot_dir = self.config.artifacts_dir / "screenshots"
        screenshot_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = screenshot_dir / f"{name}_{timestamp}.png"

        png = self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    def get_locator_health_report(self) -> str:
        """Get smart locator health report."""
        return self.smart.get_health_report()


def _first_line(error: BaseException) -> str:
    text = str(error)
    return text.splitlines()[0] if text else type(error).__name__


__all__ = [
    "BasePage",
    "QUERY_TIMEOUT_MS",
]
