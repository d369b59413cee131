# ================================================================================
# Element Actions Module
# ================================================================================
#
# This module provides the interaction primitives used by the page objects,
# with built-in escalation, wait mechanisms, and Allure integration.
#
# Key Features:
#   - Multi-strategy click (native -> script -> simulated pointer)
#   - URL change detection after a click (advisory)
#   - Idempotent checkbox toggling
#   - Field population with retry and masked logging
#   - Custom dropdown option selection
#
# ================================================================================

import time
from dataclasses import dataclass, field
from functools import wraps
from typing import Callable, List, Optional, Tuple, Type

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        delay_seconds: float = 1.0,
        backoff_multiplier: float = 2.0,
        max_delay_seconds: float = 10.0,
        retry_on: Tuple[Type[BaseException], ...] = (PlaywrightError,),
    ):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts
            delay_seconds: Initial delay between retries
            backoff_multiplier: Multiplier for exponential backoff
            max_delay_seconds: Maximum delay between retries
            retry_on: Exception types that trigger a retry
        """
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds
        self.backoff_multiplier = backoff_multiplier
        self.max_delay_seconds = max_delay_seconds
        self.retry_on = retry_on


def with_retry(config: RetryConfig = None):
    """
    Decorator for adding retry logic to element actions.

    Args:
        config: RetryConfig object for controlling retry behavior
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None
            delay = config.delay_seconds

            for attempt in range(config.max_attempts):
                try:
                    return func(*args, **kwargs)
                except config.retry_on as e:
                    last_exception = e
                    if attempt < config.max_attempts - 1:
                        logger.warning(
                            f"Attempt {attempt + 1}/{config.max_attempts} failed for "
                            f"{func.__name__}: {str(e)}. Retrying in {delay}s..."
                        )
                        time.sleep(delay)
                        delay = min(
                            delay * config.backoff_multiplier,
                            config.max_delay_seconds
                        )

            logger.error(
                f"All {config.max_attempts} attempts failed for {func.__name__}: "
                f"{str(last_exception)}"
            )
            raise last_exception

        return wrapper
    return decorator


class InteractionFailure(Exception):
    """Raised when every click strategy failed for an element."""

    def __init__(self, name: str, errors: Optional[List[str]] = None):
        self.name = name
        self.errors = errors or []
        super().__init__(
            f"Could not click {name}:\n" + "\n".join(f"  - {e}" for e in self.errors)
        )


@dataclass
class InteractionResult:
    """
    Outcome of a click.

    url_changed is a weak signal only: inline validation errors keep the
    URL while a real submission may still have happened.
    """
    url_before: str
    url_after: str
    strategy: str
    errors: List[str] = field(default_factory=list)

    @property
    def url_changed(self) -> bool:
        return self.url_before != self.url_after


# Fast retries for field population; the locator already waited for presence
FILL_RETRY = RetryConfig(max_attempts=2, delay_seconds=0.5)


class ElementActions:
    """
    Interaction primitives on top of Playwright locators.

    Example:
        actions = ElementActions(page, default_timeout=10000)
        result = actions.click(page.locator("button[type='submit']"), "Create Account button")
        if result.url_changed:
            ...
    """

    CLICK_STRATEGIES = ("native click", "script click", "pointer click")

    def __init__(
        self,
        page: Page,
        default_timeout: float = 10000,
        settle_timeout: float = 1.0,
        strategy_timeout: float = 3000,
    ):
        """
        Initialize ElementActions with a Playwright page.

        Args:
            page: Playwright Page object
            default_timeout: Interactability wait in milliseconds
            settle_timeout: Wait for a URL change after a click in seconds
            strategy_timeout: Budget for the native click attempt in milliseconds
        """
        self.page = page
        self.default_timeout = default_timeout
        self.settle_timeout = settle_timeout
        self.strategy_timeout = strategy_timeout

    # =========================================================================
    # Click
    # =========================================================================

    @allure.step("Click element: {name}")
    def click(self, locator: Locator, name: str = "element") -> InteractionResult:
        """
        Click using escalating strategies and report URL change.

        Args:
            locator: Element to click
            name: Human-readable description for reporting

        Returns:
            InteractionResult with URL before/after and the strategy used

        Raises:
            InteractionFailure: When native, script and pointer clicks all fail
        """
        url_before = self.page.url
        logger.info(f"URL before clicking {name}: {url_before}")

        self._scroll_into_view(locator, name)
        self.wait_until_interactable(locator, name)

        errors: List[str] = []
        used = None
        for strategy_name, strategy in zip(
            self.CLICK_STRATEGIES,
            (self._native_click, self._script_click, self._pointer_click),
        ):
            try:
                strategy(locator)
            except PlaywrightError as e:
                errors.append(f"{strategy_name}: {str(e).splitlines()[0] if str(e) else type(e).__name__}")
                logger.debug(f"{strategy_name.capitalize()} failed for {name}: {e}")
                continue
            used = strategy_name
            break

        if used is None:
            failure = InteractionFailure(name, errors)
            logger.error(f"❌ All click strategies failed for {name}")
            raise failure

        logger.info(f"{name} clicked ({used})")
        url_after = self._wait_for_url_change(url_before)
        logger.info(f"URL after clicking {name}: {url_after}")

        result = InteractionResult(url_before, url_after, used, errors)
        if result.url_changed:
            logger.info(f"✅ URL changed after clicking {name} - navigation detected")
        else:
            logger.debug(f"URL unchanged after clicking {name}")
        return result

    def wait_until_interactable(self, locator: Locator, name: str = "element", timeout: float = None) -> bool:
        """
        Bounded wait for the element to be visible and enabled.

        Returns False instead of raising; the click strategies decide.
        """
        timeout = self.default_timeout if timeout is None else timeout
        deadline = time.monotonic() + timeout / 1000
        try:
            locator.wait_for(state="visible", timeout=timeout)
            while not locator.is_enabled():
                if time.monotonic() >= deadline:
                    logger.warning(f"⚠️ {name} still disabled after {timeout / 1000:.0f}s")
                    return False
                self.page.wait_for_timeout(100)
        except PlaywrightError as e:
            logger.warning(f"⚠️ {name} not interactable: {str(e).splitlines()[0] if str(e) else e!r}")
            return False
        return True

    def _scroll_into_view(self, locator: Locator, name: str) -> None:
        try:
            locator.scroll_into_view_if_needed(timeout=self.strategy_timeout)
        except PlaywrightError as e:
            logger.debug(f"Could not scroll {name} into view: {e}")

    def _native_click(self, locator: Locator) -> None:
        locator.click(timeout=self.strategy_timeout)

    def _script_click(self, locator: Locator) -> None:
        locator.evaluate("el => el.click()")

    def _pointer_click(self, locator: Locator) -> None:
        box = locator.bounding_box()
        if box is None:
            raise PlaywrightError("Element has no bounding box")
        x = box["x"] + box["width"] / 2
        y = box["y"] + box["height"] / 2
        self.page.mouse.move(x, y)
        self.page.mouse.click(x, y)

    def _wait_for_url_change(self, url_before: str) -> str:
        try:
            self.page.wait_for_url(
                lambda url: url != url_before,
                timeout=self.settle_timeout * 1000,
                wait_until="commit",
            )
        except PlaywrightError:
            pass
        return self.page.url

    # =========================================================================
    # Field population
    # =========================================================================

    @allure.step("Fill input: {name}")
    @with_retry(FILL_RETRY)
    def fill(self, locator: Locator, value: str, name: str = "input") -> None:
        """
        Clear a field and type a value into it.

        Args:
            locator: Input element
            value: Text to enter ("" just clears the field)
            name: Human-readable description; values of password fields are masked
        """
        shown = "*" * len(value) if "password" in name.lower() else value
        logger.info(f"Filling {name} with '{shown[:50]}'")

        locator.wait_for(state="visible", timeout=self.default_timeout)
        locator.clear(timeout=self.default_timeout)
        if value:
            locator.fill(value, timeout=self.default_timeout)

    @allure.step("Set checkbox: {name}")
    def set_checked(self, locator: Locator, checked: bool, name: str = "checkbox") -> bool:
        """
        Toggle a checkbox only when its state differs from the desired one.

        Returns:
            True when a click was performed
        """
        current = locator.is_checked()
        if current == checked:
            logger.info(f"{name} already {'checked' if checked else 'unchecked'}")
            return False

        logger.info(f"Setting {name} to: {checked}")
        self.click(locator, name)
        return True

    @allure.step("Select option: {text} in {name}")
    def select_option_by_text(
        self,
        field_locator: Locator,
        options: Locator,
        text: str,
        name: str = "dropdown",
        open_delay: float = 1.0,
    ) -> Optional[str]:
        """
        Open a custom dropdown and pick an option by visible text.

        Picks the first visible option containing `text` (case-insensitive),
        otherwise the first option.

        Args:
            field_locator: Element opening the dropdown
            options: Locator matching every option of the open dropdown
            text: Wanted option text
            name: Human-readable description
            open_delay: Pause for the dropdown to render in seconds

        Returns:
            Text of the selected option, None when the dropdown was empty
        """
        self.click(field_locator, name)
        self.page.wait_for_timeout(open_delay * 1000)

        wanted = text.lower()
        candidates = options.all()
        for option in candidates:
            label = option.inner_text()
            if option.is_visible() and wanted in label.lower():
                option.click(timeout=self.strategy_timeout)
                logger.info(f"Selected {name} option: {label}")
                return label

        if candidates:
            label = candidates[0].inner_text()
            candidates[0].click(timeout=self.strategy_timeout)
            logger.info(f"Selected first available {name} option: {label}")
            return label

        logger.warning(f"⚠️ No options found for {name}")
        return None

    @allure.step("Take screenshot: {name}")
    def take_screenshot(self, name: str, full_page: bool = False) -> bytes:
        """
        Take a screenshot of the page and attach it to the report.

        Returns:
            Screenshot as bytes
        """
        screenshot = self.page.screenshot(full_page=full_page)
        allure.attach(
            screenshot,
            name=name,
            attachment_type=allure.attachment_type.PNG
        )
        return screenshot


__all__ = [
    "ElementActions",
    "InteractionFailure",
    "InteractionResult",
    "RetryConfig",
    "with_retry",
]
