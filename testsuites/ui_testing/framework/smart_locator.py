"""
================================================================================
Smart Locator with Ordered Fallback Strategies
================================================================================

Resilient element location system with:
    - Ordered fallback selectors per logical element (SelectorStrategy)
    - Presence-only waits; interactability is checked at interaction time
    - No-wait existence probes for optional UI
    - Fallback usage analytics for selector maintenance

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page


class ElementNotFoundError(Exception):
    """Raised when all locator strategies fail to find element."""
    pass


class LocationFailure(ElementNotFoundError):
    """
    A required element could not be found via any candidate selector.

    Attributes:
        name: Logical element name
        tried_selectors: Every selector attempted, in order
        errors: Per-selector failure summaries
    """

    def __init__(self, name: str, tried_selectors: Iterable[str], errors: Optional[List[str]] = None):
        self.name = name
        self.tried_selectors = tuple(tried_selectors)
        self.errors = errors or []
        details = self.errors or [f"{selector} -> not found" for selector in self.tried_selectors]
        super().__init__(
            f"All locators failed for '{name}':\n" + "\n".join(f"  - {d}" for d in details)
        )


@dataclass(frozen=True)
class SelectorStrategy:
    """
    Ordered candidate selectors for one logical element.

    The first selector is the most specific/stable, the last the most
    generic. Selectors are playwright selector strings, e.g. "#email",
    "input[name='email']", "button:has-text('Sign up')" or "xpath=//form//input".
    """
    name: str
    selectors: Tuple[str, ...]

    def __post_init__(self) -> None:
        selectors = tuple(self.selectors)
        if not selectors:
            raise ValueError(f"Selector strategy '{self.name}' needs at least one selector")
        object.__setattr__(self, "selectors", selectors)

    @classmethod
    def of(cls, name: str, *selectors: str) -> "SelectorStrategy":
        """Shorthand: SelectorStrategy.of("email field", "#email", "input[type='email']")."""
        return cls(name=name, selectors=selectors)

    @property
    def primary(self) -> str:
        return self.selectors[0]


@dataclass
class LocatorHealth:
    """
    Tracks locator health and usage statistics.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred selector
        used_fallback: Whether a fallback was used
        fallback_index: Position of the fallback used (if any)
        fallback_selector: The fallback selector used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_index: Optional[int] = None
    fallback_selector: Optional[str] = None


class SmartLocator:
    """
    Element locator with ordered fallback strategies.

    Usage:
        >>> email = SelectorStrategy.of("email field", "#email", "input[type='email']")
        >>> smart = SmartLocator(page, default_timeout=10000)
        >>> smart.locate(email).fill("user@example.com")
        >>> smart.exists(email)
        True
    """

    def __init__(self, page: Page, default_timeout: float = 10000):
        """
        Initialize SmartLocator with Playwright page.

        Args:
            page: Playwright Page object
            default_timeout: Presence wait per candidate selector in milliseconds
        """
        self.page = page
        self.default_timeout = default_timeout
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    def locate(self, strategy: SelectorStrategy, timeout: Optional[float] = None) -> Locator:
        """
        Locate element using smart fallback strategy.

        Tries each selector in order, waiting up to `timeout` for the
        element to be attached to the DOM. The first candidate that
        resolves wins, even when later candidates would match too.

        Args:
            strategy: Ordered selectors for the element
            timeout: Presence wait per candidate in milliseconds

        Returns:
            Playwright Locator for the first matching element

        Raises:
            LocationFailure: When every candidate exhausts its wait
        """
        timeout = self.default_timeout if timeout is None else timeout
        errors = []

        for index, selector in enumerate(strategy.selectors):
            try:
                locator = self.page.locator(selector).first
                locator.wait_for(state="attached", timeout=timeout)
            except PlaywrightError as e:
                errors.append(f"{selector} -> {str(e).splitlines()[0][:80] if str(e) else type(e).__name__}")
                continue

            self._record(strategy, index, selector)
            return locator

        failure = LocationFailure(strategy.name, strategy.selectors, errors)
        logger.error(f"❌ {failure}")
        raise failure

    def exists(self, strategy: SelectorStrategy) -> bool:
        """
        No-wait probe against the currently rendered DOM.

        Never raises; absence is a valid outcome for optional UI.
        """
        for selector in strategy.selectors:
            try:
                if self.page.locator(selector).count() > 0:
                    logger.debug(f"Element '{strategy.name}' present: {selector}")
                    return True
            except PlaywrightError as e:
                logger.debug(f"Probe failed for '{strategy.name}' ({selector}): {e}")
        return False

    def find_all(self, strategy: SelectorStrategy) -> List[Locator]:
        """
        Return all elements matched by the first candidate that matches anything.

        No waiting, never raises. Used for scanning error messages.
        """
        for selector in strategy.selectors:
            try:
                locator = self.page.locator(selector)
                if locator.count() > 0:
                    return locator.all()
            except PlaywrightError as e:
                logger.debug(f"Probe failed for '{strategy.name}' ({selector}): {e}")
        return []

    def _record(self, strategy: SelectorStrategy, index: int, selector: str) -> None:
        health = LocatorHealth(
            element_name=strategy.name,
            primary_selector=strategy.primary,
            used_fallback=index > 0,
            fallback_index=index if index > 0 else None,
            fallback_selector=selector if index > 0 else None,
        )
        self._health_records.append(health)

        if index > 0:
            logger.warning(
                f"⚠️ Element '{strategy.name}' used fallback #{index}: {selector}"
            )
            self._fallback_used[strategy.name] = health
        else:
            logger.debug(f"✅ Element '{strategy.name}' found: {selector}")

    @property
    def health_records(self) -> List[LocatorHealth]:
        return list(self._health_records)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists elements that needed a fallback selector (maintenance candidates).

        Returns:
            Formatted health report string
        """
        if not self._fallback_used:
            return "✅ All elements used primary locators. No maintenance needed."

        report_lines = [
            "⚠️ Locator Health Report - Fallbacks Used:",
            "",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used #{health.fallback_index}: {health.fallback_selector}",
                "",
            ])

        return "\n".join(report_lines)


__all__ = [
    "SmartLocator",
    "SelectorStrategy",
    "ElementNotFoundError",
    "LocationFailure",
    "LocatorHealth",
]
