"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the registration and login flows.

Components:
    - config_loader: YAML + environment configuration, resolved into RunConfig
    - smart_locator: Element location with ordered fallback selectors
    - overlay_handler: Cookie-consent / blocking overlay dismissal
    - element_actions: Multi-strategy click, fill and checkbox primitives
    - browser_manager: Browser session lifecycle, reuse and reset
    - page_base: Base page object for common operations
    - retry_policy: Per-test retry budget
    - test_data_factory: Unique users and credentials
    - harness: pytest plugin (options, fixtures, retries, failure artifacts)

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager, BrowserSession
from .config_loader import ConfigLoader, ConfigurationError, RunConfig
from .element_actions import ElementActions, InteractionFailure, InteractionResult
from .overlay_handler import COOKIE_CONSENT_OVERLAY, OverlayDescriptor, OverlayDismisser
from .page_base import BasePage
from .retry_policy import RetryPolicy
from .smart_locator import ElementNotFoundError, LocationFailure, SelectorStrategy, SmartLocator
from .test_data_factory import TestDataGenerator, TestUser

__all__ = [
    "BasePage",
    "BrowserManager",
    "BrowserSession",
    "COOKIE_CONSENT_OVERLAY",
    "ConfigLoader",
    "ConfigurationError",
    "ElementActions",
    "ElementNotFoundError",
    "InteractionFailure",
    "InteractionResult",
    "LocationFailure",
    "OverlayDescriptor",
    "OverlayDismisser",
    "RetryPolicy",
    "RunConfig",
    "SelectorStrategy",
    "SmartLocator",
    "TestDataGenerator",
    "TestUser",
]
