"""
================================================================================
Login Page Object
================================================================================

Sign-in page (`/sign-in`).

Design goals:
  - Direct navigation for speed, or the realistic homepage -> sign-in link flow
  - SmartLocator strategies for every field (primary + fallbacks)
  - Non-raising visibility checks for assertions

================================================================================
"""

from __future__ import annotations

from urllib.parse import urlparse

import allure
from loguru import logger

from testsuites.ui_testing.framework.element_actions import InteractionResult
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.smart_locator import SelectorStrategy


LOGIN_PAGE_READY_SCRIPT = """() =>
    document.title.toLowerCase().includes('sign')
    || window.location.href.includes('sign-in')
    || document.querySelector("input[type='email'], input[name='email']") !== null
"""

SIGN_IN_SEGMENTS = ("login", "sign-in")
APP_SEGMENTS = ("dashboard", "app", "home", "workspace")


class LoginPage(BasePage):
    """Login page object."""

    URL_PATH = "/sign-in"
    PAGE_NAME = "login page"

    EMAIL_FIELD = SelectorStrategy.of(
        "email field",
        "#email",
        "[name='email']",
        "xpath=//input[@type='email']",
        "xpath=//input[@placeholder='Email' or @placeholder='Email address']",
    )

    PASSWORD_FIELD = SelectorStrategy.of(
        "password field",
        "#password",
        "[name='password']",
        "xpath=//input[@type='password']",
        "xpath=//input[@placeholder='Password']",
    )

    LOGIN_BUTTON = SelectorStrategy.of(
        "login button",
        "xpath=//button[@data-testid='login']",
        "xpath=//button[.//span[contains(text(), 'Log in')]]",
        "xpath=//button[@title=' Log in']",
        "xpath=//button[@type='button' and .//span[contains(text(), 'Log in')]]",
        "xpath=//button[contains(@class, 'Button') and .//span[contains(text(), 'Log in')]]",
    )

    @allure.step("Open login page")
    def open(self, realistic_flow: bool = False) -> "LoginPage":
        """
        Navigate to the login page.

        Args:
            realistic_flow: Go through the homepage sign-in link instead of
                opening the sign-in URL directly
        """
        if realistic_flow:
            logger.info("Navigating to login page via realistic user flow from homepage")
            self.navigate_to_sign_in_via_homepage()
        else:
            self.navigate()
            self.dismiss_overlays()
        self.wait_for_page_to_load()
        return self

    def wait_for_page_to_load(self) -> None:
        logger.info("Waiting for login page to load...")
        self.page.wait_for_function(LOGIN_PAGE_READY_SCRIPT, timeout=self.config.timeout_ms)
        logger.info("Login page loaded successfully")

    def enter_email(self, email: str) -> None:
        logger.info(f"Entering email: {email}")
        self.fill(self.EMAIL_FIELD, email)

    def enter_password(self, password: str) -> None:
        logger.info("Entering password")
        self.fill(self.PASSWORD_FIELD, password)

    @allure.step("Click Login")
    def click_login(self) -> InteractionResult:
        logger.info("Clicking Login button")
        return self.submit(self.LOGIN_BUTTON)

    @allure.step("Login as {email}")
    def login(self, email: str, password: str) -> InteractionResult:
        self.enter_email(email)
        self.enter_password(password)
        return self.click_login()

    def is_login_successful(self) -> bool:
        """Redirected away from the sign-in page, or into the app."""
        # Path only; hosts such as app.example.com must not count
        path = urlparse(self.current_url).path.lower()
        if not any(segment in path for segment in SIGN_IN_SEGMENTS):
            logger.info(f"Login successful - redirected to: {self.current_url}")
            return True
        if any(segment in path for segment in APP_SEGMENTS):
            logger.info(f"Login successful - reached app: {self.current_url}")
            return True
        logger.warning("Login success could not be determined")
        return False

    def is_email_field_visible(self) -> bool:
        return self.is_displayed(self.EMAIL_FIELD)

    def is_password_field_visible(self) -> bool:
        return self.is_displayed(self.PASSWORD_FIELD)

    def is_login_button_enabled(self) -> bool:
        return self.is_enabled(self.LOGIN_BUTTON)

    def are_login_fields_visible(self) -> bool:
        return self.is_email_field_visible() and self.is_password_field_visible()


__all__ = ["LoginPage"]
