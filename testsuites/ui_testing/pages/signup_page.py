"""
================================================================================
Sign-up Page Object
================================================================================

Registration page (`/create-account`).

Design goals:
  - Selector tables as ordered SelectorStrategy data (most stable first)
  - Overlay dismissal before the primary action
  - Queries used by assertions never raise (False / "" instead)
  - Error-text probes come from configuration, not hard-coded words

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework.element_actions import InteractionFailure, InteractionResult
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.smart_locator import LocationFailure, SelectorStrategy


class SignUpPage(BasePage):
    """Registration page object."""

    URL_PATH = "/create-account"
    PAGE_NAME = "sign-up page"

    EMAIL_FIELD = SelectorStrategy.of(
        "email field",
        "#email",
        "[name='email']",
        "xpath=//input[@type='email']",
        "xpath=//input[contains(@placeholder, 'email') or contains(@placeholder, 'Email')]",
    )

    PASSWORD_FIELD = SelectorStrategy.of(
        "password field",
        "#password",
        "[name='password']",
        "xpath=//input[@type='password']",
        "xpath=//input[contains(@placeholder, 'password') or contains(@placeholder, 'Password')]",
    )

    MARKETING_CHECKBOX = SelectorStrategy.of(
        "marketing checkbox",
        "#marketing-consent",
        "[name='marketing']",
        "#idxufwc",
        "xpath=//input[@type='checkbox' and @name='marketing']",
        "xpath=//input[@type='checkbox']",
        "xpath=//*[contains(text(), 'marketing') or contains(text(), 'newsletter')]/..//input[@type='checkbox']",
    )

    CREATE_ACCOUNT_BUTTON = SelectorStrategy.of(
        "Create Account button",
        "xpath=//button[contains(text(), 'Create Account')]",
        "xpath=//button[contains(text(), 'Sign up')]",
        "xpath=//button[contains(text(), 'Register')]",
        "xpath=//button[@type='submit']",
        "xpath=//input[@type='submit']",
    )

    GOOGLE_BUTTON = SelectorStrategy.of(
        "Google OAuth button",
        "xpath=//button[contains(text(), 'Continue with Google')]",
        "xpath=//button[contains(text(), 'Sign up with Google')]",
        "xpath=//button[contains(text(), 'Google')]",
        "xpath=//*[contains(@class, 'google') or contains(@class, 'oauth')]//button",
        "xpath=//button[contains(@aria-label, 'Google')]",
        "xpath=//button[contains(@class, 'Container-jFjATm')]",
        "xpath=//button[.//span[contains(text(), 'Continue with Google')]]",
        "xpath=//span[contains(text(), 'Continue with Google')]/parent::button",
    )

    PERSONAL_OPTION = SelectorStrategy.of(
        "personal sign-up option",
        "[data-testid*='personal']",
        "input[type='radio'][value*='personal' i]",
        "xpath=//*[self::button or self::label or self::a][contains(., 'Personal') or contains(., 'personal use')]",
    )

    TEAM_WORK_OPTION = SelectorStrategy.of(
        "team/work sign-up option",
        "[data-testid*='team'], [data-testid*='work']",
        "input[type='radio'][value*='work' i], input[type='radio'][value*='team' i]",
        "xpath=//*[self::button or self::label or self::a][contains(., 'Team') or contains(., 'Work')]",
    )

    BOOK_DEMO = SelectorStrategy.of(
        "Book Demo button",
        "xpath=//a[contains(., 'Book a demo') or contains(., 'Book demo') or contains(., 'Book Demo')]",
        "xpath=//button[contains(., 'Book a demo') or contains(., 'Book demo') or contains(., 'Book Demo')]",
        "a[href*='demo']",
    )

    ERROR_MESSAGES = SelectorStrategy.of(
        "error message",
        "xpath=//*[contains(@class, 'error') and contains(text(), '.')]",
        "xpath=//*[contains(@class, 'invalid') and contains(text(), '.')]",
        "xpath=//*[contains(@class, 'warning') and contains(text(), '.')]",
        "xpath=//*[@role='alert']",
        "xpath=//*[contains(@class, 'message') and contains(text(), '.')]",
    )

    @allure.step("Open sign-up page")
    def open(self) -> "SignUpPage":
        """Navigate to the sign-up page and wait for the form."""
        self.navigate()
        self.wait_for_page_to_load()
        return self

    def wait_for_page_to_load(self) -> None:
        self.dismiss_overlays()
        self.locate(self.EMAIL_FIELD)
        self.locate(self.PASSWORD_FIELD)
        logger.info("Sign-up page loaded successfully")

    # =========================================================================
    # Form
    # =========================================================================

    def enter_email(self, email: str) -> None:
        logger.info(f"Entering email: {email}")
        self.fill(self.EMAIL_FIELD, email)

    def enter_password(self, password: str) -> None:
        logger.info("Entering password")
        self.fill(self.PASSWORD_FIELD, password)

    def set_marketing_consent(self, checked: bool) -> bool:
        """
        Set the optional marketing checkbox.

        Returns:
            True when the checkbox was clicked; False when it already had the
            wanted state or is not on the page (logged, not raised).
        """
        try:
            checkbox = self.locate(self.MARKETING_CHECKBOX)
            return self.actions.set_checked(checkbox, checked, self.MARKETING_CHECKBOX.name)
        except (LocationFailure, InteractionFailure, PlaywrightError) as e:
            logger.warning(f"Marketing checkbox not found or not interactable: {e}")
            return False

    def is_marketing_checkbox_checked(self) -> bool:
        return self.is_checked(self.MARKETING_CHECKBOX)

    @allure.step("Click Create Account")
    def click_create_account(self) -> InteractionResult:
        logger.info("Clicking Create Account button")
        return self.submit(self.CREATE_ACCOUNT_BUTTON)

    def is_create_account_button_enabled(self) -> bool:
        return self.is_enabled(self.CREATE_ACCOUNT_BUTTON)

    def is_redirected_after_sign_up(self, timeout: float = 5.0) -> bool:
        return self.wait_for_url_without("create-account", timeout=timeout)

    def is_email_field_visible(self) -> bool:
        return self.is_displayed(self.EMAIL_FIELD)

    def is_password_field_visible(self) -> bool:
        return self.is_displayed(self.PASSWORD_FIELD)

    # =========================================================================
    # Google OAuth
    # =========================================================================

    def is_google_button_present(self) -> bool:
        return self.is_present(self.GOOGLE_BUTTON)

    def is_google_button_displayed_and_enabled(self) -> bool:
        return self.is_enabled(self.GOOGLE_BUTTON)

    @allure.step("Click Continue with Google")
    def click_google_button(self) -> InteractionResult:
        logger.info("Clicking Continue with Google button")
        return self.click(self.GOOGLE_BUTTON)

    # =========================================================================
    # Error messages
    # =========================================================================

    def get_email_error_message(self) -> str:
        return self.find_error_message(self.config.email_error_terms, "email")

    def get_password_error_message(self) -> str:
        return self.find_error_message(self.config.password_error_terms, "password")

    def get_general_error_message(self) -> str:
        return self.get_error_message()

    # =========================================================================
    # Account type selection
    # =========================================================================

    def is_personal_signup_option_available(self) -> bool:
        return self.is_present(self.PERSONAL_OPTION)

    @allure.step("Select personal sign-up")
    def select_personal_signup(self) -> InteractionResult:
        return self.click(self.PERSONAL_OPTION)

    def is_team_work_signup_option_available(self) -> bool:
        return self.is_present(self.TEAM_WORK_OPTION)

    @allure.step("Select team/work sign-up")
    def select_team_work_signup(self) -> InteractionResult:
        return self.click(self.TEAM_WORK_OPTION)

    def is_book_demo_available(self) -> bool:
        return self.is_present(self.BOOK_DEMO)

    @allure.step("Click Book Demo")
    def click_book_demo(self) -> InteractionResult:
        return self.click(self.BOOK_DEMO)

    def is_demo_page_loaded(self, timeout: float = 5.0) -> bool:
        if self.url_contains("demo"):
            return True
        try:
            self.page.wait_for_url(lambda url: "demo" in url.lower(), timeout=timeout * 1000)
            return True
        except PlaywrightError as e:
            logger.warning(f"Demo page not detected: {e}")
            return False


__all__ = ["SignUpPage"]
