"""
================================================================================
Login Feature UI Tests
================================================================================

Sign-in page checks:
  - Page accessibility and form elements
  - Invalid credentials and empty-field validation
  - Login with a configured real account (informational when the account
    has not been created yet)

================================================================================
"""

import allure
import pytest
from loguru import logger

from testsuites.ui_testing.framework.browser_manager import BrowserSession
from testsuites.ui_testing.framework.config_loader import RunConfig
from testsuites.ui_testing.framework.test_data_factory import TestDataGenerator
from testsuites.ui_testing.pages import LoginPage


@allure.epic("Sign-up Flow")
@allure.feature("Authentication")
@pytest.mark.e2e
@pytest.mark.auth
class TestLogin:
    """Login UI test suite."""

    @allure.story("Login Page Accessibility")
    @allure.title("Login page loads with fields and an enabled login button")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_login_page_accessibility(self, login_page: LoginPage):
        assert login_page.url_contains("sign-in", "login"), (
            f"URL should contain login path. Current URL: {login_page.current_url}"
        )
        assert login_page.are_login_fields_visible(), "Login fields should be visible"
        assert login_page.is_login_button_enabled(), "Login button should be enabled"

    @allure.story("Login Page Accessibility")
    @allure.title("Login page is reachable from the homepage sign-in link")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    def test_login_page_via_homepage(self, browser_session: BrowserSession, run_config: RunConfig):
        login_page = LoginPage(browser_session, run_config).open(realistic_flow=True)

        assert login_page.are_login_fields_visible(), "Login fields should be visible"

    @allure.story("Login Validation")
    @allure.title("Login with invalid credentials shows an error")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    def test_invalid_login(self, login_page: LoginPage):
        login_page.login("invalid-email", "somepassword")

        error = login_page.wait_for_error_message()
        logger.info(f"Invalid login error message: '{error}'")

        assert error, "Error message should be displayed for invalid credentials"

    @allure.story("Valid Login")
    @allure.title("Login with a configured real account")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P2
    def test_valid_login(self, login_page: LoginPage, test_data: TestDataGenerator):
        user = test_data.real_user()
        login_page.login(user.email, user.password)

        successful = login_page.is_login_successful()
        logger.info(f"Login attempt result - Success: {successful}, Current URL: {login_page.current_url}")
        if successful:
            logger.info("✅ Login successful!")
            return

        # Depends on an account created by an earlier sign-up run; not a failure
        logger.info(
            f"Login may have failed or account doesn't exist yet. "
            f"Error: '{login_page.get_error_message()}'"
        )

    @allure.story("Login Validation")
    @allure.title("Login with empty fields is blocked")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    def test_empty_login_fields(self, login_page: LoginPage):
        login_page.click_login()

        error = login_page.get_error_message()
        stayed_on_page = login_page.url_contains("sign-in", "login")
        logger.info(f"Empty fields test - Error: '{error}', Stayed on page: {stayed_on_page}")

        assert error or stayed_on_page, "Form should validate required fields or show error message"

    @allure.story("Login UI Validation")
    @allure.title("Login form elements accept input")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P2
    @pytest.mark.regression
    def test_login_ui_elements(self, login_page: LoginPage):
        assert login_page.is_email_field_visible(), "Email field should be visible"
        assert login_page.is_password_field_visible(), "Password field should be visible"
        assert login_page.is_login_button_enabled(), "Login button should be enabled"

        login_page.enter_email("test@example.com")
        login_page.enter_password("testpassword")
