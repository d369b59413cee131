"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Page object and test data fixtures for the browser suites.

Browser lifecycle (run_config, browser_manager, browser_session), retries and
failure artifacts come from the harness plugin registered in the repository
conftest.

Key Features:
- Page Object fixtures for all pages (sign-up and login open ready to use)
- Unique test data per test

================================================================================
"""

import pytest

from testsuites.ui_testing.framework.browser_manager import BrowserSession
from testsuites.ui_testing.framework.config_loader import RunConfig
from testsuites.ui_testing.framework.test_data_factory import TestDataGenerator
from testsuites.ui_testing.pages import BusinessSignUpPage, HomePage, LoginPage, SignUpPage


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def signup_page(browser_session: BrowserSession, run_config: RunConfig) -> SignUpPage:
    """
    Provides an opened SignUpPage.

    The registration form is loaded and overlays are dismissed.
    """
    return SignUpPage(browser_session, run_config).open()


@pytest.fixture
def login_page(browser_session: BrowserSession, run_config: RunConfig) -> LoginPage:
    """
    Provides an opened LoginPage.
    """
    return LoginPage(browser_session, run_config).open()


@pytest.fixture
def home_page(browser_session: BrowserSession, run_config: RunConfig) -> HomePage:
    """
    Provides a HomePage bound to the session (not yet navigated).
    """
    return HomePage(browser_session, run_config)


@pytest.fixture
def business_signup_page(browser_session: BrowserSession, run_config: RunConfig) -> BusinessSignUpPage:
    return BusinessSignUpPage(browser_session, run_config)


# ================================================================================
# Utility Fixtures
# ================================================================================

@pytest.fixture
def test_data(run_config: RunConfig) -> TestDataGenerator:
    """
    Provides the test data generator configured for this run.
    """
    return TestDataGenerator(
        email_domain=run_config.email_domain,
        email_prefix=run_config.email_prefix,
    )
