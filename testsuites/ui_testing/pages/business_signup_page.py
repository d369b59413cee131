"""
================================================================================
Business Sign-up Page Object
================================================================================

Business profile step (`/business-signup`) shown after a work sign-up.

Highlights:
  - Custom dropdowns (industry, company size, country) picked by visible text
  - Optional telephone field
  - Save Profile goes through the multi-strategy click

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from testsuites.ui_testing.framework.element_actions import InteractionFailure, InteractionResult
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.framework.smart_locator import LocationFailure, SelectorStrategy


DROPDOWN_OPTIONS = "xpath=//div[contains(@class, 'option') or contains(@role, 'option')]"


class BusinessSignUpPage(BasePage):
    """Business profile page object."""

    URL_PATH = "/business-signup"
    PAGE_NAME = "business sign-up page"

    FULL_NAME_FIELD = SelectorStrategy.of(
        "full name field",
        "#fullName",
        "xpath=//input[@id='fullName']",
        "xpath=//input[@placeholder='Full name' or @placeholder='Name']",
    )

    COMPANY_FIELD = SelectorStrategy.of(
        "company field",
        "#company",
        "xpath=//input[@id='company']",
        "xpath=//input[@placeholder='Company' or @placeholder='Company name']",
    )

    INDUSTRY_FIELD = SelectorStrategy.of(
        "industry field",
        "xpath=//fieldset[@id='industry']//input",
        "xpath=//input[@placeholder='Select' and preceding-sibling::*[contains(text(), 'Industry')]]",
        "xpath=//fieldset[contains(@class, 'industry')]//input",
        "xpath=//div[contains(@class, 'industry')]//input[@placeholder='Select']",
    )

    COMPANY_SIZE_FIELD = SelectorStrategy.of(
        "company size field",
        "xpath=//fieldset[@id='companySize' or @id='company-size']//input",
        "xpath=//input[@placeholder='Select' and preceding-sibling::*[contains(text(), 'size')]]",
        "xpath=//fieldset[contains(@class, 'size')]//input",
        "xpath=//div[contains(@class, 'company-size')]//input[@placeholder='Select']",
    )

    COUNTRY_FIELD = SelectorStrategy.of(
        "country field",
        "xpath=//fieldset[@id='country']//input",
        "xpath=//input[@placeholder='Select' and preceding-sibling::*[contains(text(), 'Country')]]",
        "xpath=//fieldset[contains(@class, 'country')]//input",
    )

    TELEPHONE_FIELD = SelectorStrategy.of(
        "telephone field",
        "#telephone",
        "xpath=//input[@id='telephone']",
        "xpath=//input[@type='tel']",
        "xpath=//input[@placeholder='Phone' or @placeholder='Telephone']",
    )

    SAVE_PROFILE_BUTTON = SelectorStrategy.of(
        "Save Profile button",
        "xpath=//button[contains(text(), 'Save profile')]",
        "xpath=//button[@type='submit' and contains(text(), 'Save')]",
        "xpath=//button[contains(@class, 'submit') or contains(@class, 'save')]",
    )

    def wait_for_page_to_load(self) -> None:
        logger.info("Waiting for business signup page to load...")
        self.locate(self.FULL_NAME_FIELD)
        self.locate(self.COMPANY_FIELD)
        logger.info("Business signup page loaded successfully")

    def is_loaded(self) -> bool:
        return self.url_contains("business-signup")

    def enter_full_name(self, full_name: str) -> None:
        logger.info(f"Entering full name: {full_name}")
        self.fill(self.FULL_NAME_FIELD, full_name)

    def enter_company_name(self, company_name: str) -> None:
        logger.info(f"Entering company name: {company_name}")
        self.fill(self.COMPANY_FIELD, company_name)

    def select_industry(self, industry: str) -> Optional[str]:
        return self._select(self.INDUSTRY_FIELD, industry)

    def select_company_size(self, size: str) -> Optional[str]:
        return self._select(self.COMPANY_SIZE_FIELD, size)

    def select_country(self, country: str) -> Optional[str]:
        return self._select(self.COUNTRY_FIELD, country)

    def enter_telephone(self, telephone: str) -> bool:
        """Optional field; returns False when it could not be filled."""
        logger.info(f"Entering telephone: {telephone}")
        try:
            self.fill(self.TELEPHONE_FIELD, telephone)
            return True
        except (LocationFailure, PlaywrightError) as e:
            logger.warning(f"Could not enter telephone: {e}")
            return False

    @allure.step("Click Save Profile")
    def click_save_profile(self) -> InteractionResult:
        logger.info("Clicking Save Profile button")
        result = self.submit(self.SAVE_PROFILE_BUTTON)
        if result.url_changed:
            logger.info("✅ URL changed - business profile submission detected")
        else:
            logger.warning("⚠️ URL unchanged after button click")
        return result

    def is_redirected_after_save_profile(self, timeout: float = 5.0) -> bool:
        return self.wait_for_url_without("business-signup", timeout=timeout)

    def is_save_profile_button_enabled(self) -> bool:
        return self.is_enabled(self.SAVE_PROFILE_BUTTON)

    def _select(self, strategy: SelectorStrategy, text: str) -> Optional[str]:
        """Dropdown selection; failures are logged and return None."""
        logger.info(f"Selecting {strategy.name}: {text}")
        try:
            return self.actions.select_option_by_text(
                self.locate(strategy),
                self.page.locator(DROPDOWN_OPTIONS),
                text,
                strategy.name,
            )
        except (LocationFailure, InteractionFailure, PlaywrightError) as e:
            logger.warning(f"Could not select {strategy.name}: {e}")
            return None


__all__ = ["BusinessSignUpPage"]
