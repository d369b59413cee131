"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the registration and login flows.

Each page class encapsulates:
    - Ordered selector strategies
    - Page-specific actions
    - Non-raising verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .business_signup_page import BusinessSignUpPage
from .home_page import HomePage
from .login_page import LoginPage
from .signup_page import SignUpPage

__all__ = [
    "BusinessSignUpPage",
    "HomePage",
    "LoginPage",
    "SignUpPage",
]
