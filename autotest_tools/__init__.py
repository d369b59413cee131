"""
================================================================================
Autotest Tools
================================================================================

Infrastructure utilities shared by the test suites.

Modules:
    - common: Logging setup and tools configuration
    - report_tools: Allure attachment helpers

Example:
    from autotest_tools.common import init_logger
    from autotest_tools.report_tools.allure_utils import attach_text

    init_logger()
    attach_text("hello", name="Greeting")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
