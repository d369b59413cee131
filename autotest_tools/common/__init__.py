"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared logging setup for the suite.

Exports:
    - init_logger: Initialize loguru with the standard sinks
    - get_logger: Logger instance, initialized on first use
    - get_config: Read a tools setting (dot notation)

Usage:
    from autotest_tools.common import init_logger

    init_logger()

================================================================================
"""

from .global_config import get_config, get_logger, init_logger, reload_config

__all__ = [
    "get_config",
    "get_logger",
    "init_logger",
    "reload_config",
]
