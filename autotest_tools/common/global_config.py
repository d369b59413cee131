"""
================================================================================
Global Configuration for Automation Tools
================================================================================

This module provides the logging setup shared by the framework, the test
harness and the runner script.

Features:
    - YAML-based settings (`logging` section of config/config.yaml)
    - Environment variable support (LOG_LEVEL, LOG_FILE, CONFIG_PATH)
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_str: Optional[str] = None,
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call more than once; only the first call configures sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL,
            then to the config value.
        log_file: Optional file sink. Defaults to LOG_FILE, then to the
            config value; an empty string disables file logging.
        format_str: Custom log format string. Defaults to config value.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    log_level = (level or get_config("logging.level", "INFO")).upper()
    log_format = format_str or get_config("logging.format", DEFAULT_FORMAT)

    # Remove default logger and add configured one
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = log_file if log_file is not None else get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format,
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            compression="zip",
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def get_logger():
    """
    Returns the configured Loguru logger instance.

    Ensures the logger is initialized before returning.
    """
    if not _logger_initialized:
        init_logger()
    return logger


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a tools configuration value using dot notation.

    Example:
        level = get_config("logging.level", "INFO")
    """
    _ensure_config_loaded()
    value: Any = _config
    for part in key.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return default
    return value


def reload_config() -> None:
    """Drop cached settings so the next lookup re-reads file and environment."""
    _config.clear()


def _ensure_config_loaded() -> None:
    if not _config:
        _load_config()


def _load_config() -> None:
    config_path = Path(os.getenv("CONFIG_PATH", str(DEFAULT_CONFIG_PATH)))
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        _config["logging"] = dict(data.get("logging") or {})
    else:
        _config["logging"] = {}

    # Environment overrides
    if "LOG_LEVEL" in os.environ:
        _config["logging"]["level"] = os.environ["LOG_LEVEL"]
    if "LOG_FILE" in os.environ:
        _config["logging"]["file"] = os.environ["LOG_FILE"]
