"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - Hierarchical YAML configuration loading
    - Environment variable override (UI_BROWSER overrides ui.browser)
    - Dot notation path access
    - Typed run configuration (RunConfig) consumed by the UI framework
    - Environment name -> base URL mapping (staging, production)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from loguru import logger


# Default configuration file path (repo_root/config/config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"

SUPPORTED_BROWSERS = ("chrome", "chromium", "firefox")

ENVIRONMENT_ALIASES: Dict[str, str] = {
    "stage": "staging",
    "prod": "production",
}

# Used when neither YAML nor env provide an environment map
DEFAULT_ENVIRONMENTS: Dict[str, Dict[str, str]] = {
    "staging": {"base_url": "https://q-www.ninox.com", "locale_prefix": "/en"},
    "production": {"base_url": "https://ninox.com", "locale_prefix": "/en"},
}


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.browser", "chrome")
        'firefox'  # From YAML or env var

        >>> config.get("retry.max_retries", 2)
        2  # Default value if not configured

    Environment Variable Mapping:
        - ui.base_url -> UI_BASE_URL
        - ui.headless -> UI_HEADLESS
        - retry.max_retries -> RETRY_MAX_RETRIES
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """
        Singleton pattern - return existing instance if available.

        Configuration is loaded once per process (once per xdist worker).
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses CONFIG_PATH env var, then DEFAULT_CONFIG_PATH.
        """
        if getattr(self, "_initialized", False):
            return

        env_path = os.environ.get("CONFIG_PATH")
        self._config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "ui.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "ui", "environments")

        Returns:
            Section dictionary or empty dict if not found
        """
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        Lists are read as comma-separated values.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value
        if isinstance(reference, (list, tuple)):
            return [part.strip() for part in value.split(",") if part.strip()]

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


# =============================================================================
# Typed run configuration
# =============================================================================

@dataclass(frozen=True)
class RunConfig:
    """
    Resolved runtime options for one test run.

    Built once per worker by the harness and passed explicitly to the
    session manager and page objects.
    """
    environment: str = "staging"
    base_url: str = DEFAULT_ENVIRONMENTS["staging"]["base_url"]
    locale_prefix: str = "/en"
    browser: str = "chrome"
    headless: bool = False
    wait_timeout: float = 10.0
    window_width: int = 1920
    window_height: int = 1080
    retry_enabled: bool = True
    max_retries: int = 2
    email_domain: str = "example.com"
    email_prefix: str = "qa.automation"
    strict_signup_assertions: bool = True
    email_error_terms: Tuple[str, ...] = ("email", "invalid", "format")
    password_error_terms: Tuple[str, ...] = ("password", "weak", "strong")
    password_strength_terms: Tuple[str, ...] = ("password", "weak", "strong")
    duplicate_email_terms: Tuple[str, ...] = ("already", "exists", "registered")
    overlay_probe_attempts: int = 2
    overlay_hide_timeout: float = 3.0
    click_settle_timeout: float = 1.0
    artifacts_dir: Path = field(default=Path("reports/artifacts"))

    @property
    def effective_max_retries(self) -> int:
        """Retries granted to a failing test (0 when retry is disabled)."""
        return self.max_retries if self.retry_enabled else 0

    @property
    def timeout_ms(self) -> float:
        """Wait timeout in playwright units (milliseconds)."""
        return self.wait_timeout * 1000

    def url_for(self, path: str) -> str:
        """Build an absolute URL for a locale-aware application path."""
        return f"{self.base_url}{self.locale_prefix}{path}"

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """
        Return a copy with non-None overrides applied.

        Numeric overrides are validated like YAML/env values; an invalid
        timeout or retry count keeps the current value.
        """
        applied = {k: v for k, v in overrides.items() if v is not None}
        if "browser" in applied:
            applied["browser"] = _validate_browser(applied["browser"])
        if "wait_timeout" in applied:
            applied["wait_timeout"] = _positive_number(
                applied["wait_timeout"], self.wait_timeout, "timeout"
            )
        if "max_retries" in applied:
            applied["max_retries"] = int(_positive_number(
                applied["max_retries"], self.max_retries, "max retries", allow_zero=True
            ))
        return replace(self, **applied)

    def describe(self) -> List[str]:
        """Printable configuration summary."""
        return [
            "=== Test Configuration ===",
            f"Environment: {self.environment}",
            f"Base URL: {self.base_url}",
            f"Browser: {self.browser}",
            f"Headless: {self.headless}",
            f"Timeout: {self.wait_timeout} seconds",
            f"Retry Enabled: {self.retry_enabled}",
            f"Max Retries: {self.max_retries}",
            "==========================",
        ]

    @classmethod
    def load(
        cls,
        loader: Optional[ConfigLoader] = None,
        **overrides: Any,
    ) -> "RunConfig":
        """
        Resolve a RunConfig from YAML/env (via ConfigLoader) plus overrides.

        Overrides with value None are ignored, so CLI options that were
        not given fall through to env/YAML/defaults.

        Raises:
            ConfigurationError: Unsupported browser or unknown environment
        """
        loader = loader or ConfigLoader()
        defaults = cls()

        environment = overrides.pop("environment", None) or loader.get(
            "ui.environment", defaults.environment
        )
        environment = ENVIRONMENT_ALIASES.get(environment.lower(), environment.lower())

        environments = loader.get_section("environments") or DEFAULT_ENVIRONMENTS
        explicit_url = overrides.pop("base_url", None) or loader.get("ui.base_url", "")
        env_entry = environments.get(environment)
        if explicit_url:
            base_url = explicit_url
            # Ninox hosts serve localized paths, other hosts serve them at the root
            locale_prefix = loader.get(
                "ui.locale_prefix", "/en" if "ninox.com" in explicit_url else ""
            )
        elif env_entry:
            base_url = env_entry["base_url"]
            locale_prefix = env_entry.get("locale_prefix", "")
        else:
            raise ConfigurationError(
                f"Unknown environment '{environment}'. "
                f"Known: {', '.join(sorted(environments))}"
            )

        config = cls(
            environment=environment,
            base_url=base_url.rstrip("/"),
            locale_prefix=locale_prefix.rstrip("/"),
            browser=_validate_browser(loader.get("ui.browser", defaults.browser)),
            headless=loader.get("ui.headless", defaults.headless),
            wait_timeout=_positive_number(
                loader.get("ui.timeout", defaults.wait_timeout), defaults.wait_timeout, "timeout"
            ),
            window_width=loader.get("ui.window_width", defaults.window_width),
            window_height=loader.get("ui.window_height", defaults.window_height),
            retry_enabled=loader.get("retry.enabled", defaults.retry_enabled),
            max_retries=int(_positive_number(
                loader.get("retry.max_retries", defaults.max_retries),
                defaults.max_retries,
                "max retries",
                allow_zero=True,
            )),
            email_domain=loader.get("test_data.email_domain", defaults.email_domain),
            email_prefix=loader.get("test_data.email_prefix", defaults.email_prefix),
            strict_signup_assertions=loader.get(
                "signup.strict_assertions", defaults.strict_signup_assertions
            ),
            email_error_terms=_terms(loader, "email_error_terms", defaults.email_error_terms),
            password_error_terms=_terms(loader, "password_error_terms", defaults.password_error_terms),
            password_strength_terms=_terms(
                loader, "password_strength_terms", defaults.password_strength_terms
            ),
            duplicate_email_terms=_terms(loader, "duplicate_email_terms", defaults.duplicate_email_terms),
            overlay_probe_attempts=loader.get("overlay.probe_attempts", defaults.overlay_probe_attempts),
            overlay_hide_timeout=loader.get("overlay.hide_timeout", defaults.overlay_hide_timeout),
            click_settle_timeout=loader.get(
                "interaction.click_settle_timeout", defaults.click_settle_timeout
            ),
            artifacts_dir=Path(loader.get("artifacts.dir", str(defaults.artifacts_dir))),
        )
        return config.with_overrides(**overrides)


def _validate_browser(browser: str) -> str:
    browser = str(browser).lower()
    if browser not in SUPPORTED_BROWSERS:
        raise ConfigurationError(
            f"Browser not supported: {browser}. Use one of {', '.join(SUPPORTED_BROWSERS)}"
        )
    return browser


def _positive_number(value: Any, default: float, label: str, allow_zero: bool = False) -> float:
    """Parse a numeric setting, falling back to the default on bad input."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {label} value '{value}', using default: {default}")
        return default
    if number < 0 or (number == 0 and not allow_zero):
        logger.warning(f"Invalid {label} value '{value}', using default: {default}")
        return default
    return number


def _terms(loader: ConfigLoader, name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = loader.get(f"validation.{name}", list(default))
    return tuple(str(term).lower() for term in value)


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "RunConfig",
    "SUPPORTED_BROWSERS",
]
