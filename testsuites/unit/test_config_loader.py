import pytest
import yaml

from testsuites.ui_testing.framework.config_loader import ConfigLoader, ConfigurationError, RunConfig


ENV_VARS = [
    "CONFIG_PATH",
    "UI_ENVIRONMENT",
    "UI_BASE_URL",
    "UI_LOCALE_PREFIX",
    "UI_BROWSER",
    "UI_HEADLESS",
    "UI_TIMEOUT",
    "RETRY_ENABLED",
    "RETRY_MAX_RETRIES",
    "VALIDATION_EMAIL_ERROR_TERMS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


def make_loader(tmp_path, data):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data), encoding="utf-8")
    ConfigLoader.reset()
    return ConfigLoader(config_path=config_path)


def test_env_override_and_defaults(monkeypatch, tmp_path):
    loader = make_loader(tmp_path, {"ui": {"base_url": "http://example.com", "timeout": 10}})
    assert loader.get("ui.base_url") == "http://example.com"
    assert loader.get("retry.max_retries", 3) == 3

    monkeypatch.setenv("UI_BASE_URL", "http://env.example.com")
    monkeypatch.setenv("UI_TIMEOUT", "25")
    assert loader.get("ui.base_url") == "http://env.example.com"
    assert loader.get("ui.timeout", 10) == 25


def test_reload_updates_values(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"ui": {"timeout": 5}}), encoding="utf-8")

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.timeout") == 5

    config_path.write_text(yaml.dump({"ui": {"timeout": 15}}), encoding="utf-8")
    loader.reload()
    assert loader.get("ui.timeout") == 15


def test_environment_maps_to_base_url(tmp_path):
    loader = make_loader(tmp_path, {
        "ui": {"environment": "prod"},
        "environments": {
            "staging": {"base_url": "https://q-www.ninox.com", "locale_prefix": "/en"},
            "production": {"base_url": "https://ninox.com/", "locale_prefix": "/en"},
        },
    })

    config = RunConfig.load(loader)

    assert config.environment == "production"
    assert config.base_url == "https://ninox.com"
    assert config.url_for("/create-account") == "https://ninox.com/en/create-account"


def test_builtin_environments_when_yaml_has_none(tmp_path):
    config = RunConfig.load(make_loader(tmp_path, {}), environment="stage")

    assert config.base_url == "https://q-www.ninox.com"
    assert config.locale_prefix == "/en"


def test_explicit_base_url_wins_over_environment(tmp_path):
    loader = make_loader(tmp_path, {"ui": {"environment": "staging"}})

    local = RunConfig.load(loader, base_url="http://localhost:3000/")
    ninox = RunConfig.load(loader, base_url="https://preview.ninox.com")

    assert local.base_url == "http://localhost:3000"
    assert local.locale_prefix == ""
    assert ninox.locale_prefix == "/en"


def test_unknown_environment_is_rejected(tmp_path):
    with pytest.raises(ConfigurationError):
        RunConfig.load(make_loader(tmp_path, {}), environment="qa-west")


def test_unsupported_browser_is_rejected(tmp_path):
    loader = make_loader(tmp_path, {"ui": {"browser": "safari"}})

    with pytest.raises(ConfigurationError):
        RunConfig.load(loader)
    with pytest.raises(ConfigurationError):
        RunConfig().with_overrides(browser="edge")


def test_browser_name_is_case_insensitive(monkeypatch, tmp_path):
    monkeypatch.setenv("UI_BROWSER", "Firefox")

    assert RunConfig.load(make_loader(tmp_path, {})).browser == "firefox"


def test_invalid_timeout_falls_back_to_default(tmp_path):
    config = RunConfig.load(make_loader(tmp_path, {"ui": {"timeout": "soon"}}))

    assert config.wait_timeout == 10.0
    assert config.timeout_ms == 10000


def test_none_overrides_are_ignored(tmp_path):
    loader = make_loader(tmp_path, {"ui": {"headless": True, "timeout": 20}})

    config = RunConfig.load(loader, headless=None, wait_timeout=None, browser="chromium")

    assert config.headless is True
    assert config.wait_timeout == 20
    assert config.browser == "chromium"


def test_retry_can_be_disabled(tmp_path):
    loader = make_loader(tmp_path, {"retry": {"enabled": True, "max_retries": 3}})

    assert RunConfig.load(loader).effective_max_retries == 3
    assert RunConfig.load(loader, retry_enabled=False).effective_max_retries == 0


def test_error_terms_come_from_configuration(monkeypatch, tmp_path):
    loader = make_loader(tmp_path, {"validation": {"password_strength_terms": ["Weak", "zu schwach"]}})
    monkeypatch.setenv("VALIDATION_EMAIL_ERROR_TERMS", "E-Mail, ungültig")

    config = RunConfig.load(loader)

    assert config.password_strength_terms == ("weak", "zu schwach")
    assert config.email_error_terms == ("e-mail", "ungültig")
    assert config.duplicate_email_terms == ("already", "exists", "registered")


def test_invalid_numeric_overrides_keep_configured_values(tmp_path):
    loader = make_loader(tmp_path, {"ui": {"timeout": 15}, "retry": {"max_retries": 3}})

    config = RunConfig.load(loader, wait_timeout=0, max_retries=-1)

    assert config.wait_timeout == 15
    assert config.timeout_ms == 15000
    assert config.max_retries == 3


def test_zero_retry_override_is_allowed():
    config = RunConfig().with_overrides(max_retries=0, wait_timeout="2.5")

    assert config.max_retries == 0
    assert config.effective_max_retries == 0
    assert config.wait_timeout == 2.5
