"""
================================================================================
UI Test Lifecycle Harness
================================================================================

pytest plugin that wires the framework into test runs.

Provides:
    - Command line options (--ui-env, --ui-browser, --ui-max-retries, ...)
    - run_config / browser_manager / browser_session fixtures
    - Automatic re-run of failing `ui` tests (reported as RERUN)
    - Failure artifacts (screenshot, console log, page markup) for the
      final failed attempt, written to disk and attached to Allure

Registered from the repository conftest:
    pytest_plugins = ["testsuites.ui_testing.framework.harness"]

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generator, List, Optional

import pytest
from _pytest.runner import runtestprotocol
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from autotest_tools.report_tools.allure_utils import attach_failure_artifacts

from .browser_manager import BrowserManager, BrowserSession
from .config_loader import ConfigurationError, RunConfig
from .retry_policy import RetryPolicy


RUN_CONFIG_KEY = pytest.StashKey[RunConfig]()
RETRY_POLICY_KEY = pytest.StashKey[RetryPolicy]()
PHASE_REPORTS_KEY = pytest.StashKey[Dict[str, pytest.TestReport]]()
ARTIFACTS_KEY = pytest.StashKey[Optional["FailureArtifacts"]]()


# ================================================================================
# Failure artifacts
# ================================================================================

@dataclass
class FailureArtifacts:
    """Evidence captured from the browser when a test fails."""
    test_name: str
    url: str = ""
    screenshot: Optional[bytes] = None
    console_log: Optional[str] = None
    page_source: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @classmethod
    def capture(cls, test_name: str, session: BrowserSession) -> "FailureArtifacts":
        """
        Collect screenshot, console log and markup.

        Each part is captured independently; a part that cannot be taken
        is recorded in `errors` and left as None.
        """
        artifacts = cls(test_name=test_name, url=session.current_url)
        page = session.page

        try:
            artifacts.screenshot = page.screenshot(full_page=True)
        except PlaywrightError as e:
            artifacts.errors.append(f"screenshot: {e}")
        try:
            artifacts.console_log = "\n".join(session.console_messages())
        except PlaywrightError as e:
            artifacts.errors.append(f"console log: {e}")
        try:
            artifacts.page_source = page.content()
        except PlaywrightError as e:
            artifacts.errors.append(f"page source: {e}")

        for error in artifacts.errors:
            logger.warning(f"⚠️ Failed to capture {error}")
        return artifacts

    def attach(self, output_dir) -> int:
        """Write the captured parts under `output_dir` and attach them to Allure."""
        return attach_failure_artifacts(
            self.test_name,
            screenshot=self.screenshot,
            console_log=self.console_log,
            page_source=self.page_source,
            output_dir=output_dir,
        )


# ================================================================================
# Options & configuration
# ================================================================================

def pytest_addoption(parser):
    group = parser.getgroup("ui", "UI end-to-end suite")
    group.addoption("--ui-env", action="store", default=None,
                    help="Target environment (staging, production)")
    group.addoption("--ui-base-url", action="store", default=None,
                    help="Explicit base URL, overrides the environment mapping")
    group.addoption("--ui-browser", action="store", default=None,
                    help="Browser: chrome, chromium or firefox")
    group.addoption("--ui-headed", action="store_const", const=False, dest="ui_headless",
                    default=None, help="Run with a visible browser window")
    group.addoption("--ui-headless", action="store_const", const=True, dest="ui_headless",
                    help="Run without a browser window")
    group.addoption("--ui-timeout", action="store", type=float, default=None,
                    help="Wait timeout in seconds")
    group.addoption("--ui-max-retries", action="store", type=int, default=None,
                    help="Re-runs granted to a failing UI test")
    group.addoption("--ui-no-retry", action="store_true", default=False,
                    help="Disable re-running failing UI tests")


def pytest_configure(config):
    config.addinivalue_line("markers", "ui: browser-driven test (retried on failure)")
    config.addinivalue_line("markers", "no_retry: never re-run this test")


def get_run_config(config: pytest.Config) -> RunConfig:
    """
    Resolve the RunConfig once per process from YAML, env and CLI options.

    Raises:
        ConfigurationError: Invalid browser or unknown environment
    """
    if RUN_CONFIG_KEY not in config.stash:
        run_config = RunConfig.load(
            environment=config.getoption("ui_env"),
            base_url=config.getoption("ui_base_url"),
            browser=config.getoption("ui_browser"),
            headless=config.getoption("ui_headless"),
            wait_timeout=config.getoption("ui_timeout"),
            max_retries=config.getoption("ui_max_retries"),
            retry_enabled=False if config.getoption("ui_no_retry") else None,
        )
        for line in run_config.describe():
            logger.info(line)
        config.stash[RUN_CONFIG_KEY] = run_config
    return config.stash[RUN_CONFIG_KEY]


def get_retry_policy(config: pytest.Config) -> RetryPolicy:
    if RETRY_POLICY_KEY not in config.stash:
        config.stash[RETRY_POLICY_KEY] = RetryPolicy(get_run_config(config).effective_max_retries)
    return config.stash[RETRY_POLICY_KEY]


# ================================================================================
# Retry protocol
# ================================================================================

def _retry_applies(item: pytest.Item) -> bool:
    return (
        item.get_closest_marker("ui") is not None
        and item.get_closest_marker("no_retry") is None
    )


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_protocol(item, nextitem):
    """Run a `ui` item, re-running it while it fails and the policy allows."""
    if not _retry_applies(item):
        return None
    try:
        policy = get_retry_policy(item.config)
    except ConfigurationError as e:
        # Default protocol; the run_config fixture reports the error per test
        logger.error(f"❌ Configuration error, retries disabled: {e}")
        return None

    item.ihook.pytest_runtest_logstart(nodeid=item.nodeid, location=item.location)

    while True:
        item.stash[PHASE_REPORTS_KEY] = {}
        item.stash[ARTIFACTS_KEY] = None
        reports = runtestprotocol(item, nextitem=nextitem, log=False)
        if not any(report.failed for report in reports):
            break
        if not policy.should_retry(item.nodeid):
            break
        for report in reports:
            if report.failed:
                report.outcome = "rerun"
            item.ihook.pytest_runtest_logreport(report=report)

    retries = policy.retries_used(item.nodeid)
    failed = any(report.failed for report in reports)
    if retries and not failed:
        logger.info(f"✅ Test '{item.nodeid}' passed after {retries} retries")
        item.user_properties.append(("retries", retries))
        for report in reports:
            report.user_properties.append(("retries", retries))

    artifacts = item.stash.get(ARTIFACTS_KEY, None)
    if failed and artifacts is not None:
        artifacts.attach(get_run_config(item.config).artifacts_dir)

    for report in reports:
        item.ihook.pytest_runtest_logreport(report=report)
    item.ihook.pytest_runtest_logfinish(nodeid=item.nodeid, location=item.location)
    return True


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    item.stash.setdefault(PHASE_REPORTS_KEY, {})[report.when] = report


@pytest.hookimpl(tryfirst=True)
def pytest_report_teststatus(report):
    if report.outcome == "rerun":
        return "rerun", "R", ("RERUN", {"yellow": True})
    return None


def _test_failed(item: pytest.Item) -> bool:
    reports = item.stash.get(PHASE_REPORTS_KEY, {})
    return any(reports[when].failed for when in ("setup", "call") if when in reports)


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def run_config(pytestconfig) -> RunConfig:
    """Resolved run configuration shared by the whole worker."""
    return get_run_config(pytestconfig)


@pytest.fixture(scope="class")
def browser_manager(run_config: RunConfig) -> Generator[BrowserManager, None, None]:
    """Browser owner for one group of tests; closed when the group ends."""
    with BrowserManager(run_config) as manager:
        yield manager


@pytest.fixture
def browser_session(request, browser_manager: BrowserManager) -> Generator[BrowserSession, None, None]:
    """
    Live browser session for one test.

    After a failure the artifacts are captured and the browser disposed;
    after a pass only cookies and storage are reset. Items that go through
    the retry protocol hand their artifacts to it, so only the final
    attempt is reported; all other items report them here.
    """
    session = browser_manager.acquire()
    yield session

    failed = _test_failed(request.node)
    if failed:
        artifacts = FailureArtifacts.capture(request.node.nodeid, session)
        if _retry_applies(request.node):
            request.node.stash[ARTIFACTS_KEY] = artifacts
        else:
            artifacts.attach(get_run_config(request.config).artifacts_dir)
    browser_manager.release(failed=failed)


__all__ = [
    "FailureArtifacts",
    "get_retry_policy",
    "get_run_config",
]
