import sys

from run_tests import RunOptions, TestRunner, build_parser, options_from_args


def test_unit_suite_has_no_ui_options():
    cmd = TestRunner(RunOptions(suite="unit", allure=False)).build_command()

    assert cmd[:3] == [sys.executable, "-m", "pytest"]
    assert "testsuites/unit" in cmd
    assert not [c for c in cmd if c.startswith("--ui")]
    assert "--alluredir" not in cmd


def test_ui_flags_map_to_harness_options():
    options = RunOptions(
        suite="ui",
        tags=["smoke", "P0"],
        parallel=4,
        env="production",
        browser="firefox",
        headless=False,
        retries=3,
    )

    cmd = TestRunner(options).build_command()

    assert "testsuites/ui_testing/tests" in cmd
    assert cmd[cmd.index("-m") + 1] == "smoke or P0"
    assert cmd[cmd.index("-n") + 1] == "4"
    assert "--ui-env=production" in cmd
    assert "--ui-browser=firefox" in cmd
    assert "--ui-headed" in cmd
    assert "--ui-max-retries=3" in cmd


def test_zero_retries_disables_retrying():
    cmd = TestRunner(RunOptions(suite="ui", retries=0)).build_command()

    assert "--ui-no-retry" in cmd
    assert not [c for c in cmd if c.startswith("--ui-max-retries")]


def test_parser_defaults_defer_to_config():
    options = options_from_args(build_parser().parse_args(["--suite", "ui"]))

    assert options.env is None
    assert options.browser is None
    assert options.retries is None
    assert options.headless is None
    assert TestRunner(options).ui_options() == []


def test_no_headless_flag_forces_headed():
    options = options_from_args(build_parser().parse_args(["--no-headless", "--no-allure"]))

    assert options.headless is False
    assert options.allure is False
