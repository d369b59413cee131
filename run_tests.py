#!/usr/bin/env python3
# ================================================================================
# E2E Runner
# ================================================================================
#
# Command-line entry point for the sign-up / login suite. Translates runner
# flags into a pytest invocation plus the --ui-* options understood by the
# UI harness plugin, then optionally renders the Allure report.
#
# Suites:
#   unit  - framework self-tests, no browser needed
#   ui    - browser tests against the selected environment
#   all   - both
#
# Usage:
#   python run_tests.py --suite unit
#   python run_tests.py --suite ui --env production --browser firefox
#   python run_tests.py --suite all --parallel 4 --tags smoke P0
#
# ================================================================================

import argparse
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from loguru import logger


logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    level="INFO"
)


ROOT_DIR = Path(__file__).parent

SUITE_PATHS = {
    "unit": ["testsuites/unit"],
    "ui": ["testsuites/ui_testing/tests"],
    "all": ["testsuites/unit", "testsuites/ui_testing/tests"],
}


@dataclass
class RunOptions:
    """Runner flags; None means "use whatever config.yaml / env says"."""

    suite: str = "all"
    tags: List[str] = field(default_factory=list)
    parallel: int = 1
    env: Optional[str] = None
    browser: Optional[str] = None
    headless: Optional[bool] = None
    retries: Optional[int] = None
    allure: bool = True
    verbose: bool = False

    @property
    def runs_ui(self) -> bool:
        return self.suite in ("ui", "all")


class TestRunner:
    """
    Builds and executes the pytest command for one run.

    Reports land under reports/: raw Allure results in allure-results,
    rendered HTML in allure-report, failure artifacts in artifacts.
    """

    __test__ = False

    def __init__(self, options: RunOptions, root_dir: Path = ROOT_DIR):
        self.options = options
        self.root_dir = root_dir
        self.reports_dir = root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_html = self.reports_dir / "allure-report"

    # ==========================================================================
    # Execution
    # ==========================================================================

    def run(self) -> int:
        """Run pytest and return its exit code."""
        self._log_plan()
        self.reports_dir.mkdir(parents=True, exist_ok=True)

        cmd = self.build_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            exit_code = subprocess.run(cmd, cwd=str(self.root_dir)).returncode
        except OSError as e:
            logger.error(f"Could not start pytest: {e}")
            exit_code = 1

        if self.options.allure:
            self.render_allure_report()

        if exit_code == 0:
            logger.info("✅ All selected tests passed")
        else:
            logger.error(f"❌ Test run failed (pytest exit code {exit_code})")
        return exit_code

    def _log_plan(self) -> None:
        opts = self.options
        logger.info("=" * 60)
        logger.info(f"Suite: {opts.suite} | Markers: {' or '.join(opts.tags) or 'any'} | Workers: {opts.parallel}")
        if opts.runs_ui:
            logger.info(
                f"UI run - env: {opts.env or 'config'}, browser: {opts.browser or 'config'}, "
                f"headless: {'config' if opts.headless is None else opts.headless}, "
                f"retries: {'config' if opts.retries is None else opts.retries}"
            )
        logger.info("=" * 60)

    # ==========================================================================
    # Command construction
    # ==========================================================================

    def build_command(self) -> List[str]:
        opts = self.options
        cmd = [sys.executable, "-m", "pytest", *SUITE_PATHS[opts.suite]]

        if opts.tags:
            cmd += ["-m", " or ".join(opts.tags)]
        if opts.parallel > 1:
            cmd += ["-n", str(opts.parallel)]
        if opts.allure:
            cmd += ["--alluredir", str(self.allure_results)]
        cmd.append("-v" if opts.verbose else "-q")

        if opts.runs_ui:
            cmd += self.ui_options()
        return cmd

    def ui_options(self) -> List[str]:
        """Translate runner flags into harness options."""
        opts = self.options
        result = []
        if opts.env:
            result.append(f"--ui-env={opts.env}")
        if opts.browser:
            result.append(f"--ui-browser={opts.browser}")
        if opts.headless is not None:
            result.append("--ui-headless" if opts.headless else "--ui-headed")
        if opts.retries is not None:
            result.append("--ui-no-retry" if opts.retries <= 0 else f"--ui-max-retries={opts.retries}")
        return result

    # ==========================================================================
    # Reporting
    # ==========================================================================

    def render_allure_report(self) -> None:
        """Render allure-results to HTML with the allure CLI, if installed."""
        if not self.allure_results.exists():
            logger.warning("⚠️ No Allure results to render")
            return
        try:
            subprocess.run(
                ["allure", "generate", str(self.allure_results), "-o", str(self.allure_html), "--clean"],
                check=True,
            )
        except FileNotFoundError:
            logger.warning("⚠️ allure CLI not on PATH, skipping HTML report")
            return
        except subprocess.CalledProcessError as e:
            logger.error(f"❌ allure generate failed: {e}")
            return
        logger.info(f"📊 Report: {self.allure_html}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sign-up / Login E2E runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py --suite unit
  python run_tests.py --suite ui --env production --browser firefox --tags smoke
  python run_tests.py --suite ui --no-headless --retries 0
  python run_tests.py --suite all --parallel 4 --no-allure
        """
    )
    parser.add_argument("--suite", choices=sorted(SUITE_PATHS), default="all",
                        help="Which tests to run (default: all)")
    parser.add_argument("--env", choices=["staging", "production"],
                        help="Target environment for UI tests (default: from config)")
    parser.add_argument("--browser", choices=["chrome", "firefox"],
                        help="Browser for UI tests (default: from config)")
    parser.add_argument("--no-headless", action="store_true",
                        help="Show the browser window")
    parser.add_argument("--retries", type=int,
                        help="Max reruns of a failed UI test, 0 disables (default: from config)")
    parser.add_argument("--tags", nargs="+", default=[],
                        help="Markers to select, OR-ed together (e.g. P0 smoke signup)")
    parser.add_argument("--parallel", "-n", type=int, default=1,
                        help="pytest-xdist worker count (default: 1)")
    parser.add_argument("--no-allure", action="store_true",
                        help="Skip Allure results and HTML report")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose pytest output")
    return parser


def options_from_args(args: argparse.Namespace) -> RunOptions:
    return RunOptions(
        suite=args.suite,
        tags=args.tags,
        parallel=args.parallel,
        env=args.env,
        browser=args.browser,
        headless=False if args.no_headless else None,
        retries=args.retries,
        allure=not args.no_allure,
        verbose=args.verbose,
    )


def main():
    args = build_parser().parse_args()
    sys.exit(TestRunner(options_from_args(args)).run())


if __name__ == "__main__":
    main()
