"""
Test suites package.

This repository keeps `testsuites` importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - the harness plugin (`testsuites.ui_testing.framework.harness`)

Targets, timeouts and credentials come from config/config.yaml and env vars.
"""
