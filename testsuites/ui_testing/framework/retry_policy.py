"""
================================================================================
Retry Policy
================================================================================

Per-test retry bookkeeping used by the test lifecycle harness.

Each test id gets its own counter; a failing test is re-run while its
counter is below the configured maximum, then reported as failed.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from loguru import logger


@dataclass
class RetryState:
    """Attempts made for one test vs. the allowed maximum."""
    test_id: str
    max_retries: int
    retries: int = 0

    @property
    def exhausted(self) -> bool:
        return self.retries >= self.max_retries


class RetryPolicy:
    """
    Decides whether a failed test is re-run.

    Usage:
        >>> policy = RetryPolicy(max_retries=2)
        >>> policy.should_retry("test_signup")
        True
        >>> policy.should_retry("test_signup")
        True
        >>> policy.should_retry("test_signup")
        False
    """

    def __init__(self, max_retries: int = 2):
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")
        self.max_retries = max_retries
        self._states: Dict[str, RetryState] = {}

    def state(self, test_id: str) -> RetryState:
        if test_id not in self._states:
            self._states[test_id] = RetryState(test_id, self.max_retries)
        return self._states[test_id]

    def should_retry(self, test_id: str) -> bool:
        """
        Record a failure of `test_id` and tell whether it may run again.

        Increments the counter on every True answer.
        """
        state = self.state(test_id)
        if not state.exhausted:
            state.retries += 1
            logger.warning(
                f"Test '{test_id}' failed. Retrying... "
                f"(Attempt {state.retries}/{state.max_retries})"
            )
            return True

        if self.max_retries > 0:
            logger.error(f"Test '{test_id}' failed after {self.max_retries} retries")
        else:
            logger.info(f"Test '{test_id}' failed. Retry disabled.")
        return False

    def retries_used(self, test_id: str) -> int:
        state = self._states.get(test_id)
        return state.retries if state else 0


__all__ = [
    "RetryPolicy",
    "RetryState",
]
