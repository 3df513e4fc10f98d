"""Test utilities for formgate fields and forms.

    from formgate.testing import ManualScheduler, assert_shows_errors
"""

from formgate.testing.assertions import (
    assert_not_submittable,
    assert_shows_errors,
    assert_shows_no_errors,
    assert_submittable,
)
from formgate.testing.clock import ManualScheduler

__all__ = [
    "ManualScheduler",
    "assert_not_submittable",
    "assert_shows_errors",
    "assert_shows_no_errors",
    "assert_submittable",
]
