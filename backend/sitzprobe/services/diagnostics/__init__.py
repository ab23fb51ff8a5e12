from __future__ import annotations

"""
Diagnostics and outcome classification utilities.

This package currently provides:
- outcome_classifier: turn a failed probe's error message into a stable
  outcome symbol that the report aggregator can count.

The goal is to keep classification logic centralized and deterministic.
"""

from .outcome_classifier import (  # noqa: F401
    BENIGN_FAILURE_CODE,
    classify_payment_failure,
    extract_failure_code,
)
