from __future__ import annotations

"""backend/sitzprobe/services/diagnostics/outcome_classifier.py

Classification of failed probe payments.

A probe is built to fail at its destination: the recipient sees an HTLC for
a payment hash it never issued and rejects it with
WIRE_INCORRECT_OR_UNKNOWN_PAYMENT_DETAILS. That rejection is the healthy
outcome and is counted as a success. Every other failure code the host
reports becomes its own outcome symbol so distinct network problems stay
separately visible in the report.

The classification is:
- deterministic (no randomness, no hidden state)
- text-based (first run of [A-Z_] in the message)
- open-ended (unknown codes are absorbed, never rejected)
"""

import re
from typing import Optional

from sitzprobe.models import Outcome

BENIGN_FAILURE_CODE = "WIRE_INCORRECT_OR_UNKNOWN_PAYMENT_DETAILS"

_FAILCODE_PATTERN = re.compile(r"[A-Z_]+")


def extract_failure_code(message: Optional[str]) -> str | None:
    """Return the first uppercase/underscore token in `message`, if any."""
    match = _FAILCODE_PATTERN.search(message or "")
    if match is None:
        return None
    return match.group(0)


def classify_payment_failure(message: Optional[str]) -> str:
    """Map a raw payment failure message to an outcome symbol.

    It never returns None; at minimum it returns "unknown_error".
    """
    code = extract_failure_code(message)
    if code is None:
        return Outcome.UNKNOWN_ERROR.value
    if code == BENIGN_FAILURE_CODE:
        return Outcome.SUCCESS.value
    return code
