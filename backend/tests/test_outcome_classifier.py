# backend/tests/test_outcome_classifier.py
import pytest

from sitzprobe.services.diagnostics import (
    BENIGN_FAILURE_CODE,
    classify_payment_failure,
    extract_failure_code,
)


def test_benign_code_counts_as_success():
    msg = "failed: WIRE_INCORRECT_OR_UNKNOWN_PAYMENT_DETAILS (reply from remote)"
    assert classify_payment_failure(msg) == "success"


def test_message_without_code_is_unknown_error():
    assert classify_payment_failure("failed: reply from remote, no details") == "unknown_error"
    assert classify_payment_failure("") == "unknown_error"
    assert classify_payment_failure(None) == "unknown_error"


def test_other_codes_become_their_own_symbol():
    msg = "failed: TEMPORARY_CHANNEL_FAILURE (reply from remote)"
    assert classify_payment_failure(msg) == "TEMPORARY_CHANNEL_FAILURE"


def test_first_token_wins():
    msg = "failed: WIRE_UNKNOWN_NEXT_PEER then WIRE_INCORRECT_OR_UNKNOWN_PAYMENT_DETAILS"
    assert classify_payment_failure(msg) == "WIRE_UNKNOWN_NEXT_PEER"


@pytest.mark.parametrize(
    "message, expected",
    [
        ("x", None),
        ("a_b", "_"),
        ("204:failed: WIRE_PERMANENT_CHANNEL_FAILURE", "WIRE_PERMANENT_CHANNEL_FAILURE"),
        ("Payment failed", "P"),
    ],
)
def test_extract_failure_code(message, expected):
    assert extract_failure_code(message) == expected


def test_classification_is_pure():
    msg = f"failed: {BENIGN_FAILURE_CODE}"
    assert [classify_payment_failure(msg) for _ in range(3)] == ["success"] * 3
