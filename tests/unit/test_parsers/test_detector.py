"""Tests for bank sender and transaction-alert detection."""

import pytest

from moneytext.parsers.detector import SenderDetector


@pytest.fixture
def detector() -> SenderDetector:
    return SenderDetector()


@pytest.mark.parametrize("sender", ["VM-HDFCBK", "AD-ICICIB", "HDFCBK", "JKBANK", "BX-SBIINB"])
def test_bank_senders(detector: SenderDetector, sender: str) -> None:
    assert detector.is_bank_sender(sender) is True


@pytest.mark.parametrize("sender", ["+919876543210", "9876543210", "Mom", "", None])
def test_non_bank_senders(detector: SenderDetector, sender: str | None) -> None:
    assert detector.is_bank_sender(sender) is False


def test_transaction_body_needs_keyword_and_amount(detector: SenderDetector) -> None:
    assert detector.looks_like_transaction("Rs.500 debited from A/c XX12") is True
    assert detector.looks_like_transaction("Your OTP is 123456") is False
    assert detector.looks_like_transaction("Get flat Rs 500 off on shopping") is False
    assert detector.looks_like_transaction("Your account was debited") is False


def test_is_transactional_combines_both_checks(detector: SenderDetector) -> None:
    body = "Rs.500 debited from A/c XX12"
    assert detector.is_transactional("VM-HDFCBK", body) is True
    assert detector.is_transactional("+919876543210", body) is False
