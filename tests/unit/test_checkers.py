"""Unit tests for checker predicates"""

import pytest
from fintech_agent_api.domain.checkers import (
    LOAN_APPROVAL_CHECKS,
    check_account_active,
    check_airtime_completed,
    check_kyc_approved,
    check_limit_available,
    check_loan_approved,
    check_loan_eligible,
    check_payment_ready,
    check_transaction_cleared,
    format_amount,
    not_found,
    parse_amount,
)
from fintech_agent_api.domain.models import (
    AccountLimit,
    AccountStatus,
    KycStatus,
    LoanStatus,
    PaymentStatus,
)
from fintech_agent_api.infrastructure.store import FintechStore


def test_not_found_carries_only_requested_id():
    verdict = not_found("Loan", "loanId", "loan-404")

    assert verdict.result is False
    assert verdict.reason == "Loan not found"
    assert verdict.metadata == {"loanId": "loan-404"}


def test_account_active(seeded_store: FintechStore):
    active = check_account_active(seeded_store.accounts.get("acc-001"))
    suspended = check_account_active(seeded_store.accounts.get("acc-003"))

    assert active.result is True
    assert active.reason == "Account is active"
    assert active.metadata == {"accountId": "acc-001", "status": "active", "accountNumber": "1234567890"}
    assert suspended.result is False
    assert suspended.reason == "Account status is: suspended"


def test_transaction_cleared(seeded_store: FintechStore):
    cleared = check_transaction_cleared(seeded_store.transactions.get("txn-001"))
    pending = check_transaction_cleared(seeded_store.transactions.get("txn-003"))

    assert cleared.result is True
    assert cleared.metadata["processedAt"] == "2024-01-18T09:05:00.000Z"
    assert pending.result is False
    assert pending.reason == "Transaction status is: pending"


def test_payment_ready_reports_only_insufficient_balance(seeded_store: FintechStore):
    """Test pay-002: KYC complete, pending, but balance short"""
    verdict = check_payment_ready(seeded_store.payments.get("pay-002"))

    assert verdict.result is False
    assert verdict.reason == "Insufficient balance"
    assert "KYC" not in verdict.reason
    assert "status" not in verdict.reason


def test_payment_ready_lists_failures_in_fixed_order(seeded_store: FintechStore):
    seeded_store.payments.update(
        "pay-002",
        {"kyc_complete": False, "status": PaymentStatus.CANCELLED},
    )

    verdict = check_payment_ready(seeded_store.payments.get("pay-002"))

    assert verdict.reason == "KYC not complete, Insufficient balance, Payment status is cancelled"


def test_payment_ready_when_all_clauses_hold(seeded_store: FintechStore):
    seeded_store.payments.update("pay-002", {"sufficient_balance": True})

    verdict = check_payment_ready(seeded_store.payments.get("pay-002"))

    assert verdict.result is True
    assert verdict.reason == "Payment is ready to process"
    assert verdict.metadata["sufficientBalance"] is True


def test_loan_eligible_with_high_score(seeded_store: FintechStore):
    verdict = check_loan_eligible(seeded_store.loans.get("loan-001"))

    assert verdict.result is True
    assert verdict.metadata["creditScore"] == 750


def test_loan_not_eligible_below_threshold(seeded_store: FintechStore):
    verdict = check_loan_eligible(seeded_store.loans.get("loan-003"))

    assert verdict.result is False
    assert "650" in verdict.reason
    assert "600" in verdict.reason


def test_loan_flagged_ineligible_despite_score(seeded_store: FintechStore):
    seeded_store.loans.update("loan-002", {"eligible": False})

    verdict = check_loan_eligible(seeded_store.loans.get("loan-002"))

    assert verdict.result is False
    assert verdict.metadata["eligible"] is False


def test_loan_approved_pending_checks(seeded_store: FintechStore):
    approved = check_loan_approved(seeded_store.loans.get("loan-001"))
    pending = check_loan_approved(seeded_store.loans.get("loan-002"))

    assert approved.result is True
    assert approved.metadata["pendingChecks"] == []
    assert pending.result is False
    assert pending.reason == "Loan status is: pending"
    assert pending.metadata["pendingChecks"] == ["credit_check", "document_verification", "risk_assessment"]
    assert LOAN_APPROVAL_CHECKS == ["credit_check", "document_verification", "risk_assessment"]


def test_airtime_completed(seeded_store: FintechStore):
    done = check_airtime_completed(seeded_store.airtime_purchases.get("air-001"))
    waiting = check_airtime_completed(seeded_store.airtime_purchases.get("air-002"))

    assert done.result is True
    assert done.metadata["deliveryStatus"] == "delivered"
    assert waiting.result is False
    assert waiting.reason == "Purchase status is: pending"


def test_kyc_approved(seeded_store: FintechStore):
    approved = check_kyc_approved(seeded_store.kyc_records.get("cust-001"))
    rejected = check_kyc_approved(seeded_store.kyc_records.get("cust-003"))

    assert approved.result is True
    assert approved.metadata["riskRating"] == "low"
    assert rejected.result is False
    assert rejected.reason == "KYC status is: rejected"
    assert rejected.metadata["pendingItems"] == ["id", "proof_of_address"]


@pytest.fixture
def limit() -> AccountLimit:
    return AccountLimit(account_id="acc-001", daily_limit=1000.0, daily_used=250.0,
                        monthly_limit=10000.0, monthly_used=1200.0)


def test_limit_available_within_daily(limit: AccountLimit):
    verdict = check_limit_available(limit, "500", "daily")

    assert verdict.result is True
    assert verdict.metadata["remaining"] == 750
    assert verdict.metadata["requestedAmount"] == 500
    assert verdict.metadata["limit"] == 1000.0
    assert verdict.metadata["used"] == 250.0


def test_limit_unavailable_above_daily(limit: AccountLimit):
    verdict = check_limit_available(limit, "900", "daily")

    assert verdict.result is False
    assert verdict.metadata["remaining"] == 750
    assert verdict.reason.startswith("Insufficient daily limit")


def test_limit_reason_prints_whole_amounts_without_decimals(limit: AccountLimit):
    fits = check_limit_available(limit, "500", "daily")
    too_big = check_limit_available(limit, "900.5", "daily")

    assert fits.reason == "Daily limit available: 750 GHS"
    assert too_big.reason == "Insufficient daily limit. Available: 750 GHS, Required: 900.5 GHS"


def test_format_amount():
    assert format_amount(750.0) == "750"
    assert format_amount(12.25) == "12.25"
    assert format_amount(-40.0) == "-40"


def test_limit_exact_remaining_is_available(limit: AccountLimit):
    assert check_limit_available(limit, "750", "daily").result is True


def test_limit_period_defaults_to_daily(limit: AccountLimit):
    verdict = check_limit_available(limit, "500", None)

    assert verdict.metadata["period"] == "daily"


def test_limit_monthly_period(limit: AccountLimit):
    verdict = check_limit_available(limit, "9000", "monthly")

    assert verdict.result is False
    assert verdict.metadata["remaining"] == 8800


@pytest.mark.parametrize("raw_amount", [None, "", "abc", "0", "-5", "nan", "inf"])
def test_limit_rejects_invalid_amount(limit: AccountLimit, raw_amount):
    verdict = check_limit_available(limit, raw_amount, "daily")

    assert verdict.result is False
    assert verdict.reason == "Amount must be provided and greater than 0"
    assert "remaining" not in verdict.metadata


def test_limit_rejects_unknown_period(limit: AccountLimit):
    verdict = check_limit_available(limit, "100", "weekly")

    assert verdict.result is False
    assert verdict.reason == 'Period must be "daily" or "monthly"'
    assert verdict.metadata == {"accountId": "acc-001"}


def test_parse_amount():
    assert parse_amount("12.5") == 12.5
    assert parse_amount("0") is None


def test_checkers_are_idempotent(seeded_store: FintechStore):
    """Test repeated checks on unchanged state give identical verdicts"""
    loan = seeded_store.loans.get("loan-002")
    payment = seeded_store.payments.get("pay-002")

    assert check_loan_approved(loan) == check_loan_approved(loan)
    assert check_payment_ready(payment) == check_payment_ready(payment)
    assert seeded_store.loans.get("loan-002") == loan
    assert loan.status is LoanStatus.PENDING
    assert seeded_store.accounts.get("acc-001").status is AccountStatus.ACTIVE
    assert seeded_store.kyc_records.get("cust-002").status is KycStatus.PENDING
