"""
Checker predicates used by the orchestration agent.

Each function is a pure read of the entity it receives: no store access,
no mutation, so calling it repeatedly on unchanged state gives the same
verdict. A missing entity is reported through `not_found`, never raised.
"""

import math
from typing import Optional

from fintech_agent_api.domain.models import (
    Account,
    AccountLimit,
    AirtimePurchase,
    AirtimeStatus,
    AccountStatus,
    CheckResult,
    KycRecord,
    KycStatus,
    LimitPeriod,
    Loan,
    LoanStatus,
    Payment,
    PaymentStatus,
    Transaction,
    TransactionStatus,
)
from fintech_agent_api.domain.scoring import MIN_ELIGIBLE_CREDIT_SCORE

LOAN_APPROVAL_CHECKS = ["credit_check", "document_verification", "risk_assessment"]


def not_found(label: str, id_field: str, requested_id: str) -> CheckResult:
    return CheckResult(result=False, reason=f"{label} not found", metadata={id_field: requested_id})


def check_account_active(account: Account) -> CheckResult:
    is_active = account.status is AccountStatus.ACTIVE
    return CheckResult(
        result=is_active,
        reason="Account is active" if is_active else f"Account status is: {account.status.value}",
        metadata={
            "accountId": account.id,
            "status": account.status.value,
            "accountNumber": account.account_number,
        },
    )


def check_transaction_cleared(transaction: Transaction) -> CheckResult:
    is_cleared = transaction.status is TransactionStatus.CLEARED
    return CheckResult(
        result=is_cleared,
        reason=(
            "Transaction has been cleared"
            if is_cleared
            else f"Transaction status is: {transaction.status.value}"
        ),
        metadata={
            "transactionId": transaction.id,
            "status": transaction.status.value,
            "amount": transaction.amount,
            "currency": transaction.currency,
            "processedAt": transaction.processed_at,
        },
    )


def check_payment_ready(payment: Payment) -> CheckResult:
    """Ready means KYC done, balance sufficient and still pending; reasons keep that order"""
    failures = []
    if not payment.kyc_complete:
        failures.append("KYC not complete")
    if not payment.sufficient_balance:
        failures.append("Insufficient balance")
    if payment.status is not PaymentStatus.PENDING:
        failures.append(f"Payment status is {payment.status.value}")

    is_ready = not failures
    return CheckResult(
        result=is_ready,
        reason="Payment is ready to process" if is_ready else ", ".join(failures),
        metadata={
            "paymentId": payment.id,
            "status": payment.status.value,
            "kycComplete": payment.kyc_complete,
            "sufficientBalance": payment.sufficient_balance,
            "amount": payment.amount,
            "currency": payment.currency,
        },
    )


def check_loan_eligible(loan: Loan) -> CheckResult:
    is_eligible = bool(loan.eligible) and loan.credit_score >= MIN_ELIGIBLE_CREDIT_SCORE
    if is_eligible:
        reason = "Loan is eligible"
    elif loan.credit_score < MIN_ELIGIBLE_CREDIT_SCORE:
        reason = (
            f"Credit score {loan.credit_score} is below minimum threshold "
            f"({MIN_ELIGIBLE_CREDIT_SCORE})"
        )
    else:
        reason = "Loan is marked as not eligible"

    return CheckResult(
        result=is_eligible,
        reason=reason,
        metadata={
            "loanId": loan.id,
            "creditScore": loan.credit_score,
            "eligible": loan.eligible,
            "amount": loan.amount,
            "status": loan.status.value,
        },
    )


def check_loan_approved(loan: Loan) -> CheckResult:
    is_approved = loan.status is LoanStatus.APPROVED
    return CheckResult(
        result=is_approved,
        reason="Loan has been approved" if is_approved else f"Loan status is: {loan.status.value}",
        metadata={
            "loanId": loan.id,
            "status": loan.status.value,
            "pendingChecks": [] if is_approved else list(LOAN_APPROVAL_CHECKS),
            "approvedAt": loan.approved_at,
        },
    )


def check_airtime_completed(purchase: AirtimePurchase) -> CheckResult:
    is_completed = purchase.status is AirtimeStatus.COMPLETED
    return CheckResult(
        result=is_completed,
        reason=(
            "Airtime purchase has been completed"
            if is_completed
            else f"Purchase status is: {purchase.status.value}"
        ),
        metadata={
            "purchaseId": purchase.id,
            "status": purchase.status.value,
            "deliveryStatus": purchase.delivery_status.value,
            "phoneNumber": purchase.phone_number,
            "amount": purchase.amount,
            "provider": purchase.provider,
            "completedAt": purchase.completed_at,
        },
    )


def check_kyc_approved(kyc: KycRecord) -> CheckResult:
    is_approved = kyc.status is KycStatus.APPROVED
    return CheckResult(
        result=is_approved,
        reason="KYC is approved" if is_approved else f"KYC status is: {kyc.status.value}",
        metadata={
            "customerId": kyc.customer_id,
            "status": kyc.status.value,
            "level": kyc.level,
            "riskRating": kyc.risk_rating.value,
            "pendingItems": list(kyc.pending_items),
            "verifiedAt": kyc.verified_at,
            "expiresAt": kyc.expires_at,
        },
    )


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """Positive finite number, or None"""
    if raw is None or raw == "":
        return None
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def format_amount(value: float) -> str:
    """Whole amounts print without a trailing .0 (750, not 750.0)"""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def check_limit_available(limit: AccountLimit, raw_amount: Optional[str], raw_period: Optional[str]) -> CheckResult:
    """
    Compare the requested amount against the remaining limit for a period.

    An invalid amount or an unsupported period is a negative verdict with
    its own reason; remaining is not computed in either case.
    """
    amount = parse_amount(raw_amount)
    if amount is None:
        return CheckResult(
            result=False,
            reason="Amount must be provided and greater than 0",
            metadata={"accountId": limit.account_id},
        )

    try:
        period = LimitPeriod(raw_period or LimitPeriod.DAILY.value)
    except ValueError:
        return CheckResult(
            result=False,
            reason='Period must be "daily" or "monthly"',
            metadata={"accountId": limit.account_id},
        )

    remaining = limit.remaining(period)
    is_available = remaining >= amount
    label = period.value.capitalize()
    if is_available:
        reason = f"{label} limit available: {format_amount(remaining)} {limit.currency}"
    else:
        reason = (
            f"Insufficient {period.value} limit. Available: {format_amount(remaining)} {limit.currency}, "
            f"Required: {format_amount(amount)} {limit.currency}"
        )

    return CheckResult(
        result=is_available,
        reason=reason,
        metadata={
            "accountId": limit.account_id,
            "period": period.value,
            "requestedAmount": amount,
            "remaining": remaining,
            "limit": limit.daily_limit if period is LimitPeriod.DAILY else limit.monthly_limit,
            "used": limit.daily_used if period is LimitPeriod.DAILY else limit.monthly_used,
            "currency": limit.currency,
        },
    )
