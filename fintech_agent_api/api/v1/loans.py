"""/loans - applications, approval decisions and the eligibility/approval checks"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from fintech_agent_api.api.dependencies import get_request_id, get_scoring_strategy, get_settings, get_store
from fintech_agent_api.api.v1 import responses
from fintech_agent_api.api.v1.schemas import LoanApplicationRequest, LoanRejectionRequest
from fintech_agent_api.config import Settings
from fintech_agent_api.domain.checkers import check_loan_approved, check_loan_eligible, not_found
from fintech_agent_api.domain.exceptions import NotFoundError
from fintech_agent_api.domain.lifecycle import require_pending
from fintech_agent_api.domain.models import Loan, LoanStatus
from fintech_agent_api.domain.scoring import ScoringStrategy, interest_rate_for, is_eligible, monthly_payment
from fintech_agent_api.domain.validation import require_positive_amount
from fintech_agent_api.infrastructure.observability.logging import log_transition
from fintech_agent_api.infrastructure.observability.metrics import record_created, record_transition
from fintech_agent_api.infrastructure.store import FintechStore
from fintech_agent_api.utils.date_utils import to_iso, within_range

router = APIRouter()

DEFAULT_REJECTION_REASON = "Application does not meet requirements"


def _get_loan(store: FintechStore, loan_id: str) -> Loan:
    loan = store.loans.get(loan_id)
    if loan is None:
        raise NotFoundError("Loan not found")
    return loan


@router.post("/apply", status_code=201)
def apply_for_loan(
    body: LoanApplicationRequest,
    store: FintechStore = Depends(get_store),
    scoring: ScoringStrategy = Depends(get_scoring_strategy),
    settings: Settings = Depends(get_settings),
    request_id: str = Depends(get_request_id),
):
    """
    Submit a loan application.

    Pricing is fixed at application time:
    1. Interest rate tiered by principal
    2. Flat monthly payment over the tenure
    3. Credit score from the scoring strategy; eligible at 650 and above
    """
    require_positive_amount(body.amount)
    require_positive_amount(body.tenure, "Tenure")

    rate = interest_rate_for(body.amount)
    credit_score = scoring.credit_score(body.customer_id)

    loan = store.loans.create(
        {
            "customer_id": body.customer_id,
            "account_id": body.account_id,
            "amount": body.amount,
            "currency": settings.default_currency,
            "purpose": body.purpose,
            "tenure": body.tenure,
            "interest_rate": rate,
            "monthly_payment": monthly_payment(body.amount, rate, body.tenure),
            "credit_score": credit_score,
            "eligible": is_eligible(credit_score),
            "collateral": body.collateral,
        }
    )
    record_created("loan")
    return responses.success(request_id, responses.serialize(loan), message="Loan application submitted")


@router.get("")
def list_loans(
    customer_id: Optional[str] = Query(None, alias="customerId"),
    status: Optional[str] = Query(None),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    loans = store.loans.list(
        lambda loan: (customer_id is None or loan.customer_id == customer_id)
        and (status is None or loan.status.value == status)
        and within_range(loan.applied_at, date_from)
    )
    return responses.listing(request_id, loans)


@router.get("/{loan_id}")
def get_loan(
    loan_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    return responses.success(request_id, responses.serialize(_get_loan(store, loan_id)))


@router.post("/{loan_id}/approve")
def approve_loan(
    loan_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Approve a pending loan and disburse the full principal"""
    loan = _get_loan(store, loan_id)
    require_pending(loan.status, "approve", "loan")

    updated = store.loans.update(
        loan_id,
        {
            "status": LoanStatus.APPROVED,
            "disbursed_at": loan.disbursed_at or to_iso(store.clock()),
            "remaining_balance": loan.amount,
        },
    )
    record_transition("loan", LoanStatus.APPROVED.value)
    log_transition(request_id, "loan", loan_id, LoanStatus.APPROVED.value)
    return responses.success(request_id, responses.serialize(updated), message="Loan approved and disbursed")


@router.post("/{loan_id}/reject")
def reject_loan(
    loan_id: str,
    body: Optional[LoanRejectionRequest] = Body(None),
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    loan = _get_loan(store, loan_id)
    require_pending(loan.status, "reject", "loan")

    reason = (body.reason if body else None) or DEFAULT_REJECTION_REASON
    updated = store.loans.update(loan_id, {"status": LoanStatus.REJECTED, "rejection_reason": reason})
    record_transition("loan", LoanStatus.REJECTED.value)
    log_transition(request_id, "loan", loan_id, LoanStatus.REJECTED.value)
    return responses.success(request_id, responses.serialize(updated), message="Loan application rejected")


@router.api_route("/{loan_id}/check-eligible", methods=["GET", "POST"])
def check_eligible(
    loan_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Checker: does the application meet the credit score threshold?"""
    loan = store.loans.get(loan_id)
    if loan is None:
        return responses.check(request_id, "loan_eligible", loan_id, not_found("Loan", "loanId", loan_id), found=False)
    return responses.check(request_id, "loan_eligible", loan_id, check_loan_eligible(loan))


@router.api_route("/{loan_id}/check-approved", methods=["GET", "POST"])
def check_approved(
    loan_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Checker: has the loan been approved?"""
    loan = store.loans.get(loan_id)
    if loan is None:
        return responses.check(request_id, "loan_approved", loan_id, not_found("Loan", "loanId", loan_id), found=False)
    return responses.check(request_id, "loan_approved", loan_id, check_loan_approved(loan))
