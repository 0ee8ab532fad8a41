"""/payments - initiation, cancellation, completion and the readiness check"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fintech_agent_api.api.dependencies import get_request_id, get_store
from fintech_agent_api.api.v1 import responses
from fintech_agent_api.api.v1.schemas import InitiatePaymentRequest
from fintech_agent_api.domain.checkers import check_payment_ready, not_found
from fintech_agent_api.domain.exceptions import NotFoundError
from fintech_agent_api.domain.lifecycle import require_pending
from fintech_agent_api.domain.models import Payment, PaymentStatus
from fintech_agent_api.domain.validation import require_positive_amount
from fintech_agent_api.infrastructure.observability.logging import log_transition
from fintech_agent_api.infrastructure.observability.metrics import record_created, record_transition
from fintech_agent_api.infrastructure.store import FintechStore

router = APIRouter()


def _get_payment(store: FintechStore, payment_id: str) -> Payment:
    payment = store.payments.get(payment_id)
    if payment is None:
        raise NotFoundError("Payment not found")
    return payment


@router.get("")
def list_payments(
    account_id: Optional[str] = Query(None, alias="accountId"),
    status: Optional[str] = Query(None),
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    payments = store.payments.list(
        lambda pay: (account_id is None or pay.account_id == account_id)
        and (status is None or pay.status.value == status)
    )
    return responses.listing(request_id, payments)


@router.post("/initiate", status_code=201)
def initiate_payment(
    body: InitiatePaymentRequest,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """
    Initiate a payment from an existing account.

    sufficientBalance is a snapshot of balance >= amount taken now; KYC is
    simulated as complete.
    """
    require_positive_amount(body.amount)

    account = store.accounts.get(body.account_id)
    if account is None:
        raise NotFoundError("Account not found")

    payment = store.payments.create(
        {
            "account_id": body.account_id,
            "beneficiary": body.beneficiary,
            "beneficiary_account": body.beneficiary_account,
            "amount": body.amount,
            "currency": body.currency,
            "method": body.method or "bank_transfer",
            "reference": body.reference,
            "kyc_complete": True,
            "sufficient_balance": account.balance >= body.amount,
        }
    )
    record_created("payment")
    return responses.success(request_id, responses.serialize(payment), message="Payment initiated")


@router.get("/{payment_id}")
def get_payment(
    payment_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    return responses.success(request_id, responses.serialize(_get_payment(store, payment_id)))


@router.post("/{payment_id}/cancel")
def cancel_payment(
    payment_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    payment = _get_payment(store, payment_id)
    require_pending(payment.status, "cancel", "payment")

    updated = store.payments.update(payment_id, {"status": PaymentStatus.CANCELLED})
    record_transition("payment", PaymentStatus.CANCELLED.value)
    log_transition(request_id, "payment", payment_id, PaymentStatus.CANCELLED.value)
    return responses.success(request_id, responses.serialize(updated), message="Payment cancelled")


@router.post("/{payment_id}/complete")
def complete_payment(
    payment_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Mark a pending payment as completed; completedAt is stamped once"""
    payment = _get_payment(store, payment_id)
    require_pending(payment.status, "complete", "payment")

    updated = store.payments.update(payment_id, {"status": PaymentStatus.COMPLETED})
    record_transition("payment", PaymentStatus.COMPLETED.value)
    log_transition(request_id, "payment", payment_id, PaymentStatus.COMPLETED.value)
    return responses.success(request_id, responses.serialize(updated), message="Payment completed")


@router.api_route("/{payment_id}/check-ready", methods=["GET", "POST"])
def check_ready(
    payment_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Checker: can the payment be processed now?"""
    payment = store.payments.get(payment_id)
    if payment is None:
        return responses.check(
            request_id, "payment_ready", payment_id, not_found("Payment", "paymentId", payment_id), found=False
        )
    return responses.check(request_id, "payment_ready", payment_id, check_payment_ready(payment))
