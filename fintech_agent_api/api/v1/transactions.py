"""/transactions - transfer legs, clearing and the cleared check"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fintech_agent_api.api.dependencies import get_request_id, get_store
from fintech_agent_api.api.v1 import responses
from fintech_agent_api.api.v1.schemas import StatusUpdateRequest, TransferRequest
from fintech_agent_api.domain.checkers import check_transaction_cleared, not_found
from fintech_agent_api.domain.exceptions import NotFoundError
from fintech_agent_api.domain.models import TransactionStatus, TransactionType
from fintech_agent_api.domain.validation import parse_enum, require_positive_amount
from fintech_agent_api.infrastructure.observability.logging import log_transition
from fintech_agent_api.infrastructure.observability.metrics import record_created, record_transition
from fintech_agent_api.infrastructure.store import FintechStore
from fintech_agent_api.utils.date_utils import within_range

router = APIRouter()


@router.get("")
def list_transactions(
    account_id: Optional[str] = Query(None, alias="accountId"),
    status: Optional[str] = Query(None),
    transaction_type: Optional[str] = Query(None, alias="type"),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    date_to: Optional[str] = Query(None, alias="dateTo"),
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """List transactions; dateFrom/dateTo bound initiatedAt inclusively"""
    transactions = store.transactions.list(
        lambda txn: (account_id is None or txn.account_id == account_id)
        and (status is None or txn.status.value == status)
        and (transaction_type is None or txn.type.value == transaction_type)
        and within_range(txn.initiated_at, date_from, date_to)
    )
    return responses.listing(request_id, transactions)


@router.get("/{transaction_id}")
def get_transaction(
    transaction_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    transaction = store.transactions.get(transaction_id)
    if transaction is None:
        raise NotFoundError("Transaction not found")
    return responses.success(request_id, responses.serialize(transaction))


@router.post("", status_code=201)
def create_transfer(
    body: TransferRequest,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """
    Initiate a transfer between two accounts.

    Records a pending debit on the source and a pending credit on the
    destination. Balances are not moved.
    """
    require_positive_amount(body.amount)

    debit = store.transactions.create(
        {
            "account_id": body.from_account,
            "type": TransactionType.DEBIT,
            "amount": body.amount,
            "currency": body.currency,
            "description": body.purpose or f"Transfer to {body.to_account}",
            "status": TransactionStatus.PENDING,
            "counterparty": body.to_account,
        }
    )
    credit = store.transactions.create(
        {
            "account_id": body.to_account,
            "type": TransactionType.CREDIT,
            "amount": body.amount,
            "currency": body.currency,
            "description": body.purpose or f"Transfer from {body.from_account}",
            "status": TransactionStatus.PENDING,
            "counterparty": body.from_account,
        }
    )
    record_created("transaction", 2)

    return responses.success(
        request_id,
        {"debitTransaction": responses.serialize(debit), "creditTransaction": responses.serialize(credit)},
        message="Transaction initiated",
    )


@router.patch("/{transaction_id}/status")
def update_transaction_status(
    transaction_id: str,
    body: StatusUpdateRequest,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Move a transaction between pending and cleared; processedAt is set on first clearing"""
    status = parse_enum(TransactionStatus, body.status)
    transaction = store.transactions.update(transaction_id, {"status": status})
    if transaction is None:
        raise NotFoundError("Transaction not found")

    record_transition("transaction", status.value)
    log_transition(request_id, "transaction", transaction_id, status.value)
    return responses.success(request_id, responses.serialize(transaction), message="Transaction status updated")


@router.api_route("/{transaction_id}/check-cleared", methods=["GET", "POST"])
def check_cleared(
    transaction_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Checker: has the transaction cleared?"""
    transaction = store.transactions.get(transaction_id)
    if transaction is None:
        return responses.check(
            request_id,
            "transaction_cleared",
            transaction_id,
            not_found("Transaction", "transactionId", transaction_id),
            found=False,
        )
    return responses.check(request_id, "transaction_cleared", transaction_id, check_transaction_cleared(transaction))
