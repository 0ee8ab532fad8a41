"""/accounts - account lookup, opening, status changes and the active check"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fintech_agent_api.api.dependencies import get_request_id, get_store
from fintech_agent_api.api.v1 import responses
from fintech_agent_api.api.v1.schemas import CreateAccountRequest, StatusUpdateRequest
from fintech_agent_api.domain.checkers import check_account_active, not_found
from fintech_agent_api.domain.exceptions import NotFoundError
from fintech_agent_api.domain.models import AccountStatus
from fintech_agent_api.domain.validation import parse_enum
from fintech_agent_api.infrastructure.observability.logging import log_transition
from fintech_agent_api.infrastructure.observability.metrics import record_created, record_transition
from fintech_agent_api.infrastructure.store import FintechStore

router = APIRouter()


@router.get("")
def list_accounts(
    customer_id: Optional[str] = Query(None, alias="customerId"),
    status: Optional[str] = Query(None),
    account_type: Optional[str] = Query(None, alias="type"),
    currency: Optional[str] = Query(None),
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """List accounts, optionally filtered by customer, status, type or currency"""
    accounts = store.accounts.list(
        lambda acc: (customer_id is None or acc.customer_id == customer_id)
        and (status is None or acc.status.value == status)
        and (account_type is None or acc.type == account_type)
        and (currency is None or acc.currency == currency)
    )
    return responses.listing(request_id, accounts)


@router.get("/{account_id}")
def get_account(
    account_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    account = store.accounts.get(account_id)
    if account is None:
        raise NotFoundError("Account not found")
    return responses.success(request_id, responses.serialize(account))


@router.post("", status_code=201)
def create_account(
    body: CreateAccountRequest,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Open an account; it starts active with a generated 10-digit account number"""
    account = store.accounts.create(
        {
            "customer_id": body.customer_id,
            "type": body.type,
            "currency": body.currency,
            "balance": body.initial_deposit or 0.0,
            "status": AccountStatus.ACTIVE,
        }
    )
    record_created("account")
    return responses.success(request_id, responses.serialize(account), message="Account created successfully")


@router.patch("/{account_id}/status")
def update_account_status(
    account_id: str,
    body: StatusUpdateRequest,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    status = parse_enum(AccountStatus, body.status)
    account = store.accounts.update(account_id, {"status": status})
    if account is None:
        raise NotFoundError("Account not found")

    record_transition("account", status.value)
    log_transition(request_id, "account", account_id, status.value)
    return responses.success(request_id, responses.serialize(account), message="Account status updated")


@router.api_route("/{account_id}/check-active", methods=["GET", "POST"])
def check_active(
    account_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Checker: is the account active?"""
    account = store.accounts.get(account_id)
    if account is None:
        return responses.check(
            request_id, "account_active", account_id, not_found("Account", "accountId", account_id), found=False
        )
    return responses.check(request_id, "account_active", account_id, check_account_active(account))
