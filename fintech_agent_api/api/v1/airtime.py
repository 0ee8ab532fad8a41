"""/airtime - providers, purchases with delayed auto-completion, and the completed check"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from fintech_agent_api.api.dependencies import get_request_id, get_scheduler, get_settings, get_store
from fintech_agent_api.api.v1 import responses
from fintech_agent_api.api.v1.schemas import AirtimePurchaseRequest, StatusUpdateRequest
from fintech_agent_api.config import Settings
from fintech_agent_api.domain.checkers import check_airtime_completed, not_found
from fintech_agent_api.domain.exceptions import NotFoundError, ValidationError
from fintech_agent_api.domain.models import AirtimeProvider, AirtimeStatus
from fintech_agent_api.domain.validation import parse_enum, require_positive_amount
from fintech_agent_api.infrastructure.observability.logging import log_transition
from fintech_agent_api.infrastructure.observability.metrics import record_created, record_transition
from fintech_agent_api.infrastructure.scheduler import DeferredTaskScheduler
from fintech_agent_api.infrastructure.store import FintechStore
from fintech_agent_api.utils.date_utils import within_range

router = APIRouter()

PROVIDERS: List[AirtimeProvider] = [
    AirtimeProvider(id="MTN", name="MTN", countries=["GH", "NG", "ZA"]),
    AirtimeProvider(id="Vodafone", name="Vodafone", countries=["GH", "NG"]),
    AirtimeProvider(id="Airtel", name="Airtel", countries=["GH", "NG", "KE"]),
    AirtimeProvider(id="Tigo", name="Tigo", countries=["GH"]),
    AirtimeProvider(id="Orange", name="Orange", countries=["GH", "CI"]),
]


def find_provider(name: str) -> Optional[AirtimeProvider]:
    return next((p for p in PROVIDERS if name in (p.id, p.name)), None)


def complete_if_pending(store: FintechStore, purchase_id: str) -> None:
    """Deferred completion; a purchase already moved on by an explicit update is left alone"""
    updated = store.airtime_purchases.update_if(
        purchase_id,
        lambda purchase: purchase.status is AirtimeStatus.PENDING,
        {"status": AirtimeStatus.COMPLETED},
    )
    if updated is not None:
        record_transition("airtime", AirtimeStatus.COMPLETED.value)
        log_transition("deferred", "airtime", purchase_id, AirtimeStatus.COMPLETED.value)


@router.get("/providers")
def list_providers(request_id: str = Depends(get_request_id)):
    return responses.success(request_id, [responses.serialize(p) for p in PROVIDERS], count=len(PROVIDERS))


@router.post("/purchase", status_code=201)
async def purchase_airtime(
    body: AirtimePurchaseRequest,
    store: FintechStore = Depends(get_store),
    scheduler: DeferredTaskScheduler = Depends(get_scheduler),
    settings: Settings = Depends(get_settings),
    request_id: str = Depends(get_request_id),
):
    """
    Buy airtime for a phone number.

    The purchase starts pending and completes by itself after
    AIRTIME_COMPLETION_DELAY_SECONDS unless an explicit status update lands first.
    """
    require_positive_amount(body.amount)

    provider = find_provider(body.provider)
    if provider is None:
        raise ValidationError(f"Invalid provider. Available: {', '.join(p.id for p in PROVIDERS)}")

    purchase = store.airtime_purchases.create(
        {
            "account_id": body.account_id,
            "phone_number": body.phone_number,
            "amount": body.amount,
            "currency": body.currency or settings.default_currency,
            "provider": provider.id,
        }
    )
    record_created("airtime")

    scheduler.schedule(
        purchase.id,
        settings.airtime_completion_delay_seconds,
        lambda: complete_if_pending(store, purchase.id),
    )

    return responses.success(request_id, responses.serialize(purchase), message="Airtime purchase initiated")


@router.get("/purchases")
def list_purchases(
    account_id: Optional[str] = Query(None, alias="accountId"),
    phone_number: Optional[str] = Query(None, alias="phoneNumber"),
    status: Optional[str] = Query(None),
    date_from: Optional[str] = Query(None, alias="dateFrom"),
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    purchases = store.airtime_purchases.list(
        lambda p: (account_id is None or p.account_id == account_id)
        and (phone_number is None or p.phone_number == phone_number)
        and (status is None or p.status.value == status)
        and within_range(p.purchased_at, date_from)
    )
    return responses.listing(request_id, purchases)


@router.get("/purchases/{purchase_id}")
def get_purchase(
    purchase_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    purchase = store.airtime_purchases.get(purchase_id)
    if purchase is None:
        raise NotFoundError("Airtime purchase not found")
    return responses.success(request_id, responses.serialize(purchase))


@router.patch("/purchases/{purchase_id}/status")
async def update_purchase_status(
    purchase_id: str,
    body: StatusUpdateRequest,
    store: FintechStore = Depends(get_store),
    scheduler: DeferredTaskScheduler = Depends(get_scheduler),
    request_id: str = Depends(get_request_id),
):
    """Explicit status update; cancels the pending auto-completion so this update wins"""
    status = parse_enum(AirtimeStatus, body.status)
    if store.airtime_purchases.get(purchase_id) is None:
        raise NotFoundError("Airtime purchase not found")

    scheduler.cancel(purchase_id)
    purchase = store.airtime_purchases.update(purchase_id, {"status": status})

    record_transition("airtime", status.value)
    log_transition(request_id, "airtime", purchase_id, status.value)
    return responses.success(request_id, responses.serialize(purchase), message="Airtime purchase status updated")


@router.api_route("/purchases/{purchase_id}/check-completed", methods=["GET", "POST"])
def check_completed(
    purchase_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Checker: has the airtime been delivered?"""
    purchase = store.airtime_purchases.get(purchase_id)
    if purchase is None:
        return responses.check(
            request_id,
            "airtime_completed",
            purchase_id,
            not_found("Airtime purchase", "purchaseId", purchase_id),
            found=False,
        )
    return responses.check(request_id, "airtime_completed", purchase_id, check_airtime_completed(purchase))
