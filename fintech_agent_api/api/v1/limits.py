"""/limits - per-account spending limits and the availability check"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fintech_agent_api.api.dependencies import get_request_id, get_store
from fintech_agent_api.api.v1 import responses
from fintech_agent_api.api.v1.schemas import LimitUpdateRequest
from fintech_agent_api.domain.checkers import check_limit_available, not_found
from fintech_agent_api.domain.exceptions import NotFoundError, ValidationError
from fintech_agent_api.domain.models import LimitPeriod
from fintech_agent_api.domain.validation import require_non_negative
from fintech_agent_api.infrastructure.store import FintechStore

router = APIRouter()


@router.get("/{account_id}")
def get_limits(
    account_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Limits plus remaining headroom and availability for each period"""
    limit = store.account_limits.get(account_id)
    if limit is None:
        raise NotFoundError("Account limits not found")

    daily_remaining = limit.remaining(LimitPeriod.DAILY)
    monthly_remaining = limit.remaining(LimitPeriod.MONTHLY)
    data = responses.serialize(limit)
    data.update(
        {
            "dailyRemaining": daily_remaining,
            "monthlyRemaining": monthly_remaining,
            "dailyAvailable": daily_remaining > 0,
            "monthlyAvailable": monthly_remaining > 0,
        }
    )
    return responses.success(request_id, data)


@router.post("/{account_id}/update")
def update_limits(
    account_id: str,
    body: LimitUpdateRequest,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Set daily and/or monthly limits; the limit record is created on first update"""
    if body.daily_limit is None and body.monthly_limit is None:
        raise ValidationError("At least one limit must be provided: dailyLimit or monthlyLimit")

    patch = {}
    if body.daily_limit is not None:
        patch["daily_limit"] = require_non_negative(body.daily_limit, "dailyLimit")
    if body.monthly_limit is not None:
        patch["monthly_limit"] = require_non_negative(body.monthly_limit, "monthlyLimit")

    limit = store.account_limits.upsert(account_id, patch)
    return responses.success(request_id, responses.serialize(limit), message="Account limits updated")


@router.api_route("/{account_id}/check-available", methods=["GET", "POST"])
def check_available(
    account_id: str,
    amount: Optional[str] = Query(None),
    period: Optional[str] = Query(LimitPeriod.DAILY.value),
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Checker: is there enough limit left for `amount` in `period`?"""
    limit = store.account_limits.get(account_id)
    if limit is None:
        return responses.check(
            request_id, "limit_available", account_id, not_found("Account limits", "accountId", account_id), found=False
        )
    return responses.check(request_id, "limit_available", account_id, check_limit_available(limit, amount, period))
