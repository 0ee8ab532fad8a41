"""/kyc - customer KYC records, refresh and the approved check"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from fintech_agent_api.api.dependencies import get_request_id, get_store
from fintech_agent_api.api.v1 import responses
from fintech_agent_api.api.v1.schemas import KycRefreshRequest
from fintech_agent_api.domain.checkers import check_kyc_approved, not_found
from fintech_agent_api.domain.exceptions import NotFoundError
from fintech_agent_api.domain.scoring import assess_kyc_documents
from fintech_agent_api.infrastructure.observability.logging import log_transition
from fintech_agent_api.infrastructure.observability.metrics import record_transition
from fintech_agent_api.infrastructure.store import FintechStore

router = APIRouter()


@router.get("/customers/{customer_id}")
def get_kyc(
    customer_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    kyc = store.kyc_records.get(customer_id)
    if kyc is None:
        raise NotFoundError("KYC record not found")
    return responses.success(request_id, responses.serialize(kyc))


@router.post("/customers/{customer_id}/refresh")
def refresh_kyc(
    customer_id: str,
    body: Optional[KycRefreshRequest] = Body(None),
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """
    Re-run the KYC assessment with the supplied documents.

    Creates the record if the customer has none. Level and documents fall
    back to the existing record, then to tier1 and an empty list.
    """
    body = body or KycRefreshRequest()
    existing = store.kyc_records.get(customer_id)
    assessment = assess_kyc_documents(body.documents)
    if body.documents is not None:
        documents = list(body.documents)
    else:
        documents = list(existing.documents) if existing else []

    kyc = store.kyc_records.upsert(
        customer_id,
        {
            "status": assessment.status,
            "level": body.level or (existing.level if existing else None) or "tier1",
            "documents": documents,
            "risk_rating": assessment.risk_rating,
            "pending_items": assessment.pending_items,
        },
    )
    record_transition("kyc", kyc.status.value)
    log_transition(request_id, "kyc", customer_id, kyc.status.value)
    return responses.success(request_id, responses.serialize(kyc), message="KYC check refreshed")


@router.api_route("/customers/{customer_id}/check-approved", methods=["GET", "POST"])
def check_approved(
    customer_id: str,
    store: FintechStore = Depends(get_store),
    request_id: str = Depends(get_request_id),
):
    """Checker: is the customer's KYC approved?"""
    kyc = store.kyc_records.get(customer_id)
    if kyc is None:
        return responses.check(
            request_id, "kyc_approved", customer_id, not_found("KYC record", "customerId", customer_id), found=False
        )
    return responses.check(request_id, "kyc_approved", customer_id, check_kyc_approved(kyc))
