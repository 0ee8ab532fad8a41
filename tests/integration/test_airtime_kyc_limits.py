"""Integration tests for /airtime, /kyc and /limits"""

import time

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def _purchase(client: TestClient, **overrides):
    payload = {"phoneNumber": "+233201112222", "amount": 20, "provider": "MTN", "accountId": "acc-001"}
    payload.update(overrides)
    return client.post("/airtime/purchase", json=payload)


def test_list_providers(client: TestClient):
    body = client.get("/airtime/providers").json()

    assert body["count"] == 5
    assert [p["id"] for p in body["data"]] == ["MTN", "Vodafone", "Airtel", "Tigo", "Orange"]


def test_purchase_rejects_unknown_provider(client: TestClient):
    response = _purchase(client, provider="Glo")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid provider. Available: MTN, Vodafone, Airtel, Tigo, Orange"


def test_purchase_auto_completes_after_delay(client: TestClient):
    response = _purchase(client)

    assert response.status_code == 201
    purchase = response.json()["data"]
    assert purchase["id"] == "air-003"
    assert purchase["status"] == "pending"
    assert purchase["deliveryStatus"] == "processing"
    assert purchase["currency"] == "GHS"

    time.sleep(0.3)

    check = client.get("/airtime/purchases/air-003/check-completed").json()
    assert check["result"] is True
    assert check["metadata"]["deliveryStatus"] == "delivered"
    assert check["metadata"]["completedAt"] is not None


def test_explicit_update_cancels_auto_completion(client: TestClient):
    _purchase(client)

    response = client.patch("/airtime/purchases/air-003/status", json={"status": "pending"})
    assert response.status_code == 200

    time.sleep(0.3)

    purchase = client.get("/airtime/purchases/air-003").json()["data"]
    assert purchase["status"] == "pending"
    assert purchase["completedAt"] is None


def test_explicit_completion_before_delay(client: TestClient):
    _purchase(client)

    completed = client.patch("/airtime/purchases/air-003/status", json={"status": "completed"}).json()["data"]
    time.sleep(0.3)
    later = client.get("/airtime/purchases/air-003").json()["data"]

    assert completed["status"] == "completed"
    assert later["completedAt"] == completed["completedAt"]


def test_list_purchases_filters(client: TestClient):
    by_phone = client.get("/airtime/purchases", params={"phoneNumber": "+233241234568"}).json()
    by_status = client.get("/airtime/purchases", params={"status": "completed"}).json()

    assert [p["id"] for p in by_phone["data"]] == ["air-002"]
    assert [p["id"] for p in by_status["data"]] == ["air-001"]


def test_get_missing_purchase(client: TestClient):
    response = client.get("/airtime/purchases/air-999")

    assert response.status_code == 404
    assert response.json()["message"] == "Airtime purchase not found"


def test_kyc_get_and_missing(client: TestClient):
    assert client.get("/kyc/customers/cust-001").json()["data"]["status"] == "approved"

    missing = client.get("/kyc/customers/cust-999")
    assert missing.status_code == 404
    assert missing.json()["message"] == "KYC record not found"


def test_kyc_refresh_with_documents_approves(client: TestClient):
    response = client.post(
        "/kyc/customers/cust-002/refresh",
        json={"documents": ["id", "proof_of_address"]},
    )

    kyc = response.json()["data"]
    assert kyc["status"] == "approved"
    assert kyc["riskRating"] == "low"
    assert kyc["pendingItems"] == []
    assert kyc["level"] == "tier1"
    assert kyc["verifiedAt"] is not None
    assert kyc["expiresAt"] > kyc["verifiedAt"]

    check = client.post("/kyc/customers/cust-002/check-approved").json()
    assert check["result"] is True


def test_kyc_refresh_creates_missing_record(client: TestClient):
    response = client.post("/kyc/customers/cust-050/refresh", json={"documents": ["id"], "level": "tier2"})

    kyc = response.json()["data"]
    assert kyc["customerId"] == "cust-050"
    assert kyc["status"] == "pending"
    assert kyc["riskRating"] == "medium"
    assert kyc["level"] == "tier2"
    assert kyc["pendingItems"] == ["proof_of_address", "income_statement"]


def test_kyc_check_missing_customer(client: TestClient):
    body = client.post("/kyc/customers/cust-999/check-approved").json()

    assert body["result"] is False
    assert body["reason"] == "KYC record not found"
    assert body["metadata"] == {"customerId": "cust-999"}


def test_get_limits_includes_remaining(client: TestClient):
    data = client.get("/limits/acc-001").json()["data"]

    assert data["dailyRemaining"] == 750
    assert data["monthlyRemaining"] == 8800
    assert data["dailyAvailable"] is True
    assert data["monthlyAvailable"] is True


def test_check_available_examples(client: TestClient):
    fits = client.get("/limits/acc-001/check-available", params={"amount": 500, "period": "daily"}).json()
    too_big = client.get("/limits/acc-001/check-available", params={"amount": 900, "period": "daily"}).json()

    assert fits["result"] is True
    assert fits["metadata"]["remaining"] == 750
    assert too_big["result"] is False
    assert too_big["metadata"]["remaining"] == 750


def test_check_available_invalid_inputs(client: TestClient):
    no_amount = client.get("/limits/acc-001/check-available").json()
    bad_period = client.get("/limits/acc-001/check-available", params={"amount": 10, "period": "weekly"}).json()
    missing = client.get("/limits/acc-999/check-available", params={"amount": 10}).json()

    assert no_amount["result"] is False
    assert no_amount["reason"] == "Amount must be provided and greater than 0"
    assert bad_period["reason"] == 'Period must be "daily" or "monthly"'
    assert missing["reason"] == "Account limits not found"


def test_update_limits_upserts(client: TestClient):
    response = client.post("/limits/acc-003/update", json={"dailyLimit": 300})

    data = response.json()["data"]
    assert data["accountId"] == "acc-003"
    assert data["dailyLimit"] == 300
    assert data["monthlyLimit"] == 10000
    assert data["dailyUsed"] == 0

    check = client.get("/limits/acc-003/check-available", params={"amount": 300}).json()
    assert check["result"] is True


def test_update_limits_validation(client: TestClient):
    empty = client.post("/limits/acc-001/update", json={})
    negative = client.post("/limits/acc-001/update", json={"monthlyLimit": -1})

    assert empty.status_code == 400
    assert empty.json()["message"] == "At least one limit must be provided: dailyLimit or monthlyLimit"
    assert negative.status_code == 400
    assert negative.json()["message"] == "monthlyLimit must be >= 0"
    assert client.get("/limits/acc-001").json()["data"]["monthlyLimit"] == 10000


def test_kyc_refresh_with_empty_documents_clears_them(client: TestClient):
    client.post("/kyc/customers/cust-060/refresh", json={"documents": ["id", "proof_of_address"]})

    kyc = client.post("/kyc/customers/cust-060/refresh", json={"documents": []}).json()["data"]

    assert kyc["status"] == "pending"
    assert kyc["documents"] == []


def test_kyc_refresh_without_documents_keeps_existing(client: TestClient):
    kyc = client.post("/kyc/customers/cust-001/refresh", json={}).json()["data"]

    assert kyc["documents"] == ["id", "proof_of_address"]
    assert kyc["level"] == "tier2"
