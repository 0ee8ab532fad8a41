"""Unit tests for loan pricing, credit scoring and the KYC refresh policy"""

import pytest
from fintech_agent_api.domain.models import KycStatus, RiskRating
from fintech_agent_api.domain.scoring import (
    FixedScoringStrategy,
    RandomScoringStrategy,
    assess_kyc_documents,
    interest_rate_for,
    is_eligible,
    monthly_payment,
)


@pytest.mark.parametrize(
    "amount,expected_rate",
    [
        (500, 10.0),
        (5000, 10.0),  # boundary is exclusive
        (5000.01, 8.5),
        (10000, 8.5),
        (10000.01, 7.5),
        (250000, 7.5),
    ],
)
def test_interest_rate_tiers(amount, expected_rate):
    assert interest_rate_for(amount) == expected_rate


def test_monthly_payment_is_flat():
    """Test 3000 at 10% over 6 months: 3300 / 6"""
    assert monthly_payment(3000, 10.0, 6) == pytest.approx(550.0)


def test_monthly_payment_is_not_rounded():
    # 5000 * 1.085 / 12 = 452.0833...
    assert monthly_payment(5000, 8.5, 12) == pytest.approx(5000 * 1.085 / 12)
    assert monthly_payment(1000, 10.0, 3) != 366.67


def test_eligibility_threshold():
    assert is_eligible(650) is True
    assert is_eligible(649) is False


def test_random_strategy_stays_in_range():
    strategy = RandomScoringStrategy(seed=7)
    scores = [strategy.credit_score("cust-001") for _ in range(500)]

    assert min(scores) >= 500
    assert max(scores) < 700


def test_random_strategy_is_reproducible_with_seed():
    first = RandomScoringStrategy(seed=42)
    second = RandomScoringStrategy(seed=42)

    assert [first.credit_score("c") for _ in range(10)] == [second.credit_score("c") for _ in range(10)]


def test_fixed_strategy():
    assert FixedScoringStrategy(600).credit_score("anyone") == 600


def test_kyc_two_documents_approve():
    assessment = assess_kyc_documents(["id", "proof_of_address"])

    assert assessment.status is KycStatus.APPROVED
    assert assessment.risk_rating is RiskRating.LOW
    assert assessment.pending_items == []


@pytest.mark.parametrize("documents", [None, [], ["id"]])
def test_kyc_missing_documents_stay_pending(documents):
    assessment = assess_kyc_documents(documents)

    assert assessment.status is KycStatus.PENDING
    assert assessment.risk_rating is RiskRating.MEDIUM
    assert assessment.pending_items == ["proof_of_address", "income_statement"]
