"""Loan pricing, credit scoring and KYC refresh policy"""

import random
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from fintech_agent_api.domain.models import KycStatus, RiskRating

MIN_ELIGIBLE_CREDIT_SCORE = 650
CREDIT_SCORE_FLOOR = 500
CREDIT_SCORE_CEILING = 700  # exclusive

KYC_REQUIRED_DOCUMENTS = 2
KYC_DEFAULT_PENDING_ITEMS = ("proof_of_address", "income_statement")


class ScoringStrategy(Protocol):
    """Source of credit scores for loan applications"""

    def credit_score(self, customer_id: str) -> int: ...


class RandomScoringStrategy:
    """Uniform integer score in [500, 700), optionally seeded for reproducible runs"""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def credit_score(self, customer_id: str) -> int:
        return self._rng.randrange(CREDIT_SCORE_FLOOR, CREDIT_SCORE_CEILING)


class FixedScoringStrategy:
    """Always returns the same score"""

    def __init__(self, score: int):
        self.score = score

    def credit_score(self, customer_id: str) -> int:
        return self.score


def interest_rate_for(amount: float) -> float:
    """
    Flat annual rate tiered by principal.

    - above 10,000: 7.5%
    - above 5,000:  8.5%
    - otherwise:    10.0%
    """
    if amount > 10_000:
        return 7.5
    elif amount > 5_000:
        return 8.5
    else:
        return 10.0


def monthly_payment(amount: float, interest_rate: float, tenure: int) -> float:
    """Non-compounding: principal plus one flat interest charge, split evenly over tenure"""
    return amount * (1 + interest_rate / 100) / tenure


def is_eligible(credit_score: int) -> bool:
    return credit_score >= MIN_ELIGIBLE_CREDIT_SCORE


@dataclass
class KycAssessment:
    status: KycStatus
    risk_rating: RiskRating
    pending_items: List[str] = field(default_factory=list)


def assess_kyc_documents(documents: Optional[List[str]]) -> KycAssessment:
    """Placeholder policy: two or more documents approve the customer at low risk"""
    if documents and len(documents) >= KYC_REQUIRED_DOCUMENTS:
        return KycAssessment(status=KycStatus.APPROVED, risk_rating=RiskRating.LOW)

    return KycAssessment(
        status=KycStatus.PENDING,
        risk_rating=RiskRating.MEDIUM,
        pending_items=list(KYC_DEFAULT_PENDING_ITEMS),
    )
