"""Domain models - pure Python dataclasses representing fintech entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class AccountStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    CLOSED = "closed"


class TransactionType(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    CLEARED = "cleared"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class LoanStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    DISBURSED = "disbursed"


class AirtimeStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class DeliveryStatus(str, Enum):
    PROCESSING = "processing"
    DELIVERED = "delivered"


class KycStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RiskRating(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class LimitPeriod(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"


@dataclass
class Account:
    """Customer bank account"""

    id: str
    customer_id: str
    type: str  # "savings" or "current"
    currency: str
    balance: float
    status: AccountStatus
    account_number: str
    created_at: str
    updated_at: str


@dataclass
class Transaction:
    """One leg of a transfer; transfers create a debit and a credit"""

    id: str
    account_id: str
    type: TransactionType
    amount: float
    currency: str
    description: str
    status: TransactionStatus
    counterparty: str
    reference: str
    initiated_at: str
    processed_at: Optional[str] = None


@dataclass
class Payment:
    """Outbound payment to a beneficiary"""

    id: str
    account_id: str
    beneficiary: str
    beneficiary_account: str
    amount: float
    currency: str
    method: str
    status: PaymentStatus
    reference: str
    initiated_at: str
    kyc_complete: bool
    sufficient_balance: bool
    completed_at: Optional[str] = None


@dataclass
class Loan:
    """Loan application and its decision state"""

    id: str
    customer_id: str
    account_id: str
    amount: float
    currency: str
    purpose: str
    tenure: int  # months
    interest_rate: float
    monthly_payment: Optional[float]
    credit_score: int
    eligible: bool
    status: LoanStatus
    applied_at: str
    collateral: Optional[Any] = None
    approved_at: Optional[str] = None
    disbursed_at: Optional[str] = None
    rejection_reason: Optional[str] = None
    remaining_balance: Optional[float] = None


@dataclass
class AirtimePurchase:
    """Mobile airtime top-up"""

    id: str
    account_id: str
    phone_number: str
    amount: float
    currency: str
    provider: str
    status: AirtimeStatus
    transaction_reference: str
    purchased_at: str
    delivery_status: DeliveryStatus = DeliveryStatus.PROCESSING
    completed_at: Optional[str] = None


@dataclass
class KycRecord:
    """Know-your-customer verification state, one per customer"""

    customer_id: str
    status: KycStatus = KycStatus.PENDING
    level: str = "tier1"
    documents: List[str] = field(default_factory=list)
    risk_rating: RiskRating = RiskRating.MEDIUM
    pending_items: List[str] = field(default_factory=list)
    verified_at: Optional[str] = None
    expires_at: Optional[str] = None
    rejection_reason: Optional[str] = None


@dataclass
class AccountLimit:
    """Daily and monthly spending limits, one per account"""

    account_id: str
    daily_limit: float = 1000.0
    monthly_limit: float = 10000.0
    daily_used: float = 0.0
    monthly_used: float = 0.0
    currency: str = "GHS"
    updated_at: Optional[str] = None

    def remaining(self, period: LimitPeriod) -> float:
        if period is LimitPeriod.DAILY:
            return self.daily_limit - self.daily_used
        return self.monthly_limit - self.monthly_used


@dataclass
class CheckResult:
    """Verdict of a checker predicate"""

    result: bool
    reason: str
    metadata: Dict[str, Any]


@dataclass
class AirtimeProvider:
    id: str
    name: str
    countries: List[str]
