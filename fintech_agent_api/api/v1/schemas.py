"""Pydantic schemas for API request validation (camelCase on the wire)"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateAccountRequest(CamelModel):
    """Request body for POST /accounts"""

    customer_id: str = Field(..., min_length=1, description="Customer identifier")
    type: str = Field(..., min_length=1, description="Account type, e.g. savings or current")
    currency: str = Field(..., min_length=1, description="ISO currency code")
    initial_deposit: Optional[float] = Field(None, ge=0, description="Opening balance")


class StatusUpdateRequest(CamelModel):
    """Request body for PATCH /{resource}/{id}/status"""

    status: Optional[str] = None


class TransferRequest(CamelModel):
    """Request body for POST /transactions"""

    from_account: str = Field(..., min_length=1)
    to_account: str = Field(..., min_length=1)
    amount: float
    currency: str = Field(..., min_length=1)
    purpose: Optional[str] = None


class InitiatePaymentRequest(CamelModel):
    """Request body for POST /payments/initiate"""

    account_id: str = Field(..., min_length=1)
    beneficiary: str = Field(..., min_length=1)
    beneficiary_account: str = Field(..., min_length=1)
    amount: float
    currency: str = Field(..., min_length=1)
    method: Optional[str] = None
    reference: Optional[str] = None


class LoanApplicationRequest(CamelModel):
    """Request body for POST /loans/apply"""

    customer_id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)
    amount: float
    purpose: str = Field(..., min_length=1)
    tenure: int = Field(..., description="Repayment period in months")
    collateral: Optional[Any] = None


class LoanRejectionRequest(CamelModel):
    reason: Optional[str] = None


class AirtimePurchaseRequest(CamelModel):
    """Request body for POST /airtime/purchase"""

    phone_number: str = Field(..., min_length=1)
    amount: float
    provider: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)
    currency: Optional[str] = None


class KycRefreshRequest(CamelModel):
    documents: Optional[List[str]] = None
    level: Optional[str] = None


class LimitUpdateRequest(CamelModel):
    """Request body for POST /limits/{accountId}/update"""

    daily_limit: Optional[float] = None
    monthly_limit: Optional[float] = None
