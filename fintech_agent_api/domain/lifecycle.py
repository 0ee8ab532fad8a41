"""Status-transition rules: terminal timestamps and pending-only guards"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Tuple

from fintech_agent_api.domain.exceptions import ConflictError
from fintech_agent_api.domain.models import (
    AirtimeStatus,
    DeliveryStatus,
    KycStatus,
    LoanStatus,
    PaymentStatus,
    TransactionStatus,
)
from fintech_agent_api.utils.date_utils import add_days, to_iso


@dataclass(frozen=True)
class TransitionRule:
    """
    Side effect applied when a patch moves an entity into `trigger`.

    The effect only runs while `once_field` is still unset on the merged
    record, which makes every terminal timestamp write-once.
    """

    trigger: Enum
    once_field: str
    effects: Callable[[datetime], Dict[str, Any]]


TRANSACTION_RULES: Tuple[TransitionRule, ...] = (
    TransitionRule(TransactionStatus.CLEARED, "processed_at", lambda now: {"processed_at": to_iso(now)}),
)

PAYMENT_RULES: Tuple[TransitionRule, ...] = (
    TransitionRule(PaymentStatus.COMPLETED, "completed_at", lambda now: {"completed_at": to_iso(now)}),
)

LOAN_RULES: Tuple[TransitionRule, ...] = (
    TransitionRule(LoanStatus.APPROVED, "approved_at", lambda now: {"approved_at": to_iso(now)}),
    TransitionRule(LoanStatus.DISBURSED, "disbursed_at", lambda now: {"disbursed_at": to_iso(now)}),
)

AIRTIME_RULES: Tuple[TransitionRule, ...] = (
    TransitionRule(
        AirtimeStatus.COMPLETED,
        "completed_at",
        lambda now: {"completed_at": to_iso(now), "delivery_status": DeliveryStatus.DELIVERED},
    ),
)


def kyc_rules(validity_days: int = 365) -> Tuple[TransitionRule, ...]:
    return (
        TransitionRule(
            KycStatus.APPROVED,
            "verified_at",
            lambda now: {"verified_at": to_iso(now), "expires_at": to_iso(add_days(now, validity_days))},
        ),
    )


def transition_effects(
    merged: Any,
    patch: Mapping[str, Any],
    rules: Tuple[TransitionRule, ...],
    now: datetime,
) -> Dict[str, Any]:
    """Collect the side effects triggered by `patch` on an already-merged record"""
    target = patch.get("status")
    if target is None:
        return {}

    effects: Dict[str, Any] = {}
    for rule in rules:
        if target == rule.trigger and getattr(merged, rule.once_field) is None:
            effects.update(rule.effects(now))
    return effects


def require_pending(current: Enum, action: str, resource: str) -> None:
    """Approve, reject, cancel and complete are only allowed from `pending`"""
    if current.value != "pending":
        raise ConflictError(f"Cannot {action} {resource} with status: {current.value}")
