"""
In-memory entity store.

One collection per resource type. Collections are plain dicts keyed by id,
so iteration follows insertion order. Records are dataclasses and updates
replace the stored instance instead of mutating it, so a record handed out
earlier never changes underneath its holder.

Id assignment draws from a per-collection monotonic counter and all writes
go through the store-wide lock, since sync endpoints run on a threadpool.
"""

import dataclasses
import random
import threading
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar

from fintech_agent_api.domain import lifecycle
from fintech_agent_api.domain.lifecycle import TransitionRule
from fintech_agent_api.domain.models import (
    Account,
    AccountLimit,
    AccountStatus,
    AirtimePurchase,
    AirtimeStatus,
    DeliveryStatus,
    KycRecord,
    Loan,
    LoanStatus,
    Payment,
    PaymentStatus,
    Transaction,
    TransactionStatus,
)
from fintech_agent_api.utils.date_utils import to_iso, utc_now

T = TypeVar("T")

Builder = Callable[[str, int, str, Dict[str, Any]], Any]
Clock = Callable[[], datetime]


def _apply_patch(
    current: T,
    patch: Mapping[str, Any],
    rules: Tuple[TransitionRule, ...],
    now: datetime,
    touch_field: Optional[str],
) -> T:
    merged = dataclasses.replace(current, **patch)
    effects = lifecycle.transition_effects(merged, patch, rules, now)
    if touch_field:
        effects[touch_field] = to_iso(now)
    return dataclasses.replace(merged, **effects) if effects else merged


class EntityCollection(Generic[T]):
    """Records addressed by a generated `prefix-NNN` id"""

    def __init__(
        self,
        prefix: str,
        build: Builder,
        lock: threading.RLock,
        clock: Clock = utc_now,
        rules: Tuple[TransitionRule, ...] = (),
        touch_field: Optional[str] = None,
    ):
        self.prefix = prefix
        self._build = build
        self._lock = lock
        self._clock = clock
        self._rules = rules
        self._touch_field = touch_field
        self._records: Dict[str, T] = {}
        self._sequence = 0

    def __len__(self) -> int:
        return len(self._records)

    def list(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        with self._lock:
            records = list(self._records.values())
        if predicate is None:
            return records
        return [record for record in records if predicate(record)]

    def get(self, record_id: str) -> Optional[T]:
        return self._records.get(record_id)

    def create(self, fields: Dict[str, Any]) -> T:
        """Assign the next id, stamp timestamps and type defaults, then store"""
        with self._lock:
            self._sequence += 1
            record_id = f"{self.prefix}-{self._sequence:03d}"
            record = self._build(record_id, self._sequence, to_iso(self._clock()), dict(fields))
            self._records[record_id] = record
            return record

    def update(self, record_id: str, patch: Mapping[str, Any]) -> Optional[T]:
        """Merge `patch` over the stored record; None when the id is unknown"""
        with self._lock:
            current = self._records.get(record_id)
            if current is None:
                return None
            updated = _apply_patch(current, patch, self._rules, self._clock(), self._touch_field)
            self._records[record_id] = updated
            return updated

    def update_if(self, record_id: str, condition: Callable[[T], bool], patch: Mapping[str, Any]) -> Optional[T]:
        """Apply `patch` only when the stored record still satisfies `condition`"""
        with self._lock:
            current = self._records.get(record_id)
            if current is None or not condition(current):
                return None
            return self.update(record_id, patch)

    def _sequence_of(self, record_id: str) -> int:
        prefix, _, suffix = record_id.rpartition("-")
        if prefix == self.prefix and suffix.isdigit():
            return int(suffix)
        return 0

    def add(self, record: T) -> T:
        """Insert a fully formed record (demo data); keeps the counter ahead of its id"""
        with self._lock:
            self._records[record.id] = record
            self._sequence = max(self._sequence, self._sequence_of(record.id))
            return record


class KeyedCollection(Generic[T]):
    """Records keyed 1:1 by an owner id and created lazily on first update"""

    def __init__(
        self,
        key_field: str,
        defaults: Callable[[str, str], T],
        lock: threading.RLock,
        clock: Clock = utc_now,
        rules: Tuple[TransitionRule, ...] = (),
        touch_field: Optional[str] = None,
    ):
        self.key_field = key_field
        self._defaults = defaults
        self._lock = lock
        self._clock = clock
        self._rules = rules
        self._touch_field = touch_field
        self._records: Dict[str, T] = {}

    def __len__(self) -> int:
        return len(self._records)

    def list(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        with self._lock:
            records = list(self._records.values())
        if predicate is None:
            return records
        return [record for record in records if predicate(record)]

    def get(self, key: str) -> Optional[T]:
        return self._records.get(key)

    def upsert(self, key: str, patch: Mapping[str, Any]) -> T:
        """
        Merge `patch` over the record for `key`.

        A missing record starts from defaults, so a record created straight
        into a terminal state still gets its timestamps stamped.
        """
        with self._lock:
            now = self._clock()
            current = self._records.get(key)
            if current is None:
                current = self._defaults(key, to_iso(now))
            record = _apply_patch(current, patch, self._rules, now, self._touch_field)
            self._records[key] = record
            return record

    def add(self, record: T) -> T:
        with self._lock:
            self._records[getattr(record, self.key_field)] = record
            return record


def _random_account_number() -> str:
    return str(random.randint(1_000_000_000, 9_999_999_999))


def _build_account(record_id: str, sequence: int, now: str, fields: Dict[str, Any]) -> Account:
    fields.setdefault("status", AccountStatus.ACTIVE)
    fields.setdefault("balance", 0.0)
    if not fields.get("account_number"):
        fields["account_number"] = _random_account_number()
    return Account(id=record_id, created_at=now, updated_at=now, **fields)


def _build_transaction(record_id: str, sequence: int, now: str, fields: Dict[str, Any]) -> Transaction:
    fields.setdefault("status", TransactionStatus.PENDING)
    if not fields.get("reference"):
        fields["reference"] = f"REF-{sequence:03d}"
    processed_at = now if fields["status"] is TransactionStatus.CLEARED else None
    return Transaction(id=record_id, initiated_at=now, processed_at=processed_at, **fields)


def _build_payment(record_id: str, sequence: int, now: str, fields: Dict[str, Any]) -> Payment:
    if not fields.get("reference"):
        fields["reference"] = f"PAY-REF-{sequence:03d}"
    fields["status"] = PaymentStatus.PENDING
    fields["completed_at"] = None
    return Payment(id=record_id, initiated_at=now, **fields)


def _build_loan(record_id: str, sequence: int, now: str, fields: Dict[str, Any]) -> Loan:
    fields["status"] = LoanStatus.PENDING
    fields["approved_at"] = None
    fields["disbursed_at"] = None
    return Loan(id=record_id, applied_at=now, **fields)


def _build_airtime_purchase(record_id: str, sequence: int, now: str, fields: Dict[str, Any]) -> AirtimePurchase:
    if not fields.get("transaction_reference"):
        fields["transaction_reference"] = f"AIR-REF-{sequence:03d}"
    fields["status"] = AirtimeStatus.PENDING
    fields["delivery_status"] = DeliveryStatus.PROCESSING
    fields["completed_at"] = None
    return AirtimePurchase(id=record_id, purchased_at=now, **fields)


class FintechStore:
    """All entity collections of the service, constructed once per application (or test)"""

    def __init__(
        self,
        clock: Clock = utc_now,
        kyc_validity_days: int = 365,
        default_currency: str = "GHS",
    ):
        self._lock = threading.RLock()
        self.clock = clock

        self.accounts: EntityCollection[Account] = EntityCollection(
            "acc", _build_account, self._lock, clock, touch_field="updated_at"
        )
        self.transactions: EntityCollection[Transaction] = EntityCollection(
            "txn", _build_transaction, self._lock, clock, rules=lifecycle.TRANSACTION_RULES
        )
        self.payments: EntityCollection[Payment] = EntityCollection(
            "pay", _build_payment, self._lock, clock, rules=lifecycle.PAYMENT_RULES
        )
        self.loans: EntityCollection[Loan] = EntityCollection(
            "loan", _build_loan, self._lock, clock, rules=lifecycle.LOAN_RULES
        )
        self.airtime_purchases: EntityCollection[AirtimePurchase] = EntityCollection(
            "air", _build_airtime_purchase, self._lock, clock, rules=lifecycle.AIRTIME_RULES
        )
        self.kyc_records: KeyedCollection[KycRecord] = KeyedCollection(
            "customer_id",
            lambda customer_id, now: KycRecord(customer_id=customer_id),
            self._lock,
            clock,
            rules=lifecycle.kyc_rules(kyc_validity_days),
        )
        self.account_limits: KeyedCollection[AccountLimit] = KeyedCollection(
            "account_id",
            lambda account_id, now: AccountLimit(account_id=account_id, currency=default_currency, updated_at=now),
            self._lock,
            clock,
            touch_field="updated_at",
        )
