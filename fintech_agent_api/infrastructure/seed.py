"""Demo fixtures loaded into a fresh store when SEED_DEMO_DATA is enabled"""

from fintech_agent_api.domain.models import (
    Account,
    AccountLimit,
    AccountStatus,
    AirtimePurchase,
    AirtimeStatus,
    DeliveryStatus,
    KycRecord,
    KycStatus,
    Loan,
    LoanStatus,
    Payment,
    PaymentStatus,
    RiskRating,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from fintech_agent_api.infrastructure.store import FintechStore


def seed_demo_data(store: FintechStore) -> FintechStore:
    accounts = [
        Account("acc-001", "cust-001", "savings", "GHS", 5000.00, AccountStatus.ACTIVE, "1234567890",
                "2024-01-15T10:00:00.000Z", "2024-01-15T10:00:00.000Z"),
        Account("acc-002", "cust-002", "current", "GHS", 2500.50, AccountStatus.ACTIVE, "1234567891",
                "2024-01-16T11:00:00.000Z", "2024-01-16T11:00:00.000Z"),
        Account("acc-003", "cust-001", "savings", "GHS", 10000.00, AccountStatus.SUSPENDED, "1234567892",
                "2024-01-17T12:00:00.000Z", "2024-01-20T14:00:00.000Z"),
    ]
    transactions = [
        Transaction("txn-001", "acc-001", TransactionType.DEBIT, 100.00, "GHS", "Payment to merchant",
                    TransactionStatus.CLEARED, "merchant-123", "REF-001",
                    "2024-01-18T09:00:00.000Z", "2024-01-18T09:05:00.000Z"),
        Transaction("txn-002", "acc-001", TransactionType.CREDIT, 500.00, "GHS", "Salary deposit",
                    TransactionStatus.CLEARED, "employer-456", "REF-002",
                    "2024-01-19T10:00:00.000Z", "2024-01-19T10:02:00.000Z"),
        Transaction("txn-003", "acc-002", TransactionType.DEBIT, 50.00, "GHS", "Transfer to acc-001",
                    TransactionStatus.PENDING, "acc-001", "REF-003", "2024-01-20T11:00:00.000Z"),
    ]
    payments = [
        Payment(
            id="pay-001",
            account_id="acc-001",
            beneficiary="John Doe",
            beneficiary_account="9876543210",
            amount=200.00,
            currency="GHS",
            method="bank_transfer",
            status=PaymentStatus.COMPLETED,
            reference="PAY-REF-001",
            initiated_at="2024-01-18T08:00:00.000Z",
            completed_at="2024-01-18T08:15:00.000Z",
            kyc_complete=True,
            sufficient_balance=True,
        ),
        Payment(
            id="pay-002",
            account_id="acc-002",
            beneficiary="Jane Smith",
            beneficiary_account="9876543211",
            amount=150.00,
            currency="GHS",
            method="bank_transfer",
            status=PaymentStatus.PENDING,
            reference="PAY-REF-002",
            initiated_at="2024-01-20T10:00:00.000Z",
            kyc_complete=True,
            sufficient_balance=False,
        ),
    ]
    loans = [
        Loan(
            id="loan-001",
            customer_id="cust-001",
            account_id="acc-001",
            amount=5000.00,
            currency="GHS",
            purpose="Business expansion",
            tenure=12,
            interest_rate=8.5,
            monthly_payment=437.50,
            credit_score=750,
            eligible=True,
            status=LoanStatus.APPROVED,
            applied_at="2024-01-10T09:00:00.000Z",
            approved_at="2024-01-12T14:00:00.000Z",
            disbursed_at="2024-01-13T10:00:00.000Z",
            remaining_balance=5000.00,
        ),
        Loan(
            id="loan-002",
            customer_id="cust-002",
            account_id="acc-002",
            amount=3000.00,
            currency="GHS",
            purpose="Personal use",
            tenure=6,
            interest_rate=10.0,
            monthly_payment=525.00,
            credit_score=680,
            eligible=True,
            status=LoanStatus.PENDING,
            applied_at="2024-01-19T11:00:00.000Z",
        ),
        Loan(
            id="loan-003",
            customer_id="cust-003",
            account_id="acc-003",
            amount=10000.00,
            currency="GHS",
            purpose="Home improvement",
            tenure=24,
            interest_rate=7.5,
            monthly_payment=None,
            credit_score=600,
            eligible=False,
            status=LoanStatus.REJECTED,
            applied_at="2024-01-15T10:00:00.000Z",
            rejection_reason="Insufficient credit score",
        ),
    ]
    airtime_purchases = [
        AirtimePurchase(
            id="air-001",
            account_id="acc-001",
            phone_number="+233241234567",
            amount=10.00,
            currency="GHS",
            provider="MTN",
            status=AirtimeStatus.COMPLETED,
            transaction_reference="AIR-REF-001",
            purchased_at="2024-01-18T12:00:00.000Z",
            completed_at="2024-01-18T12:02:00.000Z",
            delivery_status=DeliveryStatus.DELIVERED,
        ),
        AirtimePurchase(
            id="air-002",
            account_id="acc-002",
            phone_number="+233241234568",
            amount=5.00,
            currency="GHS",
            provider="Vodafone",
            status=AirtimeStatus.PENDING,
            transaction_reference="AIR-REF-002",
            purchased_at="2024-01-20T13:00:00.000Z",
        ),
    ]
    kyc_records = [
        KycRecord(
            customer_id="cust-001",
            status=KycStatus.APPROVED,
            level="tier2",
            documents=["id", "proof_of_address"],
            risk_rating=RiskRating.LOW,
            verified_at="2024-01-05T10:00:00.000Z",
            expires_at="2025-01-05T10:00:00.000Z",
        ),
        KycRecord(
            customer_id="cust-002",
            status=KycStatus.PENDING,
            level="tier1",
            documents=["id"],
            risk_rating=RiskRating.MEDIUM,
            pending_items=["proof_of_address", "income_statement"],
        ),
        KycRecord(
            customer_id="cust-003",
            status=KycStatus.REJECTED,
            level="tier1",
            documents=[],
            risk_rating=RiskRating.HIGH,
            pending_items=["id", "proof_of_address"],
            rejection_reason="Invalid documents provided",
        ),
    ]
    account_limits = [
        AccountLimit("acc-001", 1000.00, 10000.00, 250.00, 1200.00, "GHS", "2024-01-20T10:00:00.000Z"),
        AccountLimit("acc-002", 500.00, 5000.00, 150.00, 800.00, "GHS", "2024-01-20T10:00:00.000Z"),
    ]

    for account in accounts:
        store.accounts.add(account)
    for transaction in transactions:
        store.transactions.add(transaction)
    for payment in payments:
        store.payments.add(payment)
    for loan in loans:
        store.loans.add(loan)
    for purchase in airtime_purchases:
        store.airtime_purchases.add(purchase)
    for kyc in kyc_records:
        store.kyc_records.add(kyc)
    for limit in account_limits:
        store.account_limits.add(limit)

    return store
