"""
Transaction Record Module

Immutable records of ledger events. Every deposit, withdrawal, transfer leg
and interest posting attempt produces exactly one Transaction, successful
or failed, which is appended to the owning account's history.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Optional, NamedTuple
from enum import Enum
import uuid

from .money import to_money, format_money


class TransactionType(Enum):
    """Types of ledger transactions"""
    DEPOSIT = "deposit"        # Cash deposit or interest credit
    WITHDRAWAL = "withdrawal"  # Cash withdrawal
    TRANSFER = "transfer"      # One leg of an account-to-account transfer


class TransactionStatus(Enum):
    """Outcome of a transaction attempt"""
    SUCCESS = "success"
    FAILED = "failed"


def utc_now() -> datetime:
    """Default clock for accounts and transactions"""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=False)
class Transaction:
    """
    Immutable record of one ledger event

    Failed transactions never change the balance, so balance_after always
    equals balance_before for them. Transfer legs carry a signed amount:
    negative for outgoing, positive for incoming.
    """
    transaction_type: TransactionType
    amount: Decimal
    balance_before: Decimal
    balance_after: Decimal
    status: TransactionStatus
    failure_reason: Optional[str] = None
    timestamp: datetime = field(default_factory=utc_now)
    transaction_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        for name in ('amount', 'balance_before', 'balance_after'):
            object.__setattr__(self, name, to_money(getattr(self, name)))

        if self.status == TransactionStatus.FAILED:
            if not self.failure_reason:
                raise ValueError("Failed transaction must have a failure reason")
            if self.balance_after != self.balance_before:
                raise ValueError("Failed transaction cannot change the balance")
        elif self.failure_reason is not None:
            raise ValueError("Successful transaction cannot have a failure reason")

    @classmethod
    def success(
        cls,
        transaction_type: TransactionType,
        amount: Decimal,
        balance_before: Decimal,
        balance_after: Decimal,
        timestamp: Optional[datetime] = None
    ) -> 'Transaction':
        """Record a committed transaction"""
        return cls(
            transaction_type=transaction_type,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            status=TransactionStatus.SUCCESS,
            timestamp=timestamp or utc_now()
        )

    @classmethod
    def failed(
        cls,
        transaction_type: TransactionType,
        amount: Decimal,
        balance: Decimal,
        reason: str,
        timestamp: Optional[datetime] = None
    ) -> 'Transaction':
        """Record a rejected attempt; the balance is left unchanged"""
        return cls(
            transaction_type=transaction_type,
            amount=amount,
            balance_before=balance,
            balance_after=balance,
            status=TransactionStatus.FAILED,
            failure_reason=reason,
            timestamp=timestamp or utc_now()
        )

    @property
    def is_successful(self) -> bool:
        return self.status == TransactionStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        return self.status == TransactionStatus.FAILED

    @property
    def balance_change(self) -> Decimal:
        """Net effect on the balance, including any fee"""
        return self.balance_after - self.balance_before

    def __eq__(self, other) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.transaction_id == other.transaction_id

    def __hash__(self) -> int:
        return hash(self.transaction_id)

    def __str__(self) -> str:
        reason = f" ({self.failure_reason})" if self.failure_reason else ""
        return (
            f"{self.timestamp.strftime('%Y-%m-%d %H:%M:%S')} "
            f"{self.transaction_type.name:<10} {format_money(self.amount):>12} "
            f"{format_money(self.balance_before):>12} -> {format_money(self.balance_after):>12} "
            f"{self.status.name}{reason}"
        )


class TransferResult(NamedTuple):
    """Both legs of a transfer: the source record and the destination record"""
    outgoing: Transaction
    incoming: Transaction

    @property
    def succeeded(self) -> bool:
        return self.outgoing.is_successful and self.incoming.is_successful
