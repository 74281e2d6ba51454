"""
Account Management Module

Bank accounts with balances, per-calendar-month counters and product rules.
CHECKING accounts charge a flat fee once the free monthly transactions are
used up; SAVINGS accounts enforce a minimum balance, cap monthly
withdrawals and earn monthly interest. Business-rule violations are never
raised: they come back as FAILED transactions recorded in the history.
"""

from decimal import Decimal
from datetime import datetime, date, timezone
from dataclasses import dataclass
from typing import Callable, List, Optional
from enum import Enum
import threading

from .money import to_money, format_money, ZERO
from .config import get_config
from .transactions import Transaction, TransactionType, utc_now


class AccountType(Enum):
    """Supported account products"""
    CHECKING = "checking"  # No minimum balance, fee after free monthly transactions
    SAVINGS = "savings"    # Minimum balance, monthly interest, capped withdrawals


def _as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class AccountPolicy:
    """Fee, limit and interest rules applied by every account"""
    checking_transaction_fee: Decimal = Decimal('2.50')
    checking_free_transactions: int = 10
    savings_minimum_balance: Decimal = Decimal('100.00')
    savings_monthly_interest_rate: Decimal = Decimal('0.02')
    savings_max_withdrawals: int = 5

    def __post_init__(self):
        if self.checking_transaction_fee < 0:
            raise ValueError("Transaction fee cannot be negative")
        if self.checking_free_transactions < 0:
            raise ValueError("Free transaction count cannot be negative")
        if self.savings_minimum_balance < 0:
            raise ValueError("Minimum balance cannot be negative")
        if self.savings_monthly_interest_rate < 0 or self.savings_monthly_interest_rate > 1:
            raise ValueError("Monthly interest rate must be between 0 and 1")
        if self.savings_max_withdrawals < 0:
            raise ValueError("Withdrawal limit cannot be negative")

    @classmethod
    def from_config(cls, config=None) -> 'AccountPolicy':
        """Build the policy from LedgerbookConfig business-rule fields"""
        if config is None:
            config = get_config()
        return cls(
            checking_transaction_fee=to_money(config.checking_transaction_fee),
            checking_free_transactions=config.checking_free_transactions,
            savings_minimum_balance=to_money(config.savings_minimum_balance),
            savings_monthly_interest_rate=Decimal(config.savings_monthly_interest_rate),
            savings_max_withdrawals=config.savings_max_withdrawals
        )


class Account:
    """
    Bank account holding a balance, monthly counters and transaction history

    Counters reset lazily: every mutating operation and every counter read
    first compares the clock's (year, month) with the stored reset date.
    """

    def __init__(
        self,
        account_number: str,
        account_type: AccountType,
        customer_name: str,
        initial_deposit: Decimal = ZERO,
        policy: Optional[AccountPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        initial_deposit = to_money(initial_deposit)
        if initial_deposit < 0:
            raise ValueError("Initial deposit cannot be negative")

        self._account_number = account_number
        self._account_type = account_type
        self._customer_name = customer_name
        self._policy = policy or AccountPolicy()
        self._clock = clock or utc_now
        self._lock = threading.RLock()

        self._balance = initial_deposit
        self._transactions: List[Transaction] = []
        self._monthly_transaction_count = 0
        self._monthly_withdrawal_count = 0
        self._last_reset_date: date = self._clock().date()

        # Opening deposit does not count towards the monthly counter
        if initial_deposit > 0:
            self._transactions.append(Transaction.success(
                TransactionType.DEPOSIT, initial_deposit, ZERO, initial_deposit,
                timestamp=self._clock()
            ))

    @property
    def account_number(self) -> str:
        return self._account_number

    @property
    def account_type(self) -> AccountType:
        return self._account_type

    @property
    def customer_name(self) -> str:
        return self._customer_name

    @property
    def policy(self) -> AccountPolicy:
        return self._policy

    @property
    def lock(self) -> threading.RLock:
        """Per-account lock serializing balance and counter mutations"""
        return self._lock

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def last_reset_date(self) -> date:
        return self._last_reset_date

    @property
    def monthly_transaction_count(self) -> int:
        with self._lock:
            self._check_and_reset_monthly_counters()
            return self._monthly_transaction_count

    @property
    def monthly_withdrawal_count(self) -> int:
        with self._lock:
            self._check_and_reset_monthly_counters()
            return self._monthly_withdrawal_count

    @property
    def is_checking(self) -> bool:
        return self._account_type == AccountType.CHECKING

    @property
    def is_savings(self) -> bool:
        return self._account_type == AccountType.SAVINGS

    def _check_and_reset_monthly_counters(self) -> None:
        """Zero both counters when a new calendar month has started"""
        today = self._clock().date()
        if (today.year, today.month) != (self._last_reset_date.year, self._last_reset_date.month):
            self._monthly_transaction_count = 0
            self._monthly_withdrawal_count = 0
            self._last_reset_date = today

    def _fee_applies(self, transaction_number: int) -> bool:
        """Whether the given transaction of the month is past the free tier"""
        return self.is_checking and transaction_number > self._policy.checking_free_transactions

    def _validate_deposit(self, amount: Decimal) -> Optional[str]:
        if amount <= 0:
            return "Deposit amount must be positive"
        return None

    def _validate_withdrawal(self, amount: Decimal) -> Optional[str]:
        """Return the failure reason, or None when the withdrawal may proceed"""
        if amount <= 0:
            return "Withdrawal amount must be positive"

        potential_balance = self._balance - amount

        # The fee is judged against the transaction this withdrawal would become
        if self._fee_applies(self._monthly_transaction_count + 1):
            potential_balance -= self._policy.checking_transaction_fee

        if potential_balance < 0:
            return "Insufficient funds"

        if self.is_savings:
            minimum = self._policy.savings_minimum_balance
            if potential_balance < minimum:
                return f"Withdrawal would violate minimum balance requirement of {format_money(minimum)}"
            limit = self._policy.savings_max_withdrawals
            if self._monthly_withdrawal_count >= limit:
                return f"Monthly withdrawal limit exceeded (max {limit} withdrawals)"

        return None

    def _record(self, transaction: Transaction) -> Transaction:
        self._transactions.append(transaction)
        return transaction

    def _credit(self, amount, success_type: TransactionType) -> Transaction:
        with self._lock:
            self._check_and_reset_monthly_counters()
            amount = to_money(amount)

            error = self._validate_deposit(amount)
            if error:
                return self._record(Transaction.failed(
                    TransactionType.DEPOSIT, amount, self._balance, error,
                    timestamp=self._clock()
                ))

            balance_before = self._balance
            self._balance += amount
            self._monthly_transaction_count += 1

            if self._fee_applies(self._monthly_transaction_count):
                self._balance -= self._policy.checking_transaction_fee

            return self._record(Transaction.success(
                success_type, amount, balance_before, self._balance,
                timestamp=self._clock()
            ))

    def _debit(self, amount, success_type: TransactionType) -> Transaction:
        with self._lock:
            self._check_and_reset_monthly_counters()
            amount = to_money(amount)

            error = self._validate_withdrawal(amount)
            if error:
                return self._record(Transaction.failed(
                    TransactionType.WITHDRAWAL, amount, self._balance, error,
                    timestamp=self._clock()
                ))

            balance_before = self._balance
            self._balance -= amount
            self._monthly_transaction_count += 1

            if self.is_savings:
                self._monthly_withdrawal_count += 1

            if self._fee_applies(self._monthly_transaction_count):
                self._balance -= self._policy.checking_transaction_fee

            recorded_amount = -amount if success_type == TransactionType.TRANSFER else amount
            return self._record(Transaction.success(
                success_type, recorded_amount, balance_before, self._balance,
                timestamp=self._clock()
            ))

    def deposit(self, amount) -> Transaction:
        """
        Deposit funds

        Args:
            amount: Amount to deposit (must be positive)

        Returns:
            SUCCESS transaction with balances around the deposit and any fee,
            or a FAILED transaction if the amount is not positive
        """
        return self._credit(amount, TransactionType.DEPOSIT)

    def withdraw(self, amount) -> Transaction:
        """
        Withdraw funds

        Checks, in order: positive amount, sufficient funds (after any fee),
        savings minimum balance, savings monthly withdrawal limit.

        Returns:
            SUCCESS or FAILED transaction; never raises for rule violations
        """
        return self._debit(amount, TransactionType.WITHDRAWAL)

    def transfer_out(self, amount) -> Transaction:
        """Outgoing transfer leg: withdrawal rules, recorded as TRANSFER with a negative amount"""
        return self._debit(amount, TransactionType.TRANSFER)

    def transfer_in(self, amount) -> Transaction:
        """Incoming transfer leg: deposit rules, recorded as TRANSFER with a positive amount"""
        return self._credit(amount, TransactionType.TRANSFER)

    def record_failed_transfer(self, amount, reason: str) -> Transaction:
        """Record a transfer that never reached this account"""
        with self._lock:
            return self._record(Transaction.failed(
                TransactionType.TRANSFER, to_money(amount), self._balance, reason,
                timestamp=self._clock()
            ))

    def apply_monthly_interest(self) -> Optional[Transaction]:
        """
        Credit one month of interest to a savings account

        No-op for checking accounts and for non-positive balances. Interest
        postings do not count towards the monthly transaction counter.

        Returns:
            The interest DEPOSIT transaction, or None if nothing was posted
        """
        with self._lock:
            self._check_and_reset_monthly_counters()

            if not self.is_savings or self._balance <= 0:
                return None

            balance_before = self._balance
            interest = to_money(self._balance * self._policy.savings_monthly_interest_rate)
            self._balance += interest

            return self._record(Transaction.success(
                TransactionType.DEPOSIT, interest, balance_before, self._balance,
                timestamp=self._clock()
            ))

    def get_transaction_history(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Transaction]:
        """
        Get transaction history in chronological order

        Args:
            start: Inclusive lower bound on timestamp (optional)
            end: Inclusive upper bound on timestamp (optional)
            Naive bounds are taken as UTC

        Returns:
            New list; mutating it does not affect the account
        """
        start = _as_utc(start)
        end = _as_utc(end)

        with self._lock:
            return [
                t for t in self._transactions
                if (start is None or t.timestamp >= start)
                and (end is None or t.timestamp <= end)
            ]

    def __repr__(self) -> str:
        return (
            f"Account(account_number='{self._account_number}', "
            f"type={self._account_type.name}, customer='{self._customer_name}', "
            f"balance={self._balance:.2f})"
        )
