"""
Bank Module

Owns the accounts of one ledger: opens and closes accounts, issues
sequential account numbers, routes deposits, withdrawals and transfers,
and posts monthly interest. Structural misuse (unknown account, bad opening
arguments, self-transfer) raises BankingError; business-rule failures come
back as FAILED transactions from the accounts.
"""

from decimal import Decimal
from datetime import datetime
from typing import Callable, Dict, List, Optional
import threading

from .money import to_money, format_money, ZERO
from .accounts import Account, AccountType, AccountPolicy
from .transactions import Transaction, TransferResult, utc_now
from .config import get_config
from .logging_config import get_logger, log_action
from .reporting import monthly_statement


class BankingError(ValueError):
    """Raised for structural errors at the bank boundary"""


class Bank:
    """
    In-memory bank holding accounts keyed by account number
    """

    def __init__(
        self,
        policy: Optional[AccountPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
        account_number_base: Optional[int] = None,
        zero_balance_tolerance: Optional[Decimal] = None,
        config=None
    ):
        if config is None:
            config = get_config()

        self.policy = policy or AccountPolicy.from_config(config)
        self.clock = clock or utc_now
        self.zero_balance_tolerance = to_money(
            zero_balance_tolerance if zero_balance_tolerance is not None
            else config.zero_balance_tolerance
        )
        self._accounts: Dict[str, Account] = {}
        self._account_counter = (
            account_number_base if account_number_base is not None
            else config.account_number_base
        )
        self._lock = threading.RLock()
        self.logger = get_logger("ledgerbook.bank")

    def _generate_account_number(self) -> str:
        with self._lock:
            self._account_counter += 1
            return str(self._account_counter)

    def _get_account(self, account_number: str) -> Account:
        with self._lock:
            account = self._accounts.get(account_number)
        if account is None:
            raise BankingError(f"Account not found: {account_number}")
        return account

    def _to_amount(self, amount) -> Decimal:
        try:
            return to_money(amount)
        except ValueError as e:
            raise BankingError(str(e)) from e

    def open_account(
        self,
        customer_name: str,
        account_type: AccountType,
        initial_deposit=ZERO
    ) -> str:
        """
        Open a new account

        Args:
            customer_name: Account holder name
            account_type: CHECKING or SAVINGS
            initial_deposit: Opening balance (may be zero for checking)

        Returns:
            Account number of the new account

        Raises:
            BankingError: If the name is blank, the deposit is negative, or a
                savings deposit is below the minimum balance
        """
        if customer_name is None or not customer_name.strip():
            raise BankingError("Customer name cannot be empty")

        if not isinstance(account_type, AccountType):
            raise BankingError(f"Unsupported account type: {account_type!r}")

        initial_deposit = self._to_amount(initial_deposit)
        if initial_deposit < 0:
            raise BankingError("Initial deposit cannot be negative")

        minimum = self.policy.savings_minimum_balance
        if account_type == AccountType.SAVINGS and initial_deposit < minimum:
            raise BankingError(
                f"Savings account requires minimum initial deposit of {format_money(minimum)}"
            )

        with self._lock:
            account_number = self._generate_account_number()
            self._accounts[account_number] = Account(
                account_number=account_number,
                account_type=account_type,
                customer_name=customer_name,
                initial_deposit=initial_deposit,
                policy=self.policy,
                clock=self.clock
            )

        log_action(
            self.logger, "info", f"Account opened: {account_number}",
            action="open_account", resource=f"account:{account_number}",
            extra={
                "account_type": account_type.value,
                "initial_deposit": str(initial_deposit)
            }
        )

        return account_number

    def close_account(self, account_number: str) -> None:
        """
        Close an account; only allowed when the balance is zero

        Raises:
            BankingError: If the account is missing or its balance is not zero
        """
        with self._lock:
            account = self._get_account(account_number)

            if abs(account.balance) > self.zero_balance_tolerance:
                raise BankingError(
                    f"Cannot close account with non-zero balance. "
                    f"Current balance: {format_money(account.balance)}"
                )

            del self._accounts[account_number]

        log_action(
            self.logger, "info", f"Account closed: {account_number}",
            action="close_account", resource=f"account:{account_number}"
        )

    def _log_outcome(self, action: str, account_number: str, transaction: Transaction) -> None:
        if transaction.is_failed:
            log_action(
                self.logger, "warning", f"{action} rejected: {transaction.failure_reason}",
                action=action, resource=f"account:{account_number}",
                extra={
                    "transaction_id": transaction.transaction_id,
                    "amount": str(transaction.amount),
                    "reason": transaction.failure_reason
                }
            )

    def deposit(self, account_number: str, amount) -> Transaction:
        """Deposit into an account; raises BankingError only if the account is missing"""
        transaction = self._get_account(account_number).deposit(self._to_amount(amount))
        self._log_outcome("deposit", account_number, transaction)
        return transaction

    def withdraw(self, account_number: str, amount) -> Transaction:
        """Withdraw from an account; raises BankingError only if the account is missing"""
        transaction = self._get_account(account_number).withdraw(self._to_amount(amount))
        self._log_outcome("withdraw", account_number, transaction)
        return transaction

    def transfer(self, from_account_number: str, to_account_number: str, amount) -> TransferResult:
        """
        Transfer funds between two accounts

        The source leg runs first under the source account's withdrawal
        rules. If it fails, the destination only receives a FAILED TRANSFER
        record and its balance is untouched. Otherwise the destination leg
        is credited and both TRANSFER records are returned.

        Raises:
            BankingError: If the accounts are the same or either is missing
        """
        if from_account_number == to_account_number:
            raise BankingError("Cannot transfer to the same account")

        from_account = self._get_account(from_account_number)
        to_account = self._get_account(to_account_number)
        amount = self._to_amount(amount)

        # Fixed lock order so concurrent opposite transfers cannot deadlock
        first, second = sorted((from_account, to_account), key=lambda a: a.account_number)
        with first.lock, second.lock:
            outgoing = from_account.transfer_out(amount)

            if outgoing.is_failed:
                incoming = to_account.record_failed_transfer(
                    amount, f"Transfer failed: {outgoing.failure_reason}"
                )
                self._log_outcome("transfer", from_account_number, outgoing)
                return TransferResult(outgoing, incoming)

            incoming = to_account.transfer_in(amount)

        log_action(
            self.logger, "info", "Transfer completed",
            action="transfer", resource=f"account:{from_account_number}",
            extra={
                "from_account": from_account_number,
                "to_account": to_account_number,
                "amount": str(incoming.amount)
            }
        )

        return TransferResult(outgoing, incoming)

    def get_account(self, account_number: str) -> Account:
        """Get account by number; raises BankingError if missing"""
        return self._get_account(account_number)

    def get_balance(self, account_number: str) -> Decimal:
        return self._get_account(account_number).balance

    def get_transaction_history(
        self,
        account_number: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Transaction]:
        """Get an account's history, optionally bounded by inclusive start/end timestamps"""
        return self._get_account(account_number).get_transaction_history(start, end)

    def apply_monthly_interest(self) -> List[Transaction]:
        """
        Post monthly interest to every savings account

        Returns:
            Interest transactions that were posted
        """
        with self._lock:
            accounts = list(self._accounts.values())

        posted = []
        for account in accounts:
            if account.account_type != AccountType.SAVINGS:
                continue
            transaction = account.apply_monthly_interest()
            if transaction is not None:
                posted.append(transaction)

        log_action(
            self.logger, "info", f"Monthly interest posted to {len(posted)} accounts",
            action="apply_monthly_interest",
            extra={"total_interest": str(sum((t.amount for t in posted), ZERO))}
        )

        return posted

    def generate_monthly_statement(self, account_number: str) -> str:
        """Formatted monthly statement for an account"""
        return monthly_statement(self._get_account(account_number))

    def get_all_accounts(self) -> Dict[str, Account]:
        """Snapshot of all accounts keyed by account number"""
        with self._lock:
            return dict(self._accounts)

    @property
    def account_count(self) -> int:
        with self._lock:
            return len(self._accounts)
