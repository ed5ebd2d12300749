"""
Core types for the ATM system.

This module provides the foundational data structures and protocols:
1. Protocols: AccountView for read-only ledger access, Terminal for customer I/O
2. Immutable data structures: Account, AccountSpec, BalanceUpdate, actions
3. Exceptions: ATMError and domain-specific error types
4. Session states

Nothing in this module mutates ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable


# ============================================================================
# CONSTANTS
# ============================================================================

# Input symbols recognised at the action prompt.
SYMBOL_BALANCE = "B"
SYMBOL_DEPOSIT = "+"
SYMBOL_WITHDRAW = "-"
SYMBOL_NEXT = "="
SYMBOL_FINISHED = "X"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ATMError(Exception):
    """Base exception for all ATM-related errors."""
    pass


class UnknownAccount(ATMError, KeyError):
    """Raised when a ledger operation references an account id that does not exist."""

    def __init__(self, account_id: int):
        super().__init__(f"Account {account_id} does not exist")
        self.account_id = account_id

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class InvalidId(ATMError):
    """Raised when a customer supplies an id that is not in the ledger."""

    def __init__(self, account_id: int):
        super().__init__(f"Invalid id: {account_id}")
        self.account_id = account_id


class InvalidAmount(ATMError, ValueError):
    """Raised when a customer supplies an amount that is negative or not a number."""
    pass


class InsufficientFunds(ATMError):
    """Raised when a withdrawal exceeds the account balance."""

    def __init__(self, account_id: int, requested: int, available: int):
        super().__init__(
            f"Insufficient funds in account {account_id}: "
            f"requested {requested}, available {available}"
        )
        self.account_id = account_id
        self.requested = requested
        self.available = available


class BalanceConstraintViolation(ATMError):
    """Raised when a balance update would leave an account below zero."""
    pass


class SessionError(ATMError):
    """Raised when a session operation is invoked in the wrong state."""
    pass


# ============================================================================
# ACCOUNTS
# ============================================================================

class AccountSpec(NamedTuple):
    """Seed entry used to initialize the ledger."""
    name: str
    id: int
    balance: int


# A seed entry may be an AccountSpec or a plain (name, id, balance) tuple.
SeedEntry = Union[AccountSpec, Tuple[str, int, int]]
Seed = Sequence[SeedEntry]


@dataclass(slots=True)
class Account:
    """
    One customer's bank record.

    `id` and `name` never change after creation. `balance` is owned by the
    Ledger and only changes through Ledger.update_balance().
    """
    id: int
    name: str
    balance: int

    def snapshot(self) -> 'Account':
        """Return a detached copy safe to hand to callers."""
        return Account(self.id, self.name, self.balance)


@dataclass(frozen=True, slots=True)
class BalanceUpdate:
    """
    Immutable audit record of a single balance change.

    Every call to Ledger.update_balance() appends exactly one record.
    """
    sequence: int
    account_id: int
    old_balance: int
    new_balance: int
    reason: Optional[str] = None

    @property
    def delta(self) -> int:
        return self.new_balance - self.old_balance

    def __repr__(self) -> str:
        reason = f" ({self.reason})" if self.reason else ""
        return (
            f"BalanceUpdate(#{self.sequence} acct={self.account_id}: "
            f"{self.old_balance} -> {self.new_balance}{reason})"
        )


# ============================================================================
# ACTIONS
# ============================================================================

class Action:
    """Base class for customer requests. Constructed once at the input boundary."""
    __slots__ = ()


@dataclass(frozen=True, slots=True)
class Balance(Action):
    """Balance inquiry."""


@dataclass(frozen=True, slots=True)
class Withdraw(Action):
    """Withdraw `amount` in cash."""
    amount: int

    def __post_init__(self):
        _check_amount(self.amount)


@dataclass(frozen=True, slots=True)
class Deposit(Action):
    """Deposit `amount`."""
    amount: int

    def __post_init__(self):
        _check_amount(self.amount)


@dataclass(frozen=True, slots=True)
class Next(Action):
    """Finish this customer and move on to the next one."""


@dataclass(frozen=True, slots=True)
class Finished(Action):
    """Shut down the ATM."""


BALANCE = Balance()
NEXT = Next()
FINISHED = Finished()


def _check_amount(amount: int) -> None:
    # bool is an int subclass; True is not an amount
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise InvalidAmount(f"Amount must be an integer, got {type(amount).__name__}")
    if amount < 0:
        raise InvalidAmount(f"Amount must be non-negative, got {amount}")


# ============================================================================
# SESSION STATE
# ============================================================================

class SessionState(Enum):
    """States of the session controller."""
    AWAITING_ID = "awaiting_id"
    AWAITING_ACTION = "awaiting_action"
    TERMINATED = "terminated"


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class AccountView(Protocol):
    """
    Read-only interface to ledger state.

    The Ledger implements this protocol but also provides update_balance().
    Functions accepting an AccountView declare that they only read.
    """

    def account_exists(self, account_id: int) -> bool:
        ...

    def get_balance(self, account_id: int) -> int:
        """Raises UnknownAccount if the id is absent."""
        ...

    def get_name(self, account_id: int) -> str:
        """Raises UnknownAccount if the id is absent."""
        ...

    def list_accounts(self) -> List[int]:
        ...


@runtime_checkable
class Terminal(Protocol):
    """
    Customer-facing input/output collaborator.

    Every acquire_* call blocks until input is available and reads it fresh.
    """

    def acquire_id(self) -> Optional[int]:
        """
        Return a candidate account id.

        Returns None when the customer asks to shut the ATM down.
        Does not check the id against the ledger.
        """
        ...

    def acquire_amount(self) -> int:
        """Return a non-negative amount. Negative input is rejected before returning."""
        ...

    def acquire_action(self) -> Action:
        """Return one well-formed Action."""
        ...

    def present_message(self, text: str) -> None:
        ...

    def deliver_cash(self, amount: int) -> None:
        ...
