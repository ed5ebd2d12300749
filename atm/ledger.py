"""
ledger.py - In-Memory Account Ledger

The Ledger class is the account store for the ATM. It is the only module that
mutates account state, and it does so through a single path: update_balance().

Key responsibilities:
    - Implements AccountView protocol for safe read-only access
    - Maps account id -> Account with O(1) lookups
    - Validates every balance update against the non-negative constraint
    - Records every balance update in an audit trail
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional

from .core import (
    # Types
    Account, AccountSpec, BalanceUpdate, Seed, SeedEntry,
    # Exceptions
    UnknownAccount, BalanceConstraintViolation,
)


class Ledger:
    """
    Account ledger keyed by customer id.

    Implements the AccountView protocol, so it can be passed to code that only
    needs to read balances and names.

    Lifecycle:
        Created once at startup, mutated during the run, discarded at shutdown.
        Accounts are never added or removed after initialize(); only balances
        change.

    Thread Safety:
        Not thread-safe. update_balance() is a plain read-modify-write, so a
        multi-terminal setup would need per-account locking around it.

    Example:
        ledger = Ledger.from_seed([("Ada", 1, 100), ("Grace", 2, 250)])
        ledger.get_balance(1)            # 100
        ledger.update_balance(1, 70)
        ledger.get_balance(1)            # 70
    """

    def __init__(self, name: str = "atm", verbose: bool = True):
        """
        Create an empty ledger.

        Args:
            name: Ledger identifier
            verbose: Enable debug output (default: True)
        """
        self.name = name
        self.verbose = verbose
        self._accounts: Dict[int, Account] = {}
        self.update_log: List[BalanceUpdate] = []
        # Monotonic sequence counter for audit ordering
        self._next_sequence: int = 0

    @classmethod
    def from_seed(cls, seed: Seed, **kwargs) -> Ledger:
        """Create a ledger and initialize it from `seed`."""
        ledger = cls(**kwargs)
        ledger.initialize(seed)
        return ledger

    # ========================================================================
    # INITIALIZATION (Mutating)
    # ========================================================================

    def initialize(self, seed: Seed) -> None:
        """
        Populate the ledger from a seed list of (name, id, balance) entries.

        Replaces any existing accounts and clears the audit trail. Ids are
        expected to be unique; if an id repeats, the last entry wins.

        Args:
            seed: Sequence of AccountSpec or (name, id, balance) tuples

        Raises:
            BalanceConstraintViolation: If a seed balance is negative
        """
        accounts: Dict[int, Account] = {}
        for entry in seed:
            spec = _to_spec(entry)
            if spec.balance < 0:
                raise BalanceConstraintViolation(
                    f"Seed balance for account {spec.id} is negative: {spec.balance}"
                )
            accounts[spec.id] = Account(spec.id, spec.name, spec.balance)

        self._accounts = accounts
        self.update_log = []
        self._next_sequence = 0

        if self.verbose:
            print(f"[LEDGER] {self.name}: initialized {len(accounts)} accounts, "
                  f"total deposits {self.total_deposits()}")

    # ========================================================================
    # AccountView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    def account_exists(self, account_id: int) -> bool:
        """Return True if an account with this id is in the ledger."""
        return account_id in self._accounts

    def get_balance(self, account_id: int) -> int:
        """
        Get the current balance of an account.

        Raises:
            UnknownAccount: If the id is absent
        """
        return self._lookup(account_id).balance

    def get_name(self, account_id: int) -> str:
        """
        Get the customer name on an account.

        Raises:
            UnknownAccount: If the id is absent
        """
        return self._lookup(account_id).name

    def list_accounts(self) -> List[int]:
        """List all account ids in ascending order."""
        return sorted(self._accounts)

    def get_account(self, account_id: int) -> Account:
        """
        Get a snapshot of an account.

        The returned object is a copy; changing it does not affect the ledger.

        Raises:
            UnknownAccount: If the id is absent
        """
        return self._lookup(account_id).snapshot()

    def total_deposits(self) -> int:
        """Sum of all account balances."""
        return sum(acct.balance for acct in self._accounts.values())

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._accounts

    def __iter__(self) -> Iterator[int]:
        return iter(self.list_accounts())

    # ========================================================================
    # BALANCE UPDATES (Mutating)
    # ========================================================================

    def update_balance(self, account_id: int, new_balance: int,
                       reason: Optional[str] = None) -> BalanceUpdate:
        """
        Set an account's balance to `new_balance`.

        The caller computes the new balance; the ledger does not interpret it
        as a deposit or withdrawal. Nothing is changed if validation fails.

        Args:
            account_id: Account to update
            new_balance: The balance to store
            reason: Optional free-text note for the audit trail

        Returns:
            The BalanceUpdate record appended to update_log

        Raises:
            UnknownAccount: If the id is absent
            BalanceConstraintViolation: If new_balance is negative
        """
        account = self._lookup(account_id)
        if new_balance < 0:
            raise BalanceConstraintViolation(
                f"Balance for account {account_id} cannot be negative: {new_balance}"
            )

        record = BalanceUpdate(
            sequence=self._next_sequence,
            account_id=account_id,
            old_balance=account.balance,
            new_balance=new_balance,
            reason=reason,
        )
        account.balance = new_balance
        self._next_sequence += 1
        self.update_log.append(record)

        if self.verbose:
            print(f"[LEDGER] {record!r}")
        return record

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _lookup(self, account_id: int) -> Account:
        try:
            return self._accounts[account_id]
        except KeyError:
            raise UnknownAccount(account_id) from None

    def __repr__(self) -> str:
        return f"Ledger({self.name!r}, accounts={len(self._accounts)})"


def _to_spec(entry: SeedEntry) -> AccountSpec:
    if isinstance(entry, AccountSpec):
        return entry
    name, account_id, balance = entry
    return AccountSpec(name, account_id, balance)
