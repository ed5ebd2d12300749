"""
session.py - ATM Session Controller

Drives one ATM run: a loop over customers, each customer a loop over actions,
until shutdown is requested.

State machine:
    AWAITING_ID      --id in ledger-->   AWAITING_ACTION
    AWAITING_ID      --id not found-->   AWAITING_ID       (InvalidId, re-prompt)
    AWAITING_ID      --shutdown-->       TERMINATED
    AWAITING_ACTION  --Balance/Withdraw/Deposit--> AWAITING_ACTION
    AWAITING_ACTION  --Next-->           AWAITING_ID
    AWAITING_ACTION  --Finished-->       TERMINATED

Customer mistakes (unknown id, insufficient funds) are reported through the
terminal and the same state is re-entered. UnknownAccount from the ledger
while a customer is bound means the ledger lost an account mid-session and is
allowed to propagate.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .core import (
    Action, Balance, Withdraw, Deposit, Next, Finished,
    SessionState, Terminal,
    InvalidId, InsufficientFunds, SessionError,
)
from .ledger import Ledger


@dataclass
class SessionSummary:
    """Counters for one ATM run."""
    customers_served: int = 0
    actions_handled: int = 0
    invalid_ids: int = 0
    rejected_withdrawals: int = 0


class SessionController:
    """
    Session controller sequencing authentication and action handling.

    Example:
        ledger = Ledger.from_seed([("Ada", 1, 100)], verbose=False)
        controller = SessionController(ledger, ConsoleTerminal())
        summary = controller.run()
    """

    def __init__(self, ledger: Ledger, terminal: Terminal, verbose: bool = False):
        """
        Initialize the controller in AWAITING_ID.

        Args:
            ledger: The ledger to operate on
            terminal: Customer-facing I/O collaborator
            verbose: Enable debug output (default: False)
        """
        self.ledger = ledger
        self.terminal = terminal
        self.verbose = verbose
        self.summary = SessionSummary()
        self._state = SessionState.AWAITING_ID
        self._current_id: Optional[int] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_id(self) -> Optional[int]:
        """Id of the authenticated customer, or None outside AWAITING_ACTION."""
        return self._current_id

    @property
    def terminated(self) -> bool:
        return self._state is SessionState.TERMINATED

    # ========================================================================
    # RUN LOOP
    # ========================================================================

    def run(self) -> SessionSummary:
        """
        Serve customers until shutdown is requested.

        Returns:
            Counters for the run

        Raises:
            UnknownAccount: If the ledger loses a bound account (fatal)
        """
        while not self.terminated:
            self.step()
        self._log("ATM shut down")
        return self.summary

    def step(self) -> SessionState:
        """
        Perform one transition from the current state.

        In AWAITING_ID this acquires and checks one id. In AWAITING_ACTION it
        acquires and handles one action.

        Returns:
            The state after the transition
        """
        if self._state is SessionState.AWAITING_ID:
            self.authenticate()
        elif self._state is SessionState.AWAITING_ACTION:
            self.handle(self.terminal.acquire_action())
        else:
            raise SessionError("Session already terminated")
        return self._state

    def serve_customer(self) -> SessionState:
        """Handle actions for the bound customer until Next or Finished."""
        self._require(SessionState.AWAITING_ACTION)
        while self._state is SessionState.AWAITING_ACTION:
            self.handle(self.terminal.acquire_action())
        return self._state

    # ========================================================================
    # AUTHENTICATION
    # ========================================================================

    def authenticate(self) -> bool:
        """
        Acquire an id and bind it if it exists in the ledger.

        Returns:
            True if a customer is now bound, False otherwise (invalid id or
            shutdown)
        """
        self._require(SessionState.AWAITING_ID)
        account_id = self.terminal.acquire_id()

        if account_id is None:
            self._terminate()
            return False

        try:
            self._check_id(account_id)
        except InvalidId as e:
            self.summary.invalid_ids += 1
            self._log(f"rejected id {e.account_id}")
            self.terminal.present_message(f"Invalid id {account_id}; please try again")
            return False

        self._current_id = account_id
        self._state = SessionState.AWAITING_ACTION
        self._log(f"customer {account_id} authenticated")
        self.terminal.present_message(f"Hello, {self.ledger.get_name(account_id)}")
        return True

    def _check_id(self, account_id: int) -> None:
        if not self.ledger.account_exists(account_id):
            raise InvalidId(account_id)

    # ========================================================================
    # ACTION DISPATCH
    # ========================================================================

    def handle(self, action: Action) -> SessionState:
        """
        Apply one action for the bound customer.

        Args:
            action: A well-formed Action from the terminal

        Returns:
            The state after the action

        Raises:
            SessionError: If no customer is bound
            TypeError: If `action` is not an Action
        """
        self._require(SessionState.AWAITING_ACTION)
        self.summary.actions_handled += 1
        self._log(f"customer {self._current_id}: {action!r}")

        if isinstance(action, Balance):
            self._present_balance()
        elif isinstance(action, Withdraw):
            self._withdraw(action.amount)
        elif isinstance(action, Deposit):
            self._deposit(action.amount)
        elif isinstance(action, Next):
            self._finish_customer()
        elif isinstance(action, Finished):
            self._finish_customer()
            self._terminate()
        else:
            raise TypeError(f"Expected Action, got {type(action).__name__}")

        return self._state

    def _present_balance(self) -> None:
        balance = self.ledger.get_balance(self._current_id)
        self.terminal.present_message(f"Current balance: {balance}")

    def _withdraw(self, amount: int) -> None:
        account_id = self._current_id
        balance = self.ledger.get_balance(account_id)
        try:
            self._check_funds(account_id, amount, balance)
        except InsufficientFunds as e:
            self.summary.rejected_withdrawals += 1
            self._log(str(e))
            self.terminal.present_message(f"Insufficient funds: {e.available}")
            return

        self.ledger.update_balance(account_id, balance - amount, reason="withdraw")
        self.terminal.deliver_cash(amount)
        self.terminal.present_message(f"New balance: {balance - amount}")

    @staticmethod
    def _check_funds(account_id: int, amount: int, balance: int) -> None:
        if amount > balance:
            raise InsufficientFunds(account_id, amount, balance)

    def _deposit(self, amount: int) -> None:
        account_id = self._current_id
        balance = self.ledger.get_balance(account_id) + amount
        self.ledger.update_balance(account_id, balance, reason="deposit")
        self.terminal.present_message(f"New balance: {balance}")

    def _finish_customer(self) -> None:
        name = self.ledger.get_name(self._current_id)
        self.terminal.present_message(f"So long, {name}")
        self._log(f"customer {self._current_id} done")
        self.summary.customers_served += 1
        self._current_id = None
        self._state = SessionState.AWAITING_ID

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _terminate(self) -> None:
        self._current_id = None
        self._state = SessionState.TERMINATED

    def _require(self, expected: SessionState) -> None:
        if self._state is not expected:
            raise SessionError(
                f"Expected state {expected.name}, session is {self._state.name}"
            )

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[SESSION] {message}")
