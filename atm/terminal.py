"""
terminal.py - Console Terminal

Implements the Terminal protocol on a line-oriented console. This is the only
place that knows the raw input encoding; everything behind it sees Action
values and integers.

Action symbols:
    B  balance inquiry
    +  deposit (prompts for an amount)
    -  withdraw (prompts for an amount)
    =  done, next customer
    X  shut down the ATM

End of input is treated as a shutdown request.
"""

from __future__ import annotations
from typing import Callable, Optional

from .core import (
    Action, Deposit, Withdraw,
    BALANCE, NEXT, FINISHED,
    SYMBOL_BALANCE, SYMBOL_DEPOSIT, SYMBOL_WITHDRAW, SYMBOL_NEXT, SYMBOL_FINISHED,
    InvalidAmount,
)


ID_PROMPT = "Enter customer id: "
AMOUNT_PROMPT = "Enter amount: "
ACTION_PROMPT = "Enter action: (B) Balance (-) Withdraw (+) Deposit (=) Done (X) Exit: "


class ConsoleTerminal:
    """
    Terminal backed by a line reader and a line writer.

    Args:
        read_line: Callable taking a prompt and returning one line of input.
            Raises EOFError at end of input. Defaults to input().
        write: Callable emitting one line of output. Defaults to print().
    """

    def __init__(
        self,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        self._read_line = read_line
        self._write = write

    # ========================================================================
    # ACQUISITION
    # ========================================================================

    def acquire_id(self) -> Optional[int]:
        """Prompt until an integer id is entered. `X` or end of input returns None."""
        while True:
            try:
                text = self._read(ID_PROMPT)
            except EOFError:
                return None
            if text.upper() == SYMBOL_FINISHED:
                return None
            try:
                return int(text)
            except ValueError:
                self.present_message(f"Invalid id {text!r}; ids are numbers")

    def acquire_amount(self) -> int:
        """
        Prompt until a non-negative integer is entered.

        Raises:
            EOFError: At end of input
        """
        while True:
            text = self._read(AMOUNT_PROMPT)
            try:
                return parse_amount(text)
            except InvalidAmount as e:
                self.present_message(str(e))

    def acquire_action(self) -> Action:
        """Prompt until a recognised action symbol is entered."""
        while True:
            try:
                text = self._read(ACTION_PROMPT)
                symbol = text.upper()
                if symbol == SYMBOL_BALANCE:
                    return BALANCE
                if symbol == SYMBOL_DEPOSIT:
                    return Deposit(self.acquire_amount())
                if symbol == SYMBOL_WITHDRAW:
                    return Withdraw(self.acquire_amount())
                if symbol == SYMBOL_NEXT:
                    return NEXT
                if symbol == SYMBOL_FINISHED:
                    return FINISHED
            except EOFError:
                return FINISHED
            self.present_message(f"Unknown action {text!r}")

    # ========================================================================
    # PRESENTATION
    # ========================================================================

    def present_message(self, text: str) -> None:
        self._write(text)

    def deliver_cash(self, amount: int) -> None:
        self._write(f"Here's your cash: {amount}")

    def _read(self, prompt: str) -> str:
        return self._read_line(prompt).strip()


def parse_amount(text: str) -> int:
    """
    Parse customer input as a non-negative integer amount.

    Raises:
        InvalidAmount: If the text is not an integer or is negative
    """
    try:
        amount = int(text)
    except ValueError:
        raise InvalidAmount(f"Invalid amount {text!r}; amounts are whole numbers") from None
    if amount < 0:
        raise InvalidAmount(f"Invalid amount {amount}; amounts cannot be negative")
    return amount
