"""
atm - Single-Terminal ATM

An account ledger keyed by customer id and a session controller that
authenticates customers and applies their requests against the ledger.

Usage:
    from atm import Ledger, SessionController, ConsoleTerminal

    ledger = Ledger.from_seed([
        ("Ada", 1, 100),
        ("Grace", 2, 250),
    ])
    controller = SessionController(ledger, ConsoleTerminal())
    summary = controller.run()
"""

# Core types
from .core import (
    AccountView,
    Terminal,
    Account,
    AccountSpec,
    BalanceUpdate,
    Action,
    Balance,
    Withdraw,
    Deposit,
    Next,
    Finished,
    BALANCE,
    NEXT,
    FINISHED,
    SessionState,
    ATMError,
    UnknownAccount,
    InvalidId,
    InvalidAmount,
    InsufficientFunds,
    BalanceConstraintViolation,
    SessionError,
)

# Ledger
from .ledger import Ledger

# Session
from .session import SessionController, SessionSummary

# Console I/O
from .terminal import ConsoleTerminal, parse_amount

__all__ = [
    # Core
    'AccountView', 'Terminal',
    'Account', 'AccountSpec', 'BalanceUpdate',
    'Action', 'Balance', 'Withdraw', 'Deposit', 'Next', 'Finished',
    'BALANCE', 'NEXT', 'FINISHED',
    'SessionState',
    'ATMError', 'UnknownAccount', 'InvalidId', 'InvalidAmount',
    'InsufficientFunds', 'BalanceConstraintViolation', 'SessionError',
    # Ledger
    'Ledger',
    # Session
    'SessionController', 'SessionSummary',
    # Console
    'ConsoleTerminal', 'parse_amount',
]

__version__ = '1.0.0'
