#!/usr/bin/env python3
"""
atm_demo.py - Run the ATM on the console

Starts a ledger from a fixed list of accounts and serves customers from stdin
until someone enters X.

Run:
    python atm_demo.py             # Customer-facing output only
    python atm_demo.py --verbose   # Also print ledger and session diagnostics
"""

from dataclasses import dataclass, field
from typing import List
import sys

from atm import (
    AccountSpec, ConsoleTerminal, Ledger, SessionController, UnknownAccount,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class ATMConfig:
    """Configuration for the console ATM. Modify these to experiment."""
    accounts: List[AccountSpec] = field(default_factory=lambda: [
        AccountSpec("Ada", 1, 100),
        AccountSpec("Grace", 2, 250),
        AccountSpec("Alan", 3, 500),
        AccountSpec("Edsger", 4, 0),
    ])
    verbose: bool = False


def main(argv: List[str]) -> int:
    config = ATMConfig(verbose="--verbose" in argv)

    ledger = Ledger.from_seed(config.accounts, name="console", verbose=config.verbose)
    controller = SessionController(ledger, ConsoleTerminal(), verbose=config.verbose)

    try:
        summary = controller.run()
    except UnknownAccount as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return 1

    if config.verbose:
        print(f"Customers served: {summary.customers_served}")
        print(f"Actions handled:  {summary.actions_handled}")
        print(f"Balance updates:  {len(ledger.update_log)}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
