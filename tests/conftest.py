"""
conftest.py - Shared pytest fixtures for ATM tests

Provides common fixtures used across unit and conformance tests:
- Seed lists and ledgers (empty, single account, several accounts)
- Controllers wired to a scripted FakeTerminal
"""

import pytest

from atm import AccountSpec, Ledger

from tests.fake_terminal import make_controller


# =============================================================================
# LEDGER FIXTURES
# =============================================================================

SEED = [
    AccountSpec("Ada", 1, 100),
    AccountSpec("Grace", 2, 250),
    AccountSpec("Alan", 3, 0),
]


@pytest.fixture
def seed():
    """Three accounts, one of them empty."""
    return list(SEED)


@pytest.fixture
def empty_ledger():
    """Fresh ledger with no accounts."""
    return Ledger("test", verbose=False)


@pytest.fixture
def ada_ledger():
    """Ledger with a single account: Ada, id 1, balance 100."""
    return Ledger.from_seed([("Ada", 1, 100)], name="test", verbose=False)


@pytest.fixture
def bank_ledger(seed):
    """Ledger initialized from SEED."""
    return Ledger.from_seed(seed, name="test", verbose=False)


# =============================================================================
# SESSION FIXTURES
# =============================================================================

@pytest.fixture
def bound_controller(ada_ledger):
    """Controller with Ada already authenticated and no further script."""
    controller = make_controller(ada_ledger, ids=[1])
    controller.authenticate()
    return controller
