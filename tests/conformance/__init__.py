"""
Conformance Test Suite for the ATM

Property-based tests for the invariants the ledger and session controller
must hold for arbitrary inputs:

1. Seeding: every balance equals its seed balance after initialize()
2. Withdrawals: exact decrease and exactly one cash delivery, or no effect
3. Deposits: exact increase
4. Round-trip: update_balance() then get_balance() returns the value set
5. Non-negativity: no sequence of actions drives a balance below zero
"""
