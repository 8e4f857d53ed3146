"""
BankCLI - Source Package

A single-user, interactive command-line ledger for a small set of
bank accounts persisted to a local JSON file.

DESIGN PRINCIPLES:
1. Validate at the gate, then mutate, then record, then persist
2. Fail early, fail visibly
3. The in-memory ledger is the source of truth
4. Every balance change leaves a transaction behind
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "BankCLI Team"
