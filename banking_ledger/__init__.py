"""
Banking Ledger

A single-process banking ledger: PIN-authenticated identities owning
accounts, deposit/withdraw rules with per-transaction and daily limits,
exact Decimal money, and an append-only transaction history.
"""

__version__ = "1.0.0"
