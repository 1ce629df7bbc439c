"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .balance_reporter import BalanceReporter, LedgerProviderProtocol, balance

__all__ = ["BalanceReporter", "LedgerProviderProtocol", "balance"]
