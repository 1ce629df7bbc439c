"""
Adapters layer - External integrations (watson time tracker).
"""

from .mock_ledger import MockLedger
from .watson_ledger import WatsonLedger

__all__ = ["MockLedger", "WatsonLedger"]
