# backend/brokerledger/services/capital/__init__.py
"""
Capital deployed calculations for option and stock trades.

Usage:
    from brokerledger.services.capital import CapitalDeployedCalculator, OptionTrade
"""

from brokerledger.services.capital.calculators import CapitalDeployedCalculator
from brokerledger.services.capital.types import OptionTrade, StockTrade

__all__ = [
    "CapitalDeployedCalculator",
    "OptionTrade",
    "StockTrade",
]
