# backend/brokerledger/services/constants.py
"""
Centralized constants for the snapshot services.

Usage:
    from brokerledger.services.constants import PERCENT, ZERO
"""

from decimal import Decimal


# =============================================================================
# ARITHMETIC
# =============================================================================

ZERO: Decimal = Decimal("0")

# Percentages are stored as "12.5" for 12.5%, not 0.125
PERCENT: Decimal = Decimal("100")


# =============================================================================
# OPTIONS
# =============================================================================

# Standard equity option contract size, used by brokers that omit it
DEFAULT_OPTION_MULTIPLIER: Decimal = Decimal("100")


# =============================================================================
# SNAPSHOT FIELDS
# =============================================================================

# Running totals the accumulator adds period deltas onto
ADDITIVE_MONEY_FIELDS: tuple[str, ...] = (
    "deposited",
    "withdrawn",
    "invested",
    "realized_gains",
    "dividends_received",
    "options_income",
    "other_income",
    "commissions",
    "fees",
)

# Fields compared (and copied) by the consistency corrector
CONSISTENCY_FIELDS: tuple[str, ...] = (
    "realized_gains",
    "realized_percentage",
    "unrealized_gains",
    "unrealized_gains_percentage",
    "invested",
    "commissions",
    "fees",
    "deposited",
    "withdrawn",
    "dividends_received",
    "options_income",
    "other_income",
    "open_trades",
    "movement_counter",
    "net_cash_flow",
)
