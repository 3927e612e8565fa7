# backend/brokerledger/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO transport
or storage-driver knowledge. Callers (the orchestrator) decide whether to
retry, skip the (currency, date) pair, or abort the run.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    ├── SnapshotError
    │   ├── SnapshotNotFoundError
    │   └── SnapshotPersistenceError
    └── UnrealizedGainsError
        └── PriceNotFoundError
"""

from datetime import date


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


# =============================================================================
# SNAPSHOT ERRORS
# =============================================================================


class SnapshotError(ServiceError):
    """Base exception for snapshot storage errors."""
    pass


class SnapshotNotFoundError(SnapshotError):
    """
    Raised when a snapshot row cannot be found.

    Attributes:
        snapshot_id: ID that was requested
    """

    def __init__(self, snapshot_id: int) -> None:
        self.snapshot_id = snapshot_id
        super().__init__(f"Financial snapshot {snapshot_id} not found")


class SnapshotPersistenceError(SnapshotError):
    """
    Raised when a snapshot cannot be written.

    No compensating action is taken; the snapshot passed to save() is left
    exactly as it was, so the caller can re-drive from the same baseline.

    Attributes:
        snapshot_id: ID of the snapshot being saved (None for new rows)
        currency_id: Currency of the snapshot
        snapshot_date: Date of the snapshot
    """

    def __init__(
            self,
            snapshot_id: int | None,
            currency_id: int,
            snapshot_date: date,
            reason: str,
    ) -> None:
        self.snapshot_id = snapshot_id
        self.currency_id = currency_id
        self.snapshot_date = snapshot_date
        self.reason = reason
        super().__init__(
            f"Failed to save financial snapshot {snapshot_id} "
            f"(currency {currency_id}, {snapshot_date}): {reason}"
        )


# =============================================================================
# UNREALIZED GAINS ERRORS
# =============================================================================


class UnrealizedGainsError(ServiceError):
    """Base exception for unrealized gains computation errors."""
    pass


class PriceNotFoundError(UnrealizedGainsError):
    """
    Raised when no market price exists on or before the requested date.

    Attributes:
        ticker_id: Ticker without a price
        currency_id: Currency the price was requested in
        price_date: Requested date
    """

    def __init__(self, ticker_id: int, currency_id: int, price_date: date) -> None:
        self.ticker_id = ticker_id
        self.currency_id = currency_id
        self.price_date = price_date
        super().__init__(
            f"No price for ticker {ticker_id} in currency {currency_id} "
            f"on or before {price_date}"
        )
