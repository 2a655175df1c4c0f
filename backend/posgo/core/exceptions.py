"""Domain errors raised by the reconciliation services.

Validation errors are raised before any state is touched. ``PersistenceFailure``
is the only error raised *after* an in-memory mutation; callers are expected
to re-fetch from the store to reconcile.
"""

from __future__ import annotations

from decimal import Decimal


class PosError(Exception):
    """Base class for errors surfaced to the initiating caller."""

    status_code: int = 400


class NoActiveShift(PosError):
    status_code = 409

    def __init__(self, message: str = "A cash shift must be open to perform this action") -> None:
        super().__init__(message)


class ShiftAlreadyOpen(PosError):
    status_code = 409

    def __init__(self, shift_id: object) -> None:
        self.shift_id = shift_id
        super().__init__(f"Shift {shift_id} is already open. Close it before opening a new one.")


class ShiftClosed(PosError):
    status_code = 409

    def __init__(self, shift_id: object) -> None:
        self.shift_id = shift_id
        super().__init__(f"Shift {shift_id} is closed")


class InsufficientPayment(PosError):
    def __init__(self, remaining: Decimal) -> None:
        self.remaining = remaining
        super().__init__(f"Payment does not cover the total: {remaining} remaining")


class InvalidPurchase(PosError):
    pass


class InvalidSale(PosError):
    pass


class EmptyCart(PosError):
    def __init__(self, message: str = "Cart must contain at least one item") -> None:
        super().__init__(message)


class NotFound(PosError):
    status_code = 404

    def __init__(self, resource: str, resource_id: object) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")


class AlreadyExists(PosError):
    status_code = 409

    def __init__(self, resource: str, resource_id: object) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} already exists")


class PersistenceFailure(PosError):
    status_code = 502
