"""
Exceptions raised by storage backends.

A missing record is never an error: lookups return None instead.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base class for storage-related exceptions."""


class DuplicateSubscriptionError(StorageError):
    def __init__(self, email: str):
        super().__init__(f"Email already subscribed: {email}")
        self.email = email


class DuplicateOrderNumberError(StorageError):
    def __init__(self, order_number: str):
        super().__init__(f"Order number already used: {order_number}")
        self.order_number = order_number


class InvalidOrderStatusError(StorageError, ValueError):
    def __init__(self, status: str):
        super().__init__(f"Unknown order status: {status!r}")
        self.status = status


class InvalidPaymentMethodError(StorageError, ValueError):
    def __init__(self, method: str):
        super().__init__(f"Unknown payment method: {method!r}")
        self.method = method


class BackendUnavailableError(StorageError):
    """The database could not be reached or a query did not complete."""


class ConfigurationMissingError(StorageError):
    """Required connection settings (DATABASE_URL) are not configured."""
