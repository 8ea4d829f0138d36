"""
Error taxonomy for the transfer pipeline.

Each error carries the FailureCategory it is reported under once it
reaches the operation boundary.
"""

from solpay.core.result import FailureCategory


class TransferError(Exception):
    """Base class for pipeline errors."""

    category = FailureCategory.NETWORK


class InputError(TransferError):
    """Raised when user input (address or amount) is malformed."""

    category = FailureCategory.INVALID_INPUT


class PreconditionError(TransferError):
    """Raised when on-chain state does not allow the operation."""

    category = FailureCategory.PRECONDITION


class NetworkError(TransferError):
    """Raised when a query, submission or confirmation wait fails."""

    category = FailureCategory.NETWORK


class UserCancelledError(TransferError):
    """Raised when the wallet owner declines to sign."""

    category = FailureCategory.CANCELLED
