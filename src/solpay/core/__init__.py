"""
Core pipeline components.

Amount conversion, result model, error taxonomy and the operations that
drive a transaction from user input to confirmation.
"""

from solpay.core.amount import LAMPORTS_PER_SOL, NATIVE_DECIMALS, parse_amount, to_base_units
from solpay.core.errors import (
    InputError,
    NetworkError,
    PreconditionError,
    TransferError,
    UserCancelledError,
)
from solpay.core.result import FailureCategory, ResultStatus, SubmissionResult

__all__ = [
    "LAMPORTS_PER_SOL",
    "NATIVE_DECIMALS",
    "parse_amount",
    "to_base_units",
    "TransferError",
    "InputError",
    "PreconditionError",
    "NetworkError",
    "UserCancelledError",
    "FailureCategory",
    "ResultStatus",
    "SubmissionResult",
]
