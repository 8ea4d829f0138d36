"""
solpay

Wallet-driven transfers on Solana: native SOL transfers, SPL token transfers
that provision the recipient's token account when needed, and faucet airdrops.
"""

__version__ = "0.1.0"

from solpay.core.result import FailureCategory, ResultStatus, SubmissionResult
from solpay.core.service import TransferService
from solpay.core.submission import SubmissionCoordinator

__all__ = [
    "TransferService",
    "SubmissionCoordinator",
    "SubmissionResult",
    "ResultStatus",
    "FailureCategory",
]
