"""
Transaction module.

Handles account resolution, transaction construction and signing.
"""

from solpay.tx.accounts import AccountResolver
from solpay.tx.builder import TransactionBuilder, TransferTransaction
from solpay.tx.signer import KeypairSigner, SigningChannel

__all__ = [
    "AccountResolver",
    "TransactionBuilder",
    "TransferTransaction",
    "KeypairSigner",
    "SigningChannel",
]
