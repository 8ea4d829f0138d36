"""
Instruction encoders for the system, SPL token and associated token programs.
"""

import struct

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer

from solpay.core.address import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)

# SPL token instruction index
TOKEN_TRANSFER = 3


def native_transfer(sender: Pubkey, recipient: Pubkey, lamports: int) -> Instruction:
    """System program transfer of lamports."""
    return transfer(
        TransferParams(from_pubkey=sender, to_pubkey=recipient, lamports=lamports)
    )


def get_associated_token_address(owner: Pubkey, mint: Pubkey) -> Pubkey:
    """Derive the associated token account of an owner for a mint."""
    address, _ = Pubkey.find_program_address(
        [bytes(owner), bytes(TOKEN_PROGRAM_ID), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )
    return address


def create_associated_token_account(
    payer: Pubkey,
    associated_account: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
) -> Instruction:
    """
    Create an associated token account.

    Args:
        payer: Funds the rent of the new account, must sign
        associated_account: Address of the account to create
        owner: Wallet that will own the new account
        mint: Token mint of the new account

    Returns:
        Associated token program instruction
    """
    accounts = [
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(associated_account, is_signer=False, is_writable=True),
        AccountMeta(owner, is_signer=False, is_writable=False),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(ASSOCIATED_TOKEN_PROGRAM_ID, b"", accounts)


def token_transfer(
    source: Pubkey,
    destination: Pubkey,
    authority: Pubkey,
    amount: int,
) -> Instruction:
    """
    SPL token transfer between two token accounts.

    Args:
        source: Sender's token account
        destination: Recipient's token account
        authority: Owner of the source account, must sign
        amount: Base units to move

    Returns:
        Token program instruction
    """
    accounts = [
        AccountMeta(source, is_signer=False, is_writable=True),
        AccountMeta(destination, is_signer=False, is_writable=True),
        AccountMeta(authority, is_signer=True, is_writable=False),
    ]
    data = struct.pack("<BQ", TOKEN_TRANSFER, amount)
    return Instruction(TOKEN_PROGRAM_ID, data, accounts)
