"""
Transaction Builder - constructs transfer transactions.

Handles the construction of native SOL transfers and SPL token transfers,
including provisioning the recipient's token account when it is missing.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import Message
from solders.pubkey import Pubkey

from solpay.core.address import short_address
from solpay.node.interface import HoldingAccount, NodeInterface
from solpay.tx.accounts import AccountResolver
from solpay.tx.instructions import (
    create_associated_token_account,
    native_transfer,
    token_transfer,
)

logger = structlog.get_logger(__name__)


@dataclass
class TransferTransaction:
    """
    An unsigned transaction.

    Instructions execute in list order and the ledger applies them
    atomically. The message is only compiled at signing time, once a
    recent blockhash is known.
    """

    fee_payer: Pubkey
    instructions: List[Instruction] = field(default_factory=list)

    def add(self, instruction: Instruction) -> "TransferTransaction":
        """Append an instruction."""
        self.instructions.append(instruction)
        return self

    def compile(self, recent_blockhash: Hash) -> Message:
        """Compile into a message ready for signing."""
        return Message.new_with_blockhash(
            list(self.instructions),
            self.fee_payer,
            recent_blockhash,
        )

    @property
    def size(self) -> int:
        """Number of instructions."""
        return len(self.instructions)

    @property
    def program_ids(self) -> List[Pubkey]:
        """Programs invoked, in order."""
        return [ix.program_id for ix in self.instructions]


class TransactionBuilder:
    """
    Builds transfer transactions.

    Native transfers need no network access. Token transfers query the node
    through the AccountResolver to decide whether the recipient's token
    account must be created first.
    """

    def __init__(
        self,
        node: NodeInterface,
        resolver: Optional[AccountResolver] = None,
    ):
        """
        Initialize the transaction builder.

        Args:
            node: Node interface for blockchain queries
            resolver: Custom account resolver (created from node if not provided)
        """
        self.node = node
        self.resolver = resolver or AccountResolver(node)

    def build_native_transfer(
        self,
        sender: Pubkey,
        recipient: Pubkey,
        lamports: int,
    ) -> TransferTransaction:
        """
        Build a single-instruction SOL transfer.

        Transfers to self are built like any other transfer.

        Args:
            sender: Paying wallet, also fee payer
            recipient: Receiving address
            lamports: Amount in lamports

        Returns:
            Unsigned transaction
        """
        transaction = TransferTransaction(fee_payer=sender)
        transaction.add(native_transfer(sender, recipient, lamports))

        logger.info(
            "native_transfer_built",
            sender=short_address(sender),
            recipient=short_address(recipient),
            lamports=lamports,
        )
        return transaction

    async def build_token_transfer(
        self,
        owner: Pubkey,
        recipient: Pubkey,
        mint: Pubkey,
        base_units: int,
        sender_account: Optional[HoldingAccount] = None,
    ) -> TransferTransaction:
        """
        Build an SPL token transfer.

        The result is [create-account, transfer] when the recipient has no
        token account for the mint yet, otherwise [transfer].

        Args:
            owner: Sending wallet, also fee payer and rent payer
            recipient: Receiving wallet
            mint: Token mint
            base_units: Amount in the mint's base units
            sender_account: Already resolved sender token account (optional)

        Returns:
            Unsigned transaction

        Raises:
            PreconditionError: If the owner holds no account for the mint
        """
        instructions: List[Instruction] = []

        recipient_account = self.resolver.derive_holding_account(recipient, mint)
        recipient_exists = await self.resolver.account_exists(recipient_account)

        if not recipient_exists:
            instructions.append(
                create_associated_token_account(
                    payer=owner,
                    associated_account=recipient_account,
                    owner=recipient,
                    mint=mint,
                )
            )

        if sender_account is None:
            sender_account = await self.resolver.find_sender_holding_account(owner, mint)

        instructions.append(
            token_transfer(
                source=sender_account.address,
                destination=recipient_account,
                authority=owner,
                amount=base_units,
            )
        )

        logger.info(
            "token_transfer_built",
            owner=short_address(owner),
            recipient=short_address(recipient),
            mint=short_address(mint),
            base_units=base_units,
            creates_account=not recipient_exists,
        )
        return TransferTransaction(fee_payer=owner, instructions=instructions)
