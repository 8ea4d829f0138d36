"""
Account Resolver - locates token holding accounts.

Derives associated token account addresses and checks which of them
already exist on-chain.
"""

import structlog

from solders.pubkey import Pubkey

from solpay.core.address import short_address
from solpay.core.errors import PreconditionError
from solpay.node.interface import HoldingAccount, NodeInterface
from solpay.tx.instructions import get_associated_token_address

logger = structlog.get_logger(__name__)


class AccountResolver:
    """Resolves holding accounts for (owner, mint) pairs."""

    def __init__(self, node: NodeInterface):
        """
        Initialize the resolver.

        Args:
            node: Node interface for blockchain queries
        """
        self.node = node

    @staticmethod
    def derive_holding_account(owner: Pubkey, mint: Pubkey) -> Pubkey:
        """Derive the associated token account address. No network access."""
        return get_associated_token_address(owner, mint)

    async def account_exists(self, address: Pubkey) -> bool:
        """
        Check whether an account exists.

        A missing account is an expected outcome, e.g. a recipient who has
        never held the token.
        """
        exists = await self.node.account_exists(address)
        logger.debug("account_checked", address=short_address(address), exists=exists)
        return exists

    async def find_sender_holding_account(
        self,
        owner: Pubkey,
        mint: Pubkey,
    ) -> HoldingAccount:
        """
        Find the sender's existing token account for a mint.

        Args:
            owner: Sender wallet address
            mint: Token mint address

        Returns:
            The first token account the owner holds for the mint

        Raises:
            PreconditionError: If the owner holds no account for the mint
        """
        accounts = await self.node.get_token_accounts_by_owner(owner, mint)

        if not accounts:
            logger.warning(
                "sender_holding_account_missing",
                owner=short_address(owner),
                mint=short_address(mint),
            )
            raise PreconditionError(
                f"Wallet {short_address(owner)} holds no token account for mint {mint}"
            )

        return accounts[0]

    async def get_token_decimals(self, holding_account: HoldingAccount) -> int:
        """Get the mint's decimal exponent from an existing token account."""
        balance = await self.node.get_token_account_balance(holding_account.address)
        return balance.decimals
