"""
Abstract interface for Solana node integration.

Defines the contract for blockchain access that all node adapters must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from solders.hash import Hash
from solders.pubkey import Pubkey

from solpay.config import Commitment
from solpay.core.errors import NetworkError


@dataclass
class AccountInfo:
    """On-chain account summary."""
    lamports: int
    owner: Pubkey
    data: bytes
    executable: bool = False


@dataclass
class HoldingAccount:
    """A token account returned by an owner/mint lookup."""
    address: Pubkey
    owner: Pubkey
    mint: Pubkey


@dataclass
class TokenAmount:
    """Balance of a token account."""
    raw_amount: int    # Base units
    decimals: int      # Subdivision exponent of the mint


class NodeInterface(ABC):
    """
    Abstract interface for Solana node access.

    This interface defines all blockchain operations needed by the pipeline:
    - Account and token account queries
    - Transaction submission
    - Faucet requests
    - Confirmation monitoring
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish connection to the node.

        Raises:
            NodeConnectionError: If connection cannot be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to the node."""
        pass

    @abstractmethod
    async def get_account_info(self, address: Pubkey) -> Optional[AccountInfo]:
        """
        Get account information.

        Args:
            address: Account address

        Returns:
            The account, or None if it does not exist
        """
        pass

    @abstractmethod
    async def get_token_accounts_by_owner(
        self,
        owner: Pubkey,
        mint: Pubkey,
    ) -> List[HoldingAccount]:
        """
        Get token accounts held by an owner for a mint.

        Args:
            owner: Wallet address
            mint: Token mint address

        Returns:
            Matching token accounts (possibly empty)
        """
        pass

    @abstractmethod
    async def get_token_account_balance(self, address: Pubkey) -> TokenAmount:
        """
        Get the balance of a token account.

        Args:
            address: Token account address

        Returns:
            Raw balance and the mint's decimals
        """
        pass

    @abstractmethod
    async def get_latest_blockhash(self) -> Hash:
        """
        Get a recent blockhash for transaction compilation.

        Returns:
            Latest blockhash
        """
        pass

    @abstractmethod
    async def send_raw_transaction(self, raw_tx: bytes) -> str:
        """
        Submit a signed, serialized transaction.

        Args:
            raw_tx: Wire-format transaction bytes

        Returns:
            Transaction signature

        Raises:
            TransactionSubmitError: If submission fails
        """
        pass

    @abstractmethod
    async def request_airdrop(self, address: Pubkey, lamports: int) -> str:
        """
        Request funds from the cluster faucet.

        Args:
            address: Recipient address
            lamports: Amount in lamports

        Returns:
            Signature of the airdrop transaction
        """
        pass

    @abstractmethod
    async def await_transaction_confirmation(
        self,
        signature: str,
        commitment: Commitment = Commitment.CONFIRMED,
    ) -> bool:
        """
        Wait for a transaction to reach a commitment level.

        Args:
            signature: Signature of the transaction to monitor
            commitment: Confirmation level to wait for

        Returns:
            True if confirmed, False if the transaction failed or the wait timed out
        """
        pass

    async def account_exists(self, address: Pubkey) -> bool:
        """
        Check if an account exists on-chain.

        Args:
            address: Account address

        Returns:
            True if the account exists
        """
        return await self.get_account_info(address) is not None


class NodeConnectionError(NetworkError):
    """Raised when a node request fails."""
    pass


class TransactionSubmitError(NetworkError):
    """Raised when transaction submission fails."""

    def __init__(self, message: str, error_code: Optional[int] = None):
        super().__init__(message)
        self.error_code = error_code
