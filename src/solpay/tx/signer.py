"""
Transaction Signer - the signing/submission channel.

Defines the wallet-side contract and a local keypair wallet that signs
with solders and submits through the node.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

import structlog

from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from solpay.config import TransferConfig, get_config
from solpay.core.address import short_address
from solpay.core.errors import PreconditionError, UserCancelledError
from solpay.node.interface import NodeInterface
from solpay.tx.builder import TransferTransaction

logger = structlog.get_logger(__name__)

# Receives the transaction about to be signed, returns False to decline
ApprovalCallback = Callable[[TransferTransaction], bool]


class SigningChannel(ABC):
    """
    A connected wallet that can sign and submit transactions.

    Signing may involve user interaction and may be declined, in which
    case UserCancelledError is raised and nothing is submitted.
    """

    @property
    @abstractmethod
    def pubkey(self) -> Pubkey:
        """Address of the connected wallet."""
        pass

    @abstractmethod
    async def sign_and_submit(self, transaction: TransferTransaction) -> str:
        """
        Sign a transaction and submit it to the network.

        Args:
            transaction: Unsigned transaction

        Returns:
            Transaction signature

        Raises:
            UserCancelledError: If the user declines to sign
            NetworkError: If submission fails
        """
        pass


class KeypairSigner(SigningChannel):
    """
    Local wallet backed by a keypair.

    Supports loading keys from:
    - File path (Solana CLI JSON keypair format)
    - Base58-encoded secret key (for environment variable configuration)
    """

    def __init__(
        self,
        node: NodeInterface,
        config: Optional[TransferConfig] = None,
        approve: Optional[ApprovalCallback] = None,
    ):
        """
        Initialize the keypair signer.

        Args:
            node: Node used to fetch blockhashes and submit transactions
            config: Transfer configuration
            approve: Optional callback asked before each signature
        """
        self.node = node
        self.config = config or get_config()
        self.approve = approve
        self._keypair: Optional[Keypair] = None

    def load_key_from_file(self, key_path: str) -> None:
        """
        Load keypair from a Solana CLI JSON file.

        Args:
            key_path: Path to the keypair file
        """
        path = Path(key_path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Keypair file not found: {key_path}")

        secret = json.loads(path.read_text())
        self._keypair = Keypair.from_bytes(bytes(secret))

        logger.info("keypair_loaded", path=key_path, address=short_address(self.pubkey))

    def load_key_from_base58(self, secret: str) -> None:
        """
        Load keypair from a base58 secret key.

        Args:
            secret: Base58-encoded 64-byte secret key
        """
        self._keypair = Keypair.from_base58_string(secret)

        logger.info("keypair_loaded_from_base58", address=short_address(self.pubkey))

    def load_from_config(self) -> None:
        """Load keypair from configuration."""
        if self.config.keypair_path:
            self.load_key_from_file(self.config.keypair_path)
        elif self.config.keypair_base58:
            self.load_key_from_base58(self.config.keypair_base58)
        else:
            raise ValueError("No keypair configured")

    @property
    def is_loaded(self) -> bool:
        """Check if a keypair is loaded."""
        return self._keypair is not None

    @property
    def pubkey(self) -> Pubkey:
        """Get the wallet address."""
        if not self._keypair:
            raise RuntimeError("No keypair loaded")
        return self._keypair.pubkey()

    def sign_transaction(self, transaction: TransferTransaction, recent_blockhash: Hash) -> Transaction:
        """
        Sign a transaction.

        Args:
            transaction: Unsigned transaction
            recent_blockhash: Blockhash the message is compiled against

        Returns:
            Signed transaction

        Raises:
            PreconditionError: If the wallet is not the fee payer
        """
        if not self._keypair:
            raise RuntimeError("No keypair loaded")

        if transaction.fee_payer != self.pubkey:
            raise PreconditionError(
                f"Fee payer {short_address(transaction.fee_payer)} is not the connected wallet"
            )

        message = transaction.compile(recent_blockhash)
        signed_tx = Transaction([self._keypair], message, recent_blockhash)

        logger.debug("transaction_signed", signature=str(signed_tx.signatures[0])[:16] + "...")
        return signed_tx

    async def sign_and_submit(self, transaction: TransferTransaction) -> str:
        """Ask for approval, sign, and submit through the node."""
        if self.approve is not None and not self.approve(transaction):
            logger.info("signing_declined", instructions=transaction.size)
            raise UserCancelledError("Transaction signing was cancelled")

        recent_blockhash = await self.node.get_latest_blockhash()
        signed_tx = self.sign_transaction(transaction, recent_blockhash)

        return await self.node.send_raw_transaction(bytes(signed_tx))


def generate_test_key(node: NodeInterface, config: Optional[TransferConfig] = None) -> KeypairSigner:
    """
    Generate a new random keypair signer for testing.

    WARNING: Do not use in production. The key is not persisted.

    Returns:
        KeypairSigner with a new random key
    """
    signer = KeypairSigner(node, config)
    signer._keypair = Keypair()

    logger.warning("test_key_generated", address=short_address(signer.pubkey))

    return signer
