"""
Transfer Service - user-facing operations.

Each operation takes raw user input, runs one pipeline and always returns
exactly one SubmissionResult. Errors never escape as exceptions.
"""

from typing import Optional, Union

import structlog

from solders.pubkey import Pubkey

from solpay.config import TransferConfig, get_config
from solpay.core.address import parse_address, short_address
from solpay.core.amount import AmountLike, NATIVE_DECIMALS, parse_amount, to_base_units
from solpay.core.errors import TransferError
from solpay.core.faucet import FaucetRequester
from solpay.core.result import FailureCategory, SubmissionResult
from solpay.core.submission import SubmissionCoordinator
from solpay.node.interface import NodeInterface
from solpay.tx.builder import TransactionBuilder
from solpay.tx.signer import SigningChannel

logger = structlog.get_logger(__name__)


class TransferService:
    """
    Native transfers, token transfers and airdrops for a connected wallet.

    The wallet and the node are explicit dependencies. Operations are
    independent of each other and may run concurrently.
    """

    def __init__(
        self,
        node: NodeInterface,
        signer: SigningChannel,
        config: Optional[TransferConfig] = None,
    ):
        """
        Initialize the service.

        Args:
            node: Node interface for blockchain queries
            signer: Connected wallet
            config: Transfer configuration
        """
        self.node = node
        self.signer = signer
        self.config = config or get_config()

        self.builder = TransactionBuilder(node)
        self.coordinator = SubmissionCoordinator(node, self.config)
        self.faucet = FaucetRequester(node, self.config, self.coordinator)

    async def send_native(
        self,
        recipient: Union[str, Pubkey],
        amount: AmountLike,
    ) -> SubmissionResult:
        """
        Send SOL to a recipient.

        Args:
            recipient: Recipient address text
            amount: Amount in SOL

        Returns:
            Result of the transfer
        """
        log = logger.bind(operation="send_native")

        try:
            recipient_key = parse_address(recipient, "recipient")
            lamports = to_base_units(amount, NATIVE_DECIMALS)

            transaction = self.builder.build_native_transfer(
                self.signer.pubkey,
                recipient_key,
                lamports,
            )
        except TransferError as e:
            log.warning("operation_rejected", category=e.category.value, error=str(e))
            return SubmissionResult.failed(e.category, str(e))
        except Exception as e:
            log.error("native_transfer_build_failed", error=str(e))
            return SubmissionResult.failed(
                FailureCategory.NETWORK,
                f"Failed to build transfer: {e}",
            )

        result = await self.coordinator.submit(transaction, self.signer)
        self._log_result(log, result, recipient=short_address(recipient_key), lamports=lamports)
        return result

    async def send_token(
        self,
        recipient: Union[str, Pubkey],
        amount: AmountLike,
        mint: Union[str, Pubkey, None] = None,
    ) -> SubmissionResult:
        """
        Send SPL tokens to a recipient, creating their token account if needed.

        Args:
            recipient: Recipient wallet address text
            amount: Amount in token display units
            mint: Token mint (defaults to the configured mint)

        Returns:
            Result of the transfer
        """
        log = logger.bind(operation="send_token")

        try:
            # Input validation happens before any network call
            recipient_key = parse_address(recipient, "recipient")
            mint_key = parse_address(
                mint if mint is not None else self.config.default_token_mint,
                "mint",
            )
            display_amount = parse_amount(amount)

            owner = self.signer.pubkey
            sender_account = await self.builder.resolver.find_sender_holding_account(
                owner,
                mint_key,
            )
            decimals = await self.builder.resolver.get_token_decimals(sender_account)
            base_units = to_base_units(display_amount, decimals)

            transaction = await self.builder.build_token_transfer(
                owner,
                recipient_key,
                mint_key,
                base_units,
                sender_account=sender_account,
            )
        except TransferError as e:
            log.warning("operation_rejected", category=e.category.value, error=str(e))
            return SubmissionResult.failed(e.category, str(e))
        except Exception as e:
            log.error("token_transfer_build_failed", error=str(e))
            return SubmissionResult.failed(
                FailureCategory.NETWORK,
                f"Failed to build token transfer: {e}",
            )

        result = await self.coordinator.submit(transaction, self.signer)
        self._log_result(
            log,
            result,
            recipient=short_address(recipient_key),
            mint=short_address(mint_key),
            base_units=base_units,
        )
        return result

    async def request_airdrop(
        self,
        address: Union[str, Pubkey, None] = None,
    ) -> SubmissionResult:
        """
        Request test SOL for an address.

        Args:
            address: Address to fund (defaults to the connected wallet)

        Returns:
            Result of the airdrop
        """
        log = logger.bind(operation="request_airdrop")

        try:
            target = parse_address(address) if address is not None else self.signer.pubkey
        except TransferError as e:
            log.warning("operation_rejected", category=e.category.value, error=str(e))
            return SubmissionResult.failed(e.category, str(e))
        except Exception as e:
            log.error("airdrop_target_unavailable", error=str(e))
            return SubmissionResult.failed(
                FailureCategory.NETWORK,
                f"Failed to resolve airdrop address: {e}",
            )

        result = await self.faucet.request_airdrop(target)
        self._log_result(log, result, address=short_address(target))
        return result

    @staticmethod
    def _log_result(log, result: SubmissionResult, **context) -> None:
        if result.is_confirmed:
            log.info("operation_confirmed", signature=result.short_signature, **context)
        else:
            log.warning(
                "operation_failed",
                category=result.category.value,
                reason=result.reason,
                **context,
            )
