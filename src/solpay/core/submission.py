"""
Submission Coordinator - signs, submits and confirms transactions.

Hands a built transaction to the wallet, waits once for the configured
confirmation level and reports a SubmissionResult. There is no retry:
the caller re-triggers the operation if it wants another attempt.
"""

from typing import Optional

import structlog

from solpay.config import TransferConfig, get_config
from solpay.core.errors import NetworkError, TransferError
from solpay.core.result import FailureCategory, SubmissionResult
from solpay.node.interface import NodeInterface
from solpay.tx.builder import TransferTransaction
from solpay.tx.signer import SigningChannel

logger = structlog.get_logger(__name__)


class SubmissionCoordinator:
    """Drives a transaction from signing to confirmation."""

    def __init__(
        self,
        node: NodeInterface,
        config: Optional[TransferConfig] = None,
    ):
        """
        Initialize the coordinator.

        Args:
            node: Node interface used for the confirmation wait
            config: Transfer configuration
        """
        self.node = node
        self.config = config or get_config()

    async def submit(
        self,
        transaction: TransferTransaction,
        signer: SigningChannel,
    ) -> SubmissionResult:
        """
        Sign, submit and confirm a transaction.

        Args:
            transaction: Unsigned transaction
            signer: Connected wallet

        Returns:
            CONFIRMED with signature and explorer link, or FAILED with a category
        """
        try:
            signature = await signer.sign_and_submit(transaction)
        except TransferError as e:
            logger.warning("submission_failed", category=e.category.value, error=str(e))
            return SubmissionResult.failed(e.category, str(e))
        except Exception as e:
            logger.error("submission_error", error=str(e))
            return SubmissionResult.failed(
                FailureCategory.NETWORK,
                f"Failed to send transaction: {e}",
            )

        return await self.confirm(signature)

    async def confirm(self, signature: str) -> SubmissionResult:
        """
        Wait for a submitted signature at the configured commitment.

        Args:
            signature: Signature returned by the submission

        Returns:
            CONFIRMED, or FAILED(network) if the wait fails or times out
        """
        commitment = self.config.commitment

        try:
            confirmed = await self.node.await_transaction_confirmation(signature, commitment)
        except NetworkError as e:
            logger.warning("confirmation_failed", signature=signature, error=str(e))
            return SubmissionResult.failed(
                FailureCategory.NETWORK,
                f"Confirmation failed: {e}",
            )
        except Exception as e:
            logger.error("confirmation_error", signature=signature, error=str(e))
            return SubmissionResult.failed(
                FailureCategory.NETWORK,
                f"Confirmation failed: {e}",
            )

        if not confirmed:
            logger.warning("transaction_not_confirmed", signature=signature)
            return SubmissionResult.failed(
                FailureCategory.NETWORK,
                f"Transaction {signature} was not confirmed",
            )

        logger.info("transaction_confirmed", signature=signature, commitment=commitment.value)
        return SubmissionResult.confirmed(
            signature,
            explorer_url=self.config.explorer_tx_url(signature),
        )
