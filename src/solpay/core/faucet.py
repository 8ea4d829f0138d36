"""
Faucet Requester - requests test SOL from the cluster faucet.
"""

from typing import Optional

import structlog

from solders.pubkey import Pubkey

from solpay.config import TransferConfig, get_config
from solpay.core.address import short_address
from solpay.core.amount import sol_to_lamports
from solpay.core.errors import NetworkError
from solpay.core.result import FailureCategory, SubmissionResult
from solpay.core.submission import SubmissionCoordinator
from solpay.node.interface import NodeInterface

logger = structlog.get_logger(__name__)


class FaucetRequester:
    """One-shot airdrop followed by a confirmation wait."""

    def __init__(
        self,
        node: NodeInterface,
        config: Optional[TransferConfig] = None,
        coordinator: Optional[SubmissionCoordinator] = None,
    ):
        self.node = node
        self.config = config or get_config()
        self.coordinator = coordinator or SubmissionCoordinator(node, self.config)

    @property
    def lamports(self) -> int:
        """Fixed airdrop amount in lamports."""
        return sol_to_lamports(self.config.airdrop_sol)

    async def request_airdrop(self, address: Pubkey) -> SubmissionResult:
        """
        Request the configured amount of SOL for an address.

        Args:
            address: Wallet to fund

        Returns:
            CONFIRMED once the airdrop lands, FAILED(network) otherwise
        """
        logger.info(
            "requesting_airdrop",
            address=short_address(address),
            sol=self.config.airdrop_sol,
        )

        try:
            signature = await self.node.request_airdrop(address, self.lamports)
        except NetworkError as e:
            logger.warning("airdrop_failed", address=short_address(address), error=str(e))
            return SubmissionResult.failed(e.category, f"Airdrop failed: {e}")
        except Exception as e:
            logger.error("airdrop_error", address=short_address(address), error=str(e))
            return SubmissionResult.failed(FailureCategory.NETWORK, f"Airdrop failed: {e}")

        return await self.coordinator.confirm(signature)
