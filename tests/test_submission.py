"""
Test suite for submission, confirmation and faucet requests.
"""

import pytest
from solders.pubkey import Pubkey

from solpay.config import Commitment
from solpay.core.errors import UserCancelledError
from solpay.core.faucet import FaucetRequester
from solpay.core.result import FailureCategory, ResultStatus
from solpay.core.submission import SubmissionCoordinator
from solpay.tx.builder import TransactionBuilder, TransferTransaction
from solpay.tx.signer import SigningChannel


class CancellingSigner(SigningChannel):
    """Wallet whose user always declines."""

    def __init__(self):
        self._pubkey = Pubkey.new_unique()
        self.requests = 0

    @property
    def pubkey(self) -> Pubkey:
        return self._pubkey

    async def sign_and_submit(self, transaction: TransferTransaction) -> str:
        self.requests += 1
        raise UserCancelledError("User rejected the request")


class BrokenSigner(CancellingSigner):
    """Wallet that fails with an unexpected error."""

    async def sign_and_submit(self, transaction: TransferTransaction) -> str:
        raise RuntimeError("wallet disconnected")


# ============================================================================
# Test Submission Coordinator
# ============================================================================

class TestSubmissionCoordinator:
    """Tests for signing, submission and confirmation."""

    @pytest.mark.asyncio
    async def test_confirmed(self, mock_node, test_signer, test_config, recipient):
        tx = TransactionBuilder(mock_node).build_native_transfer(test_signer.pubkey, recipient, 1)
        coordinator = SubmissionCoordinator(mock_node, test_config)

        result = await coordinator.submit(tx, test_signer)

        assert result.status == ResultStatus.CONFIRMED
        assert result.is_confirmed
        assert result.signature == str(mock_node.submitted_txs[0].signatures[0])
        assert result.explorer_url == (
            f"https://solscan.io/tx/{result.signature}?cluster=devnet"
        )
        assert mock_node.confirmation_requests == [(result.signature, Commitment.CONFIRMED)]

    @pytest.mark.asyncio
    async def test_user_cancellation(self, mock_node, test_config):
        signer = CancellingSigner()
        tx = TransactionBuilder(mock_node).build_native_transfer(signer.pubkey, signer.pubkey, 1)

        result = await SubmissionCoordinator(mock_node, test_config).submit(tx, signer)

        assert result.status == ResultStatus.FAILED
        assert result.category == FailureCategory.CANCELLED
        assert signer.requests == 1
        assert mock_node.submitted_txs == []
        assert mock_node.confirmation_requests == []

    @pytest.mark.asyncio
    async def test_confirmation_failure(self, mock_node, test_signer, test_config, recipient):
        mock_node.confirm_result = False
        tx = TransactionBuilder(mock_node).build_native_transfer(test_signer.pubkey, recipient, 1)

        result = await SubmissionCoordinator(mock_node, test_config).submit(tx, test_signer)

        assert result.status == ResultStatus.FAILED
        assert result.category == FailureCategory.NETWORK
        assert len(mock_node.submitted_txs) == 1
        assert len(mock_node.confirmation_requests) == 1  # no retry

    @pytest.mark.asyncio
    async def test_submission_failure(self, mock_node, test_signer, test_config, recipient):
        mock_node.fail_submission = True
        tx = TransactionBuilder(mock_node).build_native_transfer(test_signer.pubkey, recipient, 1)

        result = await SubmissionCoordinator(mock_node, test_config).submit(tx, test_signer)

        assert result.category == FailureCategory.NETWORK
        assert "blockhash not found" in result.reason
        assert mock_node.confirmation_requests == []

    @pytest.mark.asyncio
    async def test_unexpected_wallet_error(self, mock_node, test_config):
        signer = BrokenSigner()
        tx = TransactionBuilder(mock_node).build_native_transfer(signer.pubkey, signer.pubkey, 1)

        result = await SubmissionCoordinator(mock_node, test_config).submit(tx, signer)

        assert result.category == FailureCategory.NETWORK
        assert "wallet disconnected" in result.reason

    @pytest.mark.asyncio
    async def test_unexpected_confirmation_error(self, mock_node, test_signer, test_config, recipient):
        async def broken_wait(signature, commitment):
            raise ValueError("unexpected status payload")

        mock_node.await_transaction_confirmation = broken_wait
        tx = TransactionBuilder(mock_node).build_native_transfer(test_signer.pubkey, recipient, 1)

        result = await SubmissionCoordinator(mock_node, test_config).submit(tx, test_signer)

        assert result.status == ResultStatus.FAILED
        assert result.category == FailureCategory.NETWORK
        assert "unexpected status payload" in result.reason

    @pytest.mark.asyncio
    async def test_foreign_fee_payer(self, mock_node, test_signer, test_config, recipient):
        tx = TransactionBuilder(mock_node).build_native_transfer(Pubkey.new_unique(), recipient, 1)

        result = await SubmissionCoordinator(mock_node, test_config).submit(tx, test_signer)

        assert result.category == FailureCategory.PRECONDITION
        assert mock_node.submitted_txs == []


# ============================================================================
# Test Faucet Requester
# ============================================================================

class TestFaucetRequester:
    """Tests for airdrop requests."""

    @pytest.mark.asyncio
    async def test_airdrop_confirmed(self, mock_node, test_config):
        address = Pubkey.new_unique()
        faucet = FaucetRequester(mock_node, test_config)

        result = await faucet.request_airdrop(address)

        assert result.is_confirmed
        assert mock_node.airdrops == [(address, 2_000_000_000)]
        assert mock_node.confirmation_requests == [(result.signature, Commitment.CONFIRMED)]

    @pytest.mark.asyncio
    async def test_airdrop_amount_from_config(self, mock_node, test_config):
        config = test_config.model_copy(update={"airdrop_sol": 0.5})
        faucet = FaucetRequester(mock_node, config)

        await faucet.request_airdrop(Pubkey.new_unique())

        assert mock_node.airdrops[0][1] == 500_000_000

    @pytest.mark.asyncio
    async def test_airdrop_request_failure(self, mock_node, test_config):
        mock_node.fail_queries = True

        result = await FaucetRequester(mock_node, test_config).request_airdrop(Pubkey.new_unique())

        assert result.status == ResultStatus.FAILED
        assert result.category == FailureCategory.NETWORK
        assert mock_node.confirmation_requests == []

    @pytest.mark.asyncio
    async def test_airdrop_not_confirmed(self, mock_node, test_config):
        mock_node.confirm_result = False

        result = await FaucetRequester(mock_node, test_config).request_airdrop(Pubkey.new_unique())

        assert result.category == FailureCategory.NETWORK

    @pytest.mark.asyncio
    async def test_unexpected_faucet_error(self, mock_node, test_config):
        async def broken_airdrop(address, lamports):
            raise AttributeError("'list' object has no attribute 'get'")

        mock_node.request_airdrop = broken_airdrop

        result = await FaucetRequester(mock_node, test_config).request_airdrop(Pubkey.new_unique())

        assert result.status == ResultStatus.FAILED
        assert result.category == FailureCategory.NETWORK
        assert mock_node.confirmation_requests == []
