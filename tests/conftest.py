"""
Pytest configuration and shared fixtures for the test suite.
"""

from typing import Dict, List, Optional, Set, Tuple

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from solpay.config import Cluster, Commitment, TransferConfig
from solpay.core.address import TOKEN_PROGRAM_ID
from solpay.node.interface import (
    AccountInfo,
    HoldingAccount,
    NodeConnectionError,
    NodeInterface,
    TokenAmount,
    TransactionSubmitError,
)
from solpay.tx.instructions import get_associated_token_address


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> TransferConfig:
    """Create a test configuration."""
    return TransferConfig(
        cluster=Cluster.DEVNET,
        commitment=Commitment.CONFIRMED,
        default_token_mint="Gh9ZwEmdLJ8DscKNTkTqPbNwLNNBjuSzaG9Vp2KGtKJr",
        airdrop_sol=2,
        confirmation_timeout_seconds=1,
        confirmation_poll_interval_seconds=0.01,
        log_level="DEBUG",
    )


# ============================================================================
# Mock Node Interface
# ============================================================================

class MockNodeInterface(NodeInterface):
    """In-memory node for testing."""

    def __init__(self):
        self.accounts: Set[Pubkey] = set()
        self.token_accounts: Dict[Tuple[Pubkey, Pubkey], List[HoldingAccount]] = {}
        self.balances: Dict[Pubkey, TokenAmount] = {}
        self.submitted_txs: List[Transaction] = []
        self.airdrops: List[Tuple[Pubkey, int]] = []
        self.confirmation_requests: List[Tuple[str, Commitment]] = []
        self.confirm_result = True
        self.fail_queries = False
        self.fail_submission = False
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    def _check(self) -> None:
        if self.fail_queries:
            raise NodeConnectionError("RPC request failed: connection refused")

    async def get_account_info(self, address: Pubkey) -> Optional[AccountInfo]:
        self._check()
        if address not in self.accounts:
            return None
        return AccountInfo(lamports=2_039_280, owner=TOKEN_PROGRAM_ID, data=b"")

    async def get_token_accounts_by_owner(
        self,
        owner: Pubkey,
        mint: Pubkey,
    ) -> List[HoldingAccount]:
        self._check()
        return list(self.token_accounts.get((owner, mint), []))

    async def get_token_account_balance(self, address: Pubkey) -> TokenAmount:
        self._check()
        return self.balances[address]

    async def get_latest_blockhash(self) -> Hash:
        self._check()
        return Hash.default()

    async def send_raw_transaction(self, raw_tx: bytes) -> str:
        if self.fail_submission:
            raise TransactionSubmitError("Transaction submission failed: blockhash not found")
        tx = Transaction.from_bytes(raw_tx)
        self.submitted_txs.append(tx)
        return str(tx.signatures[0])

    async def request_airdrop(self, address: Pubkey, lamports: int) -> str:
        self._check()
        self.airdrops.append((address, lamports))
        return "2" * 88

    async def await_transaction_confirmation(
        self,
        signature: str,
        commitment: Commitment = Commitment.CONFIRMED,
    ) -> bool:
        self.confirmation_requests.append((signature, commitment))
        return self.confirm_result

    def add_token_holder(self, owner: Pubkey, mint: Pubkey, raw_amount: int, decimals: int) -> Pubkey:
        """Give an owner an associated token account for a mint."""
        address = get_associated_token_address(owner, mint)
        self.accounts.add(address)
        self.token_accounts.setdefault((owner, mint), []).append(
            HoldingAccount(address=address, owner=owner, mint=mint)
        )
        self.balances[address] = TokenAmount(raw_amount=raw_amount, decimals=decimals)
        return address


@pytest.fixture
def mock_node() -> MockNodeInterface:
    """Create a mock node interface."""
    return MockNodeInterface()


# ============================================================================
# Test Data
# ============================================================================

@pytest.fixture
def mint() -> Pubkey:
    return Pubkey.from_string("Gh9ZwEmdLJ8DscKNTkTqPbNwLNNBjuSzaG9Vp2KGtKJr")


@pytest.fixture
def recipient() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def test_signer(mock_node, test_config):
    """Create a test signer with a random key."""
    from solpay.tx.signer import generate_test_key
    return generate_test_key(mock_node, test_config)


@pytest.fixture
def funded_signer(mock_node, test_signer, mint):
    """Test signer holding 10.000000 tokens of the test mint."""
    mock_node.add_token_holder(test_signer.pubkey, mint, raw_amount=10_000_000, decimals=6)
    return test_signer


# ============================================================================
# Helpers
# ============================================================================

def decode_lamports(instruction) -> int:
    """Lamports of a system transfer instruction (u32 tag, u64 amount)."""
    assert int.from_bytes(bytes(instruction.data)[:4], "little") == 2
    return int.from_bytes(bytes(instruction.data)[4:12], "little")


def decode_token_amount(instruction) -> int:
    """Amount of an SPL token transfer instruction (u8 tag, u64 amount)."""
    data = bytes(instruction.data)
    assert data[0] == 3
    return int.from_bytes(data[1:9], "little")
