"""
Test suite for configuration.
"""

import pytest
from pydantic import ValidationError

from solpay.config import Cluster, Commitment, TransferConfig, get_config, set_config


class TestTransferConfig:
    """Tests for settings and derived values."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("SOLPAY_CLUSTER", raising=False)
        config = TransferConfig(_env_file=None)

        assert config.cluster == Cluster.DEVNET
        assert config.commitment == Commitment.CONFIRMED
        assert config.default_token_mint == "Gh9ZwEmdLJ8DscKNTkTqPbNwLNNBjuSzaG9Vp2KGtKJr"
        assert config.airdrop_sol == 2
        assert config.rpc_endpoint == "https://api.devnet.solana.com"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SOLPAY_CLUSTER", "testnet")
        monkeypatch.setenv("SOLPAY_DEFAULT_TOKEN_MINT", "So11111111111111111111111111111111111111112")

        config = TransferConfig(_env_file=None)

        assert config.cluster == Cluster.TESTNET
        assert config.default_token_mint == "So11111111111111111111111111111111111111112"

    def test_custom_rpc_url(self):
        config = TransferConfig(_env_file=None, rpc_url="http://localhost:8899")

        assert config.rpc_endpoint == "http://localhost:8899"

    @pytest.mark.parametrize("cluster,suffix", [
        (Cluster.DEVNET, "?cluster=devnet"),
        (Cluster.TESTNET, "?cluster=testnet"),
        (Cluster.LOCALNET, "?cluster=custom"),
        (Cluster.MAINNET, ""),
    ])
    def test_explorer_url(self, cluster, suffix):
        config = TransferConfig(_env_file=None, cluster=cluster)

        assert config.explorer_tx_url("abc") == f"https://solscan.io/tx/abc{suffix}"

    def test_invalid_airdrop_amount(self):
        with pytest.raises(ValidationError):
            TransferConfig(_env_file=None, airdrop_sol=0)

    def test_commitment_ordering(self):
        assert Commitment.PROCESSED.rank < Commitment.CONFIRMED.rank < Commitment.FINALIZED.rank

    def test_global_config(self):
        config = TransferConfig(_env_file=None, cluster=Cluster.LOCALNET)
        set_config(config)
        try:
            assert get_config() is config
        finally:
            set_config(None)
