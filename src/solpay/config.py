"""
Configuration management for solpay.

Supports configuration via environment variables and .env files.
"""

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Cluster(str, Enum):
    """Solana cluster names."""
    MAINNET = "mainnet-beta"
    DEVNET = "devnet"
    TESTNET = "testnet"
    LOCALNET = "localnet"


class Commitment(str, Enum):
    """Confirmation levels, weakest first."""
    PROCESSED = "processed"
    CONFIRMED = "confirmed"
    FINALIZED = "finalized"

    @property
    def rank(self) -> int:
        return list(Commitment).index(self)


class TransferConfig(BaseSettings):
    """
    Configuration settings for the transfer pipeline.

    All settings can be configured via environment variables with the SOLPAY_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SOLPAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Network settings
    cluster: Cluster = Field(
        default=Cluster.DEVNET,
        description="Solana cluster to connect to"
    )
    rpc_url: Optional[str] = Field(
        default=None,
        description="Custom JSON-RPC endpoint (optional)"
    )
    commitment: Commitment = Field(
        default=Commitment.CONFIRMED,
        description="Confirmation level awaited after submission"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout for a single RPC call"
    )
    confirmation_timeout_seconds: Optional[float] = Field(
        default=60.0,
        description="Give up waiting for confirmation after this long (None waits forever)"
    )
    confirmation_poll_interval_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Delay between signature status polls"
    )

    # Token settings
    default_token_mint: str = Field(
        default="Gh9ZwEmdLJ8DscKNTkTqPbNwLNNBjuSzaG9Vp2KGtKJr",
        description="Mint used by token transfers when none is given"
    )

    # Faucet settings
    airdrop_sol: float = Field(
        default=2.0,
        gt=0,
        description="Amount of SOL requested from the faucet"
    )

    # Explorer settings
    explorer_base_url: str = Field(
        default="https://solscan.io",
        description="Block explorer used for transaction links"
    )

    # Wallet settings
    keypair_path: Optional[str] = Field(
        default=None,
        description="Path to a Solana CLI JSON keypair file"
    )
    keypair_base58: Optional[str] = Field(
        default=None,
        description="Base58-encoded secret key (alternative to file path)"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )

    @property
    def rpc_endpoint(self) -> str:
        """Get the JSON-RPC URL for the configured cluster."""
        if self.rpc_url:
            return self.rpc_url

        cluster_urls = {
            Cluster.MAINNET: "https://api.mainnet-beta.solana.com",
            Cluster.DEVNET: "https://api.devnet.solana.com",
            Cluster.TESTNET: "https://api.testnet.solana.com",
            Cluster.LOCALNET: "http://127.0.0.1:8899",
        }
        return cluster_urls[self.cluster]

    def explorer_tx_url(self, signature: str) -> str:
        """Build a display-only explorer link for a transaction signature."""
        url = f"{self.explorer_base_url.rstrip('/')}/tx/{signature}"
        if self.cluster == Cluster.MAINNET:
            return url
        if self.cluster == Cluster.LOCALNET:
            return f"{url}?cluster=custom"
        return f"{url}?cluster={self.cluster.value}"


# Global config instance
_config: Optional[TransferConfig] = None


def get_config() -> TransferConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = TransferConfig()
    return _config


def set_config(config: TransferConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
