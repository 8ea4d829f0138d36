"""
Solana JSON-RPC adapter for node integration.

Provides blockchain access over the JSON-RPC 2.0 API exposed by Solana validators.
"""

import asyncio
import base64
import itertools
from typing import Any, List, Optional

import httpx
import structlog

from solders.hash import Hash
from solders.pubkey import Pubkey

from solpay.config import Commitment, TransferConfig, get_config
from solpay.core.address import short_address
from solpay.node.interface import (
    AccountInfo,
    HoldingAccount,
    NodeConnectionError,
    NodeInterface,
    TokenAmount,
    TransactionSubmitError,
)

logger = structlog.get_logger(__name__)


class SolanaRpcAdapter(NodeInterface):
    """
    Solana JSON-RPC adapter.

    Implements the NodeInterface using a validator's HTTP JSON-RPC endpoint.
    """

    def __init__(
        self,
        config: Optional[TransferConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the RPC adapter.

        Args:
            config: Transfer configuration. Uses global config if not provided.
            transport: Custom httpx transport (used by tests)
        """
        self.config = config or get_config()
        self.endpoint = self.config.rpc_endpoint
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._ids = itertools.count(1)

    async def connect(self) -> None:
        """Establish connection (create HTTP client)."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
            timeout=self.config.request_timeout_seconds,
            transport=self._transport,
        )

        # Test connection
        try:
            health = await self._call("getHealth")
        except NodeConnectionError:
            await self.disconnect()
            raise

        if health != "ok":
            await self.disconnect()
            raise NodeConnectionError(f"RPC health check failed: {health}")
        logger.info("rpc_connected", endpoint=self.endpoint)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("rpc_disconnected")

    async def _call(self, method: str, params: Optional[list] = None) -> Any:
        """Make a JSON-RPC call and return its result."""
        if not self._client:
            await self.connect()

        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }

        try:
            response = await self._client.post(self.endpoint, json=payload)
        except httpx.RequestError as e:
            logger.error("rpc_request_error", method=method, error=str(e))
            raise NodeConnectionError(f"RPC request failed: {e}")

        if response.status_code != 200:
            logger.error(
                "rpc_request_failed",
                method=method,
                status=response.status_code,
                error=response.text,
            )
            raise NodeConnectionError(f"RPC error {response.status_code}: {response.text}")

        try:
            body = response.json()
        except ValueError:
            raise NodeConnectionError(f"RPC returned invalid JSON for {method}")

        if not isinstance(body, dict):
            logger.error("rpc_malformed_response", method=method)
            raise NodeConnectionError(f"RPC returned a malformed response for {method}")

        error = body.get("error")
        if error:
            logger.error(
                "rpc_error_response",
                method=method,
                code=error.get("code"),
                error=error.get("message"),
            )
            if method == "sendTransaction":
                raise TransactionSubmitError(
                    f"Transaction submission failed: {error.get('message')}",
                    error_code=error.get("code"),
                )
            raise NodeConnectionError(f"RPC {method} failed: {error.get('message')}")

        return body.get("result")

    async def get_account_info(self, address: Pubkey) -> Optional[AccountInfo]:
        """Get account information."""
        result = await self._call(
            "getAccountInfo",
            [
                str(address),
                {"encoding": "base64", "commitment": self.config.commitment.value},
            ],
        )

        value = result.get("value") if result else None
        if value is None:
            logger.debug("account_not_found", address=short_address(address))
            return None

        data = value.get("data") or ["", "base64"]
        return AccountInfo(
            lamports=int(value["lamports"]),
            owner=Pubkey.from_string(value["owner"]),
            data=base64.b64decode(data[0]),
            executable=bool(value.get("executable", False)),
        )

    async def get_token_accounts_by_owner(
        self,
        owner: Pubkey,
        mint: Pubkey,
    ) -> List[HoldingAccount]:
        """Get token accounts held by an owner for a mint."""
        result = await self._call(
            "getTokenAccountsByOwner",
            [
                str(owner),
                {"mint": str(mint)},
                {"encoding": "base64", "commitment": self.config.commitment.value},
            ],
        )

        accounts = [
            HoldingAccount(
                address=Pubkey.from_string(item["pubkey"]),
                owner=owner,
                mint=mint,
            )
            for item in (result or {}).get("value", [])
        ]

        logger.debug(
            "token_accounts_fetched",
            owner=short_address(owner),
            mint=short_address(mint),
            count=len(accounts),
        )
        return accounts

    async def get_token_account_balance(self, address: Pubkey) -> TokenAmount:
        """Get the balance of a token account."""
        result = await self._call(
            "getTokenAccountBalance",
            [str(address), {"commitment": self.config.commitment.value}],
        )

        value = (result or {}).get("value")
        if not value:
            raise NodeConnectionError(f"No balance returned for {address}")

        return TokenAmount(
            raw_amount=int(value["amount"]),
            decimals=int(value["decimals"]),
        )

    async def get_latest_blockhash(self) -> Hash:
        """Get a recent blockhash."""
        result = await self._call(
            "getLatestBlockhash",
            [{"commitment": self.config.commitment.value}],
        )
        return Hash.from_string(result["value"]["blockhash"])

    async def send_raw_transaction(self, raw_tx: bytes) -> str:
        """Submit a signed transaction."""
        signature = await self._call(
            "sendTransaction",
            [
                base64.b64encode(raw_tx).decode("ascii"),
                {
                    "encoding": "base64",
                    "preflightCommitment": self.config.commitment.value,
                },
            ],
        )
        logger.info("tx_submitted", signature=signature)
        return signature

    async def request_airdrop(self, address: Pubkey, lamports: int) -> str:
        """Request funds from the cluster faucet."""
        signature = await self._call("requestAirdrop", [str(address), lamports])
        logger.info(
            "airdrop_requested",
            address=short_address(address),
            lamports=lamports,
            signature=signature,
        )
        return signature

    async def get_signature_status(self, signature: str) -> Optional[dict]:
        """Get the status of a single signature, or None if unknown."""
        result = await self._call(
            "getSignatureStatuses",
            [[signature], {"searchTransactionHistory": False}],
        )
        statuses = (result or {}).get("value") or [None]
        return statuses[0]

    async def await_transaction_confirmation(
        self,
        signature: str,
        commitment: Commitment = Commitment.CONFIRMED,
    ) -> bool:
        """Wait for transaction confirmation."""
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        timeout = self.config.confirmation_timeout_seconds

        while True:
            status = await self.get_signature_status(signature)

            if status is not None:
                if status.get("err") is not None:
                    logger.warning("tx_failed", signature=signature, error=status["err"])
                    return False

                reached = status.get("confirmationStatus")
                try:
                    reached_rank = Commitment(reached).rank if reached else -1
                except ValueError:
                    raise NodeConnectionError(f"Unknown confirmation status: {reached}")

                if reached_rank >= commitment.rank:
                    logger.info("tx_confirmed", signature=signature, commitment=reached)
                    return True

            if timeout is not None and loop.time() - start_time > timeout:
                logger.warning("tx_confirmation_timeout", signature=signature)
                return False

            await asyncio.sleep(self.config.confirmation_poll_interval_seconds)
