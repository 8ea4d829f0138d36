#!/usr/bin/env python3
"""
Check SOL and token balances of a wallet.
"""

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from solpay.config import Cluster, TransferConfig
from solpay.core.address import parse_address
from solpay.core.amount import lamports_to_sol, to_display_units
from solpay.node.rpc import SolanaRpcAdapter


async def check_balance(address: str, cluster: str, mint: str = None):
    """Print the SOL balance and, if held, the token balance of an address."""
    owner = parse_address(address)

    config = TransferConfig(cluster=Cluster(cluster))
    mint_key = parse_address(mint or config.default_token_mint, "mint")

    node = SolanaRpcAdapter(config)
    await node.connect()

    try:
        account = await node.get_account_info(owner)
        lamports = account.lamports if account else 0

        print(f"\nAddress: {owner}")
        print(f"   SOL: {lamports_to_sol(lamports)} ({lamports:,} lamports)")

        holdings = await node.get_token_accounts_by_owner(owner, mint_key)
        if not holdings:
            print(f"   No token account for mint {mint_key}")
            return {"address": str(owner), "lamports": lamports, "token_accounts": 0}

        for holding in holdings:
            balance = await node.get_token_account_balance(holding.address)
            display = to_display_units(balance.raw_amount, balance.decimals)
            print(f"   Token account {holding.address}: {display} ({balance.raw_amount:,} base units)")

        if lamports == 0:
            print(f"\nNo SOL found. Fund the address with: solpay airdrop --address {owner}")

        return {
            "address": str(owner),
            "lamports": lamports,
            "token_accounts": len(holdings),
        }

    finally:
        await node.disconnect()


def main():
    parser = argparse.ArgumentParser(description="Check wallet balance")
    parser.add_argument("address", help="Wallet address")
    parser.add_argument(
        "--cluster", "-c",
        choices=[c.value for c in Cluster],
        default="devnet",
        help="Solana cluster (default: devnet)"
    )
    parser.add_argument(
        "--mint", "-m",
        help="Token mint (default: configured default_token_mint)"
    )

    args = parser.parse_args()
    asyncio.run(check_balance(args.address, args.cluster, args.mint))


if __name__ == "__main__":
    main()
