"""
Command-line interface for solpay.

Provides commands for airdrops, SOL transfers and token transfers.
"""

import argparse
import asyncio
import logging
import sys

import structlog

from solpay import __version__
from solpay.config import Cluster, TransferConfig, set_config
from solpay.core.result import SubmissionResult
from solpay.core.service import TransferService
from solpay.node.rpc import SolanaRpcAdapter
from solpay.tx.builder import TransferTransaction
from solpay.tx.signer import KeypairSigner


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--cluster",
        choices=[c.value for c in Cluster],
        default=None,
        help="Solana cluster (default: devnet)",
    )
    parser.add_argument(
        "--rpc-url",
        help="Custom JSON-RPC endpoint",
    )
    parser.add_argument(
        "--keypair",
        help="Path to a Solana CLI keypair file",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Sign without asking for approval",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Output logs in JSON format",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="solpay",
        description="Send SOL and SPL tokens from a local wallet",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Airdrop command
    airdrop_parser = subparsers.add_parser("airdrop", help="Request test SOL from the faucet")
    airdrop_parser.add_argument(
        "--address",
        help="Address to fund (default: the wallet)",
    )
    _add_common_arguments(airdrop_parser)

    # Send command
    send_parser = subparsers.add_parser("send", help="Send SOL")
    send_parser.add_argument("--to", required=True, help="Recipient address")
    send_parser.add_argument("--amount", required=True, help="Amount in SOL")
    _add_common_arguments(send_parser)

    # Send-token command
    token_parser = subparsers.add_parser("send-token", help="Send SPL tokens")
    token_parser.add_argument("--to", required=True, help="Recipient wallet address")
    token_parser.add_argument("--amount", required=True, help="Amount in token units")
    token_parser.add_argument(
        "--mint",
        help="Token mint (default: configured default_token_mint)",
    )
    _add_common_arguments(token_parser)

    return parser


def build_config(args: argparse.Namespace) -> TransferConfig:
    """Overlay command-line options on environment configuration."""
    overrides = {
        "log_level": args.log_level,
        "log_json": args.log_json,
    }
    if args.cluster:
        overrides["cluster"] = Cluster(args.cluster)
    if args.rpc_url:
        overrides["rpc_url"] = args.rpc_url
    if args.keypair:
        overrides["keypair_path"] = args.keypair

    return TransferConfig(**overrides)


def prompt_approval(transaction: TransferTransaction) -> bool:
    """Ask on the terminal before signing."""
    print(f"About to sign a transaction with {transaction.size} instruction(s):")
    for program_id in transaction.program_ids:
        print(f"  program {program_id}")
    answer = input("Approve? [y/N] ").strip().lower()
    return answer in ("y", "yes")


def print_result(result: SubmissionResult) -> None:
    """Print a result for the user."""
    if result.is_confirmed:
        print("Transaction successful!")
        print(f"  Signature: {result.signature}")
        print(f"  Explorer:  {result.explorer_url}")
    else:
        print(f"Transaction failed ({result.category.value}): {result.reason}")


async def run_command(args: argparse.Namespace) -> SubmissionResult:
    """Run a transfer command against the configured cluster."""
    config = build_config(args)
    set_config(config)

    node = SolanaRpcAdapter(config)
    signer = KeypairSigner(
        node,
        config,
        approve=None if args.yes else prompt_approval,
    )
    signer.load_from_config()

    service = TransferService(node, signer, config)

    try:
        if args.command == "airdrop":
            return await service.request_airdrop(args.address)
        if args.command == "send":
            return await service.send_native(args.to, args.amount)
        return await service.send_token(args.to, args.amount, args.mint)
    finally:
        await node.disconnect()


def main() -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Setup logging
    setup_logging(args.log_level, args.log_json)

    try:
        result = asyncio.run(run_command(args))
    except (ValueError, FileNotFoundError) as e:
        print(f"Wallet error: {e}")
        sys.exit(1)

    print_result(result)
    if not result.is_confirmed:
        sys.exit(1)


if __name__ == "__main__":
    main()
