"""
Node Integration Layer.

Provides abstracted access to Solana account data, faucet requests and
transaction submission.
"""

from solpay.node.interface import NodeInterface
from solpay.node.rpc import SolanaRpcAdapter

__all__ = [
    "NodeInterface",
    "SolanaRpcAdapter",
]
