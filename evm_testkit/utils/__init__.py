"""
Utility functions and helpers for evm-testkit

- Dev chain RPC helpers and client
- Logging configuration
- Contract ABIs
"""

from .helpers import setup_logging, Timer

from .blockchain import (
    DevChainClient,
    connect_to_network,
    mine_block
)

from .abis import ERC20_PERMIT_ABI

__all__ = [
    # Helper functions
    "setup_logging",
    "Timer",

    # Blockchain utilities
    "DevChainClient",
    "connect_to_network",
    "mine_block",

    "ERC20_PERMIT_ABI"
]
