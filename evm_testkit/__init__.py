"""
evm-testkit: Helpers for constant-product pair and permit token tests

This package provides:
- EIP-712 domain separators and permit digests
- UQ112x112 price encoding and 18-decimal amount expansion
- Dev chain block mining at a chosen timestamp

Components:
- core: Hashing and fixed-point helpers
- utils: Blockchain interaction and logging
- config: Dev chain network definitions
"""

__version__ = "0.1.0"

from .core.eip712 import (
    PERMIT_TYPEHASH,
    DOMAIN_TYPEHASH,
    ApprovalIntent,
    get_domain_separator,
    build_permit_digest,
    get_approval_digest
)
from .core.fixed_point import (
    Q112,
    MINIMUM_LIQUIDITY,
    encode_price,
    expand_to_18_decimals,
    bigint
)
from .utils.blockchain import DevChainClient, connect_to_network, mine_block
from .utils.helpers import setup_logging

__all__ = [
    "__version__",

    # EIP-712
    "PERMIT_TYPEHASH",
    "DOMAIN_TYPEHASH",
    "ApprovalIntent",
    "get_domain_separator",
    "build_permit_digest",
    "get_approval_digest",

    # Fixed point
    "Q112",
    "MINIMUM_LIQUIDITY",
    "encode_price",
    "expand_to_18_decimals",
    "bigint",

    # Blockchain
    "DevChainClient",
    "connect_to_network",
    "mine_block",
    "setup_logging"
]

import logging


def _setup_default_logging():
    """Setup default logging configuration"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger('web3').setLevel(logging.WARNING)
    logging.getLogger('eth_account').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)


_setup_default_logging()
