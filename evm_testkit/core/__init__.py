"""
Core hashing and number-format helpers

- eip712: Domain separator and permit digest construction
- fixed_point: UQ112x112 prices, 18-decimal amounts, integer coercion
"""

from .eip712 import (
    PERMIT_TYPEHASH,
    DOMAIN_TYPEHASH,
    DOMAIN_VERSION,
    ApprovalIntent,
    get_domain_separator,
    get_permit_struct_hash,
    build_permit_digest,
    get_approval_digest
)
from .fixed_point import Q112, MINIMUM_LIQUIDITY, encode_price, expand_to_18_decimals, bigint

__all__ = [
    "PERMIT_TYPEHASH",
    "DOMAIN_TYPEHASH",
    "DOMAIN_VERSION",
    "ApprovalIntent",
    "get_domain_separator",
    "get_permit_struct_hash",
    "build_permit_digest",
    "get_approval_digest",
    "Q112",
    "MINIMUM_LIQUIDITY",
    "encode_price",
    "expand_to_18_decimals",
    "bigint"
]
