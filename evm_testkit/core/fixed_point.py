"""
Fixed-point and integer helpers for pair tests

Covers the number formats a V2-style pair uses:
- UQ112x112 price accumulators
- 18-decimal token amounts
- Plain integer coercion of test inputs
"""

from decimal import Decimal
from typing import Any, Tuple

from eth_utils import big_endian_to_int, is_0x_prefixed
from web3 import Web3


Q112 = 2 ** 112

# Liquidity locked forever by the first mint of a pair
MINIMUM_LIQUIDITY = 10 ** 3


def encode_price(reserve0: int, reserve1: int) -> Tuple[int, int]:
    """
    Encode reserves as UQ112x112 prices

    Args:
        reserve0: Pair reserve of token0
        reserve1: Pair reserve of token1

    Returns:
        Tuple of (price0, price1) where price0 is token1 per token0

    Raises:
        ZeroDivisionError: If either reserve is zero
    """
    return (
        reserve1 * Q112 // reserve0,
        reserve0 * Q112 // reserve1
    )


def expand_to_18_decimals(value: Any) -> int:
    """Scale a plain number to 18-decimal token units"""
    return Web3.to_wei(value, 'ether')


def bigint(value: Any) -> int:
    """
    Coerce a numeric-like value to int

    Accepts ints, integral floats, Decimals, decimal or 0x-prefixed hex
    strings (optionally negative) and big-endian bytes.
    """
    if isinstance(value, (bytes, bytearray)):
        return big_endian_to_int(bytes(value))

    if isinstance(value, str):
        if value.startswith('-'):
            return -bigint(value[1:])
        if is_0x_prefixed(value):
            return int(value, 16)
        return int(value)

    if isinstance(value, (float, Decimal)) and value != int(value):
        raise ValueError(f"Value is not an integer: {value}")

    return int(value)
