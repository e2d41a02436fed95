"""
EIP-712 helpers for ERC20 permit signatures

This module builds the hashes a permit-enabled token checks on chain:
- Domain separator for a token name, address and chain id
- Permit struct hash for an approval intent
- Final signing digest (0x19 0x01 || domainSeparator || structHash)
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Union

from eth_abi import encode
from eth_abi.packed import encode_packed
from hexbytes import HexBytes
from web3 import Web3

logger = logging.getLogger(__name__)


PERMIT_TYPEHASH = Web3.keccak(
    text="Permit(address owner,address spender,uint256 value,uint256 nonce,uint256 deadline)"
)

DOMAIN_TYPEHASH = Web3.keccak(
    text="EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)

DOMAIN_VERSION = "1"


@dataclass(frozen=True)
class ApprovalIntent:
    """Owner allowing spender to move value tokens"""
    owner: str
    spender: str
    value: int


ApprovalLike = Union[ApprovalIntent, Mapping[str, Any]]


def _as_intent(approve: ApprovalLike) -> ApprovalIntent:
    if isinstance(approve, ApprovalIntent):
        return approve
    return ApprovalIntent(
        owner=approve['owner'],
        spender=approve['spender'],
        value=approve['value']
    )


def get_domain_separator(name: str, token_address: str, chain_id: int) -> HexBytes:
    """
    Compute the EIP-712 domain separator of a token

    Args:
        name: Token name as returned by name()
        token_address: Verifying contract address
        chain_id: Chain id the token is deployed on

    Returns:
        32-byte domain separator
    """
    return Web3.keccak(
        encode(
            ['bytes32', 'bytes32', 'bytes32', 'uint256', 'address'],
            [
                DOMAIN_TYPEHASH,
                Web3.keccak(text=name),
                Web3.keccak(text=DOMAIN_VERSION),
                chain_id,
                Web3.to_checksum_address(token_address)
            ]
        )
    )


def get_permit_struct_hash(approve: ApprovalLike, nonce: int, deadline: int) -> HexBytes:
    """Hash of the Permit struct for an approval intent"""
    intent = _as_intent(approve)
    return Web3.keccak(
        encode(
            ['bytes32', 'address', 'address', 'uint256', 'uint256', 'uint256'],
            [
                PERMIT_TYPEHASH,
                Web3.to_checksum_address(intent.owner),
                Web3.to_checksum_address(intent.spender),
                intent.value,
                nonce,
                deadline
            ]
        )
    )


def build_permit_digest(name: str,
                        token_address: str,
                        approve: ApprovalLike,
                        nonce: int,
                        deadline: int,
                        chain_id: int) -> HexBytes:
    """
    Compute the permit signing digest when the token name is already known

    Args:
        name: Token name
        token_address: Token contract address
        approve: Owner, spender and value of the approval
        nonce: Owner's current permit nonce
        deadline: Unix timestamp after which the permit expires
        chain_id: Chain id

    Returns:
        32-byte digest to sign
    """
    domain_separator = get_domain_separator(name, token_address, chain_id)
    struct_hash = get_permit_struct_hash(approve, nonce, deadline)

    return Web3.keccak(
        encode_packed(
            ['bytes1', 'bytes1', 'bytes32', 'bytes32'],
            [b'\x19', b'\x01', domain_separator, struct_hash]
        )
    )


async def get_approval_digest(token: Any,
                              approve: ApprovalLike,
                              nonce: int,
                              deadline: int,
                              chain_id: int) -> HexBytes:
    """
    Fetch the token name and compute the permit signing digest

    Works with both Web3 and AsyncWeb3 contract objects. Errors raised
    while reading name() are not caught.

    Args:
        token: Contract object exposing name() and address
        approve: Owner, spender and value of the approval
        nonce: Owner's current permit nonce
        deadline: Unix timestamp after which the permit expires
        chain_id: Chain id

    Returns:
        32-byte digest to sign
    """
    name = token.functions.name().call()
    if inspect.isawaitable(name):
        name = await name

    logger.debug(f"Building permit digest for {name} at {token.address}")

    return build_permit_digest(name, token.address, approve, nonce, deadline, chain_id)
