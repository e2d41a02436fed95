#!/usr/bin/env python3
"""
Permit Flow Example

Signs a permit for a deployed permit token on a local dev chain and
moves the chain clock past its deadline.

Usage:
    python examples/permit_flow.py <token_address> [network]
"""

import asyncio
import sys
from pathlib import Path

from eth_account import Account

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from evm_testkit import ApprovalIntent, connect_to_network, expand_to_18_decimals, setup_logging
from evm_testkit.config import get_network_config, load_environment

# Anvil / Hardhat default account 0 (DO NOT USE OUTSIDE A DEV CHAIN)
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
SPENDER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


async def run_permit_flow(token_address: str, network_name: str = None) -> bool:
    """Sign a permit digest and mine past its deadline"""
    load_environment()
    client = connect_to_network(get_network_config(network_name))

    if not client.connect():
        print("Dev chain not reachable")
        return False

    owner = Account.from_key(DEV_PRIVATE_KEY)
    token = client.get_token(token_address)

    nonce = client.get_permit_nonce(token, owner.address)
    deadline = client.get_block_timestamp() + 3600
    approve = ApprovalIntent(owner=owner.address, spender=SPENDER, value=expand_to_18_decimals(10))

    digest = await client.get_approval_digest(token, approve, nonce, deadline)
    signed = Account.unsafe_sign_hash(digest, DEV_PRIVATE_KEY)

    print(f"Digest:           {digest.to_0x_hex()}")
    print(f"Domain separator: 0x{token.functions.DOMAIN_SEPARATOR().call().hex()}")
    print(f"v={signed.v} r={hex(signed.r)} s={hex(signed.s)}")

    await client.mine_block(deadline + 1)
    print(f"Mined block at {client.get_block_timestamp()} (deadline {deadline})")

    return True


def main():
    """Main entry point"""
    if len(sys.argv) < 2:
        print(__doc__)
        return 1

    setup_logging("INFO", structured=False)

    network_name = sys.argv[2] if len(sys.argv) > 2 else None
    try:
        success = asyncio.run(run_permit_flow(sys.argv[1], network_name))
        return 0 if success else 1
    except Exception as e:
        print(f"Failed: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
