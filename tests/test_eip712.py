"""
EIP-712 helper tests
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data
from web3 import Web3

from evm_testkit.core.eip712 import (
    DOMAIN_TYPEHASH,
    PERMIT_TYPEHASH,
    ApprovalIntent,
    build_permit_digest,
    get_approval_digest,
    get_domain_separator,
    get_permit_struct_hash
)

from .constants import SPENDER, TOKEN_ADDRESS, TOKEN_NAME

OTHER_ADDRESS = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
MAX_UINT256 = 2 ** 256 - 1


def typed_permit(owner, spender, value, nonce, deadline, chain_id, name=TOKEN_NAME):
    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "version", "type": "string"},
                {"name": "chainId", "type": "uint256"},
                {"name": "verifyingContract", "type": "address"}
            ],
            "Permit": [
                {"name": "owner", "type": "address"},
                {"name": "spender", "type": "address"},
                {"name": "value", "type": "uint256"},
                {"name": "nonce", "type": "uint256"},
                {"name": "deadline", "type": "uint256"}
            ]
        },
        "primaryType": "Permit",
        "domain": {
            "name": name,
            "version": "1",
            "chainId": chain_id,
            "verifyingContract": TOKEN_ADDRESS
        },
        "message": {
            "owner": owner,
            "spender": spender,
            "value": value,
            "nonce": nonce,
            "deadline": deadline
        }
    }


class TestTypehashes:

    def test_permit_typehash(self):
        assert PERMIT_TYPEHASH == bytes.fromhex(
            "6e71edae12b1b97f4d1f60370fef10105fa2faae0126114a169c64845d6126c9"
        )

    def test_domain_typehash(self):
        assert DOMAIN_TYPEHASH == bytes.fromhex(
            "8b73c3c69bb8fe3d512ecc4cf759cc79239f7b179b0ffacaa9a75d522b39400f"
        )


class TestDomainSeparator:

    def test_deterministic(self):
        first = get_domain_separator(TOKEN_NAME, TOKEN_ADDRESS, 1)
        second = get_domain_separator(TOKEN_NAME, TOKEN_ADDRESS, 1)
        assert first == second
        assert len(first) == 32

    @pytest.mark.parametrize("name,address,chain_id", [
        ("Other Token", TOKEN_ADDRESS, 1),
        (TOKEN_NAME, OTHER_ADDRESS, 1),
        (TOKEN_NAME, TOKEN_ADDRESS, 31337),
    ])
    def test_any_input_change_changes_separator(self, name, address, chain_id):
        base = get_domain_separator(TOKEN_NAME, TOKEN_ADDRESS, 1)
        assert get_domain_separator(name, address, chain_id) != base

    def test_address_case_does_not_matter(self):
        assert get_domain_separator(TOKEN_NAME, TOKEN_ADDRESS.lower(), 1) == \
            get_domain_separator(TOKEN_NAME, TOKEN_ADDRESS, 1)

    def test_matches_typed_data_domain_hash(self, owner):
        signable = encode_typed_data(full_message=typed_permit(owner.address, SPENDER, 1, 0, 1, 1))
        assert get_domain_separator(TOKEN_NAME, TOKEN_ADDRESS, 1) == signable.header


class TestPermitDigest:

    def test_struct_hash_matches_typed_data(self, owner):
        approve = ApprovalIntent(owner=owner.address, spender=SPENDER, value=10 ** 18)
        signable = encode_typed_data(
            full_message=typed_permit(owner.address, SPENDER, 10 ** 18, 0, MAX_UINT256, 1)
        )
        assert get_permit_struct_hash(approve, 0, MAX_UINT256) == signable.body

    def test_digest_matches_typed_data(self, owner):
        approve = ApprovalIntent(owner=owner.address, spender=SPENDER, value=10 ** 18)
        signable = encode_typed_data(
            full_message=typed_permit(owner.address, SPENDER, 10 ** 18, 0, MAX_UINT256, 1)
        )
        expected = Web3.keccak(b"\x19" + signable.version + signable.header + signable.body)

        digest = build_permit_digest(TOKEN_NAME, TOKEN_ADDRESS, approve, 0, MAX_UINT256, 1)
        assert digest == expected

    def test_mapping_and_dataclass_agree(self, owner):
        approve = {"owner": owner.address, "spender": SPENDER, "value": 123}
        intent = ApprovalIntent(**approve)
        assert build_permit_digest(TOKEN_NAME, TOKEN_ADDRESS, approve, 5, 100, 1) == \
            build_permit_digest(TOKEN_NAME, TOKEN_ADDRESS, intent, 5, 100, 1)

    def test_nonce_changes_digest(self, owner):
        approve = ApprovalIntent(owner=owner.address, spender=SPENDER, value=123)
        assert build_permit_digest(TOKEN_NAME, TOKEN_ADDRESS, approve, 0, 100, 1) != \
            build_permit_digest(TOKEN_NAME, TOKEN_ADDRESS, approve, 1, 100, 1)


class TestApprovalDigest:

    def test_sync_contract(self, sync_token, owner):
        approve = ApprovalIntent(owner=owner.address, spender=SPENDER, value=10 ** 18)
        digest = asyncio.run(get_approval_digest(sync_token, approve, 0, MAX_UINT256, 1))

        assert digest == build_permit_digest(TOKEN_NAME, TOKEN_ADDRESS, approve, 0, MAX_UINT256, 1)
        sync_token.functions.name.return_value.call.assert_called_once_with()

    def test_async_contract(self, async_token, owner):
        approve = ApprovalIntent(owner=owner.address, spender=SPENDER, value=10 ** 18)
        digest = asyncio.run(get_approval_digest(async_token, approve, 0, MAX_UINT256, 1))

        assert digest == build_permit_digest(TOKEN_NAME, TOKEN_ADDRESS, approve, 0, MAX_UINT256, 1)
        async_token.functions.name.return_value.call.assert_awaited_once()

    def test_signature_recovers_owner(self, sync_token, owner):
        approve = ApprovalIntent(owner=owner.address, spender=SPENDER, value=10 ** 18)
        message = typed_permit(owner.address, SPENDER, 10 ** 18, 0, MAX_UINT256, 1)
        signable = encode_typed_data(full_message=message)
        signed = Account.sign_message(signable, owner.key)

        digest = asyncio.run(get_approval_digest(sync_token, approve, 0, MAX_UINT256, 1))

        assert signed.message_hash == digest
        assert Account.recover_message(signable, signature=signed.signature) == owner.address

    def test_name_failure_propagates(self, async_token, owner):
        async_token.functions.name.return_value.call = AsyncMock(side_effect=ConnectionError("node down"))
        approve = ApprovalIntent(owner=owner.address, spender=SPENDER, value=1)

        with pytest.raises(ConnectionError, match="node down"):
            asyncio.run(get_approval_digest(async_token, approve, 0, 1, 1))
