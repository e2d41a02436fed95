from unittest.mock import AsyncMock, Mock

import pytest
from eth_account import Account

from .constants import OWNER_KEY, TOKEN_ADDRESS, TOKEN_NAME


@pytest.fixture
def owner():
    return Account.from_key(OWNER_KEY)


@pytest.fixture
def sync_token():
    """Contract double shaped like a Web3 contract"""
    token = Mock()
    token.address = TOKEN_ADDRESS
    token.functions.name.return_value.call.return_value = TOKEN_NAME
    return token


@pytest.fixture
def async_token():
    """Contract double shaped like an AsyncWeb3 contract"""
    token = Mock()
    token.address = TOKEN_ADDRESS
    token.functions.name.return_value.call = AsyncMock(return_value=TOKEN_NAME)
    return token


@pytest.fixture
def sync_provider():
    provider = Mock()
    provider.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": "0x0"}
    return provider


@pytest.fixture
def async_provider():
    provider = Mock()
    provider.make_request = AsyncMock(return_value={"jsonrpc": "2.0", "id": 1, "result": "0x0"})
    return provider
