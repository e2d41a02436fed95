"""
Blockchain interaction utilities for evm-testkit

Provides the dev-chain RPC calls tests need and a small Web3 client
wrapper around them.
"""

import inspect
import logging
from typing import Any, Dict, List, Mapping, Union

from hexbytes import HexBytes
from web3 import AsyncWeb3, Web3
from web3.contract import Contract
from web3.exceptions import Web3RPCError

from ..core.eip712 import ApprovalLike, get_approval_digest
from .abis import ERC20_PERMIT_ABI
from .helpers import Timer

logger = logging.getLogger(__name__)


def _resolve_provider(provider: Any) -> Any:
    if isinstance(provider, (Web3, AsyncWeb3)):
        return provider.provider
    return provider


async def mine_block(provider: Any, timestamp: int) -> Any:
    """
    Mine one block on a dev chain at the given timestamp

    The node bumps the committed block's timestamp by one, so the
    request asks for timestamp - 1.

    Args:
        provider: Web3 provider (sync or async), or a Web3 instance
        timestamp: Target block timestamp

    Returns:
        The RPC result

    Raises:
        Web3RPCError: If the node answers with an error
    """
    provider = _resolve_provider(provider)
    params = [timestamp - 1]

    logger.debug(f"evm_mine {params}")

    response = provider.make_request('evm_mine', params)
    if inspect.isawaitable(response):
        response = await response

    if response.get('error'):
        raise Web3RPCError(str(response['error']), rpc_response=response)

    return response.get('result')


class DevChainClient:
    """Web3 client for contract tests on a local dev chain"""

    def __init__(self,
                 rpc_url: str,
                 chain_id: int,
                 timeout: int = 30):
        """
        Initialize dev chain client

        Args:
            rpc_url: RPC endpoint URL
            chain_id: Chain id used when building EIP-712 digests
            timeout: Request timeout in seconds
        """
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.timeout = timeout

        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={'timeout': timeout}))

        self.is_connected = False

        logger.info(f"Initialized dev chain client: {rpc_url}")

    def connect(self) -> bool:
        """
        Check the node answers and record the connection state

        Returns:
            True if the node returned a block number
        """
        try:
            with Timer("Dev chain connection"):
                latest_block = self.w3.eth.block_number

            self.is_connected = True
            logger.info(f"Connected to {self.rpc_url} at block {latest_block}")
            return True

        except Exception as e:
            logger.error(f"Dev chain connection failed: {e}")
            self.is_connected = False
            return False

    def get_chain_id(self) -> int:
        """Chain id reported by the node"""
        return self.w3.eth.chain_id

    def get_block_timestamp(self, block: Union[int, str] = 'latest') -> int:
        """Timestamp of a block"""
        return self.w3.eth.get_block(block)['timestamp']

    async def mine_block(self, timestamp: int) -> Any:
        """Mine one block at timestamp on this client's node"""
        return await mine_block(self.w3.provider, timestamp)

    def get_token(self, address: str, abi: List[Dict] = None) -> Contract:
        """
        Get permit token contract instance

        Args:
            address: Token address
            abi: Contract ABI, defaults to the ERC20 permit ABI

        Returns:
            Web3 Contract instance
        """
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=abi or ERC20_PERMIT_ABI
        )

    def get_permit_nonce(self, token: Contract, owner: str) -> int:
        """Current permit nonce of owner"""
        return token.functions.nonces(Web3.to_checksum_address(owner)).call()

    async def get_approval_digest(self,
                                  token: Contract,
                                  approve: ApprovalLike,
                                  nonce: int,
                                  deadline: int) -> HexBytes:
        """Permit digest for token on this client's chain"""
        return await get_approval_digest(token, approve, nonce, deadline, self.chain_id)


def connect_to_network(network_config: Any) -> DevChainClient:
    """
    Create dev chain client from network configuration

    Args:
        network_config: NetworkConfig or mapping with rpc_url and chain_id

    Returns:
        Configured DevChainClient
    """
    if not isinstance(network_config, Mapping):
        network_config = vars(network_config)

    return DevChainClient(
        rpc_url=network_config['rpc_url'],
        chain_id=network_config['chain_id'],
        timeout=network_config.get('timeout', 30)
    )
