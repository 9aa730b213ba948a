# amm_indexer/clients/web3_reader.py

from typing import List

from web3 import Web3

from ..contracts import abis
from ..contracts.manager import ContractManager
from ..types.constants import DEFAULT_VAULT_ADDRESS
from ..types.results import CallResult
from .interfaces import PoolContractReader, TokenMetadataReader


class Web3ContractReader(PoolContractReader, TokenMetadataReader):
    """
    Pool, vault and token reads over a web3 HTTP provider.
    """

    def __init__(self, manager: ContractManager, vault_address: str = DEFAULT_VAULT_ADDRESS):
        self.manager = manager
        self.vault_address = vault_address.lower()

    @classmethod
    def from_endpoint(cls, endpoint_url: str, timeout: int = 10,
                      vault_address: str = DEFAULT_VAULT_ADDRESS) -> 'Web3ContractReader':
        w3 = Web3(Web3.HTTPProvider(endpoint_url, request_kwargs={"timeout": timeout}))
        return cls(ContractManager(w3), vault_address)

    # === Pool reads ===

    def get_pool_id(self, pool_address: str) -> CallResult[str]:
        result = self.manager.call(pool_address, "base_pool", abis.BASE_POOL_ABI, "getPoolId")
        if result.reverted:
            return result
        return CallResult.ok(Web3.to_hex(result.value).lower())

    def get_swap_fee(self, pool_address: str) -> CallResult[int]:
        return self.manager.call(pool_address, "base_pool", abis.BASE_POOL_ABI, "getSwapFeePercentage")

    def get_owner(self, pool_address: str) -> CallResult[str]:
        result = self.manager.call(pool_address, "base_pool", abis.BASE_POOL_ABI, "getOwner")
        if result.reverted:
            return result
        return CallResult.ok(result.value.lower())

    def get_normalized_weights(self, pool_address: str) -> CallResult[List[int]]:
        result = self.manager.call(pool_address, "weighted_pool", abis.WEIGHTED_POOL_ABI, "getNormalizedWeights")
        if result.reverted:
            return result
        return CallResult.ok(list(result.value))

    def get_amplification_parameter(self, pool_address: str) -> CallResult[int]:
        result = self.manager.call(pool_address, "stable_pool", abis.STABLE_POOL_ABI, "getAmplificationParameter")
        if result.reverted:
            return result
        value, _is_updating, precision = result.value
        if not precision:
            return CallResult.failed()
        return CallResult.ok(value // precision)

    def get_pool_tokens(self, pool_id: str) -> CallResult[List[str]]:
        result = self.manager.call(self.vault_address, "vault", abis.VAULT_ABI, "getPoolTokens",
                                   Web3.to_bytes(hexstr=pool_id))
        if result.reverted:
            return result
        tokens, _balances, _last_change_block = result.value
        return CallResult.ok([token.lower() for token in tokens])

    def get_asset_manager(self, pool_id: str, token_address: str) -> CallResult[str]:
        result = self.manager.call(self.vault_address, "vault", abis.VAULT_ABI, "getPoolTokenInfo",
                                   Web3.to_bytes(hexstr=pool_id),
                                   Web3.to_checksum_address(token_address))
        if result.reverted:
            return result
        return CallResult.ok(result.value[3].lower())

    # === Token reads ===

    def get_name(self, token_address: str) -> CallResult[str]:
        return self.manager.call(token_address, "erc20", abis.ERC20_ABI, "name")

    def get_symbol(self, token_address: str) -> CallResult[str]:
        return self.manager.call(token_address, "erc20", abis.ERC20_ABI, "symbol")

    def get_decimals(self, token_address: str) -> CallResult[int]:
        return self.manager.call(token_address, "erc20", abis.ERC20_ABI, "decimals")
