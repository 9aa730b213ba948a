# amm_indexer/contracts/manager.py

from typing import Any, Dict, List, Tuple

from web3 import Web3
from web3.contract import Contract

from ..core.logging import LoggingMixin
from ..types.results import CallResult


class ContractManager(LoggingMixin):
    """
    Manages Web3 contract instances with caching.

    Contracts are cached per (address, ABI name); calls never raise and
    report failures as ``CallResult.failed()``.
    """

    def __init__(self, w3: Web3):
        self.w3 = w3
        self.contract_cache: Dict[Tuple[str, str], Contract] = {}

    def get_contract(self, address: str, abi_name: str, abi: List[Dict[str, Any]]) -> Contract:
        key = (address.lower(), abi_name)

        if key not in self.contract_cache:
            self.contract_cache[key] = self.w3.eth.contract(
                address=Web3.to_checksum_address(address),
                abi=abi,
            )
        return self.contract_cache[key]

    def call(self, address: str, abi_name: str, abi: List[Dict[str, Any]],
             function_name: str, *args) -> CallResult:
        try:
            contract = self.get_contract(address, abi_name, abi)
            func = getattr(contract.functions, function_name)
            return CallResult.ok(func(*args).call())
        except Exception as e:
            self.log_debug("Contract call failed",
                           address=address,
                           function=function_name,
                           error=str(e),
                           exception_type=type(e).__name__)
            return CallResult.failed()
