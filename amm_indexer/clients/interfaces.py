"""
Interfaces for read-only contract accessors.

Every call may revert or time out; implementations never raise for such a
failure and return ``CallResult.failed()`` instead, so callers can tell an
unavailable value from a legitimately zero or empty one.
"""
from abc import ABC, abstractmethod
from typing import List

from ..types.results import CallResult


class PoolContractReader(ABC):
    """Interface for pool and vault contract reads."""

    @abstractmethod
    def get_pool_id(self, pool_address: str) -> CallResult[str]:
        """
        Get the vault pool id of a pool contract.

        Args:
            pool_address: Pool contract address

        Returns:
            32-byte pool id as lower-case hex
        """
        pass

    @abstractmethod
    def get_swap_fee(self, pool_address: str) -> CallResult[int]:
        """Raw swap fee percentage, 18-decimal fixed point."""
        pass

    @abstractmethod
    def get_owner(self, pool_address: str) -> CallResult[str]:
        pass

    @abstractmethod
    def get_normalized_weights(self, pool_address: str) -> CallResult[List[int]]:
        """Raw normalized weights in pool token order, 18-decimal fixed point."""
        pass

    @abstractmethod
    def get_amplification_parameter(self, pool_address: str) -> CallResult[int]:
        """
        Get the current amplification factor.

        Returns:
            The parameter value divided by its precision
        """
        pass

    @abstractmethod
    def get_pool_tokens(self, pool_id: str) -> CallResult[List[str]]:
        """
        Get the registered tokens of a pool from the vault.

        Args:
            pool_id: Vault pool id

        Returns:
            Token addresses in vault registration order
        """
        pass

    @abstractmethod
    def get_asset_manager(self, pool_id: str, token_address: str) -> CallResult[str]:
        pass


class TokenMetadataReader(ABC):
    """Interface for ERC-20 metadata reads."""

    @abstractmethod
    def get_name(self, token_address: str) -> CallResult[str]:
        pass

    @abstractmethod
    def get_symbol(self, token_address: str) -> CallResult[str]:
        pass

    @abstractmethod
    def get_decimals(self, token_address: str) -> CallResult[int]:
        pass
