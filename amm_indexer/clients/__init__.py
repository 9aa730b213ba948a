# amm_indexer/clients/__init__.py

from .interfaces import PoolContractReader, TokenMetadataReader
from .web3_reader import Web3ContractReader

__all__ = [
    'PoolContractReader',
    'TokenMetadataReader',
    'Web3ContractReader',
]
