# amm_indexer/contracts/__init__.py

from .manager import ContractManager
from . import abis

__all__ = ['ContractManager', 'abis']
