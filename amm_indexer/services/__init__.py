# amm_indexer/services/__init__.py

from .entities import EntityResolver
from .snapshots import SnapshotAggregator
from .tokens import TokenAggregates
from .pricing import PricingOracle
from .ledger import BalanceLedger
from .pools import PoolRegistry
from .swaps import SwapProcessor

__all__ = [
    'EntityResolver',
    'SnapshotAggregator',
    'TokenAggregates',
    'PricingOracle',
    'BalanceLedger',
    'PoolRegistry',
    'SwapProcessor',
]
