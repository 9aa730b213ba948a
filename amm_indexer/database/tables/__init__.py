# amm_indexer/database/tables/__init__.py

from .vault import Vault
from .pool import Pool
from .token import Token, PoolToken
from .holders import User, PoolShare, UserInternalBalance
from .events import Swap, JoinExit, ManagementOperation, SwapFeeUpdate, AmpUpdate
from .prices import TokenPrice, LatestPrice, PoolHistoricalLiquidity
from .trade_pair import TradePair
from .snapshots import VaultSnapshot, PoolSnapshot, TokenSnapshot, TradePairSnapshot

__all__ = [
    'Vault',
    'Pool',
    'Token',
    'PoolToken',
    'User',
    'PoolShare',
    'UserInternalBalance',
    'Swap',
    'JoinExit',
    'ManagementOperation',
    'SwapFeeUpdate',
    'AmpUpdate',
    'TokenPrice',
    'LatestPrice',
    'PoolHistoricalLiquidity',
    'TradePair',
    'VaultSnapshot',
    'PoolSnapshot',
    'TokenSnapshot',
    'TradePairSnapshot',
]
