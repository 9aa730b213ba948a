# amm_indexer/database/tables/snapshots.py
"""
Daily rollups of the live aggregates.

Every snapshot is keyed by ``ownerId-dayId`` and stores the start of its
day bucket in ``timestamp``.
"""

from decimal import Decimal

from sqlalchemy import Column, Integer, BigInteger, String, JSON

from ..base import DBEntity
from ..types import BigDecimalType


class VaultSnapshot(DBEntity):
    __tablename__ = 'vault_snapshots'

    vault_id = Column(String(64), nullable=False, index=True)
    timestamp = Column(Integer, nullable=False)
    pool_count = Column(Integer, nullable=False, default=0)
    total_liquidity = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_volume = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_fee = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_count = Column(BigInteger, nullable=False, default=0)


class PoolSnapshot(DBEntity):
    __tablename__ = 'pool_snapshots'

    pool_id = Column(String(66), nullable=False, index=True)
    timestamp = Column(Integer, nullable=False)
    amounts = Column(JSON, nullable=False, default=list)  # pool token balances in token list order
    total_shares = Column(BigDecimalType, nullable=False, default=Decimal(0))
    swap_volume = Column(BigDecimalType, nullable=False, default=Decimal(0))
    swap_fees = Column(BigDecimalType, nullable=False, default=Decimal(0))
    liquidity = Column(BigDecimalType, nullable=False, default=Decimal(0))
    swaps_count = Column(BigInteger, nullable=False, default=0)
    holders_count = Column(BigInteger, nullable=False, default=0)


class TokenSnapshot(DBEntity):
    __tablename__ = 'token_snapshots'

    token_id = Column(String(42), nullable=False, index=True)
    timestamp = Column(Integer, nullable=False)
    total_balance_notional = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_balance_usd = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_volume_notional = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_volume_usd = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_count = Column(BigInteger, nullable=False, default=0)


class TradePairSnapshot(DBEntity):
    __tablename__ = 'trade_pair_snapshots'

    pair_id = Column(String(85), nullable=False, index=True)
    timestamp = Column(Integer, nullable=False)
    total_swap_volume = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_fee = Column(BigDecimalType, nullable=False, default=Decimal(0))
