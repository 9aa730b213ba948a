# amm_indexer/database/tables/trade_pair.py

from decimal import Decimal

from sqlalchemy import Column

from ..base import DBEntity
from ..types import BigDecimalType, EvmAddressType


class TradePair(DBEntity):
    """Cross-pool trading volume for an unordered token pair, keyed by the sorted ``token0-token1``"""
    __tablename__ = 'trade_pairs'

    token0 = Column(EvmAddressType, nullable=False)
    token1 = Column(EvmAddressType, nullable=False)
    total_swap_volume = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_fee = Column(BigDecimalType, nullable=False, default=Decimal(0))
