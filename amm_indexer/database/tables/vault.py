# amm_indexer/database/tables/vault.py

from decimal import Decimal

from sqlalchemy import Column, Integer, BigInteger

from ..base import DBEntity
from ..types import BigDecimalType


class Vault(DBEntity):
    """
    Process-wide protocol singleton.

    Exactly one row exists; it is created by the entity resolver on first use
    and never recreated. Swap counters only grow, total liquidity is a
    valuation and may fall.
    """
    __tablename__ = 'vault'

    pool_count = Column(Integer, nullable=False, default=0)
    total_liquidity = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_volume = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_fee = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_count = Column(BigInteger, nullable=False, default=0)
