# amm_indexer/database/tables/pool.py

from decimal import Decimal

from sqlalchemy import Column, Integer, BigInteger, String, Boolean, JSON, Enum, Index

from ..base import DBEntity
from ..types import BigDecimalType, EvmAddressType, EvmHashType
from ...types.pools import PoolType, PoolCapabilities, capabilities


class Pool(DBEntity):
    """
    One AMM pool, keyed by its 32-byte pool id.

    ``tokens_list`` is fixed at creation and defines the positional alignment
    of per-token amount arrays in balance-change events.
    """
    __tablename__ = 'pools'

    vault_id = Column(String(64), nullable=False)
    address = Column(EvmAddressType, nullable=False, index=True)
    pool_type = Column(Enum(PoolType, native_enum=False), nullable=True)
    pool_type_version = Column(Integer, nullable=False, default=1)
    factory = Column(EvmAddressType, nullable=True)
    owner = Column(EvmAddressType, nullable=True)
    name = Column(String(256), nullable=True)
    symbol = Column(String(64), nullable=True)
    specialization = Column(Integer, nullable=False, default=0)
    create_time = Column(Integer, nullable=True)
    tx = Column(EvmHashType, nullable=True)
    swap_enabled = Column(Boolean, nullable=False, default=True)

    swap_fee = Column(BigDecimalType, nullable=False, default=Decimal(0))
    amp = Column(BigInteger, nullable=True)
    total_weight = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_shares = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_liquidity = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_volume = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_fee = Column(BigDecimalType, nullable=False, default=Decimal(0))
    swaps_count = Column(BigInteger, nullable=False, default=0)
    holders_count = Column(BigInteger, nullable=False, default=0)

    tokens_list = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index('idx_pools_type', 'pool_type'),
    )

    @property
    def capabilities(self) -> PoolCapabilities:
        if self.pool_type is None:
            return PoolCapabilities()
        return capabilities(self.pool_type)

    def is_own_token(self, token_address: str) -> bool:
        return token_address.lower() == (self.address or "").lower()

    def __repr__(self) -> str:
        pool_type = self.pool_type.value if self.pool_type else None
        return f"<Pool(id={self.id}, type={pool_type}, tokens={len(self.tokens_list or [])})>"
