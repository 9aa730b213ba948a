# amm_indexer/database/tables/prices.py

from sqlalchemy import Column, BigInteger, String

from ..base import DBEntity, DBEventEntity
from ..types import BigDecimalType, EvmAddressType


class TokenPrice(DBEventEntity):
    """
    One observed spot price of ``asset`` in units of ``pricing_asset``.

    Keyed by ``poolId-asset-pricingAsset-block``; a later sample in the same
    block for the same key overwrites the values.
    """
    __tablename__ = 'token_prices'

    pool_id = Column(String(66), nullable=False, index=True)
    asset = Column(EvmAddressType, nullable=False, index=True)
    pricing_asset = Column(EvmAddressType, nullable=False)
    amount = Column(BigDecimalType, nullable=False)
    price = Column(BigDecimalType, nullable=False)
    block = Column(BigInteger, nullable=False)


class LatestPrice(DBEntity):
    """Most recent price of ``asset`` against one pricing asset, keyed by ``asset-pricingAsset``"""
    __tablename__ = 'latest_prices'

    asset = Column(EvmAddressType, nullable=False, index=True)
    pricing_asset = Column(EvmAddressType, nullable=False)
    pool_id = Column(String(66), nullable=False)
    price = Column(BigDecimalType, nullable=False)
    block = Column(BigInteger, nullable=False)


class PoolHistoricalLiquidity(DBEntity):
    __tablename__ = 'pool_historical_liquidities'

    pool_id = Column(String(66), nullable=False, index=True)
    pricing_asset = Column(EvmAddressType, nullable=False)
    pool_total_shares = Column(BigDecimalType, nullable=False)
    pool_liquidity = Column(BigDecimalType, nullable=False)
    pool_share_value = Column(BigDecimalType, nullable=False)
    block = Column(BigInteger, nullable=False)
