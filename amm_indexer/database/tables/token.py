# amm_indexer/database/tables/token.py

from decimal import Decimal

from sqlalchemy import Column, Integer, BigInteger, String

from ..base import DBEntity
from ..types import BigDecimalType, EvmAddressType


class Token(DBEntity):
    """
    Global token metadata and cross-pool totals, keyed by token address.

    Created lazily on first reference; decimals are fixed at creation.
    """
    __tablename__ = 'tokens'

    address = Column(EvmAddressType, nullable=False, unique=True)
    symbol = Column(String(64), nullable=False, default="")
    name = Column(String(256), nullable=False, default="")
    decimals = Column(Integer, nullable=False, default=0)
    pool_id = Column(String(66), nullable=True)  # set when the token is a pool's liquidity token

    total_balance_notional = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_balance_usd = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_volume_notional = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_volume_usd = Column(BigDecimalType, nullable=False, default=Decimal(0))
    total_swap_count = Column(BigInteger, nullable=False, default=0)

    latest_price_id = Column(String(256), nullable=True)
    latest_usd_price = Column(BigDecimalType, nullable=True)


class PoolToken(DBEntity):
    """
    One token's position inside one pool, keyed by ``poolId-tokenAddress``.

    After any asset-management operation ``balance == cash_balance + managed_balance``.
    """
    __tablename__ = 'pool_tokens'

    pool_id = Column(String(66), nullable=False, index=True)
    address = Column(EvmAddressType, nullable=False, index=True)
    token_id = Column(String(256), nullable=False)
    asset_manager = Column(EvmAddressType, nullable=True)
    symbol = Column(String(64), nullable=False, default="")
    name = Column(String(256), nullable=False, default="")
    decimals = Column(Integer, nullable=False, default=0)

    balance = Column(BigDecimalType, nullable=False, default=Decimal(0))
    cash_balance = Column(BigDecimalType, nullable=False, default=Decimal(0))
    managed_balance = Column(BigDecimalType, nullable=False, default=Decimal(0))
    weight = Column(BigDecimalType, nullable=True)
    price_rate = Column(BigDecimalType, nullable=False, default=Decimal(1))
