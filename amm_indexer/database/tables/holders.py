# amm_indexer/database/tables/holders.py

from decimal import Decimal

from sqlalchemy import Column, String

from ..base import DBEntity
from ..types import BigDecimalType, EvmAddressType


class User(DBEntity):
    """A distinct holder or trader address; never mutated after creation"""
    __tablename__ = 'users'


class PoolShare(DBEntity):
    """Liquidity-token balance of one holder in one pool, keyed by ``poolAddress-holder``"""
    __tablename__ = 'pool_shares'

    pool_id = Column(String(66), nullable=False, index=True)
    user_address = Column(EvmAddressType, nullable=False, index=True)
    balance = Column(BigDecimalType, nullable=False, default=Decimal(0))


class UserInternalBalance(DBEntity):
    """Vault-internal token balance of one user, keyed by ``user ++ token``"""
    __tablename__ = 'user_internal_balances'

    user_address = Column(EvmAddressType, nullable=False, index=True)
    token = Column(EvmAddressType, nullable=False)
    balance = Column(BigDecimalType, nullable=False, default=Decimal(0))
