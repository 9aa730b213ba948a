# amm_indexer/database/tables/events.py

from sqlalchemy import Column, Integer, BigInteger, String, JSON, Enum

from ..base import DBEventEntity
from ..types import BigDecimalType, EvmAddressType, EvmHashType
from ...types.enums import JoinExitType, ManagementOperationType


class Swap(DBEventEntity):
    __tablename__ = 'swaps'

    pool_id = Column(String(66), nullable=False, index=True)
    caller = Column(EvmAddressType, nullable=True)
    user_address = Column(EvmAddressType, nullable=True, index=True)
    token_in = Column(EvmAddressType, nullable=False)
    token_in_sym = Column(String(64), nullable=False, default="")
    token_amount_in = Column(BigDecimalType, nullable=False)
    token_out = Column(EvmAddressType, nullable=False)
    token_out_sym = Column(String(64), nullable=False, default="")
    token_amount_out = Column(BigDecimalType, nullable=False)
    value_usd = Column(BigDecimalType, nullable=False)
    fee_usd = Column(BigDecimalType, nullable=False)
    block_number = Column(BigInteger, nullable=False)
    tx = Column(EvmHashType, nullable=False, index=True)


class JoinExit(DBEventEntity):
    __tablename__ = 'join_exits'

    type = Column(Enum(JoinExitType, native_enum=False), nullable=False)
    pool_id = Column(String(66), nullable=False, index=True)
    sender = Column(EvmAddressType, nullable=False)
    user_address = Column(EvmAddressType, nullable=False, index=True)
    amounts = Column(JSON, nullable=False)  # decimal strings, aligned with the pool token list
    value_usd = Column(BigDecimalType, nullable=False)
    tx = Column(EvmHashType, nullable=False, index=True)


class ManagementOperation(DBEventEntity):
    __tablename__ = 'management_operations'

    type = Column(Enum(ManagementOperationType, native_enum=False), nullable=False)
    pool_token_id = Column(String(256), nullable=False, index=True)
    cash_delta = Column(BigDecimalType, nullable=False)
    managed_delta = Column(BigDecimalType, nullable=False)


class SwapFeeUpdate(DBEventEntity):
    __tablename__ = 'swap_fee_updates'

    pool_id = Column(String(66), nullable=False, index=True)
    start_timestamp = Column(Integer, nullable=False)
    end_timestamp = Column(Integer, nullable=False)
    start_swap_fee_percentage = Column(BigDecimalType, nullable=False)
    end_swap_fee_percentage = Column(BigDecimalType, nullable=False)


class AmpUpdate(DBEventEntity):
    __tablename__ = 'amp_updates'

    pool_id = Column(String(66), nullable=False, index=True)
    start_timestamp = Column(Integer, nullable=False)
    end_timestamp = Column(Integer, nullable=False)
    start_amp = Column(BigDecimalType, nullable=False)
    end_amp = Column(BigDecimalType, nullable=False)
