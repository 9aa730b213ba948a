# amm_indexer/types/events.py

from typing import List, Optional, Union

import msgspec
from msgspec import Struct, field

from .new import EvmAddress, EvmHash, EventId, IntStr, PoolId


class EventRecord(Struct, kw_only=True, tag_field="event"):
    address: EvmAddress  # emitting contract
    block_number: int
    timestamp: int
    tx_hash: EvmHash
    log_index: int
    tx_from: Optional[EvmAddress] = None

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    @property
    def event_id(self) -> EventId:
        return EventId(f"{self.tx_hash}{self.log_index}")

    def to_dict(self):
        return msgspec.structs.asdict(self)


# Factory events

class PoolCreated(EventRecord, tag="PoolCreated"):
    pool: EvmAddress


# Pool contract events

class Transfer(EventRecord, tag="Transfer"):
    from_: EvmAddress = field(name="from")
    to: EvmAddress
    value: IntStr


class SwapFeePercentageChanged(EventRecord, tag="SwapFeePercentageChanged"):
    swap_fee_percentage: IntStr


class AmpUpdateStarted(EventRecord, tag="AmpUpdateStarted"):
    start_value: IntStr
    end_value: IntStr
    start_time: int
    end_time: int


class AmpUpdateStopped(EventRecord, tag="AmpUpdateStopped"):
    current_value: IntStr


# Vault events

class PoolBalanceChanged(EventRecord, tag="PoolBalanceChanged"):
    pool_id: PoolId
    liquidity_provider: EvmAddress
    deltas: List[IntStr]
    protocol_fee_amounts: List[IntStr] = []


class PoolBalanceManaged(EventRecord, tag="PoolBalanceManaged"):
    pool_id: PoolId
    asset_manager: EvmAddress
    token: EvmAddress
    cash_delta: IntStr
    managed_delta: IntStr


class InternalBalanceChanged(EventRecord, tag="InternalBalanceChanged"):
    user: EvmAddress
    token: EvmAddress
    delta: IntStr


class Swap(EventRecord, tag="Swap"):
    pool_id: PoolId
    token_in: EvmAddress
    token_out: EvmAddress
    amount_in: IntStr
    amount_out: IntStr


EventUnion = Union[
    PoolCreated,
    Transfer,
    SwapFeePercentageChanged,
    AmpUpdateStarted,
    AmpUpdateStopped,
    PoolBalanceChanged,
    PoolBalanceManaged,
    InternalBalanceChanged,
    Swap,
]


def normalize_event(event: EventRecord) -> EventRecord:
    """Lower-case every address/hash field so composite keys stay collision-free."""
    updates = {}
    for name in event.__struct_fields__:
        value = getattr(event, name)
        if isinstance(value, str) and value.startswith("0x"):
            updates[name] = value.lower()
    return msgspec.structs.replace(event, **updates) if updates else event
