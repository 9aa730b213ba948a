# amm_indexer/types/new.py

from typing import NewType


EvmAddress = NewType('EvmAddress', str)
EvmHash = NewType('EvmHash', str)
PoolId = NewType('PoolId', str)
IntStr = NewType('IntStr', str)
EventId = NewType('EventId', str)
ErrorId = NewType('ErrorId', str)
