# amm_indexer/types/results.py

from typing import Any, Generic, Optional, TypeVar

from msgspec import Struct


T = TypeVar('T')


class CallResult(Struct, Generic[T]):
    """
    Outcome of a read-only external call.

    ``reverted`` distinguishes an unavailable value from a legitimately
    zero or empty one.
    """
    value: Optional[T] = None
    reverted: bool = False

    @classmethod
    def ok(cls, value: Any) -> 'CallResult':
        return cls(value=value, reverted=False)

    @classmethod
    def failed(cls) -> 'CallResult':
        return cls(value=None, reverted=True)

    def unwrap_or(self, default: T) -> T:
        return default if self.reverted else self.value
