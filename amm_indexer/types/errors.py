# amm_indexer/types/errors.py

from typing import Optional, Dict, Any
import hashlib

import msgspec
from msgspec import Struct

from .new import ErrorId


class IndexerError(Exception):
    """Base class for engine errors"""


class ConfigurationError(IndexerError):
    """Configuration could not be loaded or validated"""


class DataIntegrityError(IndexerError):
    """
    Event data and stored state have desynchronized.

    Raised when a known pool references a pool token that does not exist or
    when per-token arrays do not align with the pool's token list. The event
    is aborted and its mutations rolled back.
    """

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.context = context


class ProcessingError(Struct):
    stage: str  # "resolve", "external_call", "validation"
    error_type: str  # "pool_not_found", "pool_token_not_found", "call_failed"
    message: str
    error_id: Optional[ErrorId] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        if not self.error_id:
            self.error_id = self.generate_error_id()

    def generate_error_id(self) -> ErrorId:
        content_struct = {
            "stage": self.stage,
            "error_type": self.error_type,
            "message": self.message,
            "context": self.context or {},
        }
        content_bytes = msgspec.msgpack.encode(content_struct)
        hash_hex = hashlib.sha256(content_bytes).hexdigest()

        return ErrorId(hash_hex[:12])


def create_not_found_error(
    error_type: str,
    message: str,
    **context
) -> ProcessingError:
    return ProcessingError(
        stage="resolve",
        error_type=error_type,
        message=message,
        context={k: v for k, v in context.items() if v is not None} or None
    )


def create_call_error(
    error_type: str,
    message: str,
    **context
) -> ProcessingError:
    return ProcessingError(
        stage="external_call",
        error_type=error_type,
        message=message,
        context={k: v for k, v in context.items() if v is not None} or None
    )
