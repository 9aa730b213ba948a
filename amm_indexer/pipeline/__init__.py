# amm_indexer/pipeline/__init__.py

from .processor import EventProcessor
from .reader import read_events, decode_event

__all__ = ['EventProcessor', 'read_events', 'decode_event']
