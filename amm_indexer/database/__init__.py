# amm_indexer/database/__init__.py

from .base import ModelBase, DBEntity, DBEventEntity
from .connection import DatabaseManager
from .store import EntityStore
from .tables import *  # noqa: F401,F403
from .tables import __all__ as _table_names

__all__ = [
    'ModelBase',
    'DBEntity',
    'DBEventEntity',
    'DatabaseManager',
    'EntityStore',
    *_table_names,
]
