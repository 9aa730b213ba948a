# amm_indexer/database/base.py

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base


ModelBase = declarative_base()


class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )


class BlockchainTimestampMixin:
    timestamp = Column(Integer, nullable=False, index=True)


class DBEntity(ModelBase, TimestampMixin):
    """Aggregate entity addressed by a string id (address, pool id or composite key)"""
    __abstract__ = True

    id = Column(String(256), primary_key=True)

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)

            if isinstance(value, Decimal):
                result[column.name] = str(value)
            elif isinstance(value, datetime):
                result[column.name] = value.isoformat()
            elif hasattr(value, 'value') and hasattr(value, 'name'):
                result[column.name] = value.value
            else:
                result[column.name] = value

        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class DBEventEntity(DBEntity, BlockchainTimestampMixin):
    """Immutable record of one on-chain event, keyed by tx hash ++ log index"""
    __abstract__ = True
