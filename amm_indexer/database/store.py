# amm_indexer/database/store.py

from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session

from ..core.logging import LoggingMixin
from .base import DBEntity


E = TypeVar('E', bound=DBEntity)


class EntityStore(LoggingMixin):
    """
    Id-addressed load/save over one SQLAlchemy session.

    ``save`` flushes immediately so a subsequent ``load`` of the same id in
    the same event sees the row; nothing is committed until ``commit``.
    """

    def __init__(self, session: Session):
        self.session = session

    def load(self, model: Type[E], entity_id: str) -> Optional[E]:
        return self.session.get(model, entity_id)

    def save(self, entity: E) -> E:
        self.session.add(entity)
        self.session.flush()
        return entity

    def exists(self, model: Type[E], entity_id: str) -> bool:
        return self.load(model, entity_id) is not None

    def count(self, model: Type[E]) -> int:
        return self.session.query(model).count()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
        # identity map may still hold objects mutated by the aborted event
        self.session.expire_all()
        self.log_debug("Store rolled back")
