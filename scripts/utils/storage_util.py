"""
Storage abstraction used by every handler.

Handlers never touch a database session directly; they read and write typed
collections (one per table class) through ``BaseStorage``. ``SQLStorage`` puts
a SQLAlchemy session behind it, so any database SQLAlchemy speaks can back the
service, the in-memory SQLite default included.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

ModelT = TypeVar("ModelT")


class BaseStorage(ABC):

    @abstractmethod
    def get(self, model: Type[ModelT], item_id: int) -> Optional[ModelT]:
        ...

    @abstractmethod
    def add(self, item: ModelT) -> ModelT:
        """Insert or update ``item``; new items get their id assigned."""

    @abstractmethod
    def delete(self, item) -> None:
        ...

    @abstractmethod
    def list(self, model: Type[ModelT], order_by_id: bool = True, **filters) -> List[ModelT]:
        """All rows of ``model`` whose attributes equal the given filters."""

    def first(self, model: Type[ModelT], **filters) -> Optional[ModelT]:
        rows = self.list(model, **filters)
        return rows[0] if rows else None

    @abstractmethod
    def commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        ...

    @abstractmethod
    def refresh(self, item) -> None:
        ...


class SQLStorage(BaseStorage):
    def __init__(self, session: Session):
        self.session = session

    def get(self, model, item_id):
        return self.session.get(model, item_id)

    def add(self, item):
        self.session.add(item)
        self.session.flush()
        return item

    def delete(self, item):
        self.session.delete(item)
        self.session.flush()

    def list(self, model, order_by_id=True, **filters):
        query = select(model)
        for attribute, value in filters.items():
            column = getattr(model, attribute)
            query = query.where(column.is_(None) if value is None else column == value)
        if order_by_id:
            query = query.order_by(model.id)
        return list(self.session.scalars(query).all())

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def refresh(self, item):
        self.session.refresh(item)
