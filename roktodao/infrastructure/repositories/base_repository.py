"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from roktodao.domain.repositories.base import BaseRepository
from roktodao.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, id: Any) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def create(self, obj_in: Any) -> ModelType:
        # Accepts a dict, a pydantic model or an already-built model instance
        if isinstance(obj_in, self.model):
            db_obj = obj_in
        elif hasattr(obj_in, "model_dump"):
            db_obj = self.model(**obj_in.model_dump(exclude_unset=True))
        else:
            db_obj = self.model(**obj_in)

        self.db.add(db_obj)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(db_obj)
        return db_obj

    def count(self) -> int:
        return self.db.query(func.count()).select_from(self.model).scalar() or 0
