"""
Base repository with standardized CRUD operations and error handling.

Repositories add, flush and query through the session they are given. They
never commit: the calling service owns the transaction boundary.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import DuplicateEntryError, ResourceNotFoundError
from sevaconnect.core.logging import get_logger
from sevaconnect.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Repository base providing CRUD operations for one model.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add an entity and flush so defaults and constraints apply.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
        """
        self.db.add(entity)
        self.flush()
        logger.debug(f"Created {self.entity_name} with id: {entity.id}")
        return entity

    def flush(self) -> None:
        try:
            self.db.flush()
        except IntegrityError as e:
            raise DuplicateEntryError(
                f"{self.entity_name} violates a uniqueness or reference constraint",
                field=None,
            ) from e

    # ==================== Read Operations ====================

    def get_by_id(self, entity_id: str) -> Optional[ModelType]:
        if not entity_id:
            return None
        return self.db.get(self.model, entity_id)

    def get_or_raise(self, entity_id: str) -> ModelType:
        """
        Fetch an entity or raise.

        Raises:
            ResourceNotFoundError: If no row has this id
        """
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise ResourceNotFoundError(self.entity_name, entity_id)
        return entity

    def find_all(self, *criteria, order_by: Sequence[Any] = ()) -> List[ModelType]:
        stmt = select(self.model).where(*criteria).order_by(*order_by)
        return list(self.db.scalars(stmt))

    def find_one(self, *criteria) -> Optional[ModelType]:
        return self.db.scalars(select(self.model).where(*criteria).limit(1)).first()

    def exists(self, *criteria) -> bool:
        return self.find_one(*criteria) is not None

    def count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        return int(self.db.scalar(stmt) or 0)

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, values: Dict[str, Any]) -> ModelType:
        """Assign column values on a loaded entity and flush."""
        for key, value in values.items():
            setattr(entity, key, value)
        self.flush()
        return entity

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        self.db.delete(entity)
        self.flush()
        logger.debug(f"Deleted {self.entity_name} with id: {entity.id}")
