"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and the abstract model every table derives
from, with prefixed string identifiers and creation timestamps.
"""

from datetime import datetime, timezone, date, time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Create declarative base
Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    """
    Abstract base model with common methods.

    Subclasses declare their own ``id`` column so each table gets its own
    identifier prefix.
    """

    __abstract__ = True

    def to_dict(self, exclude: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Convert model instance to dictionary.

        Args:
            exclude: List of column names to exclude

        Returns:
            Dictionary representation of the model
        """
        exclude = exclude or []
        result = {}

        for column in self.__table__.columns:
            if column.key in exclude:
                continue
            value = getattr(self, column.key)

            # Handle special types
            if isinstance(value, (datetime, date, time)):
                result[column.key] = value.isoformat()
            elif isinstance(value, Decimal):
                result[column.key] = float(value)
            elif hasattr(value, "value") and not isinstance(value, (dict, list)):
                result[column.key] = value.value
            else:
                result[column.key] = value

        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class TimestampMixin:
    """Creation timestamp assigned by the application."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
