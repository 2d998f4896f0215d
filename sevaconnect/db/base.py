"""SQLAlchemy Base with every model registered."""

from sevaconnect.models.base.base_model import Base

# Import all models here to ensure they're registered with Base
import sevaconnect.models  # noqa: F401,E402

__all__ = ["Base"]
