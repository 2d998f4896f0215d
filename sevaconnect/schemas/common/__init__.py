from sevaconnect.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = ["BaseCreateSchema", "BaseResponseSchema", "BaseSchema", "BaseUpdateSchema"]
