from sevaconnect.schemas.society.society import (
    SocietyActivity,
    SocietyCreate,
    SocietyCreated,
    SocietyResponse,
    SocietyStats,
    SocietyWithStats,
)

__all__ = [
    "SocietyActivity",
    "SocietyCreate",
    "SocietyCreated",
    "SocietyResponse",
    "SocietyStats",
    "SocietyWithStats",
]
