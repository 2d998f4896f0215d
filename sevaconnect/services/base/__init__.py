"""
Base services module.

Provides the foundations every domain service builds on:
- Result handling via ServiceResult
- Error mapping and logging in BaseService
- Transaction safety via TransactionManager
"""

from sevaconnect.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)
from sevaconnect.services.base.transaction_manager import (
    TransactionContext,
    TransactionManager,
)
from sevaconnect.services.base.base_service import BaseService

__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "TransactionContext",
    "TransactionManager",
    "BaseService",
]
