"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel as PydanticModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from sevaconnect.core.exceptions import (
    BaseAppException,
    ErrorCode as AppErrorCode,
    create_validation_error,
)
from sevaconnect.core.logging import get_logger
from sevaconnect.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)
from sevaconnect.services.base.transaction_manager import TransactionContext, TransactionManager

TSchema = TypeVar("TSchema", bound=PydanticModel)

# Application exception codes surfaced as service result codes
_APP_ERROR_CODES: Dict[AppErrorCode, ErrorCode] = {
    AppErrorCode.VALIDATION_ERROR: ErrorCode.VALIDATION_ERROR,
    AppErrorCode.RESOURCE_NOT_FOUND: ErrorCode.NOT_FOUND,
    AppErrorCode.CONFLICT: ErrorCode.CONFLICT,
    AppErrorCode.DUPLICATE_ENTRY: ErrorCode.CONFLICT,
    AppErrorCode.INVALID_STATE: ErrorCode.INVALID_STATE,
    AppErrorCode.AUTHENTICATION_FAILED: ErrorCode.AUTHENTICATION_FAILED,
    AppErrorCode.OTP_MISMATCH: ErrorCode.AUTHENTICATION_FAILED,
    AppErrorCode.TOKEN_INVALID: ErrorCode.AUTHENTICATION_FAILED,
    AppErrorCode.TOKEN_EXPIRED: ErrorCode.AUTHENTICATION_FAILED,
    AppErrorCode.EXTERNAL_SERVICE_ERROR: ErrorCode.EXTERNAL_SERVICE_ERROR,
    AppErrorCode.DATA_INTEGRITY_ERROR: ErrorCode.INTERNAL_ERROR,
    AppErrorCode.DATABASE_ERROR: ErrorCode.INTERNAL_ERROR,
    AppErrorCode.INTERNAL_ERROR: ErrorCode.INTERNAL_ERROR,
}


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Consistent error handling via ServiceResult
    - Transaction management through TransactionManager
    - Payload coercion into request schemas
    """

    def __init__(self, db_session: Session):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
        """
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)
        self._tx = TransactionManager(db_session)

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
    ) -> ServiceResult:
        """
        Convert an exception to a ServiceResult failure with logging.

        Application exceptions keep their own message since it is meant for
        the caller. Anything else is logged in full and reported with a
        generic message.
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }

        if isinstance(exception, PydanticValidationError):
            exception = self._from_pydantic(exception)

        if isinstance(exception, BaseAppException):
            code = self._map_exception_to_error_code(exception)
            if code == ErrorCode.INTERNAL_ERROR:
                self._logger.error(f"Error during {operation}: {exception}", exc_info=True, extra=context)
                return ServiceResult.from_exception(exception, operation, ErrorSeverity.CRITICAL)

            self._logger.warning(f"{operation} rejected: {exception.message}", extra=context)
            return ServiceResult.failure(
                ServiceError(
                    code=code,
                    message=exception.message,
                    severity=ErrorSeverity.WARNING,
                    details=exception.details or None,
                    field=getattr(exception, "field", None),
                )
            )

        if isinstance(exception, IntegrityError):
            self._logger.warning(f"{operation} violated a constraint: {exception.orig}", extra=context)
            return ServiceResult.conflict(
                f"Failed to {operation}: conflicts with existing data",
                details={"entity_ref": context["entity_ref"]},
            )

        self._logger.error(f"Error during {operation}: {exception}", exc_info=True, extra=context)
        return ServiceResult.from_exception(exception, operation, ErrorSeverity.CRITICAL)

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        """Map exception types to service result codes."""
        if isinstance(exception, BaseAppException):
            return _APP_ERROR_CODES.get(exception.error_code, ErrorCode.INTERNAL_ERROR)
        if isinstance(exception, IntegrityError):
            return ErrorCode.CONFLICT
        if isinstance(exception, SQLAlchemyError):
            return ErrorCode.INTERNAL_ERROR
        return ErrorCode.INTERNAL_ERROR

    @staticmethod
    def _from_pydantic(exc: PydanticValidationError) -> BaseAppException:
        field_errors: Dict[str, list] = {}
        for error in exc.errors():
            loc = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
            field_errors.setdefault(loc, []).append(error.get("msg", "invalid value"))
        return create_validation_error(field_errors)

    # -------------------------------------------------------------------------
    # Payload coercion
    # -------------------------------------------------------------------------

    def _coerce(
        self,
        schema_cls: Type[TSchema],
        payload: Union[TSchema, Mapping[str, Any]],
    ) -> TSchema:
        """
        Accept either a schema instance or a plain mapping.

        Raises:
            ValidationError: Naming every missing, malformed or unknown field
        """
        if isinstance(payload, schema_cls):
            return payload
        if isinstance(payload, PydanticModel):
            payload = payload.model_dump(exclude_unset=True)
        try:
            return schema_cls.model_validate(dict(payload or {}))
        except PydanticValidationError as exc:
            raise self._from_pydantic(exc) from exc

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[TransactionContext]:
        """
        Run the enclosed block as one atomic unit.

        Example:
            with self.transaction():
                self.repository.create(entity)
                # commit on success, rollback on exception
        """
        with self._tx.start() as ctx:
            yield ctx

    def _log_operation(self, operation: str, entity_ref: Optional[Any] = None, **details: Any) -> None:
        self._logger.info(
            f"{operation} completed",
            extra={"operation": operation, "entity_ref": str(entity_ref) if entity_ref else None, **details},
        )
