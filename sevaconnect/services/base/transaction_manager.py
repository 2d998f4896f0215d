"""
Transaction manager utilities for service layer operations.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from sevaconnect.core.logging import get_logger


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TransactionContext:
    """Context information for a transaction."""

    transaction_id: str = field(default_factory=lambda: uuid4().hex[:12])
    started_at: datetime = field(default_factory=_now)
    committed: bool = False
    rolled_back: bool = False
    completed_at: Optional[datetime] = None
    error: Optional[Exception] = None
    after_commit: List[Callable[[], None]] = field(default_factory=list)

    @property
    def duration_ms(self) -> Optional[float]:
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds() * 1000
        return None

    def on_commit(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` only once the transaction has committed."""
        self.after_commit.append(callback)


class TransactionManager:
    """
    Unit-of-work boundary for one session.

    Every write operation runs inside :meth:`start`: the block commits on
    success and rolls back on any exception, which is then re-raised.
    """

    def __init__(self, db_session: Session):
        self.db = db_session
        self._logger = get_logger(self.__class__.__name__)

    @contextmanager
    def start(self) -> Iterator[TransactionContext]:
        """
        Start a new transaction.

        Example:
            with transaction_manager.start() as ctx:
                # perform operations
                # automatic commit on success, rollback on exception
        """
        ctx = TransactionContext()

        try:
            yield ctx
            self._commit(ctx)
        except Exception as exc:
            if not ctx.rolled_back:
                self._rollback(ctx, exc)
            raise
        finally:
            ctx.completed_at = _now()
            self._logger.debug(
                f"Transaction {ctx.transaction_id} "
                f"{'committed' if ctx.committed else 'rolled back'} "
                f"in {ctx.duration_ms:.2f}ms",
                extra={"transaction_id": ctx.transaction_id, "duration_ms": ctx.duration_ms},
            )

        for callback in ctx.after_commit:
            callback()

    def _commit(self, ctx: TransactionContext) -> None:
        try:
            self.db.commit()
        except Exception as exc:
            self._logger.error(
                f"Commit failed for transaction {ctx.transaction_id}: {exc}",
                exc_info=True,
                extra={"transaction_id": ctx.transaction_id},
            )
            self._rollback(ctx, exc)
            raise
        ctx.committed = True

    def _rollback(self, ctx: TransactionContext, exc: Exception) -> None:
        self.db.rollback()
        ctx.rolled_back = True
        ctx.error = exc
        self._logger.info(
            f"Transaction rolled back: {ctx.transaction_id} ({type(exc).__name__})",
            extra={"transaction_id": ctx.transaction_id},
        )
