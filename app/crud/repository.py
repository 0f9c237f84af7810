"""Thin persistence gateway over a SQLAlchemy session.

Every service and the CSV importer go through :class:`Repository`, so it is
the only place that commits, stamps timestamps and turns driver errors into
:class:`~app.core.errors.StorageFailure`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Iterable, Iterator, Sequence, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StorageFailure
from app.db.base_class import Base
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class Repository:
    """Create/read/update/delete primitives keyed by id or by a scoping column.

    Writes commit immediately unless they run inside :meth:`atomic`, in which
    case the whole block commits once or rolls back as a unit.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock
        self._atomic_depth = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, model: type[ModelT], entity_id: int) -> ModelT:
        instance = self._run(lambda: self.db.get(model, entity_id))
        if instance is None:
            raise NotFoundError(f"{model.__name__.lower()}_not_found")
        return instance

    def first(self, model: type[ModelT], *criteria: Any, **filters: Any) -> ModelT | None:
        query = self.db.query(model).filter(*criteria).filter_by(**filters).order_by(model.id.asc())
        return self._run(query.first)

    def list(
        self,
        model: type[ModelT],
        *criteria: Any,
        order_by: Sequence[Any] | None = None,
        options: Sequence[Any] = (),
        **filters: Any,
    ) -> list[ModelT]:
        query = self.db.query(model).options(*options).filter(*criteria).filter_by(**filters)
        query = query.order_by(*(order_by if order_by is not None else (model.id.asc(),)))
        return self._run(query.all)

    def count(self, model: type[ModelT], *criteria: Any, **filters: Any) -> int:
        query = self.db.query(model).filter(*criteria).filter_by(**filters)
        return self._run(query.count)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, instance: ModelT) -> ModelT:
        return self.create_all([instance])[0]

    def create_all(self, instances: Iterable[ModelT]) -> list[ModelT]:
        items = list(instances)
        now = self.clock()
        for item in items:
            item.created_at = now
            item.updated_at = now

        def _insert() -> None:
            self.db.add_all(items)
            self._commit()
            for item in items:
                self.db.refresh(item)

        self._run(_insert)
        return items

    def save(self, instance: ModelT) -> ModelT:
        instance.updated_at = self.clock()

        def _update() -> None:
            self.db.add(instance)
            self._commit()
            self.db.refresh(instance)

        self._run(_update)
        return instance

    def delete(self, model: type[ModelT], entity_id: int) -> int:
        return self.delete_where(model, model.id == entity_id)

    def delete_where(self, model: type[ModelT], *criteria: Any, **filters: Any) -> int:
        def _delete() -> int:
            deleted = (
                self.db.query(model)
                .filter(*criteria)
                .filter_by(**filters)
                .delete(synchronize_session=False)
            )
            self._commit()
            return deleted

        return self._run(_delete)

    @contextmanager
    def atomic(self) -> Iterator["Repository"]:
        """Group several writes into one transaction.

        Nested blocks join the outermost one.
        """

        if self._atomic_depth:
            self._atomic_depth += 1
            try:
                yield self
            finally:
                self._atomic_depth -= 1
            return

        self._atomic_depth = 1
        try:
            yield self
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Transaction annulée: %s", exc)
            raise StorageFailure(str(exc)) from exc
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._atomic_depth = 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def in_transaction(self) -> bool:
        return self._atomic_depth > 0

    def _commit(self) -> None:
        if self.in_transaction:
            self.db.flush()
        else:
            self.db.commit()

    def _run(self, operation: Callable[[], Any]) -> Any:
        try:
            return operation()
        except SQLAlchemyError as exc:
            if self.in_transaction:
                raise
            self.db.rollback()
            logger.error("Erreur de stockage: %s", exc)
            raise StorageFailure(str(exc)) from exc
