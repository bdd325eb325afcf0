"""
Generic soft-delete CRUD handler.
One implementation serves every resource described in the resource table.
"""

import logging
from typing import Any, Dict, List

from pydantic import BaseModel
from sqlalchemy import inspect
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from ..core.exceptions import ConcurrencyConflictError, IdentifierMismatchError, NotFoundError

logger = logging.getLogger(__name__)


class CrudService:
    """
    List, get, create, update and soft-delete for a single resource.

    Update and soft-delete commit under optimistic locking. When the commit
    loses a race the row is looked up once: a vanished row becomes a
    NotFoundError, anything else is a fatal ConcurrencyConflictError.
    """

    # Payload fields handled by _stage_relations instead of plain assignment
    nested_fields: tuple = ()

    def __init__(self, uow, resource):
        self.uow = uow
        self.resource = resource
        self.repository = uow.repository(resource.model)

    def list(self) -> List[Any]:
        return self.repository.list_active(self.resource.eager_load)

    def get(self, entity_id: int) -> Any:
        entity = self.repository.get_active(entity_id, self.resource.eager_load)
        if entity is None:
            raise NotFoundError(self.resource.label, entity_id)
        return entity

    def create(self, payload: BaseModel) -> Any:
        entity = self.resource.model(**self._column_values(payload))
        self._stage_relations(entity, payload, is_new=True)
        self.repository.add(entity)
        self.uow.commit()
        self.uow.refresh(entity)
        logger.info(f"Created {self.resource.label} {entity.id}")
        return entity

    def update(self, entity_id: int, payload: BaseModel) -> Any:
        if payload.id != entity_id:
            raise IdentifierMismatchError(entity_id, payload.id)

        entity = self.get(entity_id)
        for key, value in self._column_values(payload).items():
            setattr(entity, key, value)
        self._stage_relations(entity, payload, is_new=False)
        self._mark_written(entity)

        self._commit_existing(entity_id)
        logger.info(f"Updated {self.resource.label} {entity_id}")
        return entity

    def soft_delete(self, entity_id: int) -> None:
        entity = self.get(entity_id)
        entity.is_deleted = True

        self._commit_existing(entity_id)
        logger.info(f"Soft-deleted {self.resource.label} {entity_id}")

    def _column_values(self, payload: BaseModel) -> Dict[str, Any]:
        return payload.model_dump(exclude={"id", *self.nested_fields})

    def _stage_relations(self, entity: Any, payload: BaseModel, is_new: bool) -> None:
        """Hook for resources that carry nested collections."""

    def _mark_written(self, entity: Any) -> None:
        # Collection-only changes leave the row clean, which skips the version check
        if inspect(entity).persistent:
            flag_modified(entity, "is_deleted")

    def _commit_existing(self, entity_id: int) -> None:
        try:
            self.uow.commit()
        except StaleDataError as exc:
            self.uow.rollback()
            if not self.repository.exists_active(entity_id):
                logger.warning(
                    f"{self.resource.label} {entity_id} disappeared during a concurrent update"
                )
                raise NotFoundError(self.resource.label, entity_id) from exc

            logger.error(f"Concurrent modification of {self.resource.label} {entity_id}")
            raise ConcurrencyConflictError(self.resource.label, entity_id) from exc
