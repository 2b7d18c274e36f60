"""Shared plumbing for record services: validation, store checks, result shaping."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from rota_api.errors import (
    ConflictError,
    ControllerError,
    InternalError,
    NotFoundError,
    ServiceError,
    ServiceResult,
    ValidationError,
)
from rota_api.record_store import RecordStore, StoreFailure, UpdateAck

logger = logging.getLogger(__name__)


def filter_validation(exc: PydanticValidationError) -> str:
    """First validation problem as a one-line message ("email: field required")."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{field}: {message}" if field else message


class RootService:
    """Base class for services backed by a RecordStore."""

    service_name = "RootService"
    hidden_fields: Iterable[str] = ()
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]

    def __init__(self, store: RecordStore):
        self.store = store

    def format_error(self, error: Exception, function_name: str) -> ServiceResult:
        """Tag an error with its origin, log it and wrap it as a failed result."""
        where = f"[{self.service_name}.{function_name}]"
        if not isinstance(error, ServiceError):
            logger.error(f"{where} unexpected error: {error}", exc_info=error)
            error = InternalError(str(error))
        elif error.http_status >= 500:
            logger.error(f"{where} {error.code}: {error.message}")
        else:
            logger.warning(f"{where} {error.code}: {error.message}")
        return ServiceResult.failure(error.tagged(self.service_name, function_name))

    @staticmethod
    def validate(schema: Type[BaseModel], body: Any) -> BaseModel:
        try:
            return schema.model_validate(body if body is not None else {})
        except PydanticValidationError as e:
            raise ValidationError(filter_validation(e)) from e

    @staticmethod
    def check_store(result: Any) -> Any:
        """Raise on a store failure indicator: ConflictError for constraint failures, else ControllerError."""
        if isinstance(result, StoreFailure):
            if result.conflict:
                raise ConflictError("Record conflicts with an existing record.")
            raise ControllerError(result.error or "Record store failure")
        return result

    def public(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {key: value for key, value in record.items() if key not in self.hidden_fields}

    def process_single_read(self, record: Dict[str, Any] | None, status: int = 200) -> ServiceResult:
        if not record:
            raise NotFoundError("Record not found.")
        return ServiceResult.ok(self.public(record), status=status)

    def process_multiple_read_results(self, records: list) -> ServiceResult:
        return ServiceResult.ok([self.public(record) for record in records])

    @staticmethod
    def process_update_result(ack: UpdateAck) -> ServiceResult:
        if not ack.matched_count:
            raise NotFoundError("No matching record to update.")
        return ServiceResult.ok(ack.to_dict())

    @staticmethod
    def process_delete_result(ack: UpdateAck) -> ServiceResult:
        if not ack.matched_count:
            raise NotFoundError("No matching record to delete.")
        return ServiceResult.ok(ack.to_dict())

    # Generic record operations; subclasses hook into prepare_create/prepare_update.

    @staticmethod
    def live(record_id: int | None = None) -> Dict[str, Any]:
        """Conditions matching active, non-deleted records."""
        conditions: Dict[str, Any] = {"is_active": True, "is_deleted": False}
        if record_id is not None:
            conditions = {"id": record_id, **conditions}
        return conditions

    def prepare_create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return data

    def prepare_update(self, record_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return data

    def create_record(self, body: Any) -> ServiceResult:
        try:
            data = self.validate(self.create_schema, body).model_dump(mode="json", exclude_none=True)
            data = self.prepare_create(data)
            result = self.check_store(self.store.create_record(data))
            return self.process_single_read(result, status=201)
        except Exception as e:
            return self.format_error(e, "create_record")

    def read_records(self) -> ServiceResult:
        try:
            result = self.check_store(self.store.read_records(self.live()))
            return self.process_multiple_read_results(result)
        except Exception as e:
            return self.format_error(e, "read_records")

    def read_record_by_id(self, record_id: int | None) -> ServiceResult:
        try:
            if not record_id:
                raise ValidationError("Invalid ID supplied.")
            result = self.check_store(self.store.read_records(self.live(record_id)))
            return self.process_single_read(result[0] if result else None)
        except Exception as e:
            return self.format_error(e, "read_record_by_id")

    def update_record_by_id(self, record_id: int | None, body: Any) -> ServiceResult:
        try:
            if not record_id:
                raise ValidationError("Invalid ID supplied.")
            if not body:
                raise ValidationError("Update requires a field.")
            data = self.validate(self.update_schema, body).model_dump(
                mode="json", exclude_unset=True, exclude_none=True
            )
            if not data:
                raise ValidationError("Update requires a field.")
            data = self.prepare_update(record_id, data)
            result = self.check_store(self.store.update_records(self.live(record_id), data))
            return self.process_update_result(result)
        except Exception as e:
            return self.format_error(e, "update_record_by_id")

    def delete_record_by_id(self, record_id: int | None) -> ServiceResult:
        try:
            if not record_id:
                raise ValidationError("Invalid ID supplied.")
            result = self.check_store(
                self.store.delete_records({"id": record_id, "is_deleted": False})
            )
            return self.process_delete_result(result)
        except Exception as e:
            return self.format_error(e, "delete_record_by_id")
