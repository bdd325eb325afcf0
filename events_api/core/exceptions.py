"""
Service-level errors raised by the resource handlers.
Each error carries the HTTP status and error code it is rendered with.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors surfaced at the handler boundary."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "SERVICE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Entity is absent or soft-deleted."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, entity_id: int):
        super().__init__(f"{resource} {entity_id} not found")
        self.resource = resource
        self.entity_id = entity_id


class IdentifierMismatchError(ServiceError):
    """Path id and payload id disagree on update."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "ID_MISMATCH"

    def __init__(self, path_id: int, payload_id: int):
        super().__init__(
            f"Path id {path_id} does not match payload id {payload_id}"
        )
        self.path_id = path_id
        self.payload_id = payload_id


class ConcurrencyConflictError(ServiceError):
    """The row changed between load and save and still exists."""

    error_code = "CONCURRENCY_CONFLICT"

    def __init__(self, resource: str, entity_id: int):
        super().__init__(f"{resource} {entity_id} was modified concurrently")
        self.resource = resource
        self.entity_id = entity_id
