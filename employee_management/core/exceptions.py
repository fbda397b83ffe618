"""Error taxonomy shared by the store adapter, the repository and the API layer."""

from __future__ import annotations


class EmployeeManagementError(Exception):
    pass


class ConfigurationError(EmployeeManagementError):
    """Missing or invalid connection, database, container or partition key settings."""


class ValidationError(EmployeeManagementError):
    """Caller supplied an incomplete or malformed employee. Raised before any I/O."""


class StoreError(EmployeeManagementError):
    """A failure reported by the document store.

    ``status_code`` and ``sub_status`` carry whatever the store returned so callers
    can tell throttling or outages apart from conflicts.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        sub_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.sub_status = sub_status


class EmployeeNotFoundError(StoreError):
    pass


class EmployeeConflictError(StoreError):
    pass


class MalformedDocumentError(StoreError):
    """A stored document that no longer parses as an employee."""

    def __init__(self, message: str, *, document_id: str | None = None) -> None:
        super().__init__(message)
        self.document_id = document_id
