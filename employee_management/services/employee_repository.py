"""Cosmos DB employee repository, partitioned by department."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from azure.core.exceptions import AzureError
from pydantic import ValidationError as PydanticValidationError
from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError

from employee_management.core.cosmos import CosmosStore
from employee_management.core.exceptions import (
    EmployeeConflictError,
    EmployeeNotFoundError,
    MalformedDocumentError,
    StoreError,
    ValidationError,
)
from employee_management.models.employee import Department, Employee

logger = logging.getLogger(__name__)

LIST_BY_DEPARTMENT_QUERY = "SELECT * FROM c WHERE c.department.departmentId = @departmentId"


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def _store_error(message: str, error: AzureError, cls: type[StoreError] = StoreError) -> StoreError:
    return cls(
        f"{message}: {error}",
        status_code=getattr(error, "status_code", None),
        sub_status=getattr(error, "sub_status", None),
    )


def _to_employee(item: dict[str, Any]) -> Employee:
    try:
        return Employee.model_validate(item)
    except PydanticValidationError as e:
        document_id = item.get("id")
        logger.error("Stored document '%s' is not a valid employee: %s", document_id, e)
        raise MalformedDocumentError(
            f"Stored document '{document_id}' is not a valid employee",
            document_id=document_id,
        ) from e


def _without_department(employee: Employee) -> Employee:
    return employee.model_copy(update={"department": None})


class EmployeeRepository:
    def __init__(self, store: CosmosStore) -> None:
        self.store = store

    @property
    def container(self) -> Any:
        return self.store.container

    async def get_by_id(self, employee_id: str, department_id: str) -> Employee | None:
        """Point read of one employee. ``None`` when the id is not in that department."""
        if _is_blank(employee_id):
            raise ValidationError("Employee id is required")
        if _is_blank(department_id):
            raise ValidationError("Department id is required")

        logger.info("Reading employee '%s' in department '%s'", employee_id, department_id)
        try:
            item = await self.container.read_item(item=employee_id, partition_key=department_id)
        except CosmosResourceNotFoundError:
            logger.warning("Employee '%s' not found in department '%s'", employee_id, department_id)
            return None
        except AzureError as e:
            logger.error(
                "Error reading employee '%s' in department '%s' (status=%s)",
                employee_id,
                department_id,
                getattr(e, "status_code", None),
            )
            raise _store_error(f"Failed to read employee '{employee_id}'", e) from e

        return _to_employee(item)

    async def create(self, employee: Employee | None) -> Employee:
        if employee is None:
            logger.error("Attempt to create a null employee")
            raise ValidationError("Employee cannot be None")
        if employee.department is None:
            logger.error("Employee '%s' has no department", employee.id)
            raise ValidationError("Department is required")
        if _is_blank(employee.department.department_id):
            logger.error("Employee '%s' has an invalid or missing department id", employee.id)
            raise ValidationError("Department id is required")

        if _is_blank(employee.id):
            employee = employee.model_copy(update={"id": str(uuid.uuid4())})
            logger.info("Generated new employee id '%s'", employee.id)

        department_id = employee.department.department_id
        logger.info("Creating employee '%s' in department '%s'", employee.id, department_id)
        try:
            item = await self.container.create_item(body=employee.to_document())
        except CosmosResourceExistsError as e:
            logger.error("Employee '%s' already exists in department '%s'", employee.id, department_id)
            raise _store_error(f"Employee '{employee.id}' already exists", e, EmployeeConflictError) from e
        except AzureError as e:
            logger.error(
                "Error creating employee '%s' in department '%s' (status=%s)",
                employee.id,
                department_id,
                getattr(e, "status_code", None),
            )
            raise _store_error(f"Failed to create employee '{employee.id}'", e) from e

        logger.info("Employee '%s' created in department '%s'", employee.id, department_id)
        return _to_employee(item)

    async def update(self, employee: Employee | None) -> Employee:
        """Replace an existing employee document in its department partition.

        This never upserts and never moves a document between departments: an
        employee whose department changed is simply not found in the new
        partition. Use :meth:`transfer` for that.
        """
        if employee is None:
            logger.error("Attempt to update a null employee")
            raise ValidationError("Employee cannot be None")
        if _is_blank(employee.id):
            logger.error("Employee id is required for update")
            raise ValidationError("Employee id is required")
        if employee.department is None or _is_blank(employee.department.department_id):
            logger.error("Valid department information is required to update employee '%s'", employee.id)
            raise ValidationError("Valid department information is required")

        department_id = employee.department.department_id
        logger.info("Updating employee '%s' in department '%s'", employee.id, department_id)
        try:
            item = await self.container.replace_item(item=employee.id, body=employee.to_document())
        except CosmosResourceNotFoundError as e:
            logger.warning("Employee '%s' not found for update in department '%s'", employee.id, department_id)
            raise _store_error(
                f"Employee '{employee.id}' not found in department '{department_id}'",
                e,
                EmployeeNotFoundError,
            ) from e
        except AzureError as e:
            logger.error(
                "Error updating employee '%s' (status=%s)",
                employee.id,
                getattr(e, "status_code", None),
            )
            raise _store_error(f"Failed to update employee '{employee.id}'", e) from e

        logger.info("Employee '%s' updated", employee.id)
        return _to_employee(item)

    async def delete(self, employee_id: str, department_id: str) -> None:
        if _is_blank(employee_id):
            logger.error("Employee id cannot be empty for deletion")
            raise ValidationError("Employee id is required")
        if _is_blank(department_id):
            logger.error("Department id cannot be empty for deletion")
            raise ValidationError("Department id is required")

        logger.info("Deleting employee '%s' from department '%s'", employee_id, department_id)
        try:
            await self.container.delete_item(item=employee_id, partition_key=department_id)
        except CosmosResourceNotFoundError:
            logger.warning(
                "Employee '%s' not found for deletion in department '%s'",
                employee_id,
                department_id,
            )
            return
        except AzureError as e:
            logger.error(
                "Error deleting employee '%s' (status=%s)",
                employee_id,
                getattr(e, "status_code", None),
            )
            raise _store_error(f"Failed to delete employee '{employee_id}'", e) from e

        logger.info("Employee '%s' deleted", employee_id)

    async def list_by_department(self, department_id: str, page_size: int | None = None) -> list[Employee]:
        if _is_blank(department_id):
            logger.error("Department id cannot be empty when querying employees")
            raise ValidationError("Department id is required")

        logger.info("Querying employees in department '%s'", department_id)
        employees: list[Employee] = []
        skipped = 0
        try:
            pages = self.container.query_items(
                query=LIST_BY_DEPARTMENT_QUERY,
                parameters=[{"name": "@departmentId", "value": department_id}],
                partition_key=department_id,
                max_item_count=page_size,
            ).by_page()
            async for page in pages:
                async for item in page:
                    try:
                        employees.append(_to_employee(item))
                    except MalformedDocumentError:
                        # Skipped so the rest of the department still lists.
                        skipped += 1
        except AzureError as e:
            logger.error(
                "Error querying employees in department '%s' (status=%s)",
                department_id,
                getattr(e, "status_code", None),
            )
            raise _store_error(f"Failed to list employees in department '{department_id}'", e) from e

        if skipped:
            logger.warning("Skipped %d malformed document(s) in department '%s'", skipped, department_id)
        logger.info("Retrieved %d employee(s) from department '%s'", len(employees), department_id)
        return employees

    async def transfer(
        self,
        employee_id: str,
        source_department_id: str,
        target_department: Department | None,
    ) -> Employee:
        """Move an employee to another department partition.

        The copy is created in the target partition before the source document is
        deleted, so a failed create leaves the original in place. If the delete
        fails, calling ``transfer`` again finishes the move as long as the target
        copy is unchanged.
        """
        if _is_blank(employee_id):
            raise ValidationError("Employee id is required")
        if _is_blank(source_department_id):
            raise ValidationError("Source department id is required")
        if target_department is None or _is_blank(target_department.department_id):
            raise ValidationError("Valid target department information is required")
        if target_department.department_id == source_department_id:
            raise ValidationError("Target department must differ from the source department")

        current = await self.get_by_id(employee_id, source_department_id)
        if current is None:
            raise EmployeeNotFoundError(
                f"Employee '{employee_id}' not found in department '{source_department_id}'",
                status_code=404,
            )

        candidate = current.model_copy(update={"department": target_department})
        try:
            moved = await self.create(candidate)
        except EmployeeConflictError:
            # A previous transfer may have created the copy and failed on delete.
            existing = await self.get_by_id(employee_id, target_department.department_id)
            if existing is None or _without_department(existing) != _without_department(current):
                raise
            logger.info("Resuming transfer of employee '%s': target copy already exists", employee_id)
            moved = existing

        await self.delete(employee_id, source_department_id)
        logger.info(
            "Employee '%s' transferred from department '%s' to '%s'",
            employee_id,
            source_department_id,
            target_department.department_id,
        )
        return moved
