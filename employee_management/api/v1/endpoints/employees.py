from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from employee_management.core.dependencies import get_employee_repository, require_function_key
from employee_management.core.exceptions import (
    EmployeeConflictError,
    EmployeeNotFoundError,
    MalformedDocumentError,
    StoreError,
    ValidationError,
)
from employee_management.models.employee import Department, Employee
from employee_management.services.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employee", tags=["employee"], dependencies=[Depends(require_function_key)])

_UNAVAILABLE_STATUSES = {None, 0, 408, 429, 503}


def _to_http_error(err: Exception) -> HTTPException:
    if isinstance(err, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err))
    if isinstance(err, EmployeeNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err))
    if isinstance(err, EmployeeConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err))
    if isinstance(err, MalformedDocumentError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(err))
    if isinstance(err, StoreError) and err.status_code not in _UNAVAILABLE_STATUSES:
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Employee store request failed")
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Employee store unavailable")


@router.get("/{department_id}/{employee_id}", response_model=Employee, response_model_by_alias=True)
async def get_employee_by_id(
    department_id: str,
    employee_id: str,
    repository: EmployeeRepository = Depends(get_employee_repository),  # noqa: B008
):
    logger.info("Retrieving employee '%s' in department '%s'", employee_id, department_id)
    try:
        employee = await repository.get_by_id(employee_id, department_id)
    except (ValidationError, StoreError) as err:
        logger.exception("Failed to get employee %s", employee_id)
        raise _to_http_error(err) from err

    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee '{employee_id}' not found in department '{department_id}'",
        )
    return employee


@router.get("/{department_id}", response_model=list[Employee], response_model_by_alias=True)
async def get_employees_by_department(
    department_id: str,
    repository: EmployeeRepository = Depends(get_employee_repository),  # noqa: B008
):
    try:
        return await repository.list_by_department(department_id)
    except (ValidationError, StoreError) as err:
        logger.exception("Failed to list employees in department %s", department_id)
        raise _to_http_error(err) from err


@router.post(
    "",
    response_model=Employee,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    employee: Employee,
    repository: EmployeeRepository = Depends(get_employee_repository),  # noqa: B008
):
    logger.info("Received request to create an employee")
    try:
        return await repository.create(employee)
    except (ValidationError, StoreError) as err:
        logger.warning("Failed to create employee: %s", err)
        raise _to_http_error(err) from err


@router.put("", response_model=Employee, response_model_by_alias=True)
async def update_employee(
    employee: Employee,
    repository: EmployeeRepository = Depends(get_employee_repository),  # noqa: B008
):
    logger.info("Received request to update employee '%s'", employee.id)
    try:
        return await repository.update(employee)
    except (ValidationError, StoreError) as err:
        logger.warning("Failed to update employee '%s': %s", employee.id, err)
        raise _to_http_error(err) from err


@router.delete("/{department_id}/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    department_id: str,
    employee_id: str,
    repository: EmployeeRepository = Depends(get_employee_repository),  # noqa: B008
):
    logger.info("Received request to delete employee '%s' in department '%s'", employee_id, department_id)
    try:
        await repository.delete(employee_id, department_id)
    except (ValidationError, StoreError) as err:
        logger.exception("Failed to delete employee %s", employee_id)
        raise _to_http_error(err) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{department_id}/{employee_id}/transfer", response_model=Employee, response_model_by_alias=True)
async def transfer_employee(
    department_id: str,
    employee_id: str,
    target_department: Department,
    repository: EmployeeRepository = Depends(get_employee_repository),  # noqa: B008
):
    try:
        return await repository.transfer(employee_id, department_id, target_department)
    except (ValidationError, StoreError) as err:
        logger.warning("Failed to transfer employee '%s': %s", employee_id, err)
        raise _to_http_error(err) from err
