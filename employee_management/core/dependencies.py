from __future__ import annotations

import logging
import secrets

from fastapi import Header, HTTPException, Query, Request, status

from employee_management.core.config import settings
from employee_management.core.cosmos import CosmosStore
from employee_management.services.employee_repository import EmployeeRepository

logger = logging.getLogger(__name__)


async def require_function_key(
    code: str | None = Query(None),
    x_functions_key: str | None = Header(None),
) -> None:
    """Function-level key check: ``?code=`` or the ``x-functions-key`` header.

    Disabled when ``FUNCTION_KEY`` is not configured.
    """
    expected = settings.FUNCTION_KEY
    if not expected:
        return

    supplied = code or x_functions_key
    if not supplied or not secrets.compare_digest(supplied, expected):
        logger.warning("Rejected request with missing or invalid function key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing function key",
        )


def get_cosmos_store(request: Request) -> CosmosStore | None:
    return getattr(request.app.state, "cosmos_store", None)


def get_employee_repository(request: Request) -> EmployeeRepository:
    repository = getattr(request.app.state, "employee_repository", None)
    if repository is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee repository not initialized",
        )
    return repository
