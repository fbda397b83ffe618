from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from employee_management.api.v1.router import api_router
from employee_management.core.config import settings
from employee_management.core.cosmos import CosmosStore
from employee_management.services.employee_repository import EmployeeRepository

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    # Configuration and store errors are fatal: the app must not start without its container.
    store = CosmosStore.from_settings(settings)
    try:
        await store.initialize(
            settings.COSMOS_DB_DATABASE,
            settings.COSMOS_DB_CONTAINER,
            settings.COSMOS_DB_PARTITION_KEY,
        )
    except Exception:
        logger.exception("Failed to initialize the Cosmos DB store")
        await store.close()
        raise

    application.state.cosmos_store = store
    application.state.employee_repository = EmployeeRepository(store)
    logger.info("EmployeeRepository initialized (container=%s)", settings.COSMOS_DB_CONTAINER)
    try:
        yield
    finally:
        application.state.employee_repository = None
        application.state.cosmos_store = None
        await store.close()


app = FastAPI(
    title="Employee Management API",
    description="Department-partitioned employee records on Azure Cosmos DB",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee Management API"}
