"""Cosmos DB client adapter: owns the client and the bound employee container."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from azure.core.exceptions import AzureError
from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient

from employee_management.core.config import Settings
from employee_management.core.exceptions import ConfigurationError, StoreError

logger = logging.getLogger(__name__)


def _require(value: str | None, name: str) -> str:
    if not value or not value.strip():
        logger.error("%s is missing or empty", name)
        raise ConfigurationError(f"{name} cannot be empty")
    return value.strip()


class CosmosStore:
    def __init__(
        self,
        connection_string: str = "",
        *,
        endpoint: str = "",
        key: str = "",
        client: Any = None,
    ) -> None:
        self.connection_string = (connection_string or "").strip()
        self.endpoint = (endpoint or "").strip()
        self.key = (key or "").strip()

        if client is None and not self.connection_string and not (self.endpoint and self.key):
            logger.error("Cosmos DB connection settings missing")
            raise ConfigurationError("A Cosmos DB connection string or endpoint and key is required")

        self.client: Any = client
        self._container: Any = None
        self._lock = asyncio.Lock()
        self.initialized = False
        self.database_name = ""
        self.container_name = ""
        self.partition_key_path = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> CosmosStore:
        return cls(
            settings.COSMOS_DB_CONNECTION_STRING,
            endpoint=settings.COSMOS_DB_ENDPOINT,
            key=settings.COSMOS_DB_KEY,
        )

    @property
    def container(self) -> Any:
        if not self.initialized:
            raise RuntimeError("CosmosStore not initialized")
        return self._container

    def _create_client(self) -> CosmosClient:
        if self.connection_string:
            return CosmosClient.from_connection_string(self.connection_string)
        return CosmosClient(self.endpoint, credential=self.key)

    async def initialize(self, database_name: str, container_name: str, partition_key_path: str) -> None:
        """Verify or create the database and container, then bind the container.

        Safe to call concurrently; only the first call talks to the store.
        """
        database_name = _require(database_name, "Database name")
        container_name = _require(container_name, "Container name")
        partition_key_path = _require(partition_key_path, "Partition key path")
        if not partition_key_path.startswith("/"):
            raise ConfigurationError(f"Partition key path must start with '/': {partition_key_path!r}")

        async with self._lock:
            if self.initialized:
                return

            if self.client is None:
                self.client = self._create_client()
                logger.info("Cosmos client created")

            try:
                database = await self.client.create_database_if_not_exists(id=database_name)
                logger.info("Database '%s' verified/created", database_name)

                container = await database.create_container_if_not_exists(
                    id=container_name,
                    partition_key=PartitionKey(path=partition_key_path),
                )
            except AzureError as e:
                logger.error(
                    "Failed to verify Cosmos DB resources (database=%s, container=%s, status=%s)",
                    database_name,
                    container_name,
                    getattr(e, "status_code", None),
                )
                raise StoreError(
                    f"Failed to initialize Cosmos DB container '{container_name}': {e}",
                    status_code=getattr(e, "status_code", None),
                    sub_status=getattr(e, "sub_status", None),
                ) from e

            logger.info(
                "Container '%s' verified/created with partition key '%s'",
                container_name,
                partition_key_path,
            )
            self._container = container
            self.database_name = database_name
            self.container_name = container_name
            self.partition_key_path = partition_key_path
            self.initialized = True

    async def close(self) -> None:
        if self.client:
            await self.client.close()
            self.client = None
        self._container = None
        self.initialized = False

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False
        try:
            await self._container.read()
            return True
        except Exception:
            logger.exception("Cosmos DB connection check failed")
            return False
