"""Employee models stored as documents in the department-partitioned container."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire and in Cosmos DB, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(CamelModel):
    street: str
    city: str
    state: str | None = None
    zip_code: str | None = None


class Department(CamelModel):
    # Partition key. Emptiness is reported by the repository, not here.
    department_id: str
    department_name: str | None = None


class Person(CamelModel):
    id: str = ""
    first_name: str
    last_name: str

    @field_validator("id", mode="before")
    @classmethod
    def _none_id_is_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("first_name", "last_name")
    @classmethod
    def _validate_name(cls, value: str, info: ValidationInfo) -> str:
        label = info.field_name.replace("_", " ").capitalize()
        if not value or not value.strip():
            raise ValueError(f"{label} cannot be empty")
        if len(value) < 2:
            raise ValueError(f"{label} must be at least 2 characters long")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def record_description(self) -> str:
        return "Person"


class Employee(Person):
    employee_id: int
    position: str = ""
    department: Department | None = None
    address: Address | None = None

    def record_description(self) -> str:
        return "Employee"

    @property
    def partition_key(self) -> str | None:
        return self.department.department_id if self.department else None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
