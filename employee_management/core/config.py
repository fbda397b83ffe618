import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Either a full connection string or an endpoint + key pair.
    COSMOS_DB_CONNECTION_STRING: str = ""
    COSMOS_DB_ENDPOINT: str = ""
    COSMOS_DB_KEY: str = ""
    COSMOS_DB_DATABASE: str = "employee-management"
    COSMOS_DB_CONTAINER: str = "employees"
    COSMOS_DB_PARTITION_KEY: str = "/department/departmentId"

    FUNCTION_KEY: str = ""

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
