import sys
from pathlib import Path

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"

_DEFAULT_SEED_FILE = str(Path(__file__).resolve().parent.parent / "data" / "employee_database.json")


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    CORS_ALLOW_ORIGINS: list[str] = ["http://localhost:5173"]

    COSMOS_DB_ENDPOINT: str = ""
    COSMOS_DB_KEY: str = ""
    COSMOS_DB_DATABASE: str = "directory-db"
    COSMOS_DB_EMPLOYEES_CONTAINER: str = "employee"
    COSMOS_DB_COMPENSATION_CONTAINER: str = "compensation"

    # Used by the in-memory store when Cosmos DB is not configured
    EMPLOYEE_SEED_FILE: str = _DEFAULT_SEED_FILE

    REPORTING_CACHE_POLICY: str = "never"
    REPORTING_CACHE_TTL_SECONDS: float = 300.0
    REPORTING_CACHE_MAX_ENTRIES: int = 1024
    REPORTING_CACHE_CLEAR_ON_WRITE: bool = False

    AUTH_ISSUER: str = ""
    AUTH_AUDIENCE: str = ""
    AUTH_JWKS_URL: str = ""
    AUTH_JWKS_TTL_SECONDS: int = 24 * 60 * 60

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
