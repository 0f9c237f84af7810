# Fichier: backend/app/core/config.py
from pydantic_settings import BaseSettings
from typing import Optional, List
from pydantic import AnyHttpUrl, ValidationError, field_validator
import sys

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./chineselearn.db"
    ENVIRONMENT: str = "development"
    API_PREFIX: str = "/api"

    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    BACKEND_CORS_ORIGIN_REGEXES: List[str] = []

    # --- Uploads ---
    # Public URL of this API, used to build the links of uploaded images.
    PUBLIC_BASE_URL: AnyHttpUrl = "http://localhost:8080"
    UPLOAD_DIR: str = "uploads"

    # Performance instrumentation
    SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS: int = 300

    # --- Import CSV ---
    IMPORT_CSV_DIR: Optional[str] = None
    IMPORT_CHAPTER_NAME: str = "HSK 1"
    IMPORT_CHAPTER_DESCRIPTION: str = "All HSK 1 Vocabulary"
    IMPORT_SKIP_SUFFIX: str = "_all.csv"

    class Config:
        env_file = ".env"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: str) -> str:
        """Ensure database URLs always use an async driver.

        The async engine (startup table creation and the admin) needs
        ``asyncpg`` or ``aiosqlite``. Managed Postgres providers still hand
        out ``postgres://`` URLs and local setups often use a bare
        ``sqlite://`` URL, so both are upgraded here; the synchronous engine
        derives its own URL from the normalised value.
        """

        if not isinstance(value, str):
            return value

        if "+asyncpg" in value or "+aiosqlite" in value:
            return value

        replacements = {
            "postgres://": "postgresql+asyncpg://",
            "postgresql://": "postgresql+asyncpg://",
            "postgresql+psycopg2://": "postgresql+asyncpg://",
            "postgresql+psycopg://": "postgresql+asyncpg://",
            "sqlite://": "sqlite+aiosqlite://",
        }

        for prefix, target in replacements.items():
            if value.startswith(prefix):
                return target + value[len(prefix) :]

        return value

    @property
    def public_base_url(self) -> str:
        return str(self.PUBLIC_BASE_URL).rstrip("/")


def _log_settings_validation_error(exc: ValidationError) -> None:
    """Pretty-print missing or invalid environment variables.

    The settings are instantiated at import time, so a bad value would
    otherwise surface as an opaque traceback from whichever module imported
    the configuration first.
    """

    header = "Configuration error while loading environment variables:"
    print(header, file=sys.stderr)

    details = exc.errors()
    if not details:
        print(exc, file=sys.stderr)
        return

    for error in details:
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Unknown validation error")
        type_name = error.get("type")
        hint = f"{message} (type={type_name})" if type_name else message
        print(f"  - {location}: {hint}", file=sys.stderr)


try:
    settings = Settings()
except ValidationError as exc:  # pragma: no cover - exercised at runtime
    _log_settings_validation_error(exc)
    raise
