import logging
import os
import re
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# Imports de l'application
from app.core.config import settings
from app.db.base import Base
from app.api.api import api_router
from app.db.session import async_engine
from app.admin import register_admin

# --- Configuration du logging ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Initialisation de l'application FastAPI ---
app = FastAPI(
    title="ChineseLearn API",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)


def _sanitize_origin(origin: str | None) -> str | None:
    if not origin:
        return None
    value = origin.strip()
    if not value:
        return None
    if not value.startswith("http"):
        value = f"https://{value}"
    return value.rstrip("/")


def _compile_origin_regex(patterns: set[str]) -> re.Pattern[str] | None:
    valid_patterns: list[str] = []
    for pattern in sorted(patterns):
        candidate = pattern.strip()
        if not candidate:
            continue

        try:
            re.compile(candidate)
        except re.error as exc:
            logger.warning("Regex CORS ignorée (invalide): %s (%s)", candidate, exc)
            continue

        valid_patterns.append(candidate)

    if not valid_patterns:
        return None

    return re.compile("|".join(f"(?:{pattern})" for pattern in valid_patterns))


def _build_cors_config() -> tuple[list[str], re.Pattern[str] | None]:
    base_origins = {_sanitize_origin(o) for o in settings.BACKEND_CORS_ORIGINS}

    additional = os.getenv("ADDITIONAL_CORS_ORIGINS")
    if additional:
        for origin in additional.split(","):
            base_origins.add(_sanitize_origin(origin))

    allow_origins = sorted({origin for origin in base_origins if origin})
    allow_origin_regex = _compile_origin_regex(set(settings.BACKEND_CORS_ORIGIN_REGEXES))

    logger.info("CORS origins configurés: %s", allow_origins)
    if allow_origin_regex is not None:
        logger.info("CORS regex configurés: %s", allow_origin_regex.pattern)

    return allow_origins, allow_origin_regex


# --- Configuration des Middlewares ---
cors_origins, cors_regex = _build_cors_config()

cors_kwargs: dict[str, object] = {
    "allow_origins": cors_origins,
    "allow_credentials": True,
    "allow_methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    "allow_headers": ["Origin", "Content-Type", "Accept"],
    "expose_headers": ["Content-Length"],
    "max_age": 12 * 60 * 60,
}

if cors_regex is not None:
    cors_kwargs["allow_origin_regex"] = cors_regex.pattern

app.add_middleware(CORSMiddleware, **cors_kwargs)

# --- Fichiers uploadés ---
# StaticFiles refuse un répertoire absent : on le crée avant de monter la route.
upload_dir = Path(settings.UPLOAD_DIR)
upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

# --- Initialisation de l'Admin ---
admin = register_admin(app, async_engine)

app.include_router(api_router, prefix=settings.API_PREFIX)


# --- Événement de Démarrage ---
@app.on_event("startup")
async def startup():
    logger.info("Vérification et création des tables de la base de données...")
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Les tables de la base de données sont prêtes.")


# --- Route Racine ---
@app.get("/")
def read_root():
    return {"message": "Welcome to ChineseLearn API!"}
