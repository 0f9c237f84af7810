from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status
from pydantic import ValidationError

from app.core.errors import ServiceError


@contextmanager
def service_errors() -> Iterator[None]:
    """Translate domain errors raised by the services into HTTP responses."""
    try:
        yield
    except ServiceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@contextmanager
def form_errors() -> Iterator[None]:
    """Report the first invalid form field as ``invalid_<field>`` (400)."""
    try:
        yield
    except ValidationError as exc:
        errors = exc.errors()
        field = errors[0]["loc"][0] if errors and errors[0].get("loc") else "form"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid_{field}") from exc
