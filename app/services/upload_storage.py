"""Local content store for images uploaded with vocabulary entries."""

from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import BinaryIO, Callable

from app.core.errors import InvalidInputError, StorageFailure

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ImageUpload:
    """Framework-agnostic view of an uploaded file."""

    filename: str
    stream: BinaryIO


class UploadStorage:
    """Write uploads under ``directory`` and expose them below ``{base_url}/uploads``.

    Files are named ``{unix_seconds}_{basename}``; two uploads of the same
    name within one second overwrite each other.
    """

    URL_PREFIX = "uploads"

    def __init__(
        self,
        directory: str | Path,
        base_url: str,
        clock: Callable[[], float] = time.time,
    ):
        self.directory = Path(directory)
        self.base_url = base_url.rstrip("/")
        self.clock = clock

    def stored_name(self, original_filename: str) -> str:
        # Browsers on Windows may send the full client path.
        basename = PureWindowsPath(original_filename).name
        basename = Path(basename).name
        if not basename or basename in {".", ".."}:
            raise InvalidInputError("invalid_filename")
        return f"{int(self.clock())}_{basename}"

    def public_url(self, stored_name: str) -> str:
        return f"{self.base_url}/{self.URL_PREFIX}/{stored_name}"

    def save(self, upload: ImageUpload) -> str:
        """Persist ``upload`` and return its public URL."""

        name = self.stored_name(upload.filename)
        destination = self.directory / name
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with destination.open("wb") as buffer:
                shutil.copyfileobj(upload.stream, buffer)
        except OSError as exc:
            logger.error("Échec de l'enregistrement de l'image %s: %s", destination, exc)
            raise StorageFailure("failed_to_save_image") from exc

        logger.info("Image enregistrée: %s", destination)
        return self.public_url(name)

    def discard(self, url: str) -> None:
        """Remove a file previously returned by :meth:`save`."""

        destination = self.directory / url.rsplit("/", 1)[-1]
        try:
            destination.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Impossible de supprimer l'image orpheline %s: %s", destination, exc)
            return
        logger.info("Image orpheline supprimée: %s", destination)
