"""Offline import of vocabulary exported as CSV.

Rows are upserted on their natural key, the trimmed ``chinese`` text within
the target chapter, so the import can be re-run over refreshed exports
without creating duplicates.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator, Optional

from app.core.errors import InvalidInputError, StorageFailure
from app.crud.repository import Repository
from app.models.chapter_model import Chapter
from app.models.vocabulary_model import Vocabulary

logger = logging.getLogger(__name__)

BOM = "\ufeff"

# Column headers of the export, with accepted fallbacks.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "chinese": ("Chinese",),
    "pinyin": ("Pinyin",),
    "meaning": ("English Meaning", "Meaning"),
    "image_url": ("Files & media",),
}


def clean_cell(value: str | None) -> str:
    """Remove byte-order marks and surrounding whitespace."""
    if not value:
        return ""
    return value.replace(BOM, "").strip()


@dataclass(slots=True)
class VocabularyRow:
    chinese: str
    pinyin: str = ""
    meaning: str = ""
    image_url: str = ""
    line_number: int = 0


class RowOutcome(str, Enum):
    INSERTED = "inserted"
    UPDATED = "updated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ImportReport:
    source: str
    outcomes: list[RowOutcome] = field(default_factory=list)

    def record(self, outcome: RowOutcome) -> None:
        self.outcomes.append(outcome)

    def _count(self, outcome: RowOutcome) -> int:
        return sum(1 for item in self.outcomes if item is outcome)

    @property
    def inserted(self) -> int:
        return self._count(RowOutcome.INSERTED)

    @property
    def updated(self) -> int:
        return self._count(RowOutcome.UPDATED)

    @property
    def skipped(self) -> int:
        return self._count(RowOutcome.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(RowOutcome.FAILED)

    @property
    def imported(self) -> int:
        """Rows successfully inserted or updated."""
        return self.inserted + self.updated


# ----------------------------------------------------------------------
# CSV reading
# ----------------------------------------------------------------------
def _map_header(header: list[str]) -> dict[str, int]:
    positions = {clean_cell(name): index for index, name in enumerate(header)}
    column_map: dict[str, int] = {}
    for key, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in positions:
                column_map[key] = positions[alias]
                break
    return column_map


def _cell(record: list[str], column_map: dict[str, int], key: str) -> str:
    index = column_map.get(key)
    if index is None or index >= len(record):
        return ""
    return clean_cell(record[index])


class _DecodedLines:
    """Iterate a binary file as UTF-8 text, one line at a time.

    A line that is not valid UTF-8 is handed to the CSV reader as an empty
    line and counted in ``undecodable``, so the rest of the file still reads.
    """

    def __init__(self, handle: BinaryIO):
        self._lines = iter(handle)
        self.undecodable = 0

    def __iter__(self) -> "_DecodedLines":
        return self

    def __next__(self) -> str:
        raw = next(self._lines)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            self.undecodable += 1
            return "\n"


def read_vocabulary_csv(path: Path) -> Iterator[Optional[VocabularyRow]]:
    """Yield one :class:`VocabularyRow` per data line of ``path``.

    A malformed or non UTF-8 line is logged and yielded as ``None`` so
    callers can count it without stopping. Raises :class:`InvalidInputError`
    when the file has no readable header or no ``Chinese`` column.
    """

    with path.open("rb") as handle:
        lines = _DecodedLines(handle)
        reader = csv.reader(lines, strict=True)
        try:
            header = next(reader)
        except StopIteration:
            raise InvalidInputError("empty_csv") from None
        except csv.Error as exc:
            raise InvalidInputError(f"unreadable_csv: {exc}") from exc
        if lines.undecodable:
            raise InvalidInputError("unreadable_csv_header")

        column_map = _map_header(header)
        if "chinese" not in column_map:
            raise InvalidInputError("missing_chinese_column")

        while True:
            undecodable = lines.undecodable
            try:
                record = next(reader)
            except StopIteration:
                return
            except csv.Error as exc:
                logger.warning("Ligne %s illisible dans %s: %s", reader.line_num, path.name, exc)
                yield None
                continue

            if lines.undecodable != undecodable:
                logger.warning("Ligne %s non UTF-8 dans %s", reader.line_num, path.name)
                yield None
                continue

            if not any(cell.strip() for cell in record):
                continue

            yield VocabularyRow(
                chinese=_cell(record, column_map, "chinese"),
                pinyin=_cell(record, column_map, "pinyin"),
                meaning=_cell(record, column_map, "meaning"),
                image_url=_cell(record, column_map, "image_url"),
                line_number=reader.line_num,
            )


def discover_csv_files(directory: Path, skip_suffix: str = "_all.csv") -> list[Path]:
    """CSV files of ``directory`` in name order, aggregate exports excluded.

    Raises ``OSError`` when the directory cannot be read.
    """

    entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    return [
        entry
        for entry in entries
        if entry.is_file()
        and entry.suffix.lower() == ".csv"
        and not (skip_suffix and entry.name.endswith(skip_suffix))
    ]


# ----------------------------------------------------------------------
# Import
# ----------------------------------------------------------------------
class VocabularyImporter:
    """Upsert vocabulary rows into a single chapter resolved by name."""

    def __init__(self, repository: Repository, chapter_name: str, chapter_description: str = ""):
        self.repository = repository
        self.chapter_name = chapter_name
        self.chapter_description = chapter_description
        self._chapter: Chapter | None = None

    @property
    def chapter(self) -> Chapter:
        if self._chapter is None:
            self._chapter = self.resolve_chapter()
        return self._chapter

    def resolve_chapter(self) -> Chapter:
        chapter = self.repository.first(Chapter, name=self.chapter_name)
        if chapter is None:
            chapter = self.repository.create(
                Chapter(name=self.chapter_name, description=self.chapter_description)
            )
            logger.info("Chapitre créé: %s (id=%s)", chapter.name, chapter.id)
        else:
            logger.info("Chapitre trouvé: %s (id=%s)", chapter.name, chapter.id)
        return chapter

    def import_row(self, row: VocabularyRow) -> RowOutcome:
        chinese = clean_cell(row.chinese)
        if not chinese:
            return RowOutcome.SKIPPED

        chapter_id = self.chapter.id
        try:
            existing = self.repository.first(Vocabulary, chinese=chinese, chapter_id=chapter_id)
            if existing is not None:
                existing.pinyin = clean_cell(row.pinyin)
                existing.meaning = clean_cell(row.meaning)
                existing.image_url = clean_cell(row.image_url)
                self.repository.save(existing)
                return RowOutcome.UPDATED

            self.repository.create(
                Vocabulary(
                    chinese=chinese,
                    pinyin=clean_cell(row.pinyin),
                    meaning=clean_cell(row.meaning),
                    image_url=clean_cell(row.image_url),
                    chapter_id=chapter_id,
                )
            )
            return RowOutcome.INSERTED
        except StorageFailure as exc:
            logger.error("Échec de l'import du mot %s (ligne %s): %s", chinese, row.line_number, exc)
            return RowOutcome.FAILED

    def import_rows(
        self,
        rows: Iterable[Optional[VocabularyRow]],
        source: str = "<rows>",
        report: ImportReport | None = None,
    ) -> ImportReport:
        """Import ``rows`` in order, recording each outcome into ``report`` as it happens."""

        if report is None:
            report = ImportReport(source=source)
        for row in rows:
            report.record(RowOutcome.FAILED if row is None else self.import_row(row))
        logger.info("Imported %d words from %s", report.imported, source)
        return report

    def import_file(self, path: Path) -> ImportReport:
        report = ImportReport(source=path.name)
        try:
            self.import_rows(read_vocabulary_csv(path), source=path.name, report=report)
        except (InvalidInputError, OSError) as exc:
            logger.error("Fichier interrompu %s après %d mots: %s", path, report.imported, exc)
        return report

    def import_directory(
        self,
        directory: Path,
        skip_suffix: str = "_all.csv",
        progress: Callable[[list[Path]], Iterable[Path]] = iter,
    ) -> list[ImportReport]:
        """Import every CSV of ``directory``, one file after the other.

        ``progress`` wraps the file list (the CLI passes ``tqdm``). A
        directory read failure propagates.
        """

        files = discover_csv_files(directory, skip_suffix=skip_suffix)
        if not files:
            logger.warning("Aucun fichier CSV trouvé dans %s", directory)
        return [self.import_file(path) for path in progress(files)]
