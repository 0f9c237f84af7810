# Fichier: backend/scripts/import_csv.py

import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

# --- Configuration du chemin et des imports ---
sys.path.append(str(Path(__file__).resolve().parents[1]))
from app.core.config import settings
from app.core.errors import StorageFailure
from app.crud.repository import Repository
from app.db.base import Base  # noqa: F401 - charge tous les modèles
from app.db.session import SessionLocal, sync_engine
from app.services.vocabulary_importer import VocabularyImporter

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Importe le vocabulaire exporté en CSV dans un chapitre.")
    parser.add_argument(
        "csv_dir",
        nargs="?",
        default=settings.IMPORT_CSV_DIR,
        help="Répertoire contenant les fichiers CSV (défaut: IMPORT_CSV_DIR).",
    )
    parser.add_argument(
        "--chapter",
        default=settings.IMPORT_CHAPTER_NAME,
        help="Nom du chapitre cible, créé s'il n'existe pas.",
    )
    parser.add_argument(
        "--description",
        default=settings.IMPORT_CHAPTER_DESCRIPTION,
        help="Description utilisée si le chapitre doit être créé.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if not args.csv_dir:
        logger.error("❌ Aucun répertoire CSV fourni (argument ou IMPORT_CSV_DIR).")
        return 2

    csv_dir = Path(args.csv_dir).expanduser().resolve()
    Base.metadata.create_all(bind=sync_engine)

    db_session = SessionLocal()
    try:
        importer = VocabularyImporter(
            Repository(db_session),
            chapter_name=args.chapter,
            chapter_description=args.description,
        )
        try:
            reports = importer.import_directory(
                csv_dir,
                skip_suffix=settings.IMPORT_SKIP_SUFFIX,
                progress=lambda files: tqdm(files, desc="Fichiers CSV", unit="fichier"),
            )
        except OSError as exc:
            logger.error("❌ Impossible de lire le répertoire %s: %s", csv_dir, exc)
            return 1
        except StorageFailure as exc:
            logger.error("❌ Base de données indisponible pendant l'import: %s", exc.code)
            return 1
    finally:
        db_session.close()

    total = sum(report.imported for report in reports)
    failed = sum(report.failed for report in reports)
    logger.info("✅ Import terminé: %s mots importés depuis %s fichiers (%s lignes en erreur).", total, len(reports), failed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
