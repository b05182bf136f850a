"""Main entry point: prepare storage, load the catalog and report."""
import logging
import sys

from poliglot.config import ensure_directories
from poliglot.errors import CatalogError
from poliglot.logging_config import setup_logging
from poliglot.models.base import init_db
from poliglot.models.word_models import Mode, ProficiencyLevel
from poliglot.services.catalog_service import load_catalog

logger = logging.getLogger(__name__)


def main() -> int:
    ensure_directories()
    setup_logging("Starting Poliglot ...")

    init_db()
    logger.info("Database initialized")

    try:
        catalog = load_catalog()
    except CatalogError as e:
        logger.error(f"Could not load catalog: {e}")
        return 1

    logger.info(f"Kid mode: {len(catalog.words_for(Mode.KID, ProficiencyLevel.EASY))} words")
    for level in ProficiencyLevel:
        logger.info(f"Adult mode, {level.value}: {len(catalog.words_for(Mode.ADULT, level))} words")

    return 0


if __name__ == "__main__":
    sys.exit(main())
