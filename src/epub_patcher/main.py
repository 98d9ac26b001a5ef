"""
Point d'entrée principal pour EPUB Patcher
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from .config import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_ENCODING,
    LOG_FILENAME,
    LOG_MAX_BYTES,
    ensure_directories,
)


def _file_handler(log_dir: str) -> logging.Handler:
    """Journal détaillé, avec rotation, dans log_dir/epub_patcher.log."""
    handler = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILENAME),
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding=LOG_ENCODING,
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    return handler


def setup_logging(log_dir: str = LOG_DIR) -> logging.Logger:
    """
    Configure le logger du package: fichier (DEBUG) et console (INFO).

    Un nouvel appel remplace les handlers posés par l'appel précédent.
    """
    ensure_directories(log_dir)
    logger = logging.getLogger("epub_patcher")
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    logger.addHandler(_file_handler(log_dir))
    logger.addHandler(console)
    return logger


def run_cli(argv=None) -> int:
    """Lance le mode ligne de commande."""
    logger = logging.getLogger("epub_patcher")
    argv = sys.argv if argv is None else argv

    if len(argv) != 4:
        print("Usage: python -m epub_patcher <epub_path> <author> <publisher>")
        print("  epub_path: Fichier EPUB (ou dossier contenant des fichiers EPUB)")
        print("  author: Auteur à écrire dans dc:creator")
        print("  publisher: Éditeur à écrire dans dc:publisher")
        return 1

    path, author, publisher = argv[1], argv[2], argv[3]

    from .cli import cli_patch, print_patch_summary

    results = cli_patch(path, author, publisher)
    print_patch_summary(results)

    if results and all(r.success for r in results):
        print("\nMétadonnées mises à jour.")
        return 0

    if not results:
        print(f"\nError: no EPUB found in {path}")
    logger.error("CLI mode - %d file(s) failed", sum(1 for r in results if not r.success))
    return 1


def main(argv=None) -> int:
    """Point d'entrée principal."""
    setup_logging()
    return run_cli(argv)


if __name__ == "__main__":
    raise SystemExit(main())
