"""
Service de patch EPUB.

Service réutilisable qui orchestre le workflow complet: lecture des
métadonnées d'origine, patch de l'OPF, puis relecture pour contrôle.
"""

import logging
from typing import List, Optional

from .epub import extract_metadata, patch_epub
from .file_utils import find_epubs_in_folder
from .models import PatchResult

logger = logging.getLogger(__name__)


class PatcherService:
    """
    Service de patch EPUB.

    Fournit les opérations de haut niveau:
    - Patch d'un fichier avec relevé des valeurs avant/après
    - Patch de tous les EPUB d'un dossier
    """

    def __init__(self, new_field_ns: Optional[str] = None):
        self.new_field_ns = new_field_ns
        logger.debug("PatcherService initialized")

    def patch_file(self, epub_path: str, author: str, publisher: str) -> PatchResult:
        """
        Patche un fichier EPUB.

        Args:
            epub_path: Chemin vers le fichier EPUB
            author: Auteur à écrire
            publisher: Éditeur à écrire

        Returns:
            PatchResult avec métadonnées originales et nouvelles
        """
        logger.info("Patching EPUB: %s", epub_path)
        original = extract_metadata(epub_path)

        result = patch_epub(epub_path, author, publisher, self.new_field_ns)
        result.original_title = original.get("title")
        result.original_authors = original.get("authors")
        result.original_publisher = original.get("publisher")

        if result.success:
            # Relire le fichier reconstruit pour refléter son contenu réel
            written = extract_metadata(epub_path)
            result.new_title = written.get("title") or result.new_title
            result.new_authors = written.get("authors") or result.new_authors
            result.new_publisher = written.get("publisher") or result.new_publisher
            logger.info("Successfully patched: %s", result.filename)
        else:
            logger.error("Failed to patch: %s", result.filename)

        return result

    def patch_folder(self, folder_path: str, author: str, publisher: str) -> List[PatchResult]:
        """
        Patche tous les fichiers EPUB d'un dossier.

        Un échec sur un fichier n'interrompt pas le traitement des autres.

        Returns:
            Liste des PatchResult, dans l'ordre des chemins
        """
        logger.info("Processing folder: %s", folder_path)

        files = find_epubs_in_folder(folder_path)
        results = [self.patch_file(epub_path, author, publisher) for epub_path in files]

        failed = sum(1 for r in results if not r.success)
        logger.info("Patched %d files (%d failed)", len(results) - failed, failed)
        return results
