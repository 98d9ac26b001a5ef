"""
Logique pour les opérations sur le système de fichiers.
"""

import logging
import os
from typing import List

from ..config import SUPPORTED_EXT

logger = logging.getLogger(__name__)


def find_epubs_in_folder(folder: str) -> List[str]:
    """Trouve tous les fichiers EPUB dans un dossier et ses sous-dossiers."""
    files = []
    for root, _, filenames in os.walk(folder):
        for f in filenames:
            if f.lower().endswith(SUPPORTED_EXT):
                files.append(os.path.join(root, f))
    files.sort()
    logger.info("Found %d epub(s) in folder %s", len(files), folder)
    return files
