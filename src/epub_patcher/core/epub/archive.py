"""
Module d'archive EPUB.

Responsabilité unique: extraire le conteneur zip dans un dossier de travail,
y localiser le document OPF, puis reconstruire le conteneur et remplacer
l'original de manière atomique.
"""

import logging
import os
import posixpath
import shutil
import zipfile
from dataclasses import dataclass, field
from typing import List, Optional

from lxml import etree

from ...config import CONTAINER_NS, CONTAINER_XML_PATH, METADATA_FILENAME, MIMETYPE_ENTRY
from ..errors import ArchiveIOError, ArchiveRepackError, MetadataEntryNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ExtractedArchive:
    """Contenu d'un EPUB extrait dans un dossier de travail."""

    root: str
    entries: List[zipfile.ZipInfo] = field(default_factory=list)
    comment: bytes = b""

    @property
    def names(self) -> List[str]:
        return [info.filename for info in self.entries]

    def path_of(self, entry_name: str) -> str:
        """Chemin sur disque d'une entrée de l'archive."""
        return os.path.join(self.root, *entry_name.split("/"))


def _check_entry_name(name: str, epub_path: str):
    """Refuse les entrées qui sortiraient du dossier de travail."""
    parts = name.split("/")
    if name.startswith("/") or ".." in parts or ":" in parts[0]:
        raise ArchiveIOError(f"Unsafe entry name in archive: {name}", epub_path)


def extract_epub(epub_path: str, dest_dir: str) -> ExtractedArchive:
    """
    Extrait toutes les entrées d'un EPUB dans dest_dir.

    Args:
        epub_path: Chemin du fichier EPUB
        dest_dir: Dossier de travail (doit exister)

    Returns:
        ExtractedArchive décrivant les entrées dans l'ordre d'origine

    Raises:
        ArchiveIOError: Si l'archive est illisible ou contient des chemins dangereux
    """
    try:
        with zipfile.ZipFile(epub_path, "r") as zin:
            entries = zin.infolist()
            for info in entries:
                _check_entry_name(info.filename, epub_path)
            zin.extractall(dest_dir)
            comment = zin.comment
    except (zipfile.BadZipFile, OSError) as e:
        raise ArchiveIOError(f"Cannot extract {epub_path}: {e}", epub_path) from e

    logger.info("Extracted %d entries from %s", len(entries), epub_path)
    return ExtractedArchive(root=dest_dir, entries=entries, comment=comment)


def _rootfile_from_container(archive: ExtractedArchive) -> Optional[str]:
    """Lit le chemin de l'OPF déclaré dans META-INF/container.xml."""
    if CONTAINER_XML_PATH not in archive.names:
        return None
    try:
        tree = etree.parse(archive.path_of(CONTAINER_XML_PATH))
    except (etree.XMLSyntaxError, OSError):
        logger.warning("Unreadable %s, ignoring it", CONTAINER_XML_PATH, exc_info=True)
        return None

    for rootfile in tree.iter("{%s}rootfile" % CONTAINER_NS):
        full_path = rootfile.get("full-path")
        if full_path and full_path.lower().endswith(".opf") and full_path in archive.names:
            return full_path
    return None


def find_metadata_entry(archive: ExtractedArchive) -> str:
    """
    Localise l'entrée du document de métadonnées.

    Cherche d'abord les entrées nommées content.opf, à n'importe quelle
    profondeur. Si plusieurs correspondent, la plus courte (profondeur puis
    ordre alphabétique) est retenue. Sinon, on se rabat sur le rootfile
    déclaré dans META-INF/container.xml.

    Raises:
        MetadataEntryNotFoundError: Si aucun document OPF n'est trouvé
    """
    candidates = [
        info.filename
        for info in archive.entries
        if not info.is_dir() and posixpath.basename(info.filename).lower() == METADATA_FILENAME
    ]
    if candidates:
        candidates.sort(key=lambda name: (name.count("/"), len(name), name))
        if len(candidates) > 1:
            logger.warning(
                "Several %s entries found (%s), using %s",
                METADATA_FILENAME,
                ", ".join(candidates),
                candidates[0],
            )
        return candidates[0]

    rootfile = _rootfile_from_container(archive)
    if rootfile:
        logger.info("Metadata document found via %s: %s", CONTAINER_XML_PATH, rootfile)
        return rootfile

    raise MetadataEntryNotFoundError(f"No {METADATA_FILENAME} found in archive")


def _ordered_entries(archive: ExtractedArchive) -> List[zipfile.ZipInfo]:
    """Place l'entrée mimetype en tête, comme l'exige le format OCF."""
    mimetype = [info for info in archive.entries if info.filename == MIMETYPE_ENTRY]
    others = [info for info in archive.entries if info.filename != MIMETYPE_ENTRY]
    return mimetype + others


def _write_archive(archive: ExtractedArchive, target_path: str):
    with zipfile.ZipFile(target_path, "w", zipfile.ZIP_DEFLATED) as zout:
        zout.comment = archive.comment
        for info in _ordered_entries(archive):
            disk_path = archive.path_of(info.filename)
            if info.is_dir():
                zout.writestr(zipfile.ZipInfo(info.filename, date_time=info.date_time), b"")
                continue
            # mimetype doit rester non compressé
            compress = zipfile.ZIP_STORED if info.filename == MIMETYPE_ENTRY else zipfile.ZIP_DEFLATED
            zout.write(disk_path, info.filename, compress_type=compress)


def repack_epub(archive: ExtractedArchive, epub_path: str):
    """
    Reconstruit l'EPUB depuis le dossier de travail et remplace l'original.

    Utilise un fichier temporaire à côté de l'original puis os.replace,
    pour ne jamais laisser un EPUB à moitié écrit.

    Raises:
        ArchiveRepackError: Si l'écriture ou le remplacement échoue
    """
    temp_epub_path = epub_path + ".tmp"

    try:
        _write_archive(archive, temp_epub_path)
        logger.info("Successfully wrote to temporary file: %s", temp_epub_path)

        # Conserver les permissions du fichier d'origine
        shutil.copymode(epub_path, temp_epub_path)
        os.replace(temp_epub_path, epub_path)
        logger.info("Replaced original file with temporary file.")

    except (OSError, zipfile.BadZipFile, ValueError) as e:
        logger.exception("Failed during temp write or replace: %s", e)

        # Nettoyer le fichier temporaire en cas d'échec
        if os.path.exists(temp_epub_path):
            try:
                os.remove(temp_epub_path)
            except OSError:
                logger.warning("Could not remove temporary file %s", temp_epub_path)

        raise ArchiveRepackError(f"Cannot repack {epub_path}: {e}", epub_path) from e
