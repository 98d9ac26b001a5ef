"""
Configuration et constantes pour EPUB Patcher
"""

import os

# ---------- Dossiers ----------
LOG_DIR = "logs"
LOG_FILENAME = "epub_patcher.log"

# ---------- Extensions supportées ----------
SUPPORTED_EXT = (".epub",)

# ---------- Conteneur EPUB ----------
METADATA_FILENAME = "content.opf"
CONTAINER_XML_PATH = "META-INF/container.xml"
CONTAINER_NS = "urn:oasis:names:tc:opendocument:xmlns:container"
MIMETYPE_ENTRY = "mimetype"

# ---------- Métadonnées ----------
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
TITLE_SEPARATORS = ("_", "-")

# Namespace des éléments créés: "dc" ou "default" (namespace par défaut du document)
NEW_FIELD_NS_ENV_VAR = "EPUB_PATCHER_NEW_FIELD_NS"
NEW_FIELD_NAMESPACE = os.getenv(NEW_FIELD_NS_ENV_VAR, "dc")

# ---------- Configuration logging ----------
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5
LOG_ENCODING = "utf-8"


# ---------- Initialisation des dossiers ----------
def ensure_directories(log_dir: str = LOG_DIR):
    """Crée le dossier de logs s'il n'existe pas."""
    os.makedirs(log_dir, exist_ok=True)
