"""
Hiérarchie des erreurs levées par le patch des métadonnées EPUB.

Toutes les erreurs dérivent de PatchError. L'exception d'origine
(OSError, zipfile.BadZipFile, XMLSyntaxError...) reste attachée via
``__cause__``.
"""


class PatchError(Exception):
    """Erreur terminale pour une opération de patch."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class InputNotFoundError(PatchError):
    """Le fichier EPUB n'existe pas ou n'est pas un fichier régulier."""


class MetadataEntryNotFoundError(PatchError):
    """Aucun document OPF exploitable dans le conteneur."""


class TitleElementNotFoundError(PatchError):
    """Le document OPF ne contient pas de dc:title."""


class ArchiveIOError(PatchError):
    """Lecture ou extraction de l'archive impossible."""


class XmlParseError(PatchError):
    """Le document OPF n'est pas du XML bien formé."""


class ArchiveRepackError(PatchError):
    """Échec de la reconstruction ou du remplacement de l'archive."""


class FieldValueError(PatchError):
    """Valeur de champ (ou mode de namespace) impossible à écrire dans l'OPF."""
