from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .errors import PatchError


@dataclass
class PatchResult:
    """Modèle de données pour le résultat du patch d'un fichier EPUB."""

    path: str
    filename: str

    # Valeurs demandées
    author: str = ""
    publisher: str = ""

    # Métadonnées originales (lues avant le patch)
    original_title: str | None = None
    original_authors: List[str] | None = field(default_factory=list)
    original_publisher: str | None = None

    # Métadonnées écrites
    new_title: str | None = None
    new_authors: List[str] | None = field(default_factory=list)
    new_publisher: str | None = None

    # Statut du traitement
    success: bool = False
    error: "PatchError | None" = None
    note: str = ""
