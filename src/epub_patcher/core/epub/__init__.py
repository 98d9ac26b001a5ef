"""
Module EPUB - Patch des métadonnées des fichiers EPUB.

Ce module fournit des fonctions pour lire les métadonnées descriptives
et pour écrire auteur, éditeur et titre normalisé dans le document OPF.
"""

from .reader import extract_metadata, safe_read_epub
from .writer import apply_patch, patch_epub

__all__ = [
    "apply_patch",
    "extract_metadata",
    "patch_epub",
    "safe_read_epub",
]
