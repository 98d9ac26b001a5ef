"""EPUB Patcher - écrit auteur et éditeur et normalise le titre d'un EPUB."""

__version__ = "0.1.0"
