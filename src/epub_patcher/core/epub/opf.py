"""
Module du document OPF.

Responsabilité unique: lire, modifier et réécrire le document de
métadonnées (package OPF) d'un EPUB.

Deux namespaces comptent:
- ``dc``: le namespace Dublin Core, fixe;
- ``ns``: le namespace par défaut de l'élément racine, qui varie selon
  l'outil qui a produit l'EPUB et doit donc être lu dans le document.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Optional

from lxml import etree

from ...config import DC_NAMESPACE, NEW_FIELD_NAMESPACE
from ..errors import (
    ArchiveIOError,
    FieldValueError,
    MetadataEntryNotFoundError,
    TitleElementNotFoundError,
    XmlParseError,
)
from ..text_utils import normalize_title

logger = logging.getLogger(__name__)

NamespaceMap = Mapping[str, Optional[str]]


def _qname(namespace: Optional[str], local_name: str) -> str:
    if namespace:
        return "{%s}%s" % (namespace, local_name)
    return local_name


# --- Lecture / écriture ---


def load_document(opf_path: str) -> etree._ElementTree:
    """
    Parse le document OPF.

    Raises:
        XmlParseError: Si le XML est mal formé
        ArchiveIOError: Si le fichier est illisible
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.parse(opf_path, parser)
    except etree.XMLSyntaxError as e:
        raise XmlParseError(f"Invalid XML in {opf_path}: {e}", opf_path) from e
    except OSError as e:
        raise ArchiveIOError(f"Cannot read {opf_path}: {e}", opf_path) from e


def save_document(tree: etree._ElementTree, opf_path: str):
    """Réécrit le document en conservant la déclaration XML et l'encodage."""
    encoding = tree.docinfo.encoding or "utf-8"
    try:
        tree.write(
            opf_path,
            xml_declaration=True,
            encoding=encoding,
            standalone=tree.docinfo.standalone,
        )
    except OSError as e:
        raise ArchiveIOError(f"Cannot write {opf_path}: {e}", opf_path) from e
    logger.debug("Saved metadata document %s (%s)", opf_path, encoding)


def resolve_namespaces(tree: etree._ElementTree) -> NamespaceMap:
    """
    Construit la table des namespaces à partir du document.

    Returns:
        Mapping immuable {"dc": <uri Dublin Core>, "ns": <namespace par défaut>}.
        "ns" vaut None si la racine ne déclare pas de namespace par défaut.
    """
    root = tree.getroot()
    default_ns = root.nsmap.get(None)
    if default_ns is None:
        # Racine préfixée (<opf:package>): son propre namespace fait foi
        default_ns = etree.QName(root).namespace
    return MappingProxyType({"dc": DC_NAMESPACE, "ns": default_ns})


# --- Recherche des éléments ---


def find_metadata_element(tree: etree._ElementTree, namespaces: NamespaceMap) -> etree._Element:
    """
    Localise l'élément <metadata> via le namespace par défaut.

    Raises:
        MetadataEntryNotFoundError: Si le document n'a pas d'élément metadata
    """
    root = tree.getroot()
    tag = _qname(namespaces["ns"], "metadata")
    if root.tag == tag:
        return root
    metadata = root.find(".//" + tag)
    if metadata is None:
        raise MetadataEntryNotFoundError("No <metadata> element in document")
    return metadata


def find_fields(
    tree: etree._ElementTree,
    metadata: etree._Element,
    namespaces: NamespaceMap,
    name: str,
) -> List[etree._Element]:
    """
    Cherche un champ: d'abord les dc:<name> de tout le document, puis les
    enfants <name> de metadata dans le namespace par défaut.
    """
    elements = list(tree.getroot().iter(_qname(namespaces["dc"], name)))
    if namespaces["ns"] != namespaces["dc"]:
        elements += metadata.findall(_qname(namespaces["ns"], name))
    return elements


def find_field(
    tree: etree._ElementTree,
    metadata: etree._Element,
    namespaces: NamespaceMap,
    name: str,
) -> Optional[etree._Element]:
    """Premier élément trouvé par find_fields, ou None."""
    elements = find_fields(tree, metadata, namespaces, name)
    return elements[0] if elements else None


# --- Modification ---


def _create_field(
    metadata: etree._Element, namespaces: NamespaceMap, name: str, new_field_ns: str
) -> etree._Element:
    """Ajoute un enfant en fin de metadata en reprenant l'indentation existante."""
    last = metadata[-1] if len(metadata) else None

    if new_field_ns == "default":
        element = etree.SubElement(metadata, _qname(namespaces["ns"], name))
    else:
        # Déclarer le préfixe dc si aucun ancêtre ne le fait
        nsmap = None
        if namespaces["dc"] not in metadata.nsmap.values():
            nsmap = {"dc": namespaces["dc"]}
        element = etree.SubElement(metadata, _qname(namespaces["dc"], name), nsmap=nsmap)

    if last is not None:
        element.tail = last.tail
        last.tail = metadata.text
    return element


def set_field(
    tree: etree._ElementTree,
    metadata: etree._Element,
    namespaces: NamespaceMap,
    name: str,
    value: str,
    new_field_ns: Optional[str] = None,
) -> etree._Element:
    """
    Trouve ou crée le champ ``name`` et lui affecte ``value``.

    Si l'élément existe, seul son texte est remplacé (réappliquer la même
    valeur ne change rien) et les éventuels doublons sont supprimés: le
    champ n'apparaît qu'une fois après le patch. Sinon il est créé et
    ajouté comme enfant de metadata, dans le namespace dc ou dans le
    namespace par défaut selon new_field_ns ("dc" ou "default",
    NEW_FIELD_NAMESPACE par défaut).

    Returns:
        L'élément mis à jour

    Raises:
        FieldValueError: Mode de namespace inconnu ou valeur non représentable en XML
    """
    new_field_ns = new_field_ns or NEW_FIELD_NAMESPACE
    if new_field_ns not in ("dc", "default"):
        raise FieldValueError(f"Unknown namespace mode for new fields: {new_field_ns}")

    try:
        # lxml refuse les caractères interdits en XML (NUL, \x0b...)
        etree.Element("check").text = value
    except (ValueError, TypeError) as e:
        raise FieldValueError(f"Invalid value for <{name}>: {value!r}") from e

    elements = find_fields(tree, metadata, namespaces, name)
    element = elements[0] if elements else None
    for duplicate in elements[1:]:
        logger.info("Removed duplicate <%s>: %s", name, duplicate.text)
        duplicate.getparent().remove(duplicate)

    if element is None:
        element = _create_field(metadata, namespaces, name, new_field_ns)
        logger.info("Created <%s>: %s", name, value)
    elif element.text != value:
        logger.info("Updated <%s>: %s -> %s", name, element.text, value)
    else:
        logger.info("<%s> unchanged", name)

    element.text = value
    return element


def normalize_title_element(tree: etree._ElementTree, namespaces: NamespaceMap) -> str:
    """
    Normalise le texte de dc:title (les '_' et '-' deviennent des espaces).

    Returns:
        Le titre normalisé

    Raises:
        TitleElementNotFoundError: Si le document n'a pas de dc:title
    """
    title = tree.getroot().find(".//" + _qname(namespaces["dc"], "title"))
    if title is None:
        raise TitleElementNotFoundError("No dc:title element in document")

    normalized = normalize_title(title.text or "")
    if normalized != (title.text or ""):
        logger.info("Normalized title: %s -> %s", title.text, normalized)
    title.text = normalized
    return normalized
