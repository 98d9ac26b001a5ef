"""
Configuration globale pour pytest.

Fournit des fixtures réutilisables pour tous les tests, notamment une
fabrique d'EPUB minimaux construits avec zipfile.
"""

import zipfile
from pathlib import Path
from typing import Dict, Optional

import pytest
from lxml import etree

DC_NS = "http://purl.org/dc/elements/1.1/"
OPF_NS = "http://www.idpf.org/2007/opf"

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="{default_ns}" version="2.0" unique-identifier="BookId">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    {title}<dc:language>en</dc:language>
    <dc:identifier id="BookId">urn:uuid:0b9f6c1e-5c3a-4d7e-9a55-2f4f1a2b3c4d</dc:identifier>{extra}
  </metadata>
  <manifest>
    <item id="chapter1" href="chapter1.xhtml" media-type="application/xhtml+xml"/>
  </manifest>
  <spine>
    <itemref idref="chapter1"/>
  </spine>
</package>
"""

CHAPTER_XHTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Chapter 1</title></head>
<body><p>Once upon a time.</p></body>
</html>
"""


def build_opf(
    title: Optional[str] = "My_Book-Title",
    extra: str = "",
    default_ns: str = OPF_NS,
) -> str:
    """Construit un document OPF; title=None omet dc:title."""
    title_xml = f"<dc:title>{title}</dc:title>\n    " if title is not None else ""
    extra_xml = f"\n    {extra}" if extra else ""
    return OPF_TEMPLATE.format(default_ns=default_ns, title=title_xml, extra=extra_xml)


def build_epub(
    path: Path,
    opf: Optional[str] = None,
    opf_path: str = "OEBPS/content.opf",
    extra_entries: Optional[Dict[str, str]] = None,
    with_container: bool = True,
) -> Path:
    """Écrit un EPUB minimal; opf=None omet le document OPF."""
    opf_dir = opf_path.rsplit("/", 1)[0] + "/" if "/" in opf_path else ""
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        if with_container:
            zf.writestr("META-INF/container.xml", CONTAINER_XML.format(opf_path=opf_path))
        if opf is not None:
            zf.writestr(opf_path, opf)
        zf.writestr(opf_dir + "chapter1.xhtml", CHAPTER_XHTML)
        for name, content in (extra_entries or {}).items():
            zf.writestr(name, content)
    return path


def read_opf(epub_path: Path, opf_path: str = "OEBPS/content.opf") -> etree._Element:
    """Relit et parse l'OPF contenu dans un EPUB."""
    with zipfile.ZipFile(epub_path) as zf:
        return etree.fromstring(zf.read(opf_path))


@pytest.fixture
def make_epub(tmp_path):
    """Fabrique d'EPUB de test dans un répertoire temporaire."""

    def _make(name: str = "book.epub", **kwargs) -> Path:
        if "opf" not in kwargs:
            kwargs["opf"] = build_opf()
        return build_epub(tmp_path / name, **kwargs)

    return _make


@pytest.fixture
def sample_epub(make_epub) -> Path:
    """EPUB sans dc:creator ni dc:publisher, titre 'My_Book-Title'."""
    return make_epub()


@pytest.fixture
def temp_dir(tmp_path):
    """Fournit un répertoire temporaire pour les tests."""
    return tmp_path


@pytest.fixture
def opf_factory():
    """Expose build_opf aux tests."""
    return build_opf


@pytest.fixture
def opf_reader():
    """Expose read_opf aux tests."""
    return read_opf
