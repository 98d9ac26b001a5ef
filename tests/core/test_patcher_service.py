"""
Tests pour le module core.patcher_service.
"""

from unittest.mock import patch

from epub_patcher.core.models import PatchResult
from epub_patcher.core.patcher_service import PatcherService


class TestPatchFile:
    """Tests pour patch_file."""

    @patch("epub_patcher.core.patcher_service.patch_epub")
    @patch("epub_patcher.core.patcher_service.extract_metadata")
    def test_records_original_and_new_values(self, mock_extract, mock_patch):
        mock_extract.side_effect = [
            {"title": "My_Book", "authors": None, "publisher": None},
            {"title": "My Book", "authors": ["Jane Doe"], "publisher": "Acme Press"},
        ]
        mock_patch.return_value = PatchResult(
            path="/fake/book.epub", filename="book.epub", success=True, new_title="My Book"
        )

        result = PatcherService().patch_file("/fake/book.epub", "Jane Doe", "Acme Press")

        mock_patch.assert_called_once_with("/fake/book.epub", "Jane Doe", "Acme Press", None)
        assert result.original_title == "My_Book"
        assert result.original_authors is None
        assert result.new_authors == ["Jane Doe"]
        assert result.new_publisher == "Acme Press"

    @patch("epub_patcher.core.patcher_service.patch_epub")
    @patch("epub_patcher.core.patcher_service.extract_metadata")
    def test_failure_does_not_reread(self, mock_extract, mock_patch):
        mock_extract.return_value = {"title": "T", "authors": None, "publisher": None}
        mock_patch.return_value = PatchResult(path="/fake/book.epub", filename="book.epub")

        result = PatcherService().patch_file("/fake/book.epub", "A", "P")

        assert result.success is False
        assert mock_extract.call_count == 1

    def test_real_file(self, sample_epub):
        result = PatcherService().patch_file(str(sample_epub), "Jane Doe", "Acme Press")

        assert result.success is True
        assert result.original_title == "My_Book-Title"
        assert result.new_title == "My Book Title"
        assert result.new_authors == ["Jane Doe"]
        assert result.new_publisher == "Acme Press"

    def test_missing_file(self, tmp_path):
        result = PatcherService().patch_file(str(tmp_path / "missing.epub"), "A", "P")

        assert result.success is False
        assert "InputNotFoundError" in result.note


class TestPatchFolder:
    """Tests pour patch_folder."""

    def test_patches_every_epub(self, make_epub, opf_factory, tmp_path):
        make_epub("a.epub")
        make_epub("b.epub", opf=opf_factory(title=None))
        (tmp_path / "notes.txt").write_text("ignored")

        results = PatcherService().patch_folder(str(tmp_path), "Jane Doe", "Acme Press")

        assert [r.filename for r in results] == ["a.epub", "b.epub"]
        assert [r.success for r in results] == [True, False]

    def test_empty_folder(self, tmp_path):
        assert PatcherService().patch_folder(str(tmp_path), "A", "P") == []

    def test_invalid_value_does_not_stop_batch(self, make_epub, tmp_path):
        make_epub("a.epub")
        make_epub("b.epub")

        results = PatcherService().patch_folder(str(tmp_path), "Jane\x00Doe", "Acme Press")

        assert [r.filename for r in results] == ["a.epub", "b.epub"]
        assert all("FieldValueError" in r.note for r in results)
