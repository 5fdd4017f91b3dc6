"""
Tests for nested archive extraction.

A package tarball is an outer tar holding contents.tar.gz, a gzipped tar of
the source tree.
"""

import gzip

import pytest

from pack.errors import CorruptArchive
from pack.sync.extractor import extract_files
from pack.sync.files import BinaryFile, TextFile, classify

from conftest import _tar_bytes, build_tarball

NON_UTF8 = b"\xff\xfe\x00\x80binary"


class TestExtraction:
    """Well-formed tarballs."""

    def test_text_and_binary_members(self):
        """Both members come back as raw bytes and classify by UTF-8 validity."""
        data = build_tarball({"a.txt": b"hi", "b.bin": NON_UTF8})

        files = extract_files(data)

        assert sorted(files) == [("a.txt", b"hi"), ("b.bin", NON_UTF8)]
        classified = {name: classify(name, raw) for name, raw in files}
        assert classified["a.txt"] == TextFile("a.txt", "hi")
        assert classified["b.bin"] == BinaryFile("b.bin", NON_UTF8)

    def test_other_outer_members_ignored(self):
        data = build_tarball({"src/app.gleam": b"pub fn main() {}"}, extra={"CHECKSUM": b"abc"})
        assert extract_files(data) == [("src/app.gleam", b"pub fn main() {}")]

    def test_nested_paths_preserved(self):
        data = build_tarball({
            "gleam.toml": b"name = \"x\"",
            "src/x.gleam": b"pub fn x() { 1 }",
            "src/x/internal.gleam": b"fn y() { 2 }",
        })
        names = [name for name, _ in extract_files(data)]
        assert names == ["gleam.toml", "src/x.gleam", "src/x/internal.gleam"]

    def test_dot_slash_prefix_stripped(self):
        data = build_tarball({"./README.md": b"# x", "./src/x.gleam": b"x"})
        names = [name for name, _ in extract_files(data)]
        assert names == ["README.md", "src/x.gleam"]

    def test_directory_entries_skipped(self):
        data = build_tarball({"src": None, "src/x.gleam": b"x"})
        assert extract_files(data) == [("src/x.gleam", b"x")]

    def test_empty_file_member_kept(self):
        data = build_tarball({"empty.txt": b""})
        assert extract_files(data) == [("empty.txt", b"")]


class TestExtractionErrors:
    """Malformed tarballs fail with CorruptArchive, never a raw exception."""

    def test_missing_contents_member(self):
        data = build_tarball({"a.txt": b"hi"}, include_contents=False)
        with pytest.raises(CorruptArchive):
            extract_files(data)

    def test_garbage_bytes(self):
        with pytest.raises(CorruptArchive):
            extract_files(b"this is not a tar file at all" * 40)

    def test_empty_input(self):
        with pytest.raises(CorruptArchive):
            extract_files(b"")

    def test_contents_not_gzip(self):
        data = _tar_bytes({"contents.tar.gz": b"plain bytes, no gzip header"})
        with pytest.raises(CorruptArchive):
            extract_files(data)

    def test_truncated_gzip(self):
        inner = gzip.compress(_tar_bytes({"a.txt": b"hello world" * 100}))
        data = _tar_bytes({"contents.tar.gz": inner[: len(inner) // 2]})
        with pytest.raises(CorruptArchive):
            extract_files(data)

    def test_gzip_of_non_tar(self):
        data = _tar_bytes({"contents.tar.gz": gzip.compress(b"not a tar" * 100)})
        with pytest.raises(CorruptArchive):
            extract_files(data)

    def test_inner_tar_without_files(self):
        """A real package has at least one source file."""
        data = build_tarball({})
        with pytest.raises(CorruptArchive):
            extract_files(data)

    def test_inner_tar_with_only_directories(self):
        data = build_tarball({"src": None})
        with pytest.raises(CorruptArchive):
            extract_files(data)

    def test_duplicate_member_paths_rejected(self):
        data = build_tarball({"a.txt": b"first", "./a.txt": b"second"})
        with pytest.raises(CorruptArchive, match="duplicate"):
            extract_files(data)

    def test_parent_traversal_rejected(self):
        data = build_tarball({"../escape.txt": b"x"})
        with pytest.raises(CorruptArchive, match="unsafe"):
            extract_files(data)

    def test_absolute_path_rejected(self):
        data = build_tarball({"/etc/passwd": b"x"})
        with pytest.raises(CorruptArchive, match="unsafe"):
            extract_files(data)


class TestClassify:

    def test_utf8_multibyte_is_text(self):
        assert classify("x.txt", "héllo ✓".encode()) == TextFile("x.txt", "héllo ✓")

    def test_invalid_utf8_is_binary(self):
        assert isinstance(classify("x.png", b"\x89PNG\r\n\x1a\n\xff"), BinaryFile)
