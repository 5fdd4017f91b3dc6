"""
Nested archive extraction for Pack Sync.

A package tarball is an uncompressed tar containing a `contents.tar.gz`
member, which is itself a gzipped tar of the package source. Everything is
decoded in memory; nothing touches disk here.
"""

import gzip
import io
import tarfile
import zlib
from typing import List, Tuple

from ..core.constants import CONTENTS_MEMBER
from ..core.formatting import normalize_member_path
from ..errors import CorruptArchive


def _read_outer_contents(data: bytes) -> bytes:
    """Pull the contents.tar.gz member out of the outer tarball."""
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:") as outer:
        try:
            member = outer.getmember(CONTENTS_MEMBER)
        except KeyError:
            raise CorruptArchive(f"no {CONTENTS_MEMBER} member")
        fileobj = outer.extractfile(member)
        if fileobj is None:
            raise CorruptArchive(f"{CONTENTS_MEMBER} is not a regular file")
        return fileobj.read()


def _read_inner_files(data: bytes) -> List[Tuple[str, bytes]]:
    """Read every regular file from the decompressed inner tarball."""
    files = []
    seen = set()
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:") as inner:
        for member in inner:
            if not member.isfile():
                continue
            path = normalize_member_path(member.name)
            if path is None:
                raise CorruptArchive(f"unsafe member path: {member.name!r}")
            if path in seen:
                raise CorruptArchive(f"duplicate member path: {path!r}")
            seen.add(path)
            fileobj = inner.extractfile(member)
            files.append((path, fileobj.read()))
    return files


def extract_files(data: bytes) -> List[Tuple[str, bytes]]:
    """
    Extract source files from a package tarball.

    Args:
        data: Raw bytes of the outer .tar file

    Returns:
        List of (relative_path, raw_bytes) in archive order

    Raises:
        CorruptArchive: missing contents.tar.gz, bad tar/gzip data, or an
            inner archive with no files
    """
    try:
        compressed = _read_outer_contents(data)
        contents = gzip.decompress(compressed)
        files = _read_inner_files(contents)
    except CorruptArchive:
        raise
    except (tarfile.TarError, OSError, EOFError, zlib.error) as e:
        raise CorruptArchive(str(e)) from e

    if not files:
        raise CorruptArchive("archive contains no files")
    return files
