"""
Extracted file values.

A file is Text when its bytes decode as UTF-8, Binary otherwise. This is a
content heuristic, not a declared type.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TextFile:
    name: str
    content: str


@dataclass(frozen=True)
class BinaryFile:
    name: str
    content: bytes


File = Union[TextFile, BinaryFile]


def classify(name: str, raw: bytes) -> File:
    """Wrap raw bytes as TextFile if they are valid UTF-8, else BinaryFile."""
    try:
        return TextFile(name, raw.decode("utf-8"))
    except UnicodeDecodeError:
        return BinaryFile(name, raw)
