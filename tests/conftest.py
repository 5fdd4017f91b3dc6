"""Pytest configuration and fixtures."""

import gzip
import io
import json
import tarfile
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests

INDEX = "https://index.test/api/packages"
ARCHIVES = "https://archives.test/tarballs"


def _tar_bytes(members: dict, mode: str = "w") -> bytes:
    """Build a tar from {name: bytes}; a value of None adds a directory entry."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode=mode) as tf:
        for name, data in members.items():
            info = tarfile.TarInfo(name=name)
            if data is None:
                info.type = tarfile.DIRTYPE
                tf.addfile(info)
            else:
                info.size = len(data)
                tf.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def build_tarball(files: dict, extra: dict = None, include_contents: bool = True) -> bytes:
    """Build a package tarball: outer tar holding a gzipped inner tar of `files`."""
    outer = {"VERSION": b"3", "metadata.config": b'{<<"name">>,<<"x">>}.\n'}
    if extra:
        outer.update(extra)
    if include_contents:
        outer["contents.tar.gz"] = gzip.compress(_tar_bytes(files))
    return _tar_bytes(outer)


def package_json(name: str, version: str = "1.0.0", repository="https://github.com/example/repo") -> dict:
    """A package object as the index returns it."""
    return {
        "name": name,
        "description": f"The {name} package",
        "latest-version": version,
        "repository": repository,
        "updated-at": 1700000000,
        "releases": [
            {"version": version, "downloads": 42, "updated-at": 1700000000},
            {"version": "0.1.0", "downloads": 7, "updated-at": 1600000000},
        ],
    }


class FakeSession:
    """Stands in for requests.Session; routes URLs to canned responses."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url: str, status: int = 200, body=None):
        """Register a response. dict/list bodies are JSON-encoded; exceptions are raised."""
        self.routes[url] = (status, body)

    def add_index(self, packages: list, index_url: str = INDEX):
        self.add(index_url, body={"data": [{"name": p["name"]} for p in packages]})
        for p in packages:
            self.add(f"{index_url}/{p['name']}", body={"data": p})

    def get(self, url, **kwargs):
        self.calls.append(url)
        if url not in self.routes:
            raise requests.ConnectionError(f"no route for {url}")
        status, body = self.routes[url]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, (dict, list)):
            content = json.dumps(body).encode()
        elif isinstance(body, str):
            content = body.encode()
        else:
            content = body or b""

        response = Mock()
        response.status_code = status
        response.content = content
        response.json = lambda: json.loads(content)
        return response


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def session():
    return FakeSession()
