"""
Package index client for Pack Sync.

Handles all HTTP interactions with the package index.
Does NOT handle archive downloads (see ArchiveDownloader for that).
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import requests

from ..core.constants import INDEX_URL, REQUEST_TIMEOUT
from ..core.progress import Done, Progress, ProgressTracker, Started
from ..errors import InvalidResponseBody, RequestFailed, UnexpectedStatus
from .models import Package


@dataclass
class IndexClientConfig:
    """Configuration for IndexClient."""
    index_url: str = INDEX_URL
    timeout: Tuple[int, int] = REQUEST_TIMEOUT


class IndexClient:
    """
    Package index API client.

    Fetches the package listing, then each package's metadata, one request
    at a time. The first failure aborts the whole fetch.
    """

    def __init__(self, config: Optional[IndexClientConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize the index client.

        Args:
            config: Client configuration
            session: Optional requests session (shared connection pool, test fakes)
        """
        self.config = config or IndexClientConfig()
        self.session = session or requests.Session()
        self._api_calls = 0

    @property
    def api_calls(self) -> int:
        """Total API calls made by this client."""
        return self._api_calls

    def _get_json(self, url: str):
        """GET a URL and decode its JSON body. Only HTTP 200 is accepted."""
        try:
            response = self.session.get(url, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise RequestFailed(url, e) from e
        self._api_calls += 1

        if response.status_code != 200:
            raise UnexpectedStatus(url, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseBody(e) from e

    @staticmethod
    def _unwrap(body):
        """Return the "data" member of an index response."""
        if not isinstance(body, dict) or "data" not in body:
            raise InvalidResponseBody(ValueError("missing field 'data'"))
        return body["data"]

    def list_package_names(self) -> list:
        """
        List the names of every package in the index.

        Returns:
            Package names in index order
        """
        data = self._unwrap(self._get_json(self.config.index_url))
        if not isinstance(data, list):
            raise InvalidResponseBody(ValueError("field 'data' should be a list"))

        names = []
        for entry in data:
            name = entry.get("name") if isinstance(entry, dict) else None
            if not isinstance(name, str) or not name:
                raise InvalidResponseBody(ValueError(f"bad package entry: {entry!r}"))
            if name in names:
                raise InvalidResponseBody(ValueError(f"duplicate package '{name}'"))
            names.append(name)
        return names

    def get_package(self, name: str) -> Package:
        """Fetch full metadata for a single package."""
        data = self._unwrap(self._get_json(f"{self.config.index_url}/{name}"))
        try:
            package = Package.from_dict(data)
        except ValueError as e:
            raise InvalidResponseBody(e) from e
        if package.name != name:
            raise InvalidResponseBody(ValueError(f"expected package '{name}', got '{package.name}'"))
        return package

    def fetch_index(self, progress: Optional[ProgressTracker] = None) -> list:
        """
        Fetch every package in the index.

        Args:
            progress: Receives Progress("index", n, total, name) after each package

        Returns:
            List of Package in index order
        """
        progress = progress or ProgressTracker()
        names = self.list_package_names()
        total = len(names)
        progress.emit(Started("index", total))

        packages = []
        for i, name in enumerate(names):
            packages.append(self.get_package(name))
            progress.emit(Progress("index", i + 1, total, name))

        progress.emit(Done("index", len(packages)))
        return packages
