"""
Index data model for Pack Sync.

Package and Release mirror the index JSON, which uses hyphenated keys for
multi-word fields ("latest-version", "updated-at").
"""

from dataclasses import dataclass
from typing import Any, Optional


def _field(data: Any, key: str, kind: type) -> Any:
    """Fetch a required key of a given type, raising ValueError on mismatch."""
    if not isinstance(data, dict):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"missing field '{key}'")
    value = data[key]
    # bool is an int subclass; reject it where an integer is expected
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"field '{key}' should be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Release:
    """One published version of a package."""
    version: str
    downloads: int
    updated_at: int

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "downloads": self.downloads,
            "updated-at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Release":
        downloads = _field(data, "downloads", int)
        if downloads < 0:
            raise ValueError(f"field 'downloads' is negative: {downloads}")
        return cls(
            version=_field(data, "version", str),
            downloads=downloads,
            updated_at=_field(data, "updated-at", int),
        )


@dataclass(frozen=True)
class Package:
    """One entry from the index. Immutable snapshot at fetch time."""
    name: str
    description: str
    latest_version: str
    repository: Optional[str]  # None (JSON null) is distinct from ""
    updated_at: int
    releases: tuple = ()

    @property
    def archive_name(self) -> str:
        """Tarball filename on the archive host."""
        return f"{self.name}-{self.latest_version}.tar"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "latest-version": self.latest_version,
            "repository": self.repository,
            "updated-at": self.updated_at,
            "releases": [r.to_dict() for r in self.releases],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Package":
        name = _field(data, "name", str)
        if not name:
            raise ValueError("field 'name' is empty")

        if "repository" not in data:
            raise ValueError("missing field 'repository'")
        repository = data["repository"]
        if repository is not None and not isinstance(repository, str):
            raise ValueError(f"field 'repository' should be str or null, got {type(repository).__name__}")

        return cls(
            name=name,
            description=_field(data, "description", str),
            latest_version=_field(data, "latest-version", str),
            repository=repository,
            updated_at=_field(data, "updated-at", int),
            releases=tuple(Release.from_dict(r) for r in _field(data, "releases", list)),
        )


def packages_from_list(items: Any) -> list:
    """Decode a JSON array of packages, rejecting duplicate names."""
    if not isinstance(items, list):
        raise ValueError(f"expected a list of packages, got {type(items).__name__}")
    packages = [Package.from_dict(item) for item in items]
    seen = set()
    for package in packages:
        if package.name in seen:
            raise ValueError(f"duplicate package '{package.name}'")
        seen.add(package.name)
    return packages
