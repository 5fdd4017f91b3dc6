"""
Shared constants for Pack Sync.
"""

# Remote index listing every known package (GET /, GET /<name>)
INDEX_URL = "https://packages.gleam.run/api/packages"

# Archive host serving <name>-<version>.tar tarballs
ARCHIVE_URL = "https://repo.hex.pm/tarballs"

# Member of the outer tarball holding the gzipped source tree
CONTENTS_MEMBER = "contents.tar.gz"

# Cache layout under the local data directory
CACHE_DIR_NAME = "pack"
PACKAGES_FILE = "packages.json"
PACKAGES_DIR = "packages"

# Environment override for the local data directory
DATA_DIR_ENV = "PACK_DATA_DIR"

# HTTP timeouts (connect, read) in seconds
REQUEST_TIMEOUT = (10, 60)
