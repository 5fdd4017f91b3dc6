"""
Formatting and path utilities for Pack Sync.
"""

from pathlib import PurePosixPath
from typing import Optional


# ============================================================================
# Cross-platform path utilities
# ============================================================================

def normalize_member_path(name: str) -> Optional[str]:
    """
    Normalize an archive member name to a path relative to the package root.

    Strips "./" prefixes and redundant separators. Returns None if the name
    is empty, absolute, or climbs out of the root with "..".
    """
    name = name.replace("\\", "/")
    if name.startswith("/"):
        return None
    parts = [p for p in PurePosixPath(name).parts if p not in ("", ".")]
    if not parts or ".." in parts:
        return None
    return "/".join(parts)


# ============================================================================
# Size and duration formatting
# ============================================================================

def format_size(size_bytes: int) -> str:
    """Format bytes as human readable string."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} PB"


def format_duration(seconds: float) -> str:
    """Format seconds as human readable duration."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{int(seconds // 60)}m {int(seconds % 60)}s"
    else:
        return f"{int(seconds // 3600)}h {int((seconds % 3600) // 60)}m"
