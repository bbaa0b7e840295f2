"""Path resolution utilities for workspace settings."""

import os
from pathlib import Path
from urllib.parse import unquote, urlparse


def resolve_path(path: str | Path, base_dir: Path | None) -> Path:
    """Resolve a path, making it relative to base_dir if it's relative."""
    path_obj = Path(os.path.expanduser(str(path)))

    # If path is absolute or no base_dir provided, return as-is
    if path_obj.is_absolute() or base_dir is None:
        return path_obj

    return base_dir / path_obj


def normalize_path(
    path: str | Path | None, base_dir: Path | None = None
) -> Path | None:
    """
    Normalize a path reported by the host so two spellings of the same file
    compare equal. Accepts plain paths and ``file://`` URLs.

    Returns None for missing or blank input.
    """
    if path is None:
        return None

    path_str = str(path).strip()
    if not path_str:
        return None

    if path_str.startswith("file://"):
        path_str = unquote(urlparse(path_str).path)

    return Path(os.path.normpath(resolve_path(path_str, base_dir)))
