"""File discovery utilities for scanning project trees."""

from pathlib import Path
from typing import Iterator, Optional, Set


ELIGIBLE_EXTENSIONS = {".js", ".jsx", ".ts", ".tsx"}
PRUNED_DIRS = {"node_modules", "build", "dist"}


class ScanError(Exception):
    """Raised when a project tree cannot be scanned."""


def is_eligible_file(name: str, include_ext: Optional[Set[str]] = None) -> bool:
    """Check whether a file name has an eligible source extension."""
    if include_ext is None:
        include_ext = ELIGIBLE_EXTENSIONS
    return Path(name).suffix.lower() in include_ext


def is_pruned_dir(name: str, exclude_dirs: Optional[Set[str]] = None) -> bool:
    """Check whether a directory is skipped entirely (including hidden ones)."""
    if exclude_dirs is None:
        exclude_dirs = PRUNED_DIRS
    return name in exclude_dirs or name.startswith(".")


def iter_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
) -> Iterator[Path]:
    """
    Iterate over eligible source files in a directory tree.

    Entries are visited in sorted order. Pruned directories are not
    descended into, and neither are symlinked directories.

    Args:
        root: Root directory to scan.
        include_ext: Set of file extensions to include.
                    If None, uses ELIGIBLE_EXTENSIONS.
        exclude_dirs: Set of directory names to skip (hidden directories
                     are always skipped). If None, uses PRUNED_DIRS.

    Yields:
        Path objects for matching files.

    Raises:
        ScanError: If a directory cannot be listed.
    """
    root = Path(root).resolve()

    def _walk(current: Path) -> Iterator[Path]:
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            raise ScanError(f"Cannot read directory {current}: {e}") from e

        for entry in entries:
            if entry.is_dir():
                if entry.is_symlink() or is_pruned_dir(entry.name, exclude_dirs):
                    continue
                yield from _walk(entry)
            elif entry.is_file():
                if is_eligible_file(entry.name, include_ext):
                    yield entry

    yield from _walk(root)
