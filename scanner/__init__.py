"""Scanner module for file discovery, classification and import extraction."""

from .discovery import ScanError, iter_files
from .config import load_config
from .classifier import classify
from .parser import extract_imports
from .resolver import resolve_import_path
from .builder import scan_project

__all__ = [
    "ScanError",
    "iter_files",
    "load_config",
    "classify",
    "extract_imports",
    "resolve_import_path",
    "scan_project",
]
