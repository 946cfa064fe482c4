"""Exporters for converting project graphs to output formats."""

from .ascii_exporter import to_ascii
from .json_exporter import from_json, save_project_json, to_json

__all__ = ["to_ascii", "to_json", "from_json", "save_project_json"]
