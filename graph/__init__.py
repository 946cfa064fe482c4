"""Graph module: project data model and graph assembly."""

from .model import AliasConfig, Node, ProjectGraph, Stats
from .builder import build_reverse_edges, build_tree, normalize_paths

__all__ = [
    "AliasConfig",
    "Node",
    "ProjectGraph",
    "Stats",
    "build_reverse_edges",
    "build_tree",
    "normalize_paths",
]
