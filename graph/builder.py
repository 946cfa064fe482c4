"""Relationship and tree construction over a scanned node registry."""

import os
from typing import Dict, List

from .model import Node, ProjectGraph, ROLE_DIRECTORY


def build_reverse_edges(nodes_map: Dict[str, Node]) -> None:
    """
    Fill in ``imported_by`` for every node in the registry.

    For each node N and each import I of N that is itself a registered
    node, N's id is appended to I's ``imported_by`` list, once per
    occurrence. Imports without a matching node stay visible only in the
    importer's forward ``imports`` list.

    Args:
        nodes_map: Registry of file nodes keyed by id (modified in place).
    """
    for node in nodes_map.values():
        node.imported_by = []

    for source_id in sorted(nodes_map):
        for target in nodes_map[source_id].imports:
            imported = nodes_map.get(target)
            if imported is not None:
                imported.imported_by.append(source_id)


def build_tree(nodes_map: Dict[str, Node], root: Node) -> Node:
    """
    Rebuild the directory hierarchy under ``root`` from the flat registry.

    Files are grouped by the directory part of their path; root-level files
    belong to the empty directory. Each directory lists its files first
    (sorted by id), then one synthetic directory node per child directory.
    A directory appears only if some eligible file lives at or below it.

    Args:
        nodes_map: Registry of file nodes keyed by id. Not modified; the
            tree holds copies of its nodes.
        root: Node that receives the top level of the tree.

    Returns:
        The ``root`` node, with its children replaced.
    """
    dir_nodes: Dict[str, List[Node]] = {}
    for node in nodes_map.values():
        dir_nodes.setdefault(os.path.dirname(node.path), []).append(node.copy())

    # Directories holding files only in deeper levels still need a node
    known_dirs = set()
    for directory in list(dir_nodes):
        while directory and directory not in known_dirs:
            known_dirs.add(directory)
            directory = os.path.dirname(directory)

    subdirs: Dict[str, List[str]] = {}
    for directory in known_dirs:
        subdirs.setdefault(os.path.dirname(directory), []).append(directory)

    root.children = []
    _attach_children(root, "", dir_nodes, subdirs)
    return root


def _attach_children(
    parent: Node,
    directory: str,
    dir_nodes: Dict[str, List[Node]],
    subdirs: Dict[str, List[str]],
) -> None:
    parent.children.extend(
        sorted(dir_nodes.get(directory, []), key=lambda n: n.id)
    )

    for subdir in sorted(subdirs.get(directory, [])):
        dir_node = Node(
            id=subdir,
            name=os.path.basename(subdir),
            path=subdir,
            type=ROLE_DIRECTORY,
        )
        _attach_children(dir_node, subdir, dir_nodes, subdirs)
        parent.children.append(dir_node)


def to_unix_path(path: str) -> str:
    """Convert a path string to use forward slashes."""
    return path.replace("\\", "/")


def normalize_paths(project: ProjectGraph) -> ProjectGraph:
    """
    Rewrite every path-like field of the graph to use forward slashes.

    Covers the root path, the file list, the registry keys, each node's
    id/path/imports/imported_by, and the whole tree below the root.
    """
    project.root.path = to_unix_path(project.root.path)
    _normalize_children(project.root)

    project.files = [to_unix_path(f) for f in project.files]

    normalized: Dict[str, Node] = {}
    for node_id, node in project.nodes_map.items():
        _normalize_node(node)
        _normalize_children(node)
        normalized[to_unix_path(node_id)] = node
    project.nodes_map = normalized

    return project


def _normalize_node(node: Node) -> None:
    node.id = to_unix_path(node.id)
    node.path = to_unix_path(node.path)
    node.imports = [to_unix_path(p) for p in node.imports]
    node.imported_by = [to_unix_path(p) for p in node.imported_by]


def _normalize_children(node: Node) -> None:
    for child in node.children:
        _normalize_node(child)
        _normalize_children(child)
