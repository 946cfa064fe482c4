"""Project scanner that orchestrates discovery, classification and graph assembly."""

import logging
import os
from pathlib import Path
from typing import Optional, Set, Union

from graph.builder import build_reverse_edges, build_tree, normalize_paths
from graph.model import AliasConfig, Node, ProjectGraph
from .classifier import classify
from .config import load_config
from .discovery import ScanError, iter_files
from .parser import extract_imports
from .resolver import get_relative_path


logger = logging.getLogger(__name__)

READ_ERROR_SKIP = "skip"
READ_ERROR_RAISE = "raise"
READ_ERROR_POLICIES = (READ_ERROR_SKIP, READ_ERROR_RAISE)


def derive_name(rel_path: str, project_name: str) -> str:
    """
    Derive the display name of a file node.

    The name is the file name without extension, except for ``index``
    files: a root-level index is named after the project, any other one
    ``<parent-directory>/index``.
    """
    stem = os.path.splitext(os.path.basename(rel_path))[0]
    if stem != "index":
        return stem

    parent = os.path.dirname(rel_path)
    if not parent:
        return project_name
    return os.path.basename(parent) + "/index"


def parse_file(
    file_path: Path,
    rel_path: str,
    root: Path,
    config: AliasConfig,
) -> Node:
    """
    Read one source file and build its node.

    Raises:
        OSError: If the file cannot be read.
    """
    content = file_path.read_text(encoding="utf-8", errors="replace")

    role, multiple = classify(content, file_path.name, rel_path)
    imports = extract_imports(content, file_path.parent, root, config)

    return Node(
        id=rel_path,
        name=derive_name(rel_path, root.name),
        path=rel_path,
        type=role,
        multiple_components=multiple,
        imports=imports,
    )


def scan_project(
    root: Union[str, Path],
    on_read_error: str = READ_ERROR_SKIP,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
) -> ProjectGraph:
    """
    Scan a JavaScript/TypeScript project and build its graph.

    Args:
        root: Project root directory.
        on_read_error: What to do when a single file cannot be read:
                      "skip" logs a warning and leaves the file out of the
                      registry, "raise" aborts the scan with ScanError.
        include_ext: File extensions to scan (default: .js .jsx .ts .tsx).
        exclude_dirs: Directory names to prune (default: node_modules,
                     build, dist; hidden directories are always pruned).

    Returns:
        ProjectGraph with reverse edges, directory tree and forward-slash
        paths.

    Raises:
        ScanError: If the root is not a readable directory, a directory in
                   the tree cannot be listed, or a file cannot be read under
                   the "raise" policy.
        ValueError: If ``on_read_error`` is not a known policy.
    """
    if on_read_error not in READ_ERROR_POLICIES:
        raise ValueError(f"Unknown read error policy: {on_read_error!r}")

    root_path = Path(root)
    if not root_path.exists():
        raise ScanError(f"'{root}' does not exist")
    if not root_path.is_dir():
        raise ScanError(f"'{root}' is not a directory")
    root_path = root_path.resolve()

    config = load_config(root_path)
    project = ProjectGraph.for_directory(root_path.name, str(root_path))

    for file_path in iter_files(
        root=root_path,
        include_ext=include_ext,
        exclude_dirs=exclude_dirs,
    ):
        rel_path = get_relative_path(file_path, root_path)
        project.add_file(rel_path)

        try:
            node = parse_file(file_path, rel_path, root_path, config)
        except OSError as e:
            if on_read_error == READ_ERROR_RAISE:
                raise ScanError(f"Cannot read {rel_path}: {e}") from e
            logger.warning(f"Skipping unreadable file {rel_path}: {e}")
            continue

        if not node.name:
            continue
        project.add_node(node)

    build_reverse_edges(project.nodes_map)
    build_tree(project.nodes_map, project.root)
    normalize_paths(project)

    logger.info(
        f"Scanned {root_path}: {len(project.files)} files, "
        f"{len(project.nodes_map)} nodes"
    )
    return project
