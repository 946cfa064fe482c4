"""ASCII tree-style exporter for project graphs."""

import posixpath
from typing import List, Tuple

from graph.model import (
    Node,
    ProjectGraph,
    ROLE_COMPONENT,
    ROLE_DIRECTORY,
    ROLE_STATE,
    ROLE_UTIL,
)


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "

ROLE_MARKERS = {
    ROLE_COMPONENT: "[C]",
    ROLE_STATE: "[S]",
    ROLE_UTIL: "[U]",
}
MULTIPLE_MARKER = "!"


def to_ascii(
    project: ProjectGraph,
    style: str = "tree",
    show_imports: bool = False,
) -> str:
    """
    Render the directory tree of a project graph as text.

    Files are tagged with their role ([C]omponent, [S]tate, [U]til) and
    ``!`` when they define several components. A stats footer follows.

    Args:
        project: The project graph to render.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        show_imports: If True, list each file's imports (``->``) and
                      importers (``<-``) beneath it; imports that match
                      no scanned file are marked [MISSING].

    Returns:
        ASCII tree string.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    lines: List[str] = [f"{project.root.name}/"]
    _render_children(
        project=project,
        node=project.root,
        prefix="",
        chars=chars,
        lines=lines,
        show_imports=show_imports,
    )

    lines.append("")
    lines.extend(_render_stats(project))
    return "\n".join(lines)


def _render_children(
    project: ProjectGraph,
    node: Node,
    prefix: str,
    chars: Tuple[str, str, str, str],
    lines: List[str],
    show_imports: bool,
) -> None:
    branch, last, vertical, space = chars

    for index, child in enumerate(node.children):
        is_last = index == len(node.children) - 1
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{_label(child)}")

        child_prefix = prefix + (space if is_last else vertical)
        if child.type == ROLE_DIRECTORY:
            _render_children(project, child, child_prefix, chars, lines, show_imports)
        elif show_imports:
            _render_imports(project, child, child_prefix, chars, lines)


def _render_imports(
    project: ProjectGraph,
    node: Node,
    prefix: str,
    chars: Tuple[str, str, str, str],
    lines: List[str],
) -> None:
    branch, last = chars[0], chars[1]
    entries = []
    for target in node.imports:
        marker = " [MISSING]" if project.get_node(target) is None else ""
        entries.append(f"-> {target}{marker}")
    entries.extend(f"<- {source}" for source in project.get_importers(node.id))

    for index, entry in enumerate(entries):
        connector = last if index == len(entries) - 1 else branch
        lines.append(f"{prefix}{connector}{entry}")


def _label(node: Node) -> str:
    """Get the display label for a tree node."""
    if node.type == ROLE_DIRECTORY:
        return f"{node.name}/"

    label = f"{posixpath.basename(node.path)} {ROLE_MARKERS.get(node.type, '')}".rstrip()
    if node.multiple_components:
        label += f" {MULTIPLE_MARKER}"
    return label


def _render_stats(project: ProjectGraph) -> List[str]:
    stats = project.stats
    return [
        f"Files: {len(project.files)}",
        f"Components: {stats.component_files} "
        f"(multiple per file: {stats.multi_comp_files})",
        f"State: {stats.state_files}",
        f"Utilities: {stats.util_files}",
    ]
