"""Import specifier resolution through the project's alias configuration."""

import os
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from graph.model import AliasConfig


# Probe order for extensionless imports
PROBE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")


def resolve_import_path(
    specifier: str,
    config: AliasConfig,
    project_root: Union[str, Path],
    current_dir: Union[str, Path],
) -> str:
    """
    Resolve an import specifier to a candidate file system path.

    Resolution order:
    1. ``./`` and ``../`` imports, relative to the importing file's directory.
    2. ``/`` imports, relative to the project root.
    3. Aliased imports; the longest matching alias wins.
    4. Bare imports under ``project_root/baseUrl`` when a baseUrl is set.
    5. Bare imports under the project root.

    The result depends only on the arguments, and the path may not exist.

    Args:
        specifier: The raw module specifier from the import statement.
        config: Alias configuration of the project.
        project_root: Project root directory.
        current_dir: Directory of the importing file.

    Returns:
        Normalized candidate path.
    """
    project_root = str(project_root)

    if specifier.startswith("."):
        return os.path.normpath(os.path.join(str(current_dir), specifier))

    if specifier.startswith("/"):
        return os.path.normpath(os.path.join(project_root, specifier.lstrip("/")))

    alias = match_alias(specifier, config.aliases)
    if alias is not None:
        target = config.aliases[alias]
        remainder = specifier[len(alias):].lstrip("/")

        if os.path.isabs(target):
            base = target
        elif config.base_url:
            base = os.path.join(project_root, config.base_url, target)
        else:
            base = os.path.join(project_root, target)

        return os.path.normpath(os.path.join(base, remainder) if remainder else base)

    if config.base_url:
        return os.path.normpath(os.path.join(project_root, config.base_url, specifier))

    return os.path.normpath(os.path.join(project_root, specifier))


def match_alias(specifier: str, aliases: Dict[str, str]) -> Optional[str]:
    """
    Find the alias that applies to a specifier.

    An alias applies when the specifier equals it or continues it with a
    ``/``. When several apply, the longest one wins.

    Returns:
        The matching alias key, or None.
    """
    best: Optional[str] = None
    for alias in aliases:
        if not alias:
            continue
        if is_alias_match(specifier, alias) and (best is None or len(alias) > len(best)):
            best = alias
    return best


def is_alias_match(specifier: str, alias: str) -> bool:
    """Check whether a specifier equals an alias or lies beneath it."""
    if specifier == alias:
        return True
    prefix = alias if alias.endswith("/") else alias + "/"
    return specifier.startswith(prefix)


def probe_extensions(
    rel_path: str,
    root: Union[str, Path],
    extensions: Sequence[str] = PROBE_EXTENSIONS,
) -> str:
    """
    Complete an import path that does not name an existing file.

    Tries ``<path><ext>`` for each extension, then ``<path>/index<ext>``.
    The first existing file wins. Directory-only paths such as ``.`` or
    ``..`` only get the ``index`` candidates, which come back normalized.

    Args:
        rel_path: Import path relative to the project root.
        root: Project root directory.
        extensions: Extensions to try, in order.

    Returns:
        The completed relative path, or ``rel_path`` unchanged if no
        candidate exists.
    """
    root = Path(root)
    if (root / rel_path).is_file():
        return rel_path

    if os.path.basename(rel_path) not in ("", ".", ".."):
        for ext in extensions:
            if (root / (rel_path + ext)).is_file():
                return rel_path + ext

    for ext in extensions:
        candidate = os.path.normpath(os.path.join(rel_path, "index" + ext))
        if (root / candidate).is_file():
            return candidate

    return rel_path


def get_relative_path(path: Union[str, Path], root: Union[str, Path]) -> str:
    """
    Get a path relative to root.

    Paths outside root keep ``..`` segments; paths that cannot be related
    at all (another drive on Windows) are returned unchanged.
    """
    try:
        return os.path.relpath(str(path), str(root))
    except ValueError:
        return str(path)
