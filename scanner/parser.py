"""Extraction of import edges from JavaScript/TypeScript source text."""

import os
import re
from pathlib import Path
from typing import Dict, List, Union

from graph.model import AliasConfig
from .resolver import (
    get_relative_path,
    is_alias_match,
    probe_extensions,
    resolve_import_path,
)


# import X from '...', import { a, b } from '...', import * as ns from '...',
# import X, { a } from '...', import type { T } from '...'.
# Side-effect imports, dynamic import() and re-exports are not matched.
_NAMED = r"\{[^}]*\}"
_NAMESPACE = r"\*\s*as\s+[\w$]+"
IMPORT_RE = re.compile(
    r"\bimport\s+(?:type\s+)?"
    rf"(?:{_NAMED}|{_NAMESPACE}|[\w$]+(?:\s*,\s*(?:{_NAMED}|{_NAMESPACE}))?)"
    r"\s*from\s*['\"]([^'\"]+)['\"]"
)


def find_import_specifiers(content: str) -> List[str]:
    """Return raw import specifiers in order of appearance."""
    return [match.group(1) for match in IMPORT_RE.finditer(content)]


def is_external_specifier(specifier: str, aliases: Dict[str, str]) -> bool:
    """
    Decide whether a specifier names a third-party package.

    Scoped (``@scope/pkg``) and single-segment (``react``) specifiers are
    external unless they are relative, root-absolute, or match a configured
    alias. Everything else is treated as project code.
    """
    if specifier.startswith((".", "/")):
        return False
    if not specifier.startswith("@") and "/" in specifier:
        return False
    return not any(alias and is_alias_match(specifier, alias) for alias in aliases)


def extract_imports(
    content: str,
    current_dir: Union[str, Path],
    project_root: Union[str, Path],
    config: AliasConfig,
) -> List[str]:
    """
    Extract the project-relative targets of a file's imports.

    Each surviving specifier is resolved through the alias configuration,
    made relative to the project root and completed with a source
    extension (or ``/index.<ext>``) when that names an existing file.
    Unresolvable imports are kept as-is; they just won't join to a node.

    Args:
        content: Source text of the file.
        current_dir: Directory of the file (absolute, or relative to
            the project root).
        project_root: Project root directory.
        config: Alias configuration of the project.

    Returns:
        Import targets in order of appearance, duplicates included.
    """
    project_root = os.path.abspath(str(project_root))
    current_dir = os.path.join(project_root, str(current_dir))

    imports: List[str] = []
    for specifier in find_import_specifiers(content):
        if is_external_specifier(specifier, config.aliases):
            continue

        resolved = resolve_import_path(specifier, config, project_root, current_dir)
        rel_path = get_relative_path(resolved, project_root)
        imports.append(probe_extensions(rel_path, project_root))

    return imports
