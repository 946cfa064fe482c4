"""Heuristic classification of source files into component/state/util roles."""

import re
from typing import Callable, List, Optional, Tuple

from graph.model import ROLE_COMPONENT, ROLE_STATE, ROLE_UTIL


# Content markers of state-management code (Redux, Context, other libraries)
STATE_CONTENT_MARKERS = (
    "createStore",
    "combineReducers",
    "createSlice",
    "configureStore",
    "useContext",
    "createContext",
    "Provider",
    "zustand",
    "recoil",
    "jotai",
    "mobx",
)

# Path fragments that mark state-management modules
STATE_PATH_MARKERS = ("redux", "store", "state", "reducer", "action")

UI_IMPORT_MARKERS = (
    "import React",
    "from 'react'",
    'from "react"',
    "from 'preact'",
    'from "preact"',
    "from 'react-native'",
    'from "react-native"',
)

DECLARATION_RE = re.compile(r"\b(?:function|const|class)\s+[\w$]+\s*[({]")
COMPONENT_DECLARATION_RE = re.compile(
    r"\b(?:function|const|let|class)\s+([A-Z][\w$]*)\s*(?:[({=<:]|extends\b)"
)


def is_state_file(content: str, path: str) -> bool:
    """Check for state-management signatures in the content or path."""
    if any(marker in content for marker in STATE_CONTENT_MARKERS):
        return True
    return any(marker in path for marker in STATE_PATH_MARKERS)


def has_ui_import(content: str) -> bool:
    return any(marker in content for marker in UI_IMPORT_MARKERS)


def has_jsx_return(content: str) -> bool:
    """Check for ``return (`` followed later by ``<`` and then ``/>``."""
    start = content.find("return (")
    if start == -1:
        return False
    open_tag = content.find("<", start)
    return open_tag != -1 and content.find("/>", open_tag) != -1


def has_component_definition(content: str) -> bool:
    """Check for a declaration alongside a render method or a return."""
    if not DECLARATION_RE.search(content):
        return False
    return "render" in content or "return" in content


def is_component_file(content: str, file_name: str) -> bool:
    """
    Check whether a file looks like a UI component.

    A UI-framework import together with JSX or a component-like
    declaration is enough; so is a file name starting with an ASCII
    uppercase letter, whatever the content.
    """
    if "A" <= file_name[:1] <= "Z":
        return True
    if not has_ui_import(content):
        return False
    return has_jsx_return(content) or has_component_definition(content)


def count_component_definitions(content: str) -> int:
    """
    Count declarations whose name looks like a component.

    ALL-CAPS names such as ``API_URL`` or ``TIMEOUT`` are constants, not
    components. Short acronyms like ``UI`` and single letters still count.
    """
    return sum(
        1
        for match in COMPONENT_DECLARATION_RE.finditer(content)
        if not _is_constant_name(match.group(1))
    )


def _is_constant_name(name: str) -> bool:
    return name.isupper() and ("_" in name or len(name) >= 3)


def has_multiple_components(content: str) -> bool:
    return count_component_definitions(content) > 1


# Ordered (role, predicate) rules; the first predicate that holds wins.
# Predicates take (content, file_name, path).
CLASSIFICATION_RULES: List[Tuple[str, Callable[[str, str, str], bool]]] = [
    (ROLE_STATE, lambda content, file_name, path: is_state_file(content, path)),
    (ROLE_COMPONENT, lambda content, file_name, path: is_component_file(content, file_name)),
]


def classify(
    content: str,
    file_name: str,
    path: Optional[str] = None,
) -> Tuple[str, bool]:
    """
    Classify a source file.

    Args:
        content: Source text of the file.
        file_name: Base name of the file (e.g. ``Button.jsx``).
        path: Project-relative path, checked for state markers.
              Defaults to ``file_name``.

    Returns:
        A ``(role, multiple_components)`` tuple. ``multiple_components``
        is only ever true for components.
    """
    if path is None:
        path = file_name

    for role, predicate in CLASSIFICATION_RULES:
        if predicate(content, file_name, path):
            if role == ROLE_COMPONENT:
                return role, has_multiple_components(content)
            return role, False

    return ROLE_UTIL, False
