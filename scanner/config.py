"""Loading of import alias configuration from project config files."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from graph.model import AliasConfig


logger = logging.getLogger(__name__)

# Searched in this order; the first JSON-bearing file that parses wins
CONFIG_FILES = [
    "jsconfig.json",
    "tsconfig.json",
    "webpack.config.js",
    "craco.config.js",
    ".babelrc",
    "babel.config.js",
    "package.json",
]

JSON_CONFIG_FILES = {"jsconfig.json", "tsconfig.json", ".babelrc", "package.json"}

DEFAULT_BASE_URL = "src"

MAX_EXTENDS_DEPTH = 6

BASE_URL_RE = re.compile(r"""baseUrl\s*:\s*['"]([^'"]*)['"]""")
ALIAS_BLOCK_PATTERNS = [
    re.compile(r"resolve\s*:\s*\{\s*alias\s*:\s*\{([^}]*)\}"),
    re.compile(r"alias\s*:\s*\{([^}]*)\}"),
]
ALIAS_PAIR_RE = re.compile(
    r"""['"]?([@~$\w][\w@~$./-]*)['"]?\s*:\s*"""
    r"""(?:path\.(?:resolve|join)\(\s*__dirname\s*,\s*)?['"]([^'"]+)['"]"""
)


def load_config(root: Path) -> AliasConfig:
    """
    Load the alias configuration of a project.

    Candidate files are tried in ``CONFIG_FILES`` order. JSON-bearing files
    end the search as soon as one parses, except a ``.babelrc`` without a
    ``module-resolver`` alias block, which is passed over. JS config files
    are only scanned heuristically and their findings accumulate. When no
    JSON config was found and the JS configs gave neither a baseUrl nor
    aliases, ``src`` is used as baseUrl if that directory exists.

    This never raises: unreadable or malformed files are skipped.

    Args:
        root: Project root directory.

    Returns:
        The loaded AliasConfig (empty when nothing usable was found).
    """
    root = Path(root)
    config = AliasConfig()

    for name in CONFIG_FILES:
        config_path = root / name
        if not config_path.is_file():
            continue

        if name in JSON_CONFIG_FILES:
            data = parse_json_config(config_path)
            if data is None:
                logger.debug(f"Could not parse {config_path}, trying next config")
                continue
            if name == ".babelrc" and not babel_module_resolver_aliases(data):
                logger.debug(f"No module-resolver aliases in {config_path}, trying next config")
                continue
            _apply_json_config(name, config_path, data, config)
            config.source = name
            logger.info(
                f"Loaded alias config from {name}: baseUrl={config.base_url!r}, "
                f"{len(config.aliases)} aliases"
            )
            return config

        parse_js_config(config_path, config)

    if not config.base_url and not config.aliases and (root / DEFAULT_BASE_URL).is_dir():
        config.base_url = DEFAULT_BASE_URL

    return config


def parse_json_config(config_path: Path) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON-style config file, tolerating comments and trailing commas.

    Strict JSON is tried first, then YAML (a JSON superset that accepts
    trailing commas in flow collections).

    Returns:
        The parsed object, or None if the file cannot be read or is not an
        object.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    cleaned = strip_comments(content).strip()
    if not cleaned:
        return None

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(cleaned)
        except yaml.YAMLError:
            return None

    return data if isinstance(data, dict) else None


def strip_comments(text: str) -> str:
    """
    Remove ``//`` and ``/* */`` comments, leaving string literals intact.

    Patterns such as ``"src/*"`` inside strings are not comments.
    """
    out: List[str] = []
    i = 0
    n = len(text)
    quote = ""

    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if quote:
            out.append(c)
            if c == "\\" and nxt:
                out.append(nxt)
                i += 2
                continue
            if c == quote:
                quote = ""
            i += 1
            continue

        if c in ("'", '"'):
            quote = c
            out.append(c)
            i += 1
        elif c == "/" and nxt == "/":
            end = text.find("\n", i)
            if end == -1:
                break
            i = end
        elif c == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            if end == -1:
                break
            i = end + 2
        else:
            out.append(c)
            i += 1

    return "".join(out)


def _apply_json_config(
    name: str,
    config_path: Path,
    data: Dict[str, Any],
    config: AliasConfig,
) -> None:
    if name in ("jsconfig.json", "tsconfig.json"):
        options = _merge_compiler_options(config_path, data)
        config.base_url = _as_str(options.get("baseUrl"))
        config.aliases.update(compiler_paths_to_aliases(options.get("paths")))
    elif name == "package.json":
        config.aliases.update(package_json_aliases(data))
    elif name == ".babelrc":
        config.aliases.update(babel_module_resolver_aliases(data))


def _merge_compiler_options(config_path: Path, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge ``compilerOptions`` along a relative ``extends`` chain.

    Parents are applied first so the file itself has the last word.
    Package-based ``extends`` values are not followed.
    """
    chain = [data]
    visited = {config_path.resolve()}
    current_path, current = config_path, data

    while len(chain) <= MAX_EXTENDS_DEPTH:
        parent_path = _resolve_extends(current_path, current.get("extends"))
        if parent_path is None or parent_path in visited:
            break
        parent = parse_json_config(parent_path)
        if parent is None:
            break
        visited.add(parent_path)
        chain.append(parent)
        current_path, current = parent_path, parent

    merged: Dict[str, Any] = {}
    for item in reversed(chain):
        options = item.get("compilerOptions")
        if isinstance(options, dict):
            merged.update(options)
    return merged


def _resolve_extends(config_path: Path, value: Any) -> Optional[Path]:
    if not isinstance(value, str) or not value.startswith(("./", "../")):
        return None
    if not value.endswith(".json"):
        value += ".json"
    candidate = (config_path.parent / value).resolve()
    return candidate if candidate.is_file() else None


def compiler_paths_to_aliases(paths: Any) -> Dict[str, str]:
    """
    Convert ``compilerOptions.paths`` into an alias table.

    ``{"@components/*": ["src/components/*"]}`` becomes
    ``{"@components": "src/components"}``; only the first target is used.
    """
    aliases: Dict[str, str] = {}
    if not isinstance(paths, dict):
        return aliases

    for pattern, targets in paths.items():
        if not isinstance(targets, list) or not targets:
            continue
        target = targets[0]
        if not isinstance(pattern, str) or not isinstance(target, str):
            continue
        alias = _strip_suffix(pattern, "/*")
        target = _strip_suffix(target, "/*")
        if alias:
            aliases[alias] = target
    return aliases


def package_json_aliases(data: Dict[str, Any]) -> Dict[str, str]:
    """Collect aliases from ``alias`` and ``jest.moduleNameMapper``."""
    aliases: Dict[str, str] = {}

    direct = data.get("alias")
    if isinstance(direct, dict):
        for alias, target in direct.items():
            if isinstance(alias, str) and isinstance(target, str) and alias:
                aliases[alias] = target

    jest = data.get("jest")
    mapper = jest.get("moduleNameMapper") if isinstance(jest, dict) else None
    if isinstance(mapper, dict):
        for pattern, target in mapper.items():
            if not isinstance(pattern, str) or not isinstance(target, str):
                continue
            alias, target = normalize_module_mapper(pattern, target)
            if alias and target:
                aliases[alias] = target

    return aliases


def normalize_module_mapper(pattern: str, target: str) -> Tuple[str, str]:
    """
    Turn a jest moduleNameMapper entry into an (alias, target) pair.

    ``("^components/(.*)$", "<rootDir>/src/components/$1")`` becomes
    ``("components", "src/components")``.
    """
    alias = pattern[1:] if pattern.startswith("^") else pattern
    alias = _strip_suffix(alias, "/(.*)$")
    alias = _strip_suffix(alias, "(.*)$")

    target = target.replace("<rootDir>/", "", 1)
    target = _strip_suffix(target, "/$1")
    return alias, target


def babel_module_resolver_aliases(data: Dict[str, Any]) -> Dict[str, str]:
    """Collect the ``alias`` option of a ``module-resolver`` babel plugin."""
    aliases: Dict[str, str] = {}
    plugins = data.get("plugins")
    if not isinstance(plugins, list):
        return aliases

    for plugin in plugins:
        if not isinstance(plugin, list) or len(plugin) < 2:
            continue
        name, options = plugin[0], plugin[1]
        if name not in ("module-resolver", "babel-plugin-module-resolver"):
            continue
        if not isinstance(options, dict) or not isinstance(options.get("alias"), dict):
            continue
        for alias, target in options["alias"].items():
            if isinstance(alias, str) and isinstance(target, str) and alias:
                aliases[alias] = target
    return aliases


def parse_js_config(config_path: Path, config: AliasConfig) -> None:
    """
    Pick baseUrl and alias pairs out of a JS config file with regexes.

    This is a heuristic: it only sees string literals (and
    ``path.resolve(__dirname, '...')`` calls) in the first alias block,
    and is no substitute for evaluating the file.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return

    content = strip_comments(content)

    match = BASE_URL_RE.search(content)
    if match:
        config.base_url = match.group(1)

    for pattern in ALIAS_BLOCK_PATTERNS:
        block = pattern.search(content)
        if not block:
            continue
        for alias, target in ALIAS_PAIR_RE.findall(block.group(1)):
            config.aliases[alias] = target
        break


def _strip_suffix(value: str, suffix: str) -> str:
    if value.endswith(suffix):
        return value[: -len(suffix)]
    return value


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""
