"""JSON exporter and persistence for project graphs."""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from graph.model import ProjectGraph


logger = logging.getLogger(__name__)

DATA_DIR_ENV = "REACTMAP_DATA_DIR"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def to_json(project: ProjectGraph, indent: int = 2) -> str:
    """
    Convert a project graph to its JSON document.

    The document has the keys ``root``, ``nodesMap``, ``files`` and
    ``stats``, and is enough to rebuild both the directory tree and the
    import graph.
    """
    return json.dumps(project.to_dict(), indent=indent)


def from_json(text: str) -> ProjectGraph:
    """Parse a JSON document produced by ``to_json``."""
    return ProjectGraph.from_dict(json.loads(text))


def default_data_dir() -> Path:
    """Return the per-user directory where scans are saved."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".local" / "reactmap"


def save_project_json(
    project: ProjectGraph,
    data_dir: Optional[Union[str, Path]] = None,
    now: Optional[datetime] = None,
) -> Path:
    """
    Write a project graph to a new timestamped JSON file.

    The file is named ``<projectName>_<YYYYMMDD_HHMMSS>.json``. Existing
    files are never overwritten; a numeric suffix is added on collision.

    Args:
        project: The graph to save.
        data_dir: Target directory (default: ``default_data_dir()``).
                  Created if missing.
        now: Timestamp to use (default: current local time).

    Returns:
        Path of the written file.
    """
    target_dir = Path(data_dir) if data_dir is not None else default_data_dir()
    target_dir.mkdir(parents=True, exist_ok=True)

    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    base_name = f"{project.root.name}_{stamp}"
    payload = to_json(project)

    attempt = 0
    while True:
        suffix = f"_{attempt}" if attempt else ""
        file_path = target_dir / f"{base_name}{suffix}.json"
        try:
            with open(file_path, "x", encoding="utf-8") as f:
                f.write(payload)
        except FileExistsError:
            attempt += 1
            continue
        logger.info(f"Saved project graph to {file_path}")
        return file_path
