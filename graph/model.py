"""Graph data model for analyzed JavaScript/TypeScript projects."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


ROLE_COMPONENT = "component"
ROLE_STATE = "state"
ROLE_UTIL = "util"
ROLE_ROOT = "root"
ROLE_DIRECTORY = "directory"

ROOT_ID = "root"


@dataclass
class Node:
    """
    One source file, or a synthetic root/directory entry in the tree.

    ``id`` is the project-relative path of the file and the only key used
    to join nodes, imports and reverse imports together.
    """

    id: str
    name: str
    path: str
    type: str = ROLE_UTIL
    multiple_components: bool = False
    imports: List[str] = field(default_factory=list)
    imported_by: List[str] = field(default_factory=list)
    children: List["Node"] = field(default_factory=list)

    def copy(self) -> "Node":
        """Return a copy whose lists are independent of this node."""
        return Node(
            id=self.id,
            name=self.name,
            path=self.path,
            type=self.type,
            multiple_components=self.multiple_components,
            imports=list(self.imports),
            imported_by=list(self.imported_by),
            children=[child.copy() for child in self.children],
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "type": self.type,
            "multipleComp": self.multiple_components,
            "imports": list(self.imports),
            "importedBy": list(self.imported_by),
        }
        # Leaf nodes carry no children key at all
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            path=data.get("path", ""),
            type=data.get("type", ROLE_UTIL),
            multiple_components=bool(data.get("multipleComp", False)),
            imports=list(data.get("imports") or []),
            imported_by=list(data.get("importedBy") or []),
            children=[cls.from_dict(c) for c in data.get("children") or []],
        )


@dataclass
class Stats:
    """
    Aggregate counters for a scan.

    ``total_components`` counts every registered node whatever its role;
    the name is kept because downstream consumers read it under that key.
    """

    total_components: int = 0
    multi_comp_files: int = 0
    component_files: int = 0
    state_files: int = 0
    util_files: int = 0

    def record(self, node: Node) -> None:
        """Update the counters for a newly registered node."""
        self.total_components += 1
        if node.type == ROLE_COMPONENT:
            self.component_files += 1
            if node.multiple_components:
                self.multi_comp_files += 1
        elif node.type == ROLE_STATE:
            self.state_files += 1
        elif node.type == ROLE_UTIL:
            self.util_files += 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalComponents": self.total_components,
            "multiCompFiles": self.multi_comp_files,
            "componentFiles": self.component_files,
            "stateFiles": self.state_files,
            "utilFiles": self.util_files,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stats":
        return cls(
            total_components=int(data.get("totalComponents", 0)),
            multi_comp_files=int(data.get("multiCompFiles", 0)),
            component_files=int(data.get("componentFiles", 0)),
            state_files=int(data.get("stateFiles", 0)),
            util_files=int(data.get("utilFiles", 0)),
        )


@dataclass
class AliasConfig:
    """Import alias configuration of a project (baseUrl + alias table)."""

    base_url: str = ""
    aliases: Dict[str, str] = field(default_factory=dict)
    source: Optional[str] = None


class ProjectGraph:
    """
    The result of scanning one project.

    Holds a synthetic root node (whose children form the directory tree),
    a flat registry of file nodes keyed by id, the ordered list of scanned
    files and aggregate statistics.
    """

    def __init__(self, root: Node):
        self.root = root
        self.nodes_map: Dict[str, Node] = {}
        self.files: List[str] = []
        self.stats = Stats()

    @classmethod
    def for_directory(cls, name: str, path: str) -> "ProjectGraph":
        """Create an empty graph with the standard root node."""
        return cls(Node(id=ROOT_ID, name=name, path=path, type=ROLE_ROOT))

    def add_file(self, file_id: str) -> None:
        """Record a discovered file path."""
        self.files.append(file_id)

    def add_node(self, node: Node) -> None:
        """
        Register a file node and update the statistics.

        Raises:
            ValueError: If a node with the same id is already registered.
        """
        if node.id in self.nodes_map:
            raise ValueError(f"Duplicate node id: {node.id}")
        self.nodes_map[node.id] = node
        self.stats.record(node)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes_map.get(node_id)

    def get_importers(self, node_id: str) -> List[str]:
        """Get the ids of all nodes that import the given node."""
        node = self.nodes_map.get(node_id)
        return list(node.imported_by) if node else []

    def iter_edges(self):
        """Iterate over resolved import edges as (source, target) tuples."""
        for source_id in sorted(self.nodes_map):
            for target in self.nodes_map[source_id].imports:
                if target in self.nodes_map:
                    yield source_id, target

    def iter_dangling(self):
        """Iterate over imports that do not join to any registered node."""
        for source_id in sorted(self.nodes_map):
            for target in self.nodes_map[source_id].imports:
                if target not in self.nodes_map:
                    yield source_id, target

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root.to_dict(),
            "nodesMap": {
                node_id: node.to_dict() for node_id, node in self.nodes_map.items()
            },
            "files": list(self.files),
            "stats": self.stats.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectGraph":
        graph = cls(Node.from_dict(data["root"]))
        graph.nodes_map = {
            node_id: Node.from_dict(node)
            for node_id, node in (data.get("nodesMap") or {}).items()
        }
        graph.files = list(data.get("files") or [])
        graph.stats = Stats.from_dict(data.get("stats") or {})
        return graph

    def __len__(self) -> int:
        """Return the number of registered file nodes."""
        return len(self.nodes_map)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes_map

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProjectGraph):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        edge_count = sum(1 for _ in self.iter_edges())
        return (
            f"ProjectGraph(root={self.root.name!r}, nodes={len(self.nodes_map)}, "
            f"files={len(self.files)}, edges={edge_count})"
        )
