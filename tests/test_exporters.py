"""Tests for exporters."""

import json
import tempfile
from datetime import datetime
from pathlib import Path

from graph.builder import build_reverse_edges, build_tree
from graph.model import Node, ProjectGraph, ROLE_COMPONENT, ROLE_STATE, ROLE_UTIL
from exporters.ascii_exporter import to_ascii
from exporters.json_exporter import (
    DATA_DIR_ENV,
    default_data_dir,
    from_json,
    save_project_json,
    to_json,
)


def _sample_graph() -> ProjectGraph:
    graph = ProjectGraph.for_directory("shop", "/work/shop")
    nodes = [
        Node(id="src/App.jsx", name="App", path="src/App.jsx", type=ROLE_COMPONENT,
             multiple_components=True, imports=["src/store/cart.js", "src/missing"]),
        Node(id="src/store/cart.js", name="cart", path="src/store/cart.js", type=ROLE_STATE),
        Node(id="src/utils/price.js", name="price", path="src/utils/price.js", type=ROLE_UTIL),
    ]
    for node in nodes:
        graph.add_file(node.path)
        graph.add_node(node)
    build_reverse_edges(graph.nodes_map)
    build_tree(graph.nodes_map, graph.root)
    return graph


class TestJsonExporter:
    """Tests for JSON exporter."""

    def test_document_shape(self):
        """Test the top-level keys and node fields."""
        data = json.loads(to_json(_sample_graph()))

        assert set(data) == {"root", "nodesMap", "files", "stats"}
        assert data["files"] == ["src/App.jsx", "src/store/cart.js", "src/utils/price.js"]
        assert data["stats"]["totalComponents"] == 3
        assert data["stats"]["multiCompFiles"] == 1

        cart = data["nodesMap"]["src/store/cart.js"]
        assert cart["importedBy"] == ["src/App.jsx"]
        assert cart["type"] == "state"
        assert "children" not in cart

        assert data["root"]["id"] == "root"
        assert data["root"]["children"][0]["type"] == "directory"

    def test_two_space_indent(self):
        output = to_json(_sample_graph())
        assert output.startswith('{\n  "root"')

    def test_round_trip(self):
        """Test parsing the document gives back an equal graph."""
        graph = _sample_graph()
        restored = from_json(to_json(graph))

        assert restored == graph
        assert list(restored.iter_edges()) == list(graph.iter_edges())
        assert restored.stats == graph.stats


class TestPersistence:
    """Tests for saving scans to disk."""

    def test_file_name(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "scans"
            saved = save_project_json(
                _sample_graph(), data_dir=target, now=datetime(2024, 3, 5, 14, 7, 9)
            )

            assert saved == target / "shop_20240305_140709.json"
            assert json.loads(saved.read_text(encoding="utf-8"))["root"]["name"] == "shop"

    def test_never_overwrites(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            now = datetime(2024, 3, 5, 14, 7, 9)
            first = save_project_json(_sample_graph(), data_dir=tmpdir, now=now)
            second = save_project_json(_sample_graph(), data_dir=tmpdir, now=now)

            assert first != second
            assert second.name == "shop_20240305_140709_1.json"
            assert first.exists() and second.exists()

    def test_default_data_dir_env(self, monkeypatch):
        with tempfile.TemporaryDirectory() as tmpdir:
            monkeypatch.setenv(DATA_DIR_ENV, tmpdir)
            assert default_data_dir() == Path(tmpdir)

            saved = save_project_json(_sample_graph(), now=datetime(2024, 1, 1))
            assert saved.parent == Path(tmpdir)

    def test_default_data_dir_home(self, monkeypatch):
        monkeypatch.delenv(DATA_DIR_ENV, raising=False)
        assert default_data_dir() == Path.home() / ".local" / "reactmap"


class TestAsciiExporter:
    """Tests for ASCII exporter."""

    def test_tree_output(self):
        output = to_ascii(_sample_graph())
        lines = output.splitlines()

        assert lines[0] == "shop/"
        assert "└── src/" in lines[1]
        assert any("App.jsx [C] !" in line for line in lines)
        assert any("cart.js [S]" in line for line in lines)
        assert any("price.js [U]" in line for line in lines)
        assert "Components: 1 (multiple per file: 1)" in output

    def test_ascii_style(self):
        output = to_ascii(_sample_graph(), style="ascii")

        assert "└──" not in output
        assert "\\-- src/" in output

    def test_show_imports(self):
        output = to_ascii(_sample_graph(), show_imports=True)

        assert "-> src/store/cart.js" in output
        assert "-> src/missing [MISSING]" in output
        assert "<- src/App.jsx" in output
        assert "[MISSING]" not in to_ascii(_sample_graph())

    def test_empty_project(self):
        graph = ProjectGraph.for_directory("empty", "/work/empty")
        output = to_ascii(graph)

        assert output.splitlines()[0] == "empty/"
        assert "Files: 0" in output

    def test_importers_follow_imports(self):
        """Test importer lines come after a file's own imports."""
        graph = ProjectGraph.for_directory("app", "/work/app")
        nodes = [
            Node(id="a.js", name="a", path="a.js", imports=["b.js"]),
            Node(id="b.js", name="b", path="b.js", imports=["c.js"]),
            Node(id="c.js", name="c", path="c.js"),
        ]
        for node in nodes:
            graph.add_file(node.path)
            graph.add_node(node)
        build_reverse_edges(graph.nodes_map)
        build_tree(graph.nodes_map, graph.root)

        lines = to_ascii(graph, style="ascii", show_imports=True).splitlines()
        start = lines.index("|-- b.js [U]")

        assert lines[start + 1:start + 3] == ["|   |-- -> c.js", "|   \\-- <- a.js"]
