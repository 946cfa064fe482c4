"""Tests for the command line interface."""

import json
import tempfile
from pathlib import Path

from cli import main, parse_args


def _write(root: Path, rel_path: str, content: str = "") -> Path:
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _project(root: Path) -> None:
    _write(root, "src/App.jsx", "import Nav from './Nav';\n")
    _write(root, "src/Nav.jsx", "export default function Nav() {}\n")


class TestCli:
    """Tests for CLI entry point."""

    def test_defaults(self):
        parsed = parse_args([])

        assert parsed.root == "."
        assert parsed.format == "json"
        assert parsed.save is False
        assert parsed.strict is False

    def test_json_stdout(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            _project(Path(tmpdir))

            assert main([tmpdir]) == 0

            data = json.loads(capsys.readouterr().out)
            assert data["nodesMap"]["src/Nav.jsx"]["importedBy"] == ["src/App.jsx"]

    def test_tree_format(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            _project(Path(tmpdir))

            assert main([tmpdir, "-f", "tree", "--ascii-style", "ascii"]) == 0

            out = capsys.readouterr().out
            assert "|-- App.jsx [C]" in out
            assert "\\-- Nav.jsx [C]" in out

    def test_output_file(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "app"
            _project(root)
            output = Path(tmpdir) / "graph.json"

            assert main([str(root), "-o", str(output)]) == 0

            data = json.loads(output.read_text(encoding="utf-8"))
            assert data["files"] == ["src/App.jsx", "src/Nav.jsx"]
            assert "Output written to" in capsys.readouterr().err

    def test_save(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "app"
            _project(root)
            data_dir = Path(tmpdir) / "saved"

            assert main([str(root), "--save", "--data-dir", str(data_dir)]) == 0

            saved = list(data_dir.glob("app_*.json"))
            assert len(saved) == 1
            assert "Graph saved to" in capsys.readouterr().err

    def test_not_a_directory(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            file_path = _write(Path(tmpdir), "file.js")

            assert main([str(file_path)]) == 1
            assert "is not a directory" in capsys.readouterr().err
