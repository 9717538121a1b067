"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from addref.bindings import load_workspace
from addref.cli import app

runner = CliRunner()


@pytest.fixture
def files(tmp_path):
    """Workspace, bindings and config files for a one-project solution."""
    (tmp_path / "ContosoLib.dll").write_bytes(b"")
    bindings = tmp_path / "bindings.json"
    bindings.write_text(json.dumps({"containers": [
        {"name": "ContosoLib", "path": "ContosoLib.dll", "types": ["Foo.Bar"]},
        {"name": "Ghost", "path": "Ghost.dll", "types": ["Ghost.Bar"]},
    ]}))
    workspace = tmp_path / "workspace.json"
    workspace.write_text(json.dumps({"projects": [{
        "id": "app",
        "name": "App",
        "documents": [{"id": "app/Program.cs", "path": "Program.cs", "text": "using System;\n\nclass P {}\n"}],
    }]}))
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"place_system_first": False}))
    return {"bindings": bindings, "workspace": workspace, "config": config, "dir": tmp_path}


def base_args(files):
    return ["--workspace", str(files["workspace"]), "--bindings", str(files["bindings"]),
            "--document", "Program.cs", "--no-cache"]


class TestFixesCommand:
    def test_lists_applicable_fixes(self, files):
        result = runner.invoke(app, ["fixes", "Bar", *base_args(files), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data) == 1
        assert data[0]["title"] == "using Foo; (from ContosoLib)"
        assert data[0]["priority"] == "low"
        assert data[0]["applicable"] is True
        assert data[0]["resolved_path"].endswith("ContosoLib.dll")

    def test_all_includes_unresolved(self, files):
        result = runner.invoke(app, ["fixes", "Bar", *base_args(files), "--all", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [d["container"] for d in data] == ["ContosoLib", "Ghost"]
        assert [d["applicable"] for d in data] == [True, False]

    def test_table_output(self, files):
        result = runner.invoke(app, ["fixes", "Bar", *base_args(files)])
        assert result.exit_code == 0, result.output
        assert "ContosoLib" in result.output

    def test_unknown_document(self, files):
        args = base_args(files)
        args[args.index("Program.cs")] = "Nope.cs"
        result = runner.invoke(app, ["fixes", "Bar", *args])
        assert result.exit_code == 1

    def test_missing_workspace(self, files):
        result = runner.invoke(app, ["fixes", "Bar", "--workspace", str(files["dir"] / "nope.json"),
                                     "--document", "Program.cs"])
        assert result.exit_code == 1


class TestApplyCommand:
    def test_applies_and_writes_output(self, files):
        out = files["dir"] / "out.json"
        result = runner.invoke(app, ["apply", "Bar", *base_args(files), "--output", str(out), "--json"])
        assert result.exit_code == 0, result.output

        solution = load_workspace(out)
        text = solution.get_document("app/Program.cs").text
        assert text == "using System;\nusing Foo;\n\nclass P {}\n"
        paths = [r.path for r in solution.get_project("app").metadata_references]
        assert len(paths) == 1 and paths[0].endswith("ContosoLib.dll")

        # Input workspace is left alone when writing elsewhere
        original = load_workspace(files["workspace"])
        assert original.get_document("app/Program.cs").text == "using System;\n\nclass P {}\n"

    def test_config_placement(self, files):
        out = files["dir"] / "out.json"
        result = runner.invoke(app, ["apply", "Bar", *base_args(files), "--config", str(files["config"]),
                                     "--output", str(out)])
        assert result.exit_code == 0, result.output
        text = load_workspace(out).get_document("app/Program.cs").text
        assert text == "using Foo;\nusing System;\n\nclass P {}\n"

    def test_apply_in_place_twice_is_stable(self, files):
        for _ in range(2):
            result = runner.invoke(app, ["apply", "Bar", *base_args(files)])
        # Second run finds the reference already present and offers nothing
        assert result.exit_code == 1
        solution = load_workspace(files["workspace"])
        assert solution.get_document("app/Program.cs").text.count("using Foo;") == 1
        assert len(solution.get_project("app").metadata_references) == 1

    def test_choice_out_of_range(self, files):
        result = runner.invoke(app, ["apply", "Bar", *base_args(files), "--choice", "5"])
        assert result.exit_code == 1

    def test_no_fixes(self, files):
        result = runner.invoke(app, ["apply", "Nothing", *base_args(files), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output) == {"error": "No applicable fixes for Nothing"}

    def test_output_written_when_nothing_changes(self, files):
        workspace = files["dir"] / "noop.json"
        workspace.write_text(json.dumps({"projects": [{
            "id": "app",
            "name": "App",
            "declared_symbols": ["App.Models.User"],
            "documents": [{"id": "app/Program.cs", "path": "Program.cs", "text": "using App.Models;\n\nclass P {}\n"}],
        }]}))
        out = files["dir"] / "noop-out.json"

        result = runner.invoke(app, ["apply", "User", "--workspace", str(workspace),
                                     "--document", "Program.cs", "--output", str(out)])

        assert result.exit_code == 0, result.output
        assert out.exists()
        assert load_workspace(out) == load_workspace(workspace)
