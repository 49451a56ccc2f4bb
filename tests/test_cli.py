"""Tests for the command line interface."""

import io
import json
from pathlib import Path

import pytest

from inkwell.__main__ import load_context, main
from inkwell.errors import ContextError, ExitCode


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    path = tmp_path / "greeting.txt"
    path.write_text("Hello &name&!&#if vip& Welcome back.&/if&", encoding="utf-8")
    return path


class TestRender:
    """Tests for the render command."""

    def test_inline_data(self, template_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["render", str(template_file), "--data", '{"name": "Ann", "vip": true}'])
        assert code == 0
        assert capsys.readouterr().out == "Hello Ann! Welcome back."

    def test_data_file(
        self, template_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        data_file = tmp_path / "data.json"
        data_file.write_text(json.dumps({"name": "Bo"}), encoding="utf-8")
        assert main(["render", str(template_file), "--data-file", str(data_file)]) == 0
        assert capsys.readouterr().out == "Hello Bo!"

    def test_output_file(self, template_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out.txt"
        assert main(["render", str(template_file), "-d", '{"name": "Cy"}', "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "Hello Cy!"

    def test_unwritable_output_file(
        self, template_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        out = tmp_path / "missing" / "out.txt"
        code = main(["render", str(template_file), "-d", '{"name": "Cy"}', "-o", str(out)])
        assert code == ExitCode.INPUT_ERROR
        assert "Cannot write output" in capsys.readouterr().err

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("n=&n&"))
        assert main(["render", "-", "--data", '{"n": 3}']) == 0
        assert capsys.readouterr().out == "n=3"

    def test_delimiter_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "t.txt"
        path.write_text("Hi {{name}}", encoding="utf-8")
        assert main(["render", str(path), "--delimiter", "{{}}", "-d", '{"name": "Di"}']) == 0
        assert capsys.readouterr().out == "Hi Di"

    def test_delimiter_from_environment(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("INKWELL_DELIMITER", "%")
        path = tmp_path / "t.txt"
        path.write_text("Hi %name%", encoding="utf-8")
        assert main(["render", str(path), "-d", '{"name": "Ed"}']) == 0
        assert capsys.readouterr().out == "Hi Ed"

    def test_invalid_json(self, template_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["render", str(template_file), "--data", "{not json"])
        assert code == ExitCode.INPUT_ERROR
        assert "Error: Invalid JSON in --data" in capsys.readouterr().err

    def test_non_object_json(self, template_file: Path) -> None:
        assert main(["render", str(template_file), "--data", "[1, 2]"]) == ExitCode.INPUT_ERROR

    def test_missing_template(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["render", str(tmp_path / "nope.txt")])
        assert code == ExitCode.INPUT_ERROR
        assert "Cannot read template" in capsys.readouterr().err

    def test_missing_data_file(self, template_file: Path, tmp_path: Path) -> None:
        code = main(["render", str(template_file), "-f", str(tmp_path / "nope.json")])
        assert code == ExitCode.INPUT_ERROR


class TestValidate:
    """Tests for the validate command."""

    def test_valid(self, template_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", str(template_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith(f"Valid: {template_file}")
        assert "Conditions: 1" in out
        assert "Variables: 1" in out

    def test_invalid(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("&#if a&\nnever closed\n", encoding="utf-8")
        assert main(["validate", str(path)]) == ExitCode.VALIDATION_ERROR
        err = capsys.readouterr().err
        assert "line 1: #if is never closed" in err
        assert "1 problem(s)" in err


class TestList:
    """Tests for the list command."""

    def test_json(self, template_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["list", str(template_file), "--format", "json"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {"variables": ["name"], "conditions": ["vip"], "problems": []}

    def test_text(self, template_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["list", str(template_file)]) == 0
        out = capsys.readouterr().out
        assert "Variables:\n  name\n" in out
        assert "Conditions:\n  vip\n" in out


class TestLoadContext:
    """Tests for data context loading."""

    def test_empty(self) -> None:
        assert load_context(None, None) == {}

    def test_inline(self) -> None:
        assert load_context('{"a": {"b": 1}}', None) == {"a": {"b": 1}}

    def test_rejects_scalar(self) -> None:
        with pytest.raises(ContextError, match="must be a JSON object"):
            load_context("3", None)


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "usage: inkwell" in capsys.readouterr().out


def test_bundled_example(capsys: pytest.CaptureFixture[str]) -> None:
    example = Path(__file__).parent.parent / "examples" / "order-confirmation"
    code = main([
        "render",
        str(example / "template.txt"),
        "--data-file",
        str(example / "data.json"),
    ])
    assert code == 0
    assert capsys.readouterr().out == (
        "Hi Ann,\n"
        "\n"
        "Thanks for your order #1042.\n"
        "Add a little more to reach free shipping.\n"
        "\n"
        "Status: paid\n"
    )
