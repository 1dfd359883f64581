import json

from typer.testing import CliRunner

from matchtree.cli import app
from matchtree.location import SourceLocation
from matchtree.matchers import equal, every
from matchtree.reporting import JsonFormatter, ReportContext

runner = CliRunner()


def _write_report(path):
    outcome = every(equal(1)).match([1, 2, 1])
    context = ReportContext(
        location=SourceLocation(file="tests/test_ids.py", line=3, column=5, expr="ids")
    )
    path.write_text(JsonFormatter().render(outcome, context))
    return path


def test_render_text_to_stdout(tmp_path):
    report = _write_report(tmp_path / "report.json")
    result = runner.invoke(app, ["render", str(report)])
    assert result.exit_code == 0
    assert "[tests/test_ids.py:3:5] = ids" in result.output
    assert "Expected every element to match:" in result.output
    assert "[1]: FAILED" in result.output


def test_render_junit_to_file(tmp_path):
    report = _write_report(tmp_path / "report.json")
    out = tmp_path / "out" / "junit.xml"
    result = runner.invoke(
        app, ["render", str(report), "--format", "junit", "--out", str(out)]
    )
    assert result.exit_code == 0
    assert "<testsuites" in out.read_text()


def test_render_json_round_trips(tmp_path):
    report = _write_report(tmp_path / "report.json")
    result = runner.invoke(app, ["render", str(report), "--format", "json"])
    assert result.exit_code == 0
    assert json.loads(result.output) == json.loads(report.read_text())


def test_render_missing_report():
    result = runner.invoke(app, ["render", "nonexistent.json"])
    assert result.exit_code != 0


def test_render_unknown_format(tmp_path):
    report = _write_report(tmp_path / "report.json")
    result = runner.invoke(app, ["render", str(report), "--format", "yaml"])
    assert result.exit_code == 1


def test_render_invalid_report(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"not": "a report"}')
    result = runner.invoke(app, ["render", str(bad)])
    assert result.exit_code == 1


def test_init_creates_example_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert (tmp_path / "matchtree.yaml").exists()


def test_init_with_custom_directory_skips_existing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init", "--dir", "conf"])
    assert result.exit_code == 0
    assert (tmp_path / "conf" / "matchtree.yaml").exists()

    result = runner.invoke(app, ["init", "--dir", "conf"])
    assert result.exit_code == 0
    assert "already exists" in result.output


def test_check_accepts_generated_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner.invoke(app, ["init"])
    result = runner.invoke(app, ["check", "matchtree.yaml"])
    assert result.exit_code == 0
    assert "Config OK" in result.output


def test_check_rejects_invalid_config(tmp_path):
    config = tmp_path / "bad.yaml"
    config.write_text("formatter: yaml\n")
    result = runner.invoke(app, ["check", str(config)])
    assert result.exit_code == 1


def test_check_missing_config():
    result = runner.invoke(app, ["check", "nonexistent.yaml"])
    assert result.exit_code != 0


def test_schema_generate_command_writes_files(tmp_path):
    out = tmp_path / "schema.json"
    doc = tmp_path / "schema.md"
    result = runner.invoke(
        app, ["schema", "generate", "--out", str(out), "--doc", str(doc)]
    )
    assert result.exit_code == 0
    schema = json.loads(out.read_text())
    assert "formatter" in schema["properties"]
    assert "`on_failure`" in doc.read_text()


def test_schema_generate_defaults_to_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["schema", "generate", "--dir", "proj"])
    assert result.exit_code == 0
    assert (tmp_path / "proj" / "schemas" / "matchtree.schema.json").exists()
    assert (tmp_path / "proj" / "docs" / "schema.md").exists()


def test_verbose_flag_writes_debug_log(tmp_path):
    report = _write_report(tmp_path / "report.json")
    log = tmp_path / "debug.log"
    result = runner.invoke(app, ["--debug-log", str(log), "render", str(report)])
    assert result.exit_code == 0
    assert log.exists()
