"""Tests for config loading and validation."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from matchtree.config import (
    FailurePolicy,
    FormatterName,
    MatchtreeConfig,
    get_config,
    load_config,
    set_config,
    use_config,
)
from matchtree.sink import FileSink, NullSink, Reporter, StreamSink, get_sink


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "matchtree.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_defaults():
    config = MatchtreeConfig()
    assert config.formatter is FormatterName.TEXT
    assert config.styling is False
    assert config.sink == "stderr"
    assert config.on_failure is FailurePolicy.RAISE
    assert config.exit_code == 1
    assert config.max_repr is None


def test_load_full_config(tmp_yaml):
    path = tmp_yaml("""\
        formatter: json
        styling: true
        sink: stdout
        on_failure: exit
        exit_code: 7
        max_repr: 80
    """)
    config = load_config(path)
    assert config.formatter is FormatterName.JSON
    assert config.styling is True
    assert config.on_failure is FailurePolicy.EXIT
    assert config.exit_code == 7
    assert config.max_repr == 80


def test_empty_file_gives_defaults(tmp_yaml):
    assert load_config(tmp_yaml("")) == MatchtreeConfig()


def test_unknown_keys_are_rejected(tmp_yaml):
    with pytest.raises(ValidationError):
        load_config(tmp_yaml("colour: always\n"))


def test_unknown_formatter_is_rejected():
    with pytest.raises(ValidationError):
        MatchtreeConfig(formatter="yaml")


def test_exit_code_must_be_positive():
    with pytest.raises(ValidationError):
        MatchtreeConfig(exit_code=0)


def test_non_mapping_document_is_rejected(tmp_yaml):
    with pytest.raises(ValueError, match="mapping"):
        load_config(tmp_yaml("- a\n- b\n"))


def test_sink_expands_environment_variables(tmp_yaml, monkeypatch):
    monkeypatch.setenv("REPORT_DIR", "/tmp/reports")
    config = load_config(tmp_yaml("sink: ${REPORT_DIR}/failures.txt\n"))
    assert config.sink == "/tmp/reports/failures.txt"


def test_sink_default_value_is_used_when_unset(monkeypatch):
    monkeypatch.delenv("REPORT_DIR", raising=False)
    config = MatchtreeConfig(sink="${REPORT_DIR:-out}/failures.txt")
    assert config.sink == "out/failures.txt"


def test_sink_with_missing_variable_is_rejected(monkeypatch):
    monkeypatch.delenv("MATCHTREE_MISSING_DIR", raising=False)
    with pytest.raises(ValidationError, match="missing environment variable"):
        MatchtreeConfig(sink="${MATCHTREE_MISSING_DIR}/out.txt")


def test_get_config_loads_from_environment(tmp_yaml, monkeypatch):
    path = tmp_yaml("formatter: junit\n")
    monkeypatch.setenv("MATCHTREE_CONFIG", str(path))
    set_config(None)
    assert get_config().formatter is FormatterName.JUNIT


def test_use_config_restores_previous():
    before = get_config()
    with use_config(formatter="html") as active:
        assert get_config() is active
        assert active.formatter is FormatterName.HTML
        assert active.sink == before.sink
    assert get_config() is before


def test_get_sink():
    assert isinstance(get_sink("stderr"), StreamSink)
    assert get_sink("stdout").stream_name == "stdout"
    assert isinstance(get_sink("none"), NullSink)
    file_sink = get_sink("out/report.txt")
    assert isinstance(file_sink, FileSink)
    assert file_sink.path == Path("out/report.txt")


def test_reporter_from_config():
    reporter = Reporter.from_config(
        MatchtreeConfig(formatter="junit", styling=True, sink="none", max_repr=20)
    )
    assert reporter.formatter.name == "junit"
    assert reporter.styling is True
    assert reporter.max_repr == 20
    assert isinstance(reporter.sink, NullSink)
