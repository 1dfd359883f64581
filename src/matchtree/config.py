from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_ENV_VAR = "MATCHTREE_CONFIG"


class FormatterName(str, Enum):
    TEXT = "text"
    JSON = "json"
    JUNIT = "junit"
    HTML = "html"


class FailurePolicy(str, Enum):
    RAISE = "raise"
    EXIT = "exit"


class MatchtreeConfig(BaseModel):
    """How failed expectations are rendered and signalled.

    Attributes:
        formatter: Report format written to the sink.
        styling: Emit ANSI styling in text reports. Never auto-detected.
        sink: ``stderr``, ``stdout``, ``none``, or a file path to append to.
            ``${VAR}`` references are expanded.
        on_failure: ``raise`` an ``AssertionFailure`` or ``exit`` the process.
        exit_code: Exit status used by the ``exit`` policy.
        max_repr: Truncate displayed values longer than this.
    """

    model_config = ConfigDict(extra="forbid")

    formatter: FormatterName = FormatterName.TEXT
    styling: bool = False
    sink: str = "stderr"
    on_failure: FailurePolicy = FailurePolicy.RAISE
    exit_code: int = Field(default=1, ge=1, le=255)
    max_repr: int | None = Field(default=None, ge=4)

    @field_validator("sink")
    @classmethod
    def expand_sink(cls, v: str) -> str:
        """Expand ``${VAR}`` references, failing on unset variables without defaults."""
        try:
            expanded = expandvars(v, nounset=True)
        except Exception as exc:
            raise ValueError(
                f"sink {v!r} references a missing environment variable: {exc}"
            ) from exc
        if not expanded.strip():
            raise ValueError("sink must not be empty")
        return expanded


def load_config(path: Path) -> MatchtreeConfig:
    """Load and validate a matchtree config from a YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return MatchtreeConfig(**raw)


_active: MatchtreeConfig | None = None


def get_config() -> MatchtreeConfig:
    """The process-wide default configuration.

    On first use it is loaded from the file named by ``MATCHTREE_CONFIG``, if
    set, and otherwise built from defaults.
    """
    global _active
    if _active is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        _active = load_config(Path(env_path)) if env_path else MatchtreeConfig()
    return _active


def set_config(config: MatchtreeConfig | None) -> MatchtreeConfig | None:
    """Replace the default configuration and return the previous one.

    Passing ``None`` resets it so the next :func:`get_config` reloads.
    """
    global _active
    previous = _active
    _active = config
    return previous


@contextmanager
def use_config(
    config: MatchtreeConfig | None = None, **overrides: object
) -> Iterator[MatchtreeConfig]:
    """Temporarily replace the default configuration.

    ``overrides`` are applied on top of ``config`` (or the current default).
    """
    base = config if config is not None else get_config()
    if overrides:
        base = MatchtreeConfig(**{**base.model_dump(), **overrides})
    previous = set_config(base)
    try:
        yield base
    finally:
        set_config(previous)
