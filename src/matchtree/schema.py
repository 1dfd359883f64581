"""Generate JSON Schema and docs for the matchtree YAML config."""

from __future__ import annotations

import json
from pathlib import Path

from matchtree.config import MatchtreeConfig


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def generate_json_schema() -> dict:
    schema = MatchtreeConfig.model_json_schema()
    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    return schema


def write_json_schema(path: Path) -> None:
    _ensure_parent(path)
    schema = generate_json_schema()
    path.write_text(json.dumps(schema, indent=2) + "\n")


def _describe_type(prop: dict, defs: dict) -> str:
    if "$ref" in prop:
        target = defs.get(prop["$ref"].removeprefix("#/$defs/"), {})
        if "enum" in target:
            return "one of: " + ", ".join(str(v) for v in target["enum"])
        return target.get("type", "object")
    if "anyOf" in prop:
        return " | ".join(_describe_type(p, defs) for p in prop["anyOf"])
    return prop.get("type", "any")


def generate_schema_doc() -> str:
    schema = generate_json_schema()
    defs = schema.get("$defs", {})
    props = schema.get("properties", {})

    lines: list[str] = []
    lines.append("# matchtree YAML Schema")
    lines.append("")
    lines.append("This doc is generated from the Pydantic models.")
    lines.append("")
    lines.append("## Keys")
    for name, prop in props.items():
        default = prop.get("default")
        line = f"- `{name}`: {_describe_type(prop, defs)}"
        if default is not None:
            line += f" (default: `{default}`)"
        lines.append(line)
    lines.append("")
    lines.append("Unknown keys are rejected. `${VAR}` references in `sink` are expanded.")
    lines.append("")
    return "\n".join(lines)


def write_schema_doc(path: Path) -> None:
    _ensure_parent(path)
    path.write_text(generate_schema_doc())
