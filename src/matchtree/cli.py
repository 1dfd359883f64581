from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="matchtree", help="Render and configure matchtree assertion reports")
schema_app = typer.Typer(name="schema", help="Generate schema tooling for matchtree.yaml")
app.add_typer(schema_app, name="schema")

EXAMPLE_CONFIG = """\
# matchtree configuration
formatter: text        # text | json | junit | html
styling: false         # ANSI styling in text reports
sink: stderr           # stderr | stdout | none | <file path>, ${VAR} expanded
on_failure: raise      # raise | exit
exit_code: 1
"""


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Append debug output to this file"
    ),
):
    """Render and configure matchtree assertion reports."""
    if verbose or debug_log:
        from matchtree.verbose import setup_logger

        setup_logger(
            Path(debug_log) if debug_log else None, verbose=verbose, logger_name="matchtree"
        )


@app.command()
def render(
    report: str = typer.Argument(help="Path to a JSON report written by the json formatter"),
    format: str = typer.Option("text", "--format", "-f", help="text, json, junit or html"),
    styling: bool = typer.Option(False, "--styling", help="ANSI styling for text output"),
    out: str | None = typer.Option(None, "--out", "-o", help="Write to this file instead of stdout"),
):
    """Re-render a saved JSON report with another formatter."""
    from matchtree.reporting import get_formatter, load_report

    report_path = Path(report)
    if not report_path.exists():
        typer.echo(f"Error: report file not found: {report}", err=True)
        raise typer.Exit(1)

    try:
        formatter = get_formatter(format)
        outcome, context = load_report(report_path)
    except (ValueError, KeyError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    context.styling = styling
    rendered = formatter.render(outcome, context)

    if out is None:
        typer.echo(rendered)
        return

    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(rendered + "\n", encoding="utf-8")
    typer.echo(f"Wrote {format} report: {out_path}")


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write matchtree.yaml into"),
):
    """Write an example matchtree.yaml."""
    project_dir = Path(dir)
    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "matchtree.yaml"
    if example.exists():
        typer.echo(f"matchtree.yaml already exists in {dir}, skipping.")
        return

    example.write_text(EXAMPLE_CONFIG)
    typer.echo(f"Initialized matchtree config in {dir}:")
    typer.echo("  matchtree.yaml  - example config")
    typer.echo("Point MATCHTREE_CONFIG at it to make it the default.")


@app.command()
def check(
    config: str = typer.Argument(help="Path to a matchtree YAML config"),
):
    """Validate a matchtree config file."""
    from pydantic import ValidationError
    from yaml import YAMLError

    from matchtree.config import load_config

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        loaded = load_config(config_path)
    except (ValidationError, ValueError, YAMLError) as e:
        typer.echo(f"Error: invalid config {config}:\n{e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Config OK: {config}")
    for key, value in loaded.model_dump(mode="json").items():
        typer.echo(f"  {key}: {value}")


@schema_app.command("generate")
def schema_generate(
    dir: str = typer.Option(
        ".", "--dir", help="Project directory for default schema/doc outputs"
    ),
    out: str | None = typer.Option(
        None,
        help="Output path for JSON Schema (defaults to <dir>/schemas/matchtree.schema.json)",
    ),
    doc: str | None = typer.Option(
        None, help="Output path for schema docs (defaults to <dir>/docs/schema.md)"
    ),
):
    """Generate JSON Schema and docs for the matchtree YAML config."""
    from matchtree.schema import write_json_schema, write_schema_doc

    project_dir = Path(dir)
    out_path = (
        Path(out)
        if out is not None
        else project_dir / "schemas" / "matchtree.schema.json"
    )
    doc_path = Path(doc) if doc is not None else project_dir / "docs" / "schema.md"
    write_json_schema(out_path)
    write_schema_doc(doc_path)
    typer.echo(f"Wrote schema: {out_path}")
    typer.echo(f"Wrote docs: {doc_path}")
