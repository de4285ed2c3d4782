from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="assertree", help="Inspect assertree settings and negation rules")
schema_app = typer.Typer(name="schema", help="Generate schema tooling for the settings file")
app.add_typer(schema_app, name="schema")


def _load(config: str | None):
    from pydantic import ValidationError

    from assertree.config import AssertreeConfig, load_config

    if config is None:
        return AssertreeConfig()
    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)
    try:
        return load_config(config_path)
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: invalid config {config}:\n{e}", err=True)
        raise typer.Exit(1)


@app.command()
def negate(
    description: str = typer.Argument(help="Assertion description to negate"),
    config: str | None = typer.Option(None, help="Settings YAML with extra negation rules"),
):
    """Print the description a negated assertion would report."""
    from assertree.negation import negate_description

    settings = _load(config)
    typer.echo(negate_description(description, settings.negation_rules()))


@app.command("validate-config")
def validate_config(
    config: str = typer.Argument(help="Path to settings YAML"),
):
    """Validate a settings file."""
    settings = _load(config)
    typer.echo(f"Config OK: {config}")
    if settings.extra_negation_rules:
        typer.echo(f"  {len(settings.extra_negation_rules)} extra negation rules")


@schema_app.command("generate")
def schema_generate(
    out: str = typer.Option(
        "schemas/assertree.schema.json", help="Output path for JSON Schema"
    ),
):
    """Generate JSON Schema for the settings YAML format."""
    from assertree.schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Schema written: {out_path}")


if __name__ == "__main__":
    app()
