from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from jsonmap.mapper.engine import transform_json
from jsonmap.mapper.errors import ConfigError, MappingError
from jsonmap.mapper.loader import load_spec
from jsonmap.mapper.timefmt import SECONDS_THRESHOLD, TIME_LAYOUTS

app = typer.Typer(help="jsonmap: declarative JSON-to-JSON mapping")


def _setup_logging(verbose: bool) -> None:
    logger = logging.getLogger("jsonmap")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[jsonmap] %(levelname)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _load_or_exit(config: Path):
    try:
        return load_spec(config)
    except ConfigError as e:
        typer.secho(f"Config error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command()
def transform(
    config: Path = typer.Argument(..., help="YAML file with the mapping rules"),
    source: Optional[Path] = typer.Argument(None, help="Source JSON file (default: stdin)"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write target JSON here instead of stdout"),
    indent: int = typer.Option(0, "--indent", help="Pretty-print with this indent (0 = compact)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every rule decision"),
):
    """Apply the rules in CONFIG to a source JSON document."""
    _setup_logging(verbose)
    spec = _load_or_exit(config)

    if source is None:
        text = sys.stdin.read()
    else:
        if not source.is_file():
            raise typer.BadParameter(f"{source} not found")
        text = source.read_text(encoding="utf-8")

    try:
        result = transform_json(text, spec, indent=indent)
    except MappingError as e:
        typer.secho(f"Transform failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(result + "\n", encoding="utf-8")
        typer.secho(f"Wrote {out}", fg=typer.colors.GREEN, err=True)
    else:
        typer.echo(result)


@app.command("check-config")
def check_config(config: Path = typer.Argument(..., help="YAML file with the mapping rules")):
    """Load and validate CONFIG, then list its rules in order."""
    spec = _load_or_exit(config)
    for i, rule in enumerate(spec.mappings):
        mode = " [collection]" if rule.is_collection else ""
        typer.echo(f"{i:3d}  {rule.source_path} -> {rule.target_path} ({rule.type or 'raw'}){mode}")
    typer.secho(f"OK: {len(spec)} rule(s), version {spec.version}", fg=typer.colors.GREEN)


@app.command()
def formats():
    """Print the built-in time layouts in the order they are tried."""
    for layout in TIME_LAYOUTS:
        typer.echo(layout)
    typer.echo(f"# numbers <= {SECONDS_THRESHOLD} are seconds, larger are milliseconds")


if __name__ == "__main__":
    app()
