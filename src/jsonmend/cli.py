"""Command-line driver: repair a file or stdin, or run the demo examples."""

import json
import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from jsonmend.examples import EXAMPLES
from jsonmend.infra.errors import RepairError
from jsonmend.infra.json_repair import repair_json
from jsonmend.infra.logging_config import configure_logging
from jsonmend.utils.config import LOG_LEVELS, settings

app = typer.Typer(help="Repair malformed, truncated or JSON-like text into valid JSON.")


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help=f"Stderr log level ({', '.join(LOG_LEVELS)})"
    ),
):
    """Configure logging before any command runs."""
    level = (log_level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        raise typer.BadParameter(f"unknown level {log_level!r}", param_hint="--log-level")

    log_file = configure_logging(level=level, logs_dir=settings.logs_dir)
    if log_file:
        logger.info(f"📝 Logging to: {log_file}")


@app.command("repair")
def repair_command(
    path: Optional[Path] = typer.Argument(None, help="Input file; stdin when omitted or '-'"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result here instead of stdout"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=1, help="Nesting limit"),
    validate: bool = typer.Option(True, "--validate/--no-validate", help="Re-parse the result with json"),
):
    """Repair one JSON document."""
    if path is None or str(path) == "-":
        text = sys.stdin.read()
        source = "<stdin>"
    else:
        text = path.read_text(encoding="utf-8")
        source = str(path)

    logger.debug(f"Repairing {len(text)} character(s) from {source}")
    try:
        repaired = repair_json(text, max_depth=max_depth)
    except RepairError as e:
        typer.echo(f"❌ {source}: {e}", err=True)
        raise typer.Exit(code=1)

    if validate:
        try:
            json.loads(repaired)
        except json.JSONDecodeError as e:
            typer.echo(f"❌ {source}: repaired output is still invalid JSON: {e}", err=True)
            raise typer.Exit(code=1)

    if output is None:
        typer.echo(repaired)
    else:
        output.write_text(repaired + "\n", encoding="utf-8")
        logger.info(f"✅ Wrote {output}")


@app.command("demo")
def demo_command():
    """Repair the built-in examples and print input/output pairs."""
    typer.echo("JSON Repair Examples")
    typer.echo("====================\n")

    failures = 0
    for name, text in EXAMPLES:
        typer.echo(f"Example:  {name}")
        typer.echo(f"Input:    {text}")
        try:
            typer.echo(f"Repaired: {repair_json(text)}\n")
        except RepairError as e:
            failures += 1
            typer.echo(f"Error:    {e}\n", err=True)

    if failures:
        raise typer.Exit(code=1)


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
