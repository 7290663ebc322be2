from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, List, Optional, Tuple

import typer
import structlog
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import load_config, SieveConfig
from .engine.chain import ValidationChain
from .engine.registry import catalog
from .errors import UnknownRuleError, UnsupportedInChainError

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="sieve: composable input validation rules")


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"sieve {__version__}")
        raise typer.Exit()


def parse_rule_option(text: str) -> Tuple[str, List[Any]]:
    """
    "length:1,16" -> ("length", [1, 16])

    Everything after the first colon is read as the body of a YAML flow
    sequence, so "oneOf:{isInt: [], isEmail: []}" passes one mapping.
    """
    name, sep, body = text.partition(":")
    name = name.strip()
    if not name:
        raise typer.BadParameter(f"empty rule name in {text!r}")
    if not sep or not body.strip():
        return name, []
    try:
        args = yaml.safe_load(f"[{body}]")
    except yaml.YAMLError as e:
        raise typer.BadParameter(f"cannot parse arguments of {text!r}: {e}")
    return name, list(args or [])


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to sieve.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(processors=[structlog.processors.JSONRenderer()])
    ctx.obj = {"config": load_config(config) if config else SieveConfig(), "verbose": verbose}
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
        log.info("verbose_enabled")


@app.command()
def check(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="Value to validate"),
    rules: List[str] = typer.Option(..., "--rule", "-r", help="Rule as name or name:args, repeatable"),
    key: Optional[str] = typer.Option(None, "--key", help="Group all failures under this key"),
    as_json: bool = typer.Option(False, "--json", help="Print the failure map as JSON"),
):
    """Run RULES against VALUE; exit code 1 if any rule fails."""
    obj = ctx.obj
    cfg: SieveConfig = obj["config"]
    chain = ValidationChain(value, config=cfg)
    outcomes: List[Tuple[str, List[Any], bool]] = []

    for text in rules:
        name, args = parse_rule_option(text)
        try:
            valid = chain.validate_with(name, args, key=key)
        except (UnknownRuleError, UnsupportedInChainError, TypeError, ValueError) as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(code=2)
        outcomes.append((name, args, valid))

    failures = chain.get_failed_validations()
    if obj["verbose"]:
        log.info("check_done", rules=len(outcomes), failed=sum(1 for *_, ok in outcomes if not ok))

    if as_json:
        typer.echo(json.dumps({"valid": not failures, "failures": failures}, default=str))
    else:
        table = Table(title=f"{value!r}")
        table.add_column("Rule")
        table.add_column("Arguments")
        table.add_column("Result")
        for name, args, ok in outcomes:
            result = "[green]pass[/green]" if ok else "[red]fail[/red]"
            table.add_row(name, json.dumps(args, default=str), result)
        console.print(table)

    if failures:
        raise typer.Exit(code=1)


@app.command()
def rules(
    filter_: Optional[str] = typer.Option(None, "--filter", help="Only names containing this text"),
):
    """List the rule catalog."""
    table = Table(title="Rules")
    table.add_column("Name")
    table.add_column("Aliases")
    table.add_column("Kind")
    for name, aliases, kind in sorted(catalog(), key=lambda row: row[0].lower()):
        names = [name, *aliases]
        if filter_ and not any(filter_.lower() in n.lower() for n in names):
            continue
        table.add_row(name, ", ".join(aliases), kind.value)
    console.print(table)
