"""gitstatus CLI — Typer application with status, parse, grammars, and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from gitstatus import __version__

app = typer.Typer(
    name="gitstatus",
    help="Turn git status output into structured, queryable data.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(level: str, *, verbose: bool = False, debug: bool = False) -> None:
    """Route library loggers through Rich on stderr."""
    if debug:
        resolved = logging.DEBUG
    elif verbose:
        resolved = logging.INFO
    else:
        resolved = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from gitstatus.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _load(root: Path, config: Optional[str], format: Optional[str], grammar: Optional[str]):
    """Load config and apply CLI overrides, exit 2 on bad input."""
    from gitstatus.config.loader import ConfigError, load_config
    from gitstatus.config.schema import OUTPUT_FORMATS

    try:
        cfg = load_config(root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if grammar:
        cfg.parse.grammar = grammar
    return cfg


def _build_grammars(cfg, root: Path):
    """Build the grammar registry (built-ins plus grammars_dir), exit 2 on error."""
    from gitstatus.git.grammar import GrammarError, build_registry

    try:
        return build_registry(
            default=cfg.parse.default_grammar,
            grammars_dir=root / cfg.parse.grammars_dir,
        )
    except GrammarError as exc:
        console.print(f"[bold red]Grammar error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _parse_and_report(lines, cfg, registry, output: Optional[str], strict: bool) -> None:
    """Parse *lines*, render the response, and exit with the right code."""
    from gitstatus.git.builder import parse_status
    from gitstatus.git.grammar import GrammarError
    from gitstatus.output import json_report, terminal

    try:
        response = parse_status(lines, grammar=cfg.parse.grammar, registry=registry)
    except GrammarError as exc:
        console.print(f"[bold red]Grammar error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    logging.getLogger(__name__).info(
        "Grammar %s: %d file(s), %d unrecognized line(s)",
        response.grammar, response.total_files, response.error_count,
    )

    if cfg.output.format == "json":
        report_text = json_report.render(response)
        print(report_text)
    else:
        terminal.render(response, show_summary=cfg.output.show_summary)
        report_text = json_report.render(response) if output else None

    if output and report_text:
        Path(output).write_text(report_text, encoding="utf-8")

    if strict and response.error_state:
        raise typer.Exit(code=1)
    raise typer.Exit(code=0)


# ── status ────────────────────────────────────────────────────────────────────


@app.command()
def status(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitstatus.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    grammar: Optional[str] = typer.Option(None, "--grammar", "-g", help="Grammar name, or 'auto'"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any line was unrecognized"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Run git status in the current repository and show the parsed result."""
    from gitstatus.git.adapter import GitError, get_status_lines

    repo_root = _resolve_repo_root()
    cfg = _load(repo_root, config, format, grammar)
    _configure_logging(cfg.logging.level, verbose=verbose, debug=debug)
    registry = _build_grammars(cfg, repo_root)

    try:
        lines = get_status_lines(
            repo_root, executable=cfg.git.executable, timeout=cfg.git.timeout
        )
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    _parse_and_report(lines, cfg, registry, output, strict)


# ── parse ─────────────────────────────────────────────────────────────────────


@app.command()
def parse(
    source: str = typer.Argument(..., help="File with captured git status output, or '-' for stdin"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitstatus.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    grammar: Optional[str] = typer.Option(None, "--grammar", "-g", help="Grammar name, or 'auto'"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any line was unrecognized"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output"),
) -> None:
    """Parse previously captured git status output."""
    root = Path.cwd()
    cfg = _load(root, config, format, grammar)
    _configure_logging(cfg.logging.level, verbose=verbose, debug=debug)
    registry = _build_grammars(cfg, root)

    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(source).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] cannot read {source}: {exc}")
            raise typer.Exit(code=2) from exc

    _parse_and_report(text.splitlines(), cfg, registry, output, strict)


# ── grammars ──────────────────────────────────────────────────────────────────


@app.command()
def grammars(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitstatus.toml"),
) -> None:
    """List the available status grammars."""
    from rich.table import Table

    root = Path.cwd()
    cfg = _load(root, config, None, None)
    registry = _build_grammars(cfg, root)

    table = Table(title="Status Grammars", title_style="bold", border_style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Prefix", justify="center")
    table.add_column("Description")
    for g in registry.all_grammars:
        marker = " (default)" if g.name == registry.default else ""
        table.add_row(g.name + marker, repr(g.comment_prefix), g.description)
    console.print(table)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    grammar_example: bool = typer.Option(
        False, "--grammar-example", help="Also write an example custom grammar"
    ),
) -> None:
    """Generate a starter .gitstatus.toml in the repo root."""
    from gitstatus.config.defaults import DEFAULT_TOML, GRAMMAR_YAML_EXAMPLE
    from gitstatus.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")

    if grammar_example:
        grammar_path = repo_root / ".gitstatus" / "grammars" / "example.yaml"
        grammar_path.parent.mkdir(parents=True, exist_ok=True)
        grammar_path.write_text(GRAMMAR_YAML_EXAMPLE, encoding="utf-8")
        console.print(f"[green]✓[/green] Created {grammar_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gitstatus {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """gitstatus — Turn git status output into structured, queryable data."""
