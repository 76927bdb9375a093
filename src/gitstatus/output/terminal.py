"""Rich terminal reporter — one table of entries, one of errors."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from gitstatus.git.models import Bucket, StatusResponse

_BUCKET_LABEL = {
    Bucket.NEW_TO_COMMIT: "new file",
    Bucket.DELETED_TO_COMMIT: "deleted",
    Bucket.MODIFIED_TO_COMMIT: "modified",
    Bucket.DELETED_NOT_UPDATED: "deleted",
    Bucket.MODIFIED_NOT_UPDATED: "modified",
    Bucket.UNTRACKED: "untracked",
}

_BUCKET_STYLE = {
    Bucket.NEW_TO_COMMIT: "bold green",
    Bucket.DELETED_TO_COMMIT: "bold green",
    Bucket.MODIFIED_TO_COMMIT: "bold green",
    Bucket.DELETED_NOT_UPDATED: "bold red",
    Bucket.MODIFIED_NOT_UPDATED: "bold red",
    Bucket.UNTRACKED: "dim red",
}

_STAGED = (Bucket.NEW_TO_COMMIT, Bucket.DELETED_TO_COMMIT, Bucket.MODIFIED_TO_COMMIT)


def _state_pill(bucket: Bucket) -> Text:
    return Text(_BUCKET_LABEL[bucket], style=_BUCKET_STYLE[bucket])


def render(
    response: StatusResponse,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print a parsed status to the terminal using Rich."""
    console = console or Console(stderr=True)

    if response.branch:
        console.print(f"[bold]Branch:[/bold] [cyan]{escape(str(response.branch))}[/cyan]")
    else:
        console.print("[bold]Branch:[/bold] [dim](none)[/dim]")

    if response.total_files:
        table = Table(
            title="Working Tree Status",
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Area", justify="center", width=10)
        table.add_column("State", justify="center", width=12)
        table.add_column("Path", style="magenta")

        for bucket in Bucket:
            if bucket in _STAGED:
                area = "staged"
            elif bucket is Bucket.UNTRACKED:
                area = "-"
            else:
                area = "unstaged"
            for path in response.iter_files(bucket):
                table.add_row(area, _state_pill(bucket), Text(path))

        console.print()
        console.print(table)
    elif not response.error_state:
        console.print("[bold green]✅ Working tree clean.[/bold green]")

    if response.message:
        console.print()
        console.print(Text(response.message, style="dim"))

    if response.error_state:
        errors = Table(
            title="Unrecognized Lines",
            min_width=40,
            title_style="bold red",
            border_style="dim",
        )
        errors.add_column("Line", justify="right", style="green")
        errors.add_column("Text")
        for e in response.errors:
            errors.add_row(str(e.line_no), Text(e.error))
        console.print()
        console.print(errors)

    if show_summary:
        _print_summary(console, response)


def _print_summary(console: Console, response: StatusResponse) -> None:
    console.print()
    console.print(f"[dim]Grammar:[/dim]    {response.grammar}")
    console.print(f"[dim]Staged:[/dim]     {sum(response.count(b) for b in _STAGED)}")
    console.print(
        f"[dim]Unstaged:[/dim]   "
        f"{response.count(Bucket.DELETED_NOT_UPDATED) + response.count(Bucket.MODIFIED_NOT_UPDATED)}"
    )
    console.print(f"[dim]Untracked:[/dim]  {response.count(Bucket.UNTRACKED)}")
    console.print(f"[dim]Errors:[/dim]     {response.error_count}")
