"""Rich progress display for the analysis pipeline."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

console = Console()


class AnalysisProgress:
    """Tracks pipeline stages (fetch, export, ...) using Rich spinners."""

    def __init__(self, console: Console = console) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=False,
        )
        self._task_ids: dict[str, int] = {}

    def __enter__(self) -> "AnalysisProgress":
        self._progress.__enter__()
        return self

    def __exit__(self, *args: object) -> None:
        self._progress.__exit__(*args)

    def start_stage(self, stage: str) -> None:
        """Register and start tracking a stage."""
        tid = self._progress.add_task(f"[cyan]{stage}[/]", total=None)
        self._task_ids[stage] = tid

    def finish_stage(self, stage: str, note: str = "") -> None:
        """Mark a stage as complete."""
        if stage in self._task_ids:
            suffix = f" [dim]{note}[/]" if note else ""
            self._progress.update(
                self._task_ids[stage],
                description=f"[green]✓ {stage}[/]{suffix}",
                completed=True,
            )

    def fail_stage(self, stage: str, error: str) -> None:
        """Mark a stage as failed."""
        if stage in self._task_ids:
            self._progress.update(
                self._task_ids[stage],
                description=f"[red]✗ {stage}: {escape(error)}[/]",
                completed=True,
            )
