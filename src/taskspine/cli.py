"""CLI entry point."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from taskspine.models.weight import MAX_WEIGHT

app = typer.Typer(
    name="taskspine",
    help="Weight-budgeted deferred task execution",
    no_args_is_help=True,
)
console = Console()


def _parse_weights(raw: str) -> list[int]:
    try:
        weights = [int(part) for part in raw.split(",") if part.strip()]
    except ValueError as e:
        raise typer.BadParameter(
            f"weights must be comma-separated integers: {raw!r}", param_hint="'--weights'"
        ) from e
    if any(not 0 <= w <= MAX_WEIGHT for w in weights):
        raise typer.BadParameter(f"weights must be in [0, {MAX_WEIGHT}]", param_hint="'--weights'")
    return weights


@app.command()
def version() -> None:
    """Show version."""
    from taskspine import __version__

    console.print(f"taskspine {__version__}")


@app.command()
def info() -> None:
    """Show system information."""
    import sys

    from taskspine import __version__
    from taskspine.core.config import get_settings

    settings = get_settings()
    console.print(f"[bold]TaskSpine[/bold] {__version__}")
    console.print(f"Python {sys.version}")
    console.print(f"Default quota: {settings.default_quota}")
    console.print(f"DB weight: read={settings.db_read_weight} write={settings.db_write_weight}")


@app.command()
def simulate(
    quota: int = typer.Option(
        ..., "--quota", "-q", min=0, max=MAX_WEIGHT, help="Weight cap per turn"
    ),
    weights: str = typer.Option("10,10,10", "--weights", "-w", help="Comma-separated task weights"),
    half: int = typer.Option(0, "--half", min=0, max=255, help="Half-steps per task"),
    greedy: bool = typer.Option(True, "--greedy/--non-greedy", help="Task consumption mode"),
    turns: int = typer.Option(20, "--turns", "-t", min=1, help="Maximum number of turns"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each pass"),
) -> None:
    """Drain a queue of reference tasks, one execution per turn."""
    from taskspine.core.config import get_settings
    from taskspine.core.logging import setup_logging
    from taskspine.executor.host import execute_stored
    from taskspine.executor.single_pass import SinglePassExecutor
    from taskspine.models.weight import DbWeight
    from taskspine.quota import ConstantQuota
    from taskspine.storage import MemoryStorage, StorageValue
    from taskspine.testing import ReferenceTask, TaskBuilder, remaining_weights_of

    task_weights = _parse_weights(weights)
    settings = get_settings(log_level="DEBUG") if verbose else get_settings()
    setup_logging(settings)

    executor_type = SinglePassExecutor.of(ReferenceTask, ConstantQuota(quota))
    value = StorageValue(MemoryStorage(), "task_executor", executor_type)
    builder = TaskBuilder().half(half).greedy(greedy)
    for weight in task_weights:
        value.append(builder.build(weight))

    db_weight = DbWeight.from_settings(settings)
    table = Table(title=f"Single pass, quota {quota}")
    table.add_column("Turn", justify="right")
    table.add_column("Consumed", justify="right")
    table.add_column("Charged", justify="right")
    table.add_column("Remaining")

    for turn in range(1, turns + 1):
        if not value.decode_len():
            break
        charged = execute_stored(value, db_weight)
        consumed = charged - db_weight.reads_writes(1, 1)
        executor = value.get()
        table.add_row(str(turn), str(consumed), str(charged), str(remaining_weights_of(executor)))

    console.print(table)
    if value.decode_len():
        console.print(f"[yellow]{value.decode_len()} task(s) left after {turns} turns[/yellow]")
    else:
        console.print("[green]Queue drained[/green]")


if __name__ == "__main__":
    app()
