from collections.abc import Iterable

from rich.console import Console
from rich.table import Table

from .core import TraceEvent
from .resolver import Resolver
from .utils import summarize_trace


def memo_table(resolver: Resolver) -> Table:
    table = Table(title=f"Resolved types ({len(resolver.memo)})")
    table.add_column("type", style="cyan")
    table.add_column("path")
    for name, path in sorted(resolver.memo.items()):
        table.add_row(name, path)
    return table


def trace_table(trace: Iterable[TraceEvent]) -> Table:
    events = list(trace)
    table = Table(title=f"Resolver trace ({len(events)} events)")
    table.add_column("#", justify="right")
    table.add_column("op", style="bold")
    table.add_column("payload")
    for idx, ev in enumerate(events):
        payload = ", ".join(f"{k}={v}" for k, v in ev.payload.items())
        table.add_row(str(idx), ev.op, payload)
    return table


def print_report(resolver: Resolver, console: Console | None = None) -> dict:
    """Print the memo and trace tables; return the trace summary."""
    console = console or Console()
    summary = summarize_trace(resolver.trace)
    console.print(memo_table(resolver))
    console.print(trace_table(resolver.trace))
    search = summary["search"]
    console.print(
        f"[bright_white]searches:[/bright_white] {search['hits']} hit, "
        f"{search['misses']} miss, {search['listings']} listings, "
        f"{search['seconds']:.4f}s"
    )
    return summary
