import time
from collections.abc import Iterable
from contextlib import contextmanager

from .core import TraceEvent


@contextmanager
def timer():
    start = time.perf_counter()
    yield lambda: (time.perf_counter() - start)


def summarize_trace(trace: Iterable[TraceEvent]) -> dict:
    """Roll up a resolver trace: event counts per op, search hits/misses and time."""
    counts: dict[str, int] = {}
    hits = misses = listings = 0
    seconds = 0.0
    for ev in trace:
        counts[ev.op] = counts.get(ev.op, 0) + 1
        if ev.op != "search":
            continue
        if ev.payload.get("hit"):
            hits += 1
        else:
            misses += 1
        listings += ev.payload.get("listings", 0)
        seconds += ev.payload.get("seconds", 0.0)
    return {
        "per_op": counts,
        "search": {
            "hits": hits,
            "misses": misses,
            "listings": listings,
            "seconds": seconds,
        },
    }
