from __future__ import annotations

import time
from collections import defaultdict
from contextlib import contextmanager, nullcontext
from typing import ContextManager, Dict, Iterator, Optional


class Profiler:
    """Accumulates wall time and call counts per label."""

    def __init__(self) -> None:
        self.totals: Dict[str, float] = defaultdict(float)
        self.counts: Dict[str, int] = defaultdict(int)

    @contextmanager
    def span(self, label: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.totals[label] += time.perf_counter() - start
            self.counts[label] += 1

    def reset(self) -> None:
        self.totals.clear()
        self.counts.clear()

    def report(self) -> Dict[str, Dict[str, float]]:
        return {
            label: {"seconds": self.totals[label], "calls": float(self.counts[label])}
            for label in sorted(self.totals)
        }


def span(profiler: Optional[Profiler], label: str) -> ContextManager[None]:
    return profiler.span(label) if profiler is not None else nullcontext()
