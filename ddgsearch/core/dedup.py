"""
Result Collector
Per-call accumulator enforcing identity-key uniqueness and the result cap
"""
from typing import Generic, List, Set, TypeVar


T = TypeVar("T")


class ResultCollector(Generic[T]):
    """
    Accumulates records for one search call.

    A record is kept only if its identity key is non-empty and unseen and the
    cap (``max_results > 0``) has not been reached. Never shared across calls.
    """

    def __init__(self, max_results: int = 0):
        self.max_results = max(0, int(max_results or 0))
        self.results: List[T] = []
        self._seen: Set[str] = set()

    def add(self, result: T) -> bool:
        """Keep ``result`` if it is new and there is room; returns whether it was kept."""
        if self.is_full():
            return False
        key = result.identity
        if not key or key in self._seen:
            return False
        self._seen.add(key)
        self.results.append(result)
        return True

    def extend(self, results) -> int:
        return sum(1 for result in results if self.add(result))

    def is_full(self) -> bool:
        return self.max_results > 0 and len(self.results) >= self.max_results

    def __len__(self) -> int:
        return len(self.results)
