# mazepath/core/open_set.py
from collections import Counter
from typing import List, Optional
import heapq

from mazepath.core.types import Node, ScoredState


class OpenSet:
    """
    Min-heap of scored states with lazy deletion.

    There is no decrease-key: a better score for a node is pushed as a new entry
    and the old one stays behind. Searches recognise and skip those stale entries
    when they pop them (their g no longer matches the best-cost table).
    """

    def __init__(self) -> None:
        self._heap: List[ScoredState] = []
        self._live: Counter = Counter()   # node -> entries currently in the heap
        self._seq = 0                     # monotonic counter for PQ stability

    def push(self, node: Node, g: int, score: Optional[int] = None) -> ScoredState:
        self._seq += 1
        state = ScoredState(g if score is None else score, self._seq, g, node)
        heapq.heappush(self._heap, state)
        self._live[node] += 1
        return state

    def pop_min(self) -> Optional[ScoredState]:
        if not self._heap:
            return None
        state = heapq.heappop(self._heap)
        self._live[state.node] -= 1
        if not self._live[state.node]:
            del self._live[state.node]
        return state

    def peek_score(self) -> Optional[int]:
        return self._heap[0].score if self._heap else None

    def contains(self, node: Node) -> bool:
        return node in self._live

    def __contains__(self, node: Node) -> bool:
        return self.contains(node)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def clear(self) -> None:
        self._heap.clear()
        self._live.clear()
        self._seq = 0

    def snapshot(self) -> List[ScoredState]:
        """Entries in pop order, for display. Does not disturb the heap."""
        return sorted(self._heap)
