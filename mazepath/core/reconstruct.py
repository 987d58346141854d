# mazepath/core/reconstruct.py
#!/usr/bin/env python3
"""
Walking predecessor links backwards.

- best_path_nodes(): every node on *any* minimum-cost route, from the tie-keeping
  predecessor sets of the all-paths search.
- trace_route(): the single route recorded by A*, expanded cell by cell.
"""

from typing import Dict, List, Mapping, Optional, Set

from mazepath.core.moves import cells_between
from mazepath.core.types import Direction, Node, Pos


def best_path_nodes(preceding: Mapping[Node, Set[Node]],
                    best: Mapping[Node, float],
                    end: Pos,
                    min_cost: Optional[int]) -> Set[Node]:
    """Backward breadth-first walk from every end orientation tied at `min_cost`."""
    if min_cost is None:
        return set()

    frontier: List[Node] = [
        Node(end, d) for d in Direction if best.get(Node(end, d)) == min_cost
    ]
    visited: Set[Node] = set(frontier)

    while frontier:
        next_frontier: List[Node] = []
        for node in frontier:
            for prev in preceding.get(node, ()):
                if prev not in visited:
                    visited.add(prev)
                    next_frontier.append(prev)
        frontier = next_frontier
    return visited


def best_path_cells(preceding: Mapping[Node, Set[Node]],
                    best: Mapping[Node, float],
                    end: Pos,
                    min_cost: Optional[int]) -> Set[Pos]:
    """Distinct positions (orientation dropped) on any minimum-cost route."""
    return {n.pos for n in best_path_nodes(preceding, best, end, min_cost)}


def trace_route(came_from: Dict[Node, Node], goal: Node) -> List[Pos]:
    nodes = [goal]
    cur = goal
    while cur in came_from:
        cur = came_from[cur]
        nodes.append(cur)
    nodes.reverse()

    cells: List[Pos] = [nodes[0].pos]
    for a, b in zip(nodes, nodes[1:]):
        if a.pos != b.pos:
            # corridor jumps span several cells
            cells.extend(cells_between(a.pos, b.pos)[1:])
    return cells
