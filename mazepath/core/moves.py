# mazepath/core/moves.py
#!/usr/bin/env python3
"""
Edges of the (position, facing) state space.

From any node there are at most three moves:
- step forward one cell, if that cell is open   (cost FORWARD_COST)
- rotate clockwise in place                      (cost TURN_COST)
- rotate counter-clockwise in place              (cost TURN_COST)
"""

from typing import List, Tuple

from mazepath.core.maze import Maze
from mazepath.core.types import FORWARD_COST, TURN_COST, Node, Pos

Move = Tuple[Node, int]  # (successor, edge cost)


def successors(maze: Maze, node: Node) -> List[Move]:
    out: List[Move] = []
    ahead = node.forward()
    if maze.is_open(ahead.pos):
        out.append((ahead, FORWARD_COST))
    out.append((node.rotate_cw(), TURN_COST))
    out.append((node.rotate_ccw(), TURN_COST))
    return out


def can_turn_at(maze: Maze, node: Node) -> bool:
    """True if either side cell of `node` is open."""
    return (maze.is_open(node.facing.rotate_cw().forward(node.pos))
            or maze.is_open(node.facing.rotate_ccw().forward(node.pos)))


def coast(maze: Maze, node: Node) -> Tuple[Node, int]:
    """
    Walk forward along a straight corridor as far as nothing interesting happens.

    Stops on the first cell where a turn is possible, on the end cell, or in front
    of a wall. Returns (landing node, cells walked); zero cells means blocked.
    """
    cur = node
    steps = 0
    while True:
        ahead = cur.forward()
        if not maze.is_open(ahead.pos):
            break
        cur = ahead
        steps += 1
        if cur.pos == maze.end or can_turn_at(maze, cur):
            break
    return cur, steps


def coast_successors(maze: Maze, node: Node) -> List[Move]:
    """Like successors(), but the forward move jumps a whole corridor."""
    out: List[Move] = []
    landing, steps = coast(maze, node)
    if steps:
        out.append((landing, steps * FORWARD_COST))
    out.append((node.rotate_cw(), TURN_COST))
    out.append((node.rotate_ccw(), TURN_COST))
    return out


def cells_between(a: Pos, b: Pos) -> List[Pos]:
    """Cells from a to b inclusive along a row or column."""
    (r0, c0), (r1, c1) = a, b
    if r0 != r1 and c0 != c1:
        raise ValueError(f"{a} and {b} are not on a straight line")
    dr = (r1 > r0) - (r1 < r0)
    dc = (c1 > c0) - (c1 < c0)
    n = max(abs(r1 - r0), abs(c1 - c0))
    return [(r0 + i * dr, c0 + i * dc) for i in range(n + 1)]
