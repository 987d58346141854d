import heapq
import itertools

import pytest

from mazepath.core.astar import solve_best_cost
from mazepath.core.dijkstra import AllBestPathsAlgo, count_best_path_cells
from mazepath.core.maze import load_maze, parse_maze
from mazepath.core.reconstruct import best_path_nodes
from mazepath.core.types import FORWARD_COST, TURN_COST, Direction, Node

from mazes import CORRIDOR, END_MID_CORRIDOR, MIRROR, OPEN_ROOM, SPLIT, WALLED_OFF

ALL_MAZES = [CORRIDOR, OPEN_ROOM, MIRROR, SPLIT, END_MID_CORRIDOR]


def _run(maze):
    algo = AllBestPathsAlgo()
    algo.init(maze)
    algo.run()
    return algo


def _cost_to_end(maze):
    """Reverse uniform-cost search: cheapest cost from every node to any end node."""
    seq = itertools.count()
    dist = {}
    heap = []
    for d in Direction:
        node = Node(maze.end, d)
        dist[node] = 0
        heapq.heappush(heap, (0, next(seq), node))
    while heap:
        g, _, node = heapq.heappop(heap)
        if g > dist[node]:
            continue
        dr, dc = node.facing.delta
        behind = (node.pos[0] - dr, node.pos[1] - dc)
        preds = [(node.rotate_cw(), TURN_COST), (node.rotate_ccw(), TURN_COST)]
        if maze.is_open(behind):
            preds.append((Node(behind, node.facing), FORWARD_COST))
        for prev, w in preds:
            if g + w < dist.get(prev, float("inf")):
                dist[prev] = g + w
                heapq.heappush(heap, (g + w, next(seq), prev))
    return dist


@pytest.mark.parametrize("text, expected", [
    (CORRIDOR, 7),
    (OPEN_ROOM, 7),
    (MIRROR, 16),
    (SPLIT, 17),
    (END_MID_CORRIDOR, 3),
    ("S.E", 3),
])
def test_cell_count_on_small_mazes(text, expected):
    assert count_best_path_cells(parse_maze(text)) == expected


@pytest.mark.parametrize("key, expected", [
    ("example_small", 45),
    ("example_large", 64),
])
def test_cell_count_on_bundled_maps(key, expected):
    assert count_best_path_cells(load_maze(key)) == expected


def test_mirror_routes_are_both_kept():
    maze = parse_maze(MIRROR)
    algo = _run(maze)
    top = {(3, 1), (2, 1), (1, 1), (1, 2), (1, 3), (1, 4), (1, 5), (2, 5), (3, 5)}
    bottom = {(3, 1), (4, 1), (5, 1), (5, 2), (5, 3), (5, 4), (5, 5), (4, 5), (3, 5)}
    assert algo.cells == top | bottom
    assert len(algo.cells) > len(top)
    assert algo.best[Node((3, 5), Direction.SOUTH)] == 3008
    assert algo.best[Node((3, 5), Direction.NORTH)] == 3008


def test_ties_keep_every_predecessor():
    algo = AllBestPathsAlgo()
    algo.init(parse_maze(SPLIT))
    kinds = set()
    while True:
        res = algo.step()
        kinds.update(r.kind for r in res.relaxed)
        if res.status != "running":
            break
    assert res.status == "done"
    assert "tied" in kinds
    assert algo.preceding[Node((1, 2), Direction.EAST)] == {
        Node((1, 1), Direction.EAST),
        Node((1, 2), Direction.NORTH),
    }


@pytest.mark.parametrize("text", ALL_MAZES)
def test_agrees_with_astar(text):
    maze = parse_maze(text)
    assert _run(maze).best_end_cost == solve_best_cost(maze)


@pytest.mark.parametrize("key", ["example_small", "example_large"])
def test_agrees_with_astar_on_bundled_maps(key):
    maze = load_maze(key)
    assert _run(maze).best_end_cost == solve_best_cost(maze)


def test_finalized_costs_never_change():
    algo = AllBestPathsAlgo()
    algo.init(load_maze("example_small"))
    frozen = {}
    while True:
        res = algo.step()
        for node, g in frozen.items():
            assert algo.best[node] == g
        for node in algo.finalized:
            frozen.setdefault(node, algo.best[node])
        if res.status != "running":
            break
    assert len(frozen) == len(algo.finalized)


@pytest.mark.parametrize("key", ["example_small", "example_large"])
def test_every_kept_node_lies_on_an_optimal_route(key):
    maze = load_maze(key)
    algo = _run(maze)
    to_end = _cost_to_end(maze)
    nodes = best_path_nodes(algo.preceding, algo.best, maze.end, algo.best_end_cost)
    assert Node(maze.start, Direction.EAST) in nodes
    for node in nodes:
        assert algo.best[node] + to_end[node] == algo.best_end_cost


def test_unreachable_end():
    maze = parse_maze(WALLED_OFF)
    assert count_best_path_cells(maze) is None
    algo = _run(maze)
    assert algo.no_path and algo.cells is None
    assert algo.step().status == "no_path"
    assert best_path_nodes(algo.preceding, algo.best, maze.end, None) == set()


def test_deterministic():
    maze = load_maze("example_large")
    first, second = _run(maze), _run(maze)
    assert first.cells == second.cells
    assert first.best_end_cost == second.best_end_cost
    assert first.popped_count == second.popped_count
