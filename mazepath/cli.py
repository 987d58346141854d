# mazepath/cli.py
"""
Command-line front end.

    mazepath run MAZE [--part 1|2] [--no-coast] [--log-level LEVEL]
    mazepath view MAZE [--algo astar|dijkstra]

MAZE is a file path or a bundled map name (see mazepath.core.maze.MAP_FILES).
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from mazepath.core.config import SearchConfig
from mazepath.core.errors import MalformedMazeError
from mazepath.core.maze import MAP_FILES, read_maze_text
from mazepath.solvers import MAZE_PUZZLE, SolverRegistry, UnknownSolverError, default_registry

LOGGER = logging.getLogger("mazepath")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mazepath", description="Directional maze shortest-path solver")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="print the puzzle answers")
    run.add_argument("maze", help=f"maze file or bundled map ({', '.join(MAP_FILES)})")
    run.add_argument("--part", type=int, choices=(1, 2), help="only solve this part")
    run.add_argument("--no-coast", action="store_true", help="disable corridor jumps in A*")

    view = sub.add_parser("view", help="step through a search in a pygame window")
    view.add_argument("maze", help=f"maze file or bundled map ({', '.join(MAP_FILES)})")
    view.add_argument("--algo", choices=("astar", "dijkstra"), default="dijkstra")
    view.add_argument("--no-coast", action="store_true", help="disable corridor jumps in A*")
    return parser


def _config(args: argparse.Namespace) -> SearchConfig:
    config = SearchConfig.from_env()
    if args.no_coast:
        config = replace(config, coast=False)
    return config


def cmd_run(args: argparse.Namespace, registry: SolverRegistry) -> int:
    text = read_maze_text(args.maze)
    config = _config(args)
    parts = [args.part] if args.part else registry.parts(MAZE_PUZZLE)
    for part in parts:
        LOGGER.debug("solving %s part %d (coast=%s)", args.maze, part, config.coast)
        answer = registry.solve(MAZE_PUZZLE, part, text, config)
        print(f"{part}: {answer}")
    return 0


def cmd_view(args: argparse.Namespace) -> int:
    # pygame is only needed here
    from mazepath.app.viewer import main as viewer_main

    viewer_main(args.maze, algo="A*" if args.algo == "astar" else "Dijkstra", config=_config(args))
    return 0


def main(argv: Optional[List[str]] = None, registry: Optional[SolverRegistry] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))
    registry = registry or default_registry()

    try:
        if args.command == "run":
            return cmd_run(args, registry)
        return cmd_view(args)
    except (OSError, MalformedMazeError) as ex:
        print(f"Failed to load maze {args.maze}: {ex}", file=sys.stderr)
        return 1
    except UnknownSolverError as ex:
        print(ex.args[0], file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
