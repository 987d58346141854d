# mazepath/core/errors.py
class MazeError(Exception):
    """Base class for everything the maze engine raises."""


class MalformedMazeError(MazeError, ValueError):
    """Maze text cannot be turned into a searchable grid."""


class SearchInvariantError(MazeError, AssertionError):
    """A search broke one of its own bookkeeping guarantees (a bug, not bad input)."""
