"""Exceptions raised by the graph core and its I/O layer.

Bad arguments are caller mistakes and surface immediately. A cyclic graph
handed to the path solver is not an error: those calls return ``None``.
"""

from __future__ import annotations


class GraphError(Exception):
    """Base class for every error raised by :mod:`sccdag`."""


class InvalidArgumentError(GraphError, ValueError):
    """A required graph or result argument is missing or malformed."""


class VertexOutOfBoundsError(GraphError, IndexError):
    """A vertex index lies outside ``[0, n)``.

    Attributes
    ----------
    vertex:
        the offending index.
    n:
        vertex count of the graph it was checked against.
    """

    def __init__(self, vertex: int, n: int, what: str = "vertex") -> None:
        super().__init__(f"{what} {vertex} out of bounds for graph with n={n}")
        self.vertex = vertex
        self.n = n


class GraphFormatError(GraphError, ValueError):
    """An input document does not describe a valid graph suite."""
