# ekflow/data/capacity_graph.py
from typing import Iterable, Iterator, List, NamedTuple, Tuple


class InvalidArgumentError(ValueError):
    """Raised by the opt-in validation of graphs and solve arguments."""


class Edge(NamedTuple):
    to: int
    capacity: int


class CapacityGraph:
    """
    Immutable directed graph over vertices 0..N-1.

    Each vertex owns an ordered tuple of outgoing edges. Parallel edges between
    the same pair of vertices are kept as distinct entries. Nothing is checked
    at construction time; call validate() when the input is untrusted.
    """

    def __init__(self, adjacency: Iterable[Iterable[Edge]]):
        self._adjacency = tuple(tuple(Edge(e.to, e.capacity) for e in edges) for edges in adjacency)
        self._num_edges = sum(len(edges) for edges in self._adjacency)

    @classmethod
    def from_edges(cls, num_vertices: int, edges: Iterable[Tuple[int, int, int]]) -> 'CapacityGraph':
        """Builds a graph from (from, to, capacity) triples, duplicates included."""
        builder = GraphBuilder(num_vertices)
        for u, v, capacity in edges:
            builder.add_edge(u, v, capacity)
        return builder.build()

    @property
    def num_vertices(self) -> int:
        return len(self._adjacency)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    def out_edges(self, vertex: int) -> Tuple[Edge, ...]:
        return self._adjacency[vertex]

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        """Yields (from, to, capacity) in enumeration order."""
        for u, out in enumerate(self._adjacency):
            for edge in out:
                yield u, edge.to, edge.capacity

    def total_capacity(self, vertex: int) -> int:
        """Sum of the capacities leaving a vertex."""
        return sum(edge.capacity for edge in self._adjacency[vertex])

    def has_vertex(self, vertex: int) -> bool:
        return 0 <= vertex < len(self._adjacency)

    def validate(self) -> None:
        """Raises InvalidArgumentError on a dangling endpoint or a negative capacity."""
        for u, v, capacity in self.edges():
            if not self.has_vertex(v):
                raise InvalidArgumentError(f"Edge {u}->{v} points outside [0, {self.num_vertices})")
            if capacity < 0:
                raise InvalidArgumentError(f"Edge {u}->{v} has negative capacity {capacity}")

    def __len__(self) -> int:
        return len(self._adjacency)

    def __iter__(self) -> Iterator[Tuple[Edge, ...]]:
        return iter(self._adjacency)

    def __repr__(self) -> str:
        return f"CapacityGraph(num_vertices={self.num_vertices}, num_edges={self.num_edges})"


class GraphBuilder:
    """Accumulates edges for a CapacityGraph. Drivers build their networks through this."""

    def __init__(self, num_vertices: int = 0):
        self._adjacency: List[List[Edge]] = [[] for _ in range(num_vertices)]

    @property
    def num_vertices(self) -> int:
        return len(self._adjacency)

    def add_vertex(self) -> int:
        """Appends a vertex and returns its index."""
        self._adjacency.append([])
        return len(self._adjacency) - 1

    def add_edge(self, u: int, v: int, capacity: int) -> 'GraphBuilder':
        self._adjacency[u].append(Edge(v, capacity))
        return self

    def build(self) -> CapacityGraph:
        return CapacityGraph(self._adjacency)
