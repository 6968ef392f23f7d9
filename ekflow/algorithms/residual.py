# ekflow/algorithms/residual.py
from collections import defaultdict
from typing import Dict, List, NamedTuple, Tuple

from ekflow.data.capacity_graph import CapacityGraph


class FlowEdge(NamedTuple):
    """Net flow and remaining residual capacity for an ordered vertex pair."""
    flow: int
    c_f: int


class ResidualArc:
    """One direction of an original edge inside the residual network."""
    __slots__ = ("tail", "head", "capacity", "flow", "c_f", "twin", "edge_index")

    def __init__(self, tail: int, head: int, capacity: int, twin: int, edge_index: int):
        self.tail = tail
        self.head = head
        self.capacity = capacity
        self.flow = 0
        self.c_f = capacity
        self.twin = twin
        self.edge_index = edge_index

    @property
    def is_forward(self) -> bool:
        return self.twin % 2 == 1

    def __repr__(self) -> str:
        return f"ResidualArc({self.tail}->{self.head}, flow={self.flow}, c_f={self.c_f})"


class ResidualNetwork:
    """
    Residual state for a single max-flow solve.

    Every original edge k owns two arcs in a flat arena: the forward arc at
    index 2k and its twin at 2k + 1. Each arc stores the index of the other so
    the reverse update never needs a lookup. Parallel edges keep their own
    arcs; they are only merged when the state is viewed by vertex pair.
    """

    def __init__(self, graph: CapacityGraph):
        self.graph = graph
        self.arcs: List[ResidualArc] = []
        forward: List[List[int]] = [[] for _ in range(graph.num_vertices)]
        backward: List[List[int]] = [[] for _ in range(graph.num_vertices)]

        for edge_index, (u, v, capacity) in enumerate(graph.edges()):
            arc_index = len(self.arcs)
            self.arcs.append(ResidualArc(u, v, capacity, arc_index + 1, edge_index))
            self.arcs.append(ResidualArc(v, u, 0, arc_index, edge_index))
            forward[u].append(arc_index)
            backward[v].append(arc_index + 1)

        # Real edges are scanned before the synthetic reverse ones.
        self._adjacency = [forward[v] + backward[v] for v in range(graph.num_vertices)]

    @property
    def num_vertices(self) -> int:
        return self.graph.num_vertices

    def adjacency(self, vertex: int) -> List[int]:
        """Arc indices leaving a vertex, forward arcs first."""
        return self._adjacency[vertex]

    def push(self, arc_index: int, amount: int) -> None:
        """Sends amount units along an arc and takes them back from its twin."""
        arc = self.arcs[arc_index]
        twin = self.arcs[arc.twin]
        arc.flow += amount
        arc.c_f -= amount
        twin.flow -= amount
        twin.c_f += amount

    def forward_arcs(self) -> List[ResidualArc]:
        return self.arcs[0::2]

    def edge_flows(self) -> List[Tuple[int, int, int, int]]:
        """(from, to, capacity, flow) for each original edge in graph order."""
        return [(arc.tail, arc.head, arc.capacity, arc.flow) for arc in self.forward_arcs()]

    def flow_map(self) -> Dict[Tuple[int, int], FlowEdge]:
        """
        Flow state keyed by (from, to).

        All arcs running from -> to are summed, so parallel edges and a twin
        sharing the direction of a real edge land in the same entry.
        """
        flows: Dict[Tuple[int, int], int] = defaultdict(int)
        residuals: Dict[Tuple[int, int], int] = defaultdict(int)
        for arc in self.arcs:
            key = (arc.tail, arc.head)
            flows[key] += arc.flow
            residuals[key] += arc.c_f
        return {key: FlowEdge(flows[key], residuals[key]) for key in flows}

    def flow_dict(self) -> Dict[int, Dict[int, int]]:
        """Nested {u: {v: flow}} over original edges, shaped like networkx's flow_dict."""
        result: Dict[int, Dict[int, int]] = {u: {} for u in range(self.num_vertices)}
        for arc in self.forward_arcs():
            result[arc.tail][arc.head] = result[arc.tail].get(arc.head, 0) + arc.flow
        return result

    def total_outflow(self, vertex: int) -> int:
        """Net flow leaving a vertex over original edges."""
        net = 0
        for arc in self.forward_arcs():
            if arc.tail == vertex:
                net += arc.flow
            if arc.head == vertex:
                net -= arc.flow
        return net
