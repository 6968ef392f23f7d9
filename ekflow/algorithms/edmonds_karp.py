import logging
from typing import Dict, List, Optional, Set, Tuple

from ekflow.algorithms.path_search import bottleneck, find_augmenting_path, reachable_from
from ekflow.algorithms.residual import FlowEdge, ResidualNetwork
from ekflow.data.capacity_graph import CapacityGraph, InvalidArgumentError

module_logger = logging.getLogger(__name__)


class MaxFlowResult:
    """Outcome of one solve: the flow value plus the residual state that produced it."""

    def __init__(self, value: int, residual: ResidualNetwork, source: int, sink: int,
                 history: List[int], path_lengths: List[int], complete: bool = True):
        self.value = value
        self.residual = residual
        self.source = source
        self.sink = sink
        self.history = history
        self.path_lengths = path_lengths
        self.complete = complete

    @property
    def augmentations(self) -> int:
        return len(self.history)

    def flow_map(self) -> Dict[Tuple[int, int], FlowEdge]:
        return self.residual.flow_map()

    def edge_flows(self) -> List[Tuple[int, int, int, int]]:
        return self.residual.edge_flows()

    def min_cut(self) -> Tuple[Set[int], Set[int], List[Tuple[int, int, int]]]:
        """
        Source side, sink side and saturated crossing edges of a minimum cut.

        Only meaningful for a complete solve; the crossing capacities then sum
        to the flow value.
        """
        source_side = reachable_from(self.residual, self.source)
        sink_side = set(range(self.residual.num_vertices)) - source_side
        cut_edges = [(u, v, capacity) for u, v, capacity in self.residual.graph.edges()
                     if u in source_side and v in sink_side]
        return source_side, sink_side, cut_edges

    def to_dict(self) -> dict:
        return {
            "max_flow": self.value,
            "augmentations": self.augmentations,
            "history": self.history,
            "path_lengths": self.path_lengths,
            "complete": self.complete,
        }

    def __repr__(self) -> str:
        return f"MaxFlowResult(value={self.value}, augmentations={self.augmentations}, complete={self.complete})"


class MaxFlowSolver:
    """
    Edmonds-Karp maximum flow over a CapacityGraph.

    The graph is only read. Every call to solve() starts from a fresh
    ResidualNetwork, so one solver can be reused and separate solvers can run
    in parallel.
    """

    def __init__(self, graph: CapacityGraph, config: Optional[dict] = None,
                 logger: Optional[logging.Logger] = None, max_augmentations: Optional[int] = None,
                 validate: Optional[bool] = None, label: str = "maxflow"):
        solver_config = (config or {}).get('solver', {}) or {}

        self.graph = graph
        self.logger = logger or module_logger
        self.label = label
        self.max_augmentations = (max_augmentations if max_augmentations is not None
                                  else solver_config.get('max_augmentations'))
        self.validate = validate if validate is not None else solver_config.get('validate_input', False)
        self.log_every = solver_config.get('log_every', 0) or 0

    def _check_arguments(self, source: int, sink: int):
        if not self.graph.has_vertex(source):
            raise InvalidArgumentError(f"Source {source} is not a vertex of a {self.graph.num_vertices}-vertex graph")
        if not self.graph.has_vertex(sink):
            raise InvalidArgumentError(f"Sink {sink} is not a vertex of a {self.graph.num_vertices}-vertex graph")
        if source == sink:
            raise InvalidArgumentError(f"Source and sink must differ (both are {source})")
        self.graph.validate()

    def solve(self, source: int, sink: int) -> MaxFlowResult:
        """Augment along shortest residual paths until none is left."""
        if self.validate:
            self._check_arguments(source, sink)

        residual = ResidualNetwork(self.graph)
        total_flow = 0
        history: List[int] = []
        path_lengths: List[int] = []
        complete = True

        while True:
            if self.max_augmentations is not None and len(history) >= self.max_augmentations:
                complete = find_augmenting_path(residual, source, sink) is None
                if not complete:
                    self.logger.info(f"[{self.label}] Augmentation budget of {self.max_augmentations} reached, "
                                     f"stopping at flow {total_flow}")
                break

            path = find_augmenting_path(residual, source, sink)
            if not path:
                break

            delta = bottleneck(residual, path)
            for arc_index in path:
                residual.push(arc_index, delta)
            total_flow += delta

            history.append(total_flow)
            path_lengths.append(len(path))
            self.logger.debug(f"[{self.label}] Augmentation {len(history)}: +{delta} over {len(path)} arcs "
                              f"(total {total_flow})")
            if self.log_every and len(history) % self.log_every == 0:
                self.logger.info(f"[{self.label}] {len(history)} augmentations, flow so far {total_flow}")

        self.logger.info(f"[{self.label}] Max flow {source}->{sink}: {total_flow} "
                         f"after {len(history)} augmentations")
        return MaxFlowResult(total_flow, residual, source, sink, history, path_lengths, complete)

    def max_flow(self, source: int, sink: int) -> int:
        """Value-only form of solve()."""
        return self.solve(source, sink).value


def max_flow(graph: CapacityGraph, source: int, sink: int) -> Tuple[int, Dict[Tuple[int, int], FlowEdge]]:
    """Returns the maximum flow value and the flow map keyed by (from, to)."""
    result = MaxFlowSolver(graph).solve(source, sink)
    return result.value, result.flow_map()


def max_flow_value(graph: CapacityGraph, source: int, sink: int) -> int:
    return MaxFlowSolver(graph).max_flow(source, sink)
