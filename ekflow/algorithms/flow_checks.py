from typing import Dict, Iterable, Tuple

from ekflow.algorithms.residual import FlowEdge
from ekflow.data.capacity_graph import CapacityGraph

FlowMap = Dict[Tuple[int, int], FlowEdge]


def verify_flow_conservation(flow_map: FlowMap, source: int, sink: int) -> bool:
    """Verify inflow equals outflow at every vertex other than source and sink."""
    balance: Dict[int, int] = {}
    for (u, v), entry in flow_map.items():
        if entry.flow > 0:
            balance[u] = balance.get(u, 0) - entry.flow
            balance[v] = balance.get(v, 0) + entry.flow
    return all(net == 0 for node, net in balance.items() if node not in (source, sink))


def verify_antisymmetry(flow_map: FlowMap) -> bool:
    for (u, v), entry in flow_map.items():
        reverse = flow_map.get((v, u))
        if reverse is None:
            if entry.flow != 0:
                return False
        elif entry.flow != -reverse.flow:
            return False
    return True


def verify_capacity_respect(graph: CapacityGraph, flow_map: FlowMap) -> bool:
    """Positive flow between a pair never exceeds the pair's combined capacity."""
    capacities: Dict[Tuple[int, int], int] = {}
    for u, v, capacity in graph.edges():
        capacities[(u, v)] = capacities.get((u, v), 0) + capacity

    for key, entry in flow_map.items():
        if entry.flow > 0 and entry.flow > capacities.get(key, 0):
            return False
    return True


def cut_capacity(graph: CapacityGraph, source_side: Iterable[int]) -> int:
    """Total capacity of edges leaving source_side."""
    side = set(source_side)
    return sum(capacity for u, v, capacity in graph.edges() if u in side and v not in side)
