# ekflow/data/network_reader.py
import os
import networkx as nx
from typing import Dict, Any

from ekflow.data.capacity_graph import CapacityGraph, GraphBuilder

class NetworkData:
    """A container for the graph, source, sink, and metadata."""
    def __init__(self, graph: CapacityGraph, source: int, sink: int, info: Dict[str, Any]):
        self.graph = graph
        self.source = source
        self.sink = sink
        self.info = info

    def get_max_possible_flow(self) -> int:
        """Returns the trivial upper bound: capacity out of the source vs. into the sink."""
        return min(self.info.get('total_source_capacity', 0), self.info.get('total_sink_capacity', 0))

def _parse_int(token: str, filepath: str, line_number: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"{filepath}:{line_number}: expected an integer, got {token!r}") from None

def read_network(filepath: str) -> NetworkData:
    """
    Reads a network file and returns a NetworkData object.

    Layout: vertex count, edge count, source, sink, then one "u v capacity"
    line per edge. Parallel edges are kept.
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, 'r') as file:
        lines = [(number, line.strip()) for number, line in enumerate(file, start=1) if line.strip()]

    if len(lines) < 4:
        raise ValueError(f"{filepath}: header needs vertex count, edge count, source and sink")

    num_nodes, num_edges, source, sink = (_parse_int(text, filepath, number) for number, text in lines[:4])

    builder = GraphBuilder(num_nodes)
    total_source_capacity = 0
    total_sink_capacity = 0

    for number, line in lines[4:]:
        fields = line.split()
        if len(fields) != 3:
            raise ValueError(f"{filepath}:{number}: expected 'u v capacity', got {line!r}")
        u, v, capacity = (_parse_int(field, filepath, number) for field in fields)
        if not (0 <= u < num_nodes and 0 <= v < num_nodes):
            raise ValueError(f"{filepath}:{number}: edge {u}->{v} outside [0, {num_nodes})")
        builder.add_edge(u, v, capacity)
        if u == source:
            total_source_capacity += capacity
        if v == sink:
            total_sink_capacity += capacity

    graph = builder.build()
    if graph.num_edges != num_edges:
        raise ValueError(f"{filepath}: header declares {num_edges} edges, found {graph.num_edges}")

    info = {
        'filename': os.path.basename(filepath),
        'num_nodes': graph.num_vertices,
        'num_edges': graph.num_edges,
        'source': source,
        'sink': sink,
        'total_source_capacity': total_source_capacity,
        'total_sink_capacity': total_sink_capacity,
    }
    return NetworkData(graph, source, sink, info)

def write_network(filepath: str, graph: CapacityGraph, source: int, sink: int):
    """Writes a graph in the layout read_network expects."""
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, 'w') as file:
        file.write(f"{graph.num_vertices}\n{graph.num_edges}\n{source}\n{sink}\n")
        for u, v, capacity in graph.edges():
            file.write(f"{u} {v} {capacity}\n")

def to_networkx(graph: CapacityGraph) -> nx.DiGraph:
    """Converts to a networkx DiGraph, summing the capacities of parallel edges."""
    nx_graph = nx.DiGraph()
    nx_graph.add_nodes_from(range(graph.num_vertices))
    for u, v, capacity in graph.edges():
        if nx_graph.has_edge(u, v):
            nx_graph[u][v]['capacity'] += capacity
        else:
            nx_graph.add_edge(u, v, capacity=capacity)
    return nx_graph

def compute_reference_max_flow(network_data: NetworkData) -> int:
    """Computes the exact maximum flow with networkx for validation."""
    nx_graph = to_networkx(network_data.graph)
    if not nx_graph.has_node(network_data.source) or not nx_graph.has_node(network_data.sink):
        return 0
    try:
        max_flow_value, _ = nx.maximum_flow(
            nx_graph,
            network_data.source,
            network_data.sink,
            capacity='capacity'
        )
        return max_flow_value
    except nx.NetworkXError:
        return 0
