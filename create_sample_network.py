#!/usr/bin/env python3
"""
Script to write the sample networks used for manual testing
"""

from ekflow.data.capacity_graph import GraphBuilder
from ekflow.data.network_reader import write_network

def create_sample_network(path: str = "data/networks/network_7.txt"):
    """Seven-node network with two disjoint routes; max flow 3"""
    x, a, b, c, d, e, y = range(7)
    graph = (GraphBuilder(7)
             .add_edge(x, b, 1)
             .add_edge(x, a, 3)
             .add_edge(a, c, 3)
             .add_edge(b, c, 5)
             .add_edge(b, d, 4)
             .add_edge(c, y, 2)
             .add_edge(d, e, 2)
             .add_edge(e, y, 3)
             .build())
    write_network(path, graph, x, y)

    print(f"✅ Sample network created: {path}")
    print("   7 nodes, source=0, sink=6")
    print("   Expected max flow: 3")

if __name__ == "__main__":
    create_sample_network()
