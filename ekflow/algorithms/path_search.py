# ekflow/algorithms/path_search.py
from collections import deque
from typing import List, Optional, Set

from ekflow.algorithms.residual import ResidualNetwork


def find_augmenting_path(residual: ResidualNetwork, source: int, sink: int) -> Optional[List[int]]:
    """
    Find a fewest-hops augmenting path from source to sink using BFS.

    Only arcs with positive residual capacity are followed. A vertex keeps the
    first arc that reached it, so ties go to discovery order. Returns the arc
    indices from source to sink, or None when the sink is unreachable.
    """
    hops: List[Optional[int]] = [None] * residual.num_vertices
    parent_arc: List[Optional[int]] = [None] * residual.num_vertices
    hops[source] = 0
    queue = deque([source])

    while queue:
        u = queue.popleft()
        if u == sink:
            break
        next_hops = hops[u] + 1
        for arc_index in residual.adjacency(u):
            arc = residual.arcs[arc_index]
            if arc.c_f > 0 and hops[arc.head] is None:
                hops[arc.head] = next_hops
                parent_arc[arc.head] = arc_index
                queue.append(arc.head)
    else:
        return None

    path = []
    v = sink
    while v != source:
        arc_index = parent_arc[v]
        path.append(arc_index)
        v = residual.arcs[arc_index].tail
    path.reverse()
    return path


def bottleneck(residual: ResidualNetwork, path: List[int]) -> int:
    """Smallest residual capacity along a path."""
    return min(residual.arcs[arc_index].c_f for arc_index in path)


def reachable_from(residual: ResidualNetwork, source: int) -> Set[int]:
    """Vertices reachable from source over arcs with positive residual capacity."""
    seen = {source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for arc_index in residual.adjacency(u):
            arc = residual.arcs[arc_index]
            if arc.c_f > 0 and arc.head not in seen:
                seen.add(arc.head)
                queue.append(arc.head)
    return seen
