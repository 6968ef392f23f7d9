from ekflow.algorithms.path_search import bottleneck, find_augmenting_path, reachable_from
from ekflow.algorithms.residual import FlowEdge, ResidualNetwork
from ekflow.data.capacity_graph import CapacityGraph


def make_residual(num_vertices, edges):
    return ResidualNetwork(CapacityGraph.from_edges(num_vertices, edges))


class TestResidualNetwork:
    def test_initial_state(self):
        residual = make_residual(3, [(0, 1, 5), (1, 2, 3)])

        assert len(residual.arcs) == 4
        forward, twin = residual.arcs[0], residual.arcs[1]
        assert (forward.tail, forward.head, forward.c_f, forward.flow) == (0, 1, 5, 0)
        assert (twin.tail, twin.head, twin.c_f, twin.flow) == (1, 0, 0, 0)
        assert forward.twin == 1 and twin.twin == 0
        assert forward.is_forward and not twin.is_forward

    def test_adjacency_lists_forward_arcs_first(self):
        residual = make_residual(3, [(0, 1, 1), (2, 1, 1), (1, 2, 1)])
        arcs = [residual.arcs[i] for i in residual.adjacency(1)]

        assert [(a.head, a.is_forward) for a in arcs] == [(2, True), (0, False), (2, False)]

    def test_push_updates_arc_and_twin(self):
        residual = make_residual(2, [(0, 1, 5)])
        residual.push(0, 3)

        assert (residual.arcs[0].flow, residual.arcs[0].c_f) == (3, 2)
        assert (residual.arcs[1].flow, residual.arcs[1].c_f) == (-3, 3)
        for arc in residual.forward_arcs():
            assert arc.c_f + residual.arcs[arc.twin].c_f == arc.capacity

    def test_parallel_edges_keep_separate_arcs(self):
        residual = make_residual(2, [(0, 1, 2), (0, 1, 3)])
        residual.push(2, 3)

        assert residual.edge_flows() == [(0, 1, 2, 0), (0, 1, 3, 3)]
        assert residual.flow_map()[(0, 1)] == FlowEdge(3, 2)
        assert residual.flow_map()[(1, 0)] == FlowEdge(-3, 3)

    def test_opposite_real_edges_stay_independent(self):
        residual = make_residual(2, [(0, 1, 4), (1, 0, 2)])
        residual.push(0, 1)

        assert residual.arcs[0].c_f == 3
        assert residual.arcs[2].c_f == 2
        flow_map = residual.flow_map()
        assert flow_map[(0, 1)] == FlowEdge(1, 3 + 0)
        assert flow_map[(1, 0)] == FlowEdge(-1, 2 + 1)

    def test_flow_dict_and_outflow(self):
        residual = make_residual(3, [(0, 1, 5), (1, 2, 3)])
        residual.push(0, 2)
        residual.push(2, 2)

        assert residual.flow_dict() == {0: {1: 2}, 1: {2: 2}, 2: {}}
        assert residual.total_outflow(0) == 2
        assert residual.total_outflow(1) == 0
        assert residual.total_outflow(2) == -2


class TestPathSearch:
    def test_shortest_path_by_hops(self):
        # 0->1->2->3 is longer than 0->4->3 even though it is listed first
        residual = make_residual(5, [(0, 1, 9), (1, 2, 9), (2, 3, 9), (0, 4, 1), (4, 3, 1)])
        path = find_augmenting_path(residual, 0, 3)

        assert [(residual.arcs[i].tail, residual.arcs[i].head) for i in path] == [(0, 4), (4, 3)]
        assert bottleneck(residual, path) == 1

    def test_ties_go_to_first_enumerated_edge(self):
        residual = make_residual(4, [(0, 2, 1), (0, 1, 1), (1, 3, 1), (2, 3, 1)])
        path = find_augmenting_path(residual, 0, 3)

        assert [residual.arcs[i].head for i in path] == [2, 3]

    def test_zero_capacity_arcs_are_skipped(self):
        residual = make_residual(3, [(0, 1, 0), (1, 2, 5)])
        assert find_augmenting_path(residual, 0, 2) is None

    def test_unreachable_sink(self):
        residual = make_residual(4, [(0, 1, 3), (2, 3, 3)])
        assert find_augmenting_path(residual, 0, 3) is None
        assert reachable_from(residual, 0) == {0, 1}

    def test_follows_twin_arcs(self):
        residual = make_residual(3, [(0, 1, 2), (2, 1, 2)])
        residual.push(2, 2)
        path = find_augmenting_path(residual, 0, 2)

        arcs = [residual.arcs[i] for i in path]
        assert [(a.tail, a.head, a.is_forward) for a in arcs] == [(0, 1, True), (1, 2, False)]
        assert bottleneck(residual, path) == 2

    def test_self_loop_never_on_path(self):
        residual = make_residual(3, [(0, 0, 10), (0, 1, 2), (1, 1, 10), (1, 2, 3)])
        path = find_augmenting_path(residual, 0, 2)

        assert all(residual.arcs[i].tail != residual.arcs[i].head for i in path)
        assert len(path) == 2
