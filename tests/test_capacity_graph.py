import pytest

from ekflow.data.capacity_graph import CapacityGraph, Edge, GraphBuilder, InvalidArgumentError


class TestCapacityGraph:
    def test_from_edges_keeps_order_and_parallel_edges(self):
        graph = CapacityGraph.from_edges(3, [(0, 1, 5), (0, 2, 1), (0, 1, 2), (1, 2, 3)])

        assert graph.num_vertices == 3
        assert graph.num_edges == 4
        assert graph.out_edges(0) == (Edge(1, 5), Edge(2, 1), Edge(1, 2))
        assert graph.out_edges(2) == ()
        assert list(graph.edges()) == [(0, 1, 5), (0, 2, 1), (0, 1, 2), (1, 2, 3)]

    def test_total_capacity(self):
        graph = CapacityGraph.from_edges(3, [(0, 1, 5), (0, 2, 1), (0, 1, 2)])
        assert graph.total_capacity(0) == 8
        assert graph.total_capacity(1) == 0

    def test_graph_is_detached_from_builder(self):
        builder = GraphBuilder(2).add_edge(0, 1, 4)
        graph = builder.build()
        builder.add_edge(1, 0, 7)

        assert graph.num_edges == 1
        assert builder.build().num_edges == 2

    def test_out_edges_are_immutable(self):
        graph = CapacityGraph.from_edges(2, [(0, 1, 1)])
        with pytest.raises((TypeError, AttributeError)):
            graph.out_edges(0).append(Edge(1, 1))

    def test_builder_add_vertex(self):
        builder = GraphBuilder()
        source = builder.add_vertex()
        sink = builder.add_vertex()
        graph = builder.add_edge(source, sink, 3).build()

        assert (source, sink) == (0, 1)
        assert len(graph) == 2
        assert [list(out) for out in graph] == [[Edge(1, 3)], []]

    def test_construction_does_not_validate(self):
        graph = CapacityGraph.from_edges(2, [(0, 1, -1), (1, 5, 2)])
        assert graph.num_edges == 2

    def test_validate_rejects_negative_capacity(self):
        graph = CapacityGraph.from_edges(2, [(0, 1, -1)])
        with pytest.raises(InvalidArgumentError, match="negative capacity"):
            graph.validate()

    def test_validate_rejects_dangling_endpoint(self):
        graph = CapacityGraph.from_edges(2, [(0, 3, 1)])
        with pytest.raises(InvalidArgumentError):
            graph.validate()

    def test_invalid_argument_is_value_error(self):
        assert issubclass(InvalidArgumentError, ValueError)

    def test_empty_graph(self):
        graph = CapacityGraph.from_edges(0, [])
        assert graph.num_vertices == 0
        assert graph.num_edges == 0
        assert not graph.has_vertex(0)
