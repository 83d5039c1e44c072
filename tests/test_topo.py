import numpy as np
import pytest

from sccdag.errors import InvalidArgumentError
from sccdag.graph import Graph
from sccdag.topo import kahn_toposort, topological_sort


def _respects_edges(graph, order):
    pos = {v: i for i, v in enumerate(order)}
    return all(pos[e.src] < pos[e.dst] for e in graph.edges())


class TestKahnToposort:
    def test_chain(self, chain_dag):
        res = kahn_toposort(chain_dag)
        assert res.is_dag
        assert res.order == [0, 1, 2, 3, 4]

    def test_fifo_order_on_ties(self):
        g = Graph.from_edges(4, [(3, 0), (1, 2)])
        assert kahn_toposort(g).order == [1, 3, 2, 0]

    def test_cycle(self, cycle_graph):
        res = kahn_toposort(cycle_graph)
        assert not res.is_dag
        assert res.order == []

    def test_cycle_leaves_prefix(self):
        g = Graph.from_edges(4, [(0, 1), (1, 2), (2, 1)])
        res = kahn_toposort(g)
        assert not res.is_dag
        assert res.order == [0, 3]

    def test_self_loop_is_a_cycle(self):
        res = kahn_toposort(Graph.from_edges(1, [(0, 0)]))
        assert not res.is_dag

    def test_empty_graph(self):
        res = kahn_toposort(Graph(0))
        assert res.is_dag
        assert res.order == []

    def test_isolated_vertices(self):
        assert kahn_toposort(Graph(3)).order == [0, 1, 2]

    def test_parallel_edges(self):
        g = Graph.from_edges(2, [(0, 1), (0, 1)])
        res = kahn_toposort(g)
        assert res.is_dag
        assert res.order == [0, 1]
        assert res.metrics.indegree_updates == 2

    def test_none_graph(self):
        with pytest.raises(InvalidArgumentError):
            kahn_toposort(None)

    def test_alias(self, chain_dag):
        assert topological_sort(chain_dag).order == kahn_toposort(chain_dag).order

    def test_positions(self, chain_dag):
        res = kahn_toposort(chain_dag)
        assert res.positions().tolist() == [0, 1, 2, 3, 4]

    def test_positions_of_partial_order(self):
        g = Graph.from_edges(4, [(0, 1), (1, 2), (2, 1)])
        assert kahn_toposort(g).positions(4).tolist() == [0, -1, -1, 1]

    def test_metrics(self, chain_dag):
        m = kahn_toposort(chain_dag).metrics
        assert m.algorithm == "Kahn-TS"
        # one enqueue and one dequeue per vertex
        assert m.queue_operations == 10
        assert m.indegree_updates == 5
        assert m.total_operations() == 15

    def test_empty_graph_metrics(self):
        m = kahn_toposort(Graph(0)).metrics
        assert m.total_operations() == 0


class TestToposortProperties:
    @pytest.mark.parametrize("seed", range(10))
    def test_dag_order_is_valid_permutation(self, random_dag, seed):
        rng = np.random.default_rng(seed)
        g = random_dag(rng, 30)
        res = kahn_toposort(g)
        assert res.is_dag
        assert sorted(res.order) == list(range(g.n))
        assert _respects_edges(g, res.order)

    @pytest.mark.parametrize("seed", range(10))
    def test_cycle_detection_agrees_with_scc(self, random_graph, seed):
        from sccdag.scc import tarjan_scc

        rng = np.random.default_rng(300 + seed)
        g = random_graph(rng, 15, 18)
        res = kahn_toposort(g)
        scc = tarjan_scc(g)
        has_self_loop = any(e.src == e.dst for e in g.edges())
        acyclic = scc.num_components == g.n and not has_self_loop
        assert res.is_dag == acyclic
        assert len(set(res.order)) == len(res.order)
