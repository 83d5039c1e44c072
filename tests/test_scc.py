import numpy as np
import pytest

from sccdag.errors import InvalidArgumentError, VertexOutOfBoundsError
from sccdag.graph import Graph
from sccdag.metrics import Metrics
from sccdag.scc import find_scc, tarjan_scc


def _partition(result):
    return {frozenset(c) for c in result.components}


class TestTarjanSCC:
    def test_cycle_with_tail(self, cycle_graph):
        res = tarjan_scc(cycle_graph)
        assert res.num_components == 3
        assert _partition(res) == {frozenset([0, 1, 2]), frozenset([3]), frozenset([4])}

    def test_components_in_finish_order(self, cycle_graph):
        # 4 finishes first, then 3, then the root of the ring
        res = tarjan_scc(cycle_graph)
        assert res.components == [[4], [3], [2, 1, 0]]
        assert res.comp_id.tolist() == [2, 2, 2, 1, 0]

    def test_empty_graph(self):
        res = tarjan_scc(Graph(0))
        assert res.num_components == 0
        assert res.components == []
        assert len(res.comp_id) == 0

    def test_single_vertex(self):
        res = tarjan_scc(Graph(1))
        assert res.components == [[0]]

    def test_self_loop_is_single_component(self):
        res = tarjan_scc(Graph.from_edges(2, [(0, 0, 1.0), (0, 1, 1.0)]))
        assert _partition(res) == {frozenset([0]), frozenset([1])}

    def test_dag_has_singleton_components(self, chain_dag):
        res = tarjan_scc(chain_dag)
        assert res.num_components == chain_dag.n
        assert res.sizes().tolist() == [1] * chain_dag.n

    def test_two_cycles_joined(self):
        g = Graph.from_edges(5, [(0, 1), (1, 0), (1, 2), (2, 3), (3, 4), (4, 3)])
        res = tarjan_scc(g)
        assert _partition(res) == {frozenset([0, 1]), frozenset([2]), frozenset([3, 4])}

    def test_unreachable_start_vertices_are_covered(self):
        # 3 is only reachable from 4, which comes later in the outer loop
        g = Graph.from_edges(5, [(0, 1), (4, 3), (3, 4)])
        res = tarjan_scc(g)
        assert _partition(res) == {frozenset([0]), frozenset([1]), frozenset([2]), frozenset([3, 4])}

    def test_deep_ring_does_not_recurse(self):
        n = 20_000
        g = Graph.from_edges(n, [(i, (i + 1) % n) for i in range(n)])
        res = tarjan_scc(g)
        assert res.num_components == 1
        assert len(res.components[0]) == n

    def test_none_graph(self):
        with pytest.raises(InvalidArgumentError):
            tarjan_scc(None)

    def test_find_scc_alias(self, cycle_graph):
        assert find_scc(cycle_graph).components == tarjan_scc(cycle_graph).components

    def test_component_of(self, cycle_graph):
        res = tarjan_scc(cycle_graph)
        assert res.component_of(0) == res.component_of(2)
        with pytest.raises(VertexOutOfBoundsError):
            res.component_of(5)
        with pytest.raises(InvalidArgumentError):
            res.component_of(1.0)

    def test_metrics(self, cycle_graph):
        res = tarjan_scc(cycle_graph)
        m = res.metrics
        assert m.algorithm == "Tarjan-SCC"
        assert m.dfs_visits == 5
        assert m.edge_explorations == 5
        assert m.stack_pushes == 5
        assert m.stack_pops == 5
        # four tree edges plus the back edge 2->0
        assert m.lowlink_updates == 5
        assert m.total_operations() == 25
        assert m.elapsed_ms >= 0.0

    def test_passed_metrics_are_reset(self, cycle_graph):
        m = Metrics(algorithm="Tarjan-SCC", category="scc")
        tarjan_scc(cycle_graph, metrics=m)
        tarjan_scc(cycle_graph, metrics=m)
        assert m.dfs_visits == 5

    def test_reproducible(self, cycle_graph):
        a = tarjan_scc(cycle_graph)
        b = tarjan_scc(cycle_graph)
        assert a.components == b.components
        assert a.metrics.total_operations() == b.metrics.total_operations()


class TestSCCProperties:
    @pytest.mark.parametrize("seed", range(8))
    def test_partition_is_consistent(self, random_graph, seed):
        rng = np.random.default_rng(seed)
        n = int(rng.integers(1, 40))
        g = random_graph(rng, n, int(rng.integers(0, 3 * n)))
        res = tarjan_scc(g)

        assert int(res.sizes().sum()) == n
        assert res.num_components <= n
        assert sorted(v for c in res.components for v in c) == list(range(n))
        for cid, comp in enumerate(res.components):
            assert comp
            assert all(res.comp_id[v] == cid for v in comp)

    @pytest.mark.parametrize("seed", range(8))
    def test_cross_edges_point_to_earlier_components(self, random_graph, seed):
        rng = np.random.default_rng(100 + seed)
        g = random_graph(rng, 30, 60)
        res = tarjan_scc(g)
        for e in g.edges():
            ci, cj = res.comp_id[e.src], res.comp_id[e.dst]
            assert ci == cj or cj < ci

    @pytest.mark.parametrize("seed", range(8))
    def test_matches_scipy(self, random_graph, seed):
        sparse = pytest.importorskip("scipy.sparse")
        csgraph = pytest.importorskip("scipy.sparse.csgraph")

        rng = np.random.default_rng(200 + seed)
        n = 40
        g = random_graph(rng, n, int(rng.integers(n, 3 * n)))
        src, dst, _ = g.edge_arrays()
        adj = sparse.csr_matrix((np.ones(len(src)), (src, dst)), shape=(n, n))
        k, labels = csgraph.connected_components(adj, directed=True, connection="strong")

        expected = {}
        for v, lab in enumerate(labels):
            expected.setdefault(int(lab), set()).add(v)
        res = tarjan_scc(g)
        assert res.num_components == k
        assert _partition(res) == {frozenset(s) for s in expected.values()}
