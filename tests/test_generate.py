import json

import numpy as np
import pytest

from sccdag import config
from sccdag.errors import InvalidArgumentError
from sccdag.generate import VARIANTS, generate_graph, generate_suite, target_edge_count, write_suite
from sccdag.io import load_graph_suite, parse_graph
from sccdag.scc import tarjan_scc
from sccdag.topo import kahn_toposort


def _num_sccs(entry):
    return tarjan_scc(parse_graph(entry).graph).num_components


class TestGenerateGraph:
    @pytest.mark.parametrize("n", [6, 20, 35])
    @pytest.mark.parametrize("dense", [False, True])
    def test_pure_dag_is_acyclic(self, n, dense):
        entry = generate_graph(1, n, "pure_dag", dense=dense, rng=np.random.default_rng(n))
        assert kahn_toposort(parse_graph(entry).graph).is_dag

    @pytest.mark.parametrize("n", [8, 20])
    def test_one_cycle_is_strongly_connected(self, n):
        entry = generate_graph(1, n, "one_cycle", rng=np.random.default_rng(n))
        assert _num_sccs(entry) == 1

    @pytest.mark.parametrize("n", [10, 11, 30])
    def test_two_cycles(self, n):
        entry = generate_graph(1, n, "two_cycles", dense=True, rng=np.random.default_rng(n))
        assert _num_sccs(entry) == 2

    @pytest.mark.parametrize("seed", range(5))
    def test_mixed(self, seed):
        entry = generate_graph(1, 16, "mixed", rng=np.random.default_rng(seed))
        assert 3 <= _num_sccs(entry) <= 5

    @pytest.mark.parametrize("seed", range(5))
    def test_many_sccs(self, seed):
        entry = generate_graph(1, 50, "many_sccs", dense=True, rng=np.random.default_rng(seed))
        assert 5 <= _num_sccs(entry) <= 10
        assert entry["source"] == 50 // 3

    @pytest.mark.parametrize("variant", VARIANTS)
    def test_entry_layout(self, variant):
        entry = generate_graph(4, 12, variant, rng=np.random.default_rng(0))
        assert entry["id"] == 4
        assert entry["n"] == 12
        assert entry["variant"] == variant
        assert entry["density"] == "sparse"
        pairs = [(e["u"], e["v"]) for e in entry["edges"]]
        assert len(pairs) == len(set(pairs))
        for e in entry["edges"]:
            assert 0 <= e["u"] < 12 and 0 <= e["v"] < 12
            assert config.WEIGHT_LOW <= e["w"] <= config.WEIGHT_HIGH
            assert e["w"] == round(e["w"], 1)

    def test_edge_budget(self):
        entry = generate_graph(1, 20, "one_cycle", rng=np.random.default_rng(0))
        assert len(entry["edges"]) == target_edge_count(20, dense=False) == 36
        assert target_edge_count(6, dense=True) == 10

    def test_unknown_variant(self):
        with pytest.raises(InvalidArgumentError):
            generate_graph(1, 10, "star")

    @pytest.mark.parametrize("variant,n", [("two_cycles", 3), ("mixed", 2), ("pure_dag", 1)])
    def test_too_small(self, variant, n):
        with pytest.raises(InvalidArgumentError):
            generate_graph(1, n, variant)


class TestGenerateSuite:
    def test_suite_shape(self):
        doc = generate_suite(seed=1)
        graphs = doc["graphs"]
        assert [g["id"] for g in graphs] == list(range(1, len(config.SUITE_SIZES) + 1))
        assert [(g["n"], g["variant"]) for g in graphs] == list(config.SUITE_SIZES)

    def test_reproducible(self):
        assert generate_suite(dense=True, seed=3) == generate_suite(dense=True, seed=3)
        assert generate_suite(seed=3) != generate_suite(seed=4)

    def test_write_and_load(self, tmp_path):
        path = tmp_path / "data" / config.SPARSE_INPUT
        doc = write_suite(path, seed=0)
        assert json.loads(path.read_text(encoding="utf-8")) == doc
        specs = load_graph_suite(path)
        assert len(specs) == len(config.SUITE_SIZES)
        assert all(s.density == "sparse" for s in specs)
