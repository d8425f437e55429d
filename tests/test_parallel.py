"""
Tests for first-level branch fan-out and all-starts search.
"""

from concurrent.futures import ThreadPoolExecutor
import math
import threading

import pytest

from adjacency_list_graph import AdjacencyListGraph
from errors import InvalidStartNode
from graph_generators import complete_graph, generate_random_graph
from longest_path_engine import IterativeLongestPathEngine, RecursiveLongestPathEngine
from parallel import longest_paths_from_all, longest_simple_path_parallel


@pytest.mark.parametrize("seed", range(8))
def test_branch_fan_out_matches_sequential_search(seed):
    """Weight and reconstructed path equal the sequential answer, ties included."""
    g = generate_random_graph(8, edge_probability=0.4, max_weight=3, seed=seed, allow_self_loops=True)
    engine = RecursiveLongestPathEngine()

    for start in range(g.node_count()):
        expected = engine.longest_simple_path_from(g, start)
        got = longest_simple_path_parallel(g, start, engine, max_workers=3)

        assert got.weight == expected.weight
        assert got.path == expected.path
        assert got.complete


def test_fan_out_with_external_executor_and_destination():
    g = AdjacencyListGraph(4, [(0, 1, 5), (1, 2, 3), (0, 2, 10), (2, 3, 1)])
    engine = IterativeLongestPathEngine()

    with ThreadPoolExecutor(max_workers=2) as pool:
        to_two = longest_simple_path_parallel(g, 0, engine, destination=2, executor=pool)
        to_self = longest_simple_path_parallel(g, 0, engine, destination=0, executor=pool)
        unreachable = longest_simple_path_parallel(g, 3, engine, destination=0, executor=pool)

    assert (to_two.weight, to_two.path) == (10.0, (0, 2))
    assert (to_self.weight, to_self.path) == (0.0, (0,))
    assert unreachable.weight == -math.inf
    assert unreachable.path == ()


def test_fan_out_without_edges_and_with_only_self_loops():
    g = AdjacencyListGraph(2, [(0, 0, 4.0)])

    result = longest_simple_path_parallel(g, 0)

    assert result.weight == 0.0
    assert result.path == (0,)
    assert result.nodes_entered == 1


def test_fan_out_without_path_reconstruction():
    g = AdjacencyListGraph(3, [(0, 1, 1.0), (1, 2, 1.0)])

    result = longest_simple_path_parallel(g, 0, RecursiveLongestPathEngine(reconstruct_path=False))

    assert result.weight == 2.0
    assert result.path is None


def test_fan_out_reports_cancellation():
    g = complete_graph(5)
    event = threading.Event()
    event.set()

    result = longest_simple_path_parallel(g, 0, cancel=event)

    assert not result.complete


def test_fan_out_rejects_invalid_start():
    g = AdjacencyListGraph(2, [])

    with pytest.raises(InvalidStartNode):
        longest_simple_path_parallel(g, 2)
    with pytest.raises(InvalidStartNode):
        longest_simple_path_parallel(g, 0, destination=5)


def test_searches_from_every_start():
    g = generate_random_graph(6, edge_probability=0.5, seed=11)
    engine = RecursiveLongestPathEngine()

    results = longest_paths_from_all(g, engine, max_workers=2)

    assert sorted(results) == list(range(6))
    for start, result in results.items():
        assert result == engine.longest_simple_path_from(g, start)
