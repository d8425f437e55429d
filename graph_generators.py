"""
Random and worst-case graph generation for search scenarios and tests.

Uses a seeded random.Random so that a (parameters, seed) pair always yields
the same graph.
"""

from typing import List, Optional
import random

from adjacency_list_graph import AdjacencyListGraph, Edge


def generate_random_graph(
    node_count: int,
    edge_probability: float,
    max_weight: float = 10.0,
    seed: Optional[int] = None,
    integer_weights: bool = True,
    allow_self_loops: bool = False,
) -> AdjacencyListGraph:
    """
    Erdos-Renyi style directed graph: every ordered pair (u, v) gets an edge
    independently with probability edge_probability.

    Args:
        node_count: number of nodes.
        edge_probability: chance of each directed edge, in [0, 1].
        max_weight: weights are drawn from [0, max_weight].
        seed: RNG seed for reproducibility.
        integer_weights: draw whole-number weights, which keeps sums exact.
        allow_self_loops: also consider u -> u edges.
    """
    if not 0.0 <= edge_probability <= 1.0:
        raise ValueError(f"edge_probability must be in [0, 1], got {edge_probability}")
    if max_weight < 0:
        raise ValueError(f"max_weight must be non-negative, got {max_weight}")

    rng = random.Random(seed)
    edges: List[Edge] = []
    for u in range(node_count):
        for v in range(node_count):
            if u == v and not allow_self_loops:
                continue
            if rng.random() >= edge_probability:
                continue
            if integer_weights:
                weight = float(rng.randint(0, int(max_weight)))
            else:
                weight = rng.uniform(0.0, max_weight)
            edges.append(Edge(u, v, weight))
    return AdjacencyListGraph(node_count, edges)


def complete_graph(node_count: int, weight: float = 1.0) -> AdjacencyListGraph:
    """Every ordered pair of distinct nodes connected; the search's worst case."""
    edges = [Edge(u, v, weight) for u in range(node_count) for v in range(node_count) if u != v]
    return AdjacencyListGraph(node_count, edges)
