"""Parallel utilities for longest-path search.

The backtracking search itself is sequential: every step depends on the
visited-set mutation just before it. Parallelism is applied only where
searches are independent:

* across the first-level branches of one search, each branch running its own
  sub-search with its own visited set and the start node excluded, and
* across top-level searches from different start nodes.

The graph is immutable and shared read-only by all workers.
"""
from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

from algorithms import CancellationFlag, LongestPathEngine, SearchResult
from graph import Graph, NodeId
from longest_path_engine import check_node, default_engine


def _search_branch(
    engine: LongestPathEngine,
    graph: Graph,
    branch_root: NodeId,
    start: NodeId,
    destination: Optional[NodeId],
    cancel: Optional[CancellationFlag],
) -> SearchResult:
    """Worker body; module level so process pools can pickle it."""
    return engine.longest_simple_path_from(
        graph, branch_root, destination=destination, avoid=(start,), cancel=cancel
    )


def _search_from(engine: LongestPathEngine, graph: Graph, start: NodeId) -> SearchResult:
    return engine.longest_simple_path_from(graph, start)


def longest_simple_path_parallel(
    graph: Graph,
    start: NodeId,
    engine: Optional[LongestPathEngine] = None,
    *,
    destination: Optional[NodeId] = None,
    cancel: Optional[CancellationFlag] = None,
    max_workers: int = 4,
    executor: Optional[Executor] = None,
) -> SearchResult:
    """Longest simple path from start, fanned out over start's out-edges.

    Parameters
    ----------
    graph:
        Graph to search; shared read-only by every branch.
    start:
        Node the path begins at.
    engine:
        Engine used for each branch. Defaults to :func:`default_engine`.
    destination:
        Optional node every counted path must end at.
    cancel:
        Cooperative cancellation flag passed to every branch. Only useful with
        thread-based executors, since an Event cannot cross process boundaries.
    max_workers:
        Size of the internal :class:`ThreadPoolExecutor`; ignored when
        ``executor`` is given.
    executor:
        Optional external executor, e.g. a ``ProcessPoolExecutor``.

    Notes
    -----
    Unless cancelled, the result is the same as a sequential search: weight
    and the reconstructed path (ties resolve to the first edge in input order).
    Parallel edges to the same target share one branch search. Self-loops are
    skipped because they would revisit start.
    """
    check_node(start, graph.node_count(), "start")
    if destination is not None:
        check_node(destination, graph.node_count(), "destination")
    if engine is None:
        engine = default_engine(graph)

    if executor is None:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return _run_branches(graph, start, engine, destination, cancel, pool)
    return _run_branches(graph, start, engine, destination, cancel, executor)


def _run_branches(
    graph: Graph,
    start: NodeId,
    engine: LongestPathEngine,
    destination: Optional[NodeId],
    cancel: Optional[CancellationFlag],
    executor: Executor,
) -> SearchResult:
    reconstruct = getattr(engine, "reconstruct_path", True)
    edges: List[Tuple[NodeId, float]] = [
        (target, weight) for target, weight in graph.neighbours_of(start) if target != start
    ]

    branches: Dict[NodeId, Future] = {}
    if start != destination:
        for target, _weight in edges:
            if target not in branches:
                branches[target] = executor.submit(
                    _search_branch, engine, graph, target, start, destination, cancel
                )

    results: Dict[NodeId, SearchResult] = {target: f.result() for target, f in branches.items()}

    best = 0.0 if destination is None or destination == start else float("-inf")
    best_path: Optional[Tuple[NodeId, ...]] = (start,) if best == 0.0 else ()
    for target, weight in edges:
        sub = results.get(target)
        if sub is None:
            continue
        candidate = weight + sub.weight
        if candidate > best:
            best = candidate
            best_path = (start,) + sub.path if sub.path is not None else None

    return SearchResult(
        weight=best,
        path=best_path if reconstruct else None,
        complete=all(r.complete for r in results.values()),
        nodes_entered=1 + sum(r.nodes_entered for r in results.values()),
    )


def longest_paths_from_all(
    graph: Graph,
    engine: Optional[LongestPathEngine] = None,
    *,
    max_workers: int = 4,
    executor: Optional[Executor] = None,
) -> Dict[NodeId, SearchResult]:
    """Independent top-level searches from every node, keyed by start node."""
    if engine is None:
        engine = default_engine(graph)

    def collect(pool: Executor) -> Dict[NodeId, SearchResult]:
        futures = {node: pool.submit(_search_from, engine, graph, node) for node in range(graph.node_count())}
        return {node: future.result() for node, future in futures.items()}

    if executor is None:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return collect(pool)
    return collect(executor)
