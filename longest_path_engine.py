"""
Exhaustive backtracking engines for the longest simple path problem.

Both engines enumerate every simple path out of the start node and keep the
heaviest one. The problem is NP-complete, so running time is exponential in
the graph's connectivity; the only pruning is the simple-path constraint.

Visited-state discipline: a node is marked on entry to its exploration and
unmarked on exit, on every exit path. While a node is being explored the
marked set is exactly the current path from the start (plus any avoided
nodes), and a finished call leaves the set as it found it.
"""

from typing import Iterable, List, Optional, Tuple
import math
import numbers
import sys

from algorithms import CancellationFlag, LongestPathEngine, SearchResult
from errors import InvalidStartNode, SearchExhausted
from graph import Graph, NodeId

# Frames kept free for the caller's own stack and for pytest/executor wrappers.
_RECURSION_HEADROOM = 200


def default_max_depth() -> int:
    """Deepest path the recursive engine will follow under the current recursion limit."""
    return max(1, sys.getrecursionlimit() - _RECURSION_HEADROOM)


def check_node(node: NodeId, node_count: int, role: str = "start") -> None:
    """Raise InvalidStartNode unless node is an integer identity in [0, node_count)."""
    if isinstance(node, bool) or not isinstance(node, numbers.Integral) or not 0 <= node < node_count:
        raise InvalidStartNode(node, node_count, f"{role} node {node!r} is not in [0, {node_count})")


def _new_visited(
    graph: Graph,
    start: NodeId,
    destination: Optional[NodeId],
    avoid: Iterable[NodeId],
) -> List[bool]:
    """
    Validate the search arguments and allocate a fresh visited set.

    Everything is checked before anything is allocated, so a bad argument
    never leaves search state behind.
    """
    n = graph.node_count()
    check_node(start, n, "start")
    if destination is not None:
        check_node(destination, n, "destination")
    avoided = tuple(avoid)
    for node in avoided:
        check_node(node, n, "avoided")
    if start in avoided:
        raise InvalidStartNode(start, n, f"start node {start} is in the avoid set")

    visited = [False] * n
    for node in avoided:
        visited[node] = True
    return visited


def _baseline(node: NodeId, destination: Optional[NodeId]) -> float:
    # Stopping is always allowed, except that a fixed destination only
    # accepts paths that end on it.
    if destination is None or node == destination:
        return 0.0
    return -math.inf


def _finish(
    start: NodeId,
    best: float,
    suffix: Tuple[NodeId, ...],
    reconstruct: bool,
    complete: bool,
    nodes_entered: int,
) -> SearchResult:
    if not reconstruct:
        path = None
    elif best == -math.inf:
        path = ()
    else:
        path = (start,) + suffix
    return SearchResult(weight=best, path=path, complete=complete, nodes_entered=nodes_entered)


class RecursiveLongestPathEngine(LongestPathEngine):
    """
    Depth-first backtracking search written as a recursive explore().

    Recursion depth equals the number of nodes on the current path, so it is
    bounded by node_count() and additionally by max_depth, which defaults to
    what the interpreter's recursion limit allows. Graphs whose paths can be
    longer than that should use IterativeLongestPathEngine.
    """

    def __init__(
        self,
        reconstruct_path: bool = True,
        max_depth: Optional[int] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        self.reconstruct_path = reconstruct_path
        self.max_depth = max_depth if max_depth is not None else default_max_depth()
        self.max_steps = max_steps
        # Instrumentation counters per invocation.
        self.last_nodes_entered = 0
        self.last_edges_examined = 0
        self.last_max_depth = 0

    def longest_simple_path_from(
        self,
        graph: Graph,
        start: NodeId,
        *,
        destination: Optional[NodeId] = None,
        avoid: Iterable[NodeId] = (),
        cancel: Optional[CancellationFlag] = None,
    ) -> SearchResult:
        visited = _new_visited(graph, start, destination, avoid)

        neighbours_of = graph.neighbours_of
        reconstruct = self.reconstruct_path
        max_depth = self.max_depth
        max_steps = self.max_steps

        entered = 0
        examined = 0
        deepest = 0
        stopped = False

        def explore(current: NodeId, depth: int) -> Tuple[float, Tuple[NodeId, ...]]:
            nonlocal entered, examined, deepest, stopped

            if not stopped and cancel is not None and cancel.is_set():
                stopped = True
            if depth > max_depth:
                raise SearchExhausted("path deeper than the recursion bound", max_depth)
            entered += 1
            if max_steps is not None and entered > max_steps:
                raise SearchExhausted("node-entry budget exceeded", max_steps)
            if depth > deepest:
                deepest = depth

            best = _baseline(current, destination)
            best_suffix: Tuple[NodeId, ...] = ()

            visited[current] = True
            try:
                if stopped or current == destination:
                    return best, best_suffix
                for neighbour, weight in neighbours_of(current):
                    if stopped:
                        break
                    examined += 1
                    if visited[neighbour]:
                        continue
                    value, suffix = explore(neighbour, depth + 1)
                    candidate = weight + value
                    # Strictly greater keeps the first edge order that reaches the maximum.
                    if candidate > best:
                        best = candidate
                        if reconstruct:
                            best_suffix = (neighbour,) + suffix
            finally:
                visited[current] = False
            return best, best_suffix

        try:
            best, suffix = explore(start, 1)
        except RecursionError:
            raise SearchExhausted("interpreter recursion limit reached", sys.getrecursionlimit()) from None
        finally:
            self.last_nodes_entered = entered
            self.last_edges_examined = examined
            self.last_max_depth = deepest

        return _finish(start, best, suffix, reconstruct, not stopped, entered)


class _Frame:
    """One node on the explicit search stack."""

    __slots__ = ("node", "neighbours", "index", "pending_weight", "best", "best_suffix")

    def __init__(self, node: NodeId, neighbours, best: float) -> None:
        self.node = node
        self.neighbours = neighbours
        self.index = 0  # next neighbour to try
        self.pending_weight = 0.0  # weight of the edge to the child being explored
        self.best = best
        self.best_suffix: Tuple[NodeId, ...] = ()


class IterativeLongestPathEngine(LongestPathEngine):
    """
    The same backtracking search driven by an explicit stack of frames.

    Marks and unmarks happen in exactly the order the recursive engine uses,
    so results (including which tied path is reconstructed) are identical.
    There is no depth limit beyond memory; max_steps bounds the total work.
    """

    def __init__(self, reconstruct_path: bool = True, max_steps: Optional[int] = None) -> None:
        self.reconstruct_path = reconstruct_path
        self.max_steps = max_steps
        self.last_nodes_entered = 0
        self.last_edges_examined = 0
        self.last_max_depth = 0

    def longest_simple_path_from(
        self,
        graph: Graph,
        start: NodeId,
        *,
        destination: Optional[NodeId] = None,
        avoid: Iterable[NodeId] = (),
        cancel: Optional[CancellationFlag] = None,
    ) -> SearchResult:
        visited = _new_visited(graph, start, destination, avoid)

        neighbours_of = graph.neighbours_of
        reconstruct = self.reconstruct_path
        max_steps = self.max_steps

        entered = 0
        examined = 0
        deepest = 0
        stopped = False

        def enter(node: NodeId) -> _Frame:
            nonlocal entered, stopped
            if not stopped and cancel is not None and cancel.is_set():
                stopped = True
            entered += 1
            if max_steps is not None and entered > max_steps:
                raise SearchExhausted("node-entry budget exceeded", max_steps)
            if stopped or node == destination:
                neighbours: Tuple[Tuple[NodeId, float], ...] = ()
            else:
                neighbours = neighbours_of(node)
            visited[node] = True
            return _Frame(node, neighbours, _baseline(node, destination))

        stack: List[_Frame] = []
        try:
            stack.append(enter(start))
            deepest = 1
            while True:
                frame = stack[-1]
                child: Optional[_Frame] = None
                if not stopped:
                    neighbours = frame.neighbours
                    while frame.index < len(neighbours):
                        target, weight = neighbours[frame.index]
                        frame.index += 1
                        examined += 1
                        if visited[target]:
                            continue
                        frame.pending_weight = weight
                        child = enter(target)
                        break

                if child is not None:
                    stack.append(child)
                    if len(stack) > deepest:
                        deepest = len(stack)
                    continue

                # Frame exhausted: backtrack and fold its best into the parent.
                finished = stack.pop()
                visited[finished.node] = False
                if not stack:
                    break
                parent = stack[-1]
                candidate = parent.pending_weight + finished.best
                if candidate > parent.best:
                    parent.best = candidate
                    if reconstruct:
                        parent.best_suffix = (finished.node,) + finished.best_suffix
        finally:
            # Unwinding on an exception still clears every mark on the path.
            for frame in stack:
                visited[frame.node] = False
            self.last_nodes_entered = entered
            self.last_edges_examined = examined
            self.last_max_depth = deepest

        return _finish(start, finished.best, finished.best_suffix, reconstruct, not stopped, entered)


def default_engine(
    graph: Graph,
    reconstruct_path: bool = True,
    max_depth: Optional[int] = None,
    max_steps: Optional[int] = None,
) -> LongestPathEngine:
    """
    Recursive engine when every possible path fits the recursion budget,
    iterative engine otherwise.

    max_depth replaces the budget derived from the interpreter's recursion
    limit and is handed to the recursive engine as its depth bound.
    """
    depth = max_depth if max_depth is not None else default_max_depth()
    if graph.node_count() <= depth:
        return RecursiveLongestPathEngine(
            reconstruct_path=reconstruct_path, max_depth=depth, max_steps=max_steps
        )
    return IterativeLongestPathEngine(reconstruct_path=reconstruct_path, max_steps=max_steps)


def longest_simple_path_from(
    graph: Graph,
    start: NodeId,
    *,
    destination: Optional[NodeId] = None,
    avoid: Iterable[NodeId] = (),
    cancel: Optional[CancellationFlag] = None,
    reconstruct_path: bool = True,
    max_steps: Optional[int] = None,
) -> SearchResult:
    """Run one search with the engine default_engine() picks for this graph."""
    engine = default_engine(graph, reconstruct_path=reconstruct_path, max_steps=max_steps)
    return engine.longest_simple_path_from(
        graph, start, destination=destination, avoid=avoid, cancel=cancel
    )
