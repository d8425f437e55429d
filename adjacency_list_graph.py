"""
Concrete directed, weighted graph implementation for longest-path search.

Implements the Graph interface using an adjacency-list representation that is
validated and frozen at construction time.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple, Union
import math
import numbers

from errors import MalformedGraph
from graph import Graph, NodeId


@dataclass(frozen=True)
class Edge:
    """
    Directed edge source -> target with a non-negative weight.
    """

    source: NodeId
    target: NodeId
    weight: float


EdgeLike = Union[Edge, Sequence[Any]]


def _is_node_id(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_weight(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _coerce_edge(index: int, record: EdgeLike, node_count: int) -> Edge:
    if isinstance(record, Edge):
        source, target, weight = record.source, record.target, record.weight
    else:
        try:
            source, target, weight = record
        except (TypeError, ValueError):
            raise MalformedGraph(
                f"edge #{index} {record!r} is not a (source, target, weight) triple",
                index=index,
                record=record,
            ) from None

    for label, node in (("source", source), ("target", target)):
        if not _is_node_id(node):
            raise MalformedGraph(
                f"edge #{index} {record!r}: {label} {node!r} is not an integer node id",
                index=index,
                record=record,
            )
        if not 0 <= node < node_count:
            raise MalformedGraph(
                f"edge #{index} {record!r}: {label} {node} is not in [0, {node_count})",
                index=index,
                record=record,
            )

    try:
        finite = _is_weight(weight) and math.isfinite(weight)
    except OverflowError:
        # Integers too large for a float.
        finite = False
    if not finite:
        raise MalformedGraph(
            f"edge #{index} {record!r}: weight {weight!r} is not a finite number",
            index=index,
            record=record,
        )
    if weight < 0:
        raise MalformedGraph(
            f"edge #{index} {record!r}: weight {weight!r} is negative",
            index=index,
            record=record,
        )

    return Edge(int(source), int(target), float(weight))


class AdjacencyListGraph(Graph):
    """
    Directed, weighted multigraph backed by one tuple of (target, weight)
    pairs per node.

    The structure never changes after __init__, so a single instance can be
    read by many searches at once and pickled to worker processes.
    """

    def __init__(self, node_count: int, edges: Iterable[EdgeLike] = ()) -> None:
        if not _is_node_id(node_count):
            raise MalformedGraph(f"node count {node_count!r} is not an integer")
        if node_count < 0:
            raise MalformedGraph(f"node count {node_count} is negative")

        # Validate everything before building so a failure leaves nothing behind.
        validated: List[Edge] = [
            _coerce_edge(index, record, node_count) for index, record in enumerate(edges)
        ]

        buckets: List[List[Tuple[NodeId, float]]] = [[] for _ in range(node_count)]
        for edge in validated:
            buckets[edge.source].append((edge.target, edge.weight))

        self._node_count = int(node_count)
        self._edges: Tuple[Edge, ...] = tuple(validated)
        self._adj: Tuple[Tuple[Tuple[NodeId, float], ...], ...] = tuple(
            tuple(bucket) for bucket in buckets
        )

    # --- Graph interface -----------------------------------------------------

    def node_count(self) -> int:
        return self._node_count

    def neighbours_of(self, node: NodeId) -> Tuple[Tuple[NodeId, float], ...]:
        if not _is_node_id(node) or not 0 <= node < self._node_count:
            raise IndexError(f"node {node!r} is not in [0, {self._node_count})")
        return self._adj[node]

    # --- Inspection helpers --------------------------------------------------

    def edges(self) -> Tuple[Edge, ...]:
        """All edges in input order."""
        return self._edges

    def edge_count(self) -> int:
        return len(self._edges)

    def has_edge(self, source: NodeId, target: NodeId, weight: float) -> bool:
        """True if at least one source -> target edge carries exactly this weight."""
        return any(t == target and w == weight for t, w in self.neighbours_of(source))

    def __repr__(self) -> str:
        return f"AdjacencyListGraph(node_count={self._node_count}, edges={len(self._edges)})"
