"""
Directed, weighted graph abstraction for longest-path search.

Nodes are dense integer identities in [0, node_count).
Edges are directed: u -> v with a non-negative float weight.
"""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

NodeId = int


class Graph(ABC):
    """Read-only directed, weighted multigraph over integer node identities."""

    @abstractmethod
    def node_count(self) -> int:
        """Return the fixed number of nodes in the graph."""
        raise NotImplementedError

    @abstractmethod
    def neighbours_of(self, node: NodeId) -> Sequence[Tuple[NodeId, float]]:
        """
        Outgoing (target, weight) pairs for a given node, in input order.

        Parallel edges appear once per edge. The returned sequence must not
        change between calls.
        """
        raise NotImplementedError
