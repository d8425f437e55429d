"""
Algorithm interfaces for longest simple path search.

Keeps the search engines separate from graph storage, fan-out and the
scenario runner.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Tuple

from graph import Graph, NodeId


class CancellationFlag(Protocol):
    """Anything with is_set(), e.g. threading.Event."""

    def is_set(self) -> bool:
        ...


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of one top-level longest-path search.

    weight is the best total edge weight over all simple paths from the start
    (0 when no edge can be taken). With a destination that cannot be reached
    it is -inf and path is empty. path is None when the engine does not
    reconstruct paths. complete is False when the search was cancelled; the
    weight and path then belong to the best path seen before cancellation.
    """

    weight: float
    path: Optional[Tuple[NodeId, ...]]
    complete: bool = True
    nodes_entered: int = 0

    def edges(self) -> Tuple[Tuple[NodeId, NodeId], ...]:
        """Consecutive (source, target) pairs along the reconstructed path."""
        if not self.path:
            return ()
        return tuple(zip(self.path, self.path[1:]))


class LongestPathEngine(ABC):
    """
    Interface for exhaustive single-source longest simple path search.
    """

    @abstractmethod
    def longest_simple_path_from(
        self,
        graph: Graph,
        start: NodeId,
        *,
        destination: Optional[NodeId] = None,
        avoid: Iterable[NodeId] = (),
        cancel: Optional[CancellationFlag] = None,
    ) -> SearchResult:
        """
        Compute the heaviest simple path that starts at start.

        Args:
            graph: read-only graph to search.
            start: node the path begins at.
            destination: if given, only paths ending here are considered.
            avoid: nodes the path may never enter.
            cancel: cooperative cancellation flag checked on every node entry.

        Returns:
            SearchResult with the maximum weight and, optionally, its path.
        """
        raise NotImplementedError
