"""
Error types raised by graph construction and longest-path search.
"""

from typing import Any, Optional


class LongestPathError(Exception):
    """Base class for all graph and search failures."""


class MalformedGraph(LongestPathError, ValueError):
    """
    Graph input that cannot be represented faithfully.

    index/record identify the offending edge record; both are None when the
    declared node count itself is invalid.
    """

    def __init__(self, message: str, index: Optional[int] = None, record: Any = None) -> None:
        super().__init__(message)
        self.index = index
        self.record = record


class InvalidStartNode(LongestPathError, ValueError):
    """A search was asked to start (or end, or avoid) a node outside the graph."""

    def __init__(self, node: Any, node_count: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"node {node!r} is not in [0, {node_count})")
        self.node = node
        self.node_count = node_count


class SearchExhausted(LongestPathError, RuntimeError):
    """A search exceeded its depth or step budget before finishing."""

    def __init__(self, reason: str, limit: int) -> None:
        super().__init__(f"search exhausted: {reason} (limit={limit})")
        self.reason = reason
        self.limit = limit
