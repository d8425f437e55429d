"""
Strict decoding of raw (source, target, weight) fields into Edge records.

Whatever reads graphs from text (YAML, CSV, a socket) hands each row here.
A row is accepted whole or rejected whole; a field that fails to parse is
never replaced by a default.
"""

from typing import Any, Iterable, List, Optional, Sequence
import math
import numbers

from adjacency_list_graph import Edge
from errors import MalformedGraph


def _parse_node(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is a boolean, not a node id")
    if isinstance(value, numbers.Integral):
        node = int(value)
    elif isinstance(value, str):
        node = int(value.strip(), 10)
    else:
        raise ValueError(f"{value!r} is not an integer")
    if node < 0:
        raise ValueError(f"{node} is negative")
    return node


def _parse_weight(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is a boolean, not a weight")
    try:
        if isinstance(value, numbers.Real):
            weight = float(value)
        elif isinstance(value, str):
            weight = float(value.strip())
        else:
            raise ValueError(f"{value!r} is not a number")
    except OverflowError:
        raise ValueError(f"{value!r} is too large for a weight") from None
    if not math.isfinite(weight):
        raise ValueError(f"{value!r} is not finite")
    if weight < 0:
        raise ValueError(f"{value!r} is negative")
    return weight


def decode_edge_record(fields: Sequence[Any], index: Optional[int] = None) -> Edge:
    """
    Decode one row of three fields into an Edge.

    Node fields must be base-10 integers >= 0 and the weight a finite,
    non-negative number. Range checks against the node count happen later,
    in AdjacencyListGraph.
    """
    where = f"edge #{index}" if index is not None else "edge"
    if isinstance(fields, (str, bytes)) or len(fields) != 3:
        raise MalformedGraph(f"{where} {fields!r} must have exactly three fields", index=index, record=fields)

    source, target, weight = fields
    try:
        return Edge(_parse_node(source), _parse_node(target), _parse_weight(weight))
    except ValueError as exc:
        raise MalformedGraph(f"{where} {fields!r}: {exc}", index=index, record=fields) from exc


def decode_edge_records(rows: Iterable[Sequence[Any]]) -> List[Edge]:
    """Decode every row, failing on the first malformed one."""
    return [decode_edge_record(row, index) for index, row in enumerate(rows)]
