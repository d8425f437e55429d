import pytest

from adjacency_list_graph import AdjacencyListGraph, Edge
from edge_records import decode_edge_record, decode_edge_records
from errors import MalformedGraph


def test_decodes_numbers_and_strings():
    """Numeric and textual fields decode to the same Edge."""
    assert decode_edge_record((0, 1, 5)) == Edge(0, 1, 5.0)
    assert decode_edge_record(["0", " 1 ", "2.5"]) == Edge(0, 1, 2.5)


@pytest.mark.parametrize(
    "fields",
    [
        ("a", 1, 1.0),
        (0, "1.0", 1.0),
        (0, 1, "heavy"),
        (0, 1, ""),
        (0, 1, "nan"),
        (0, 1, "inf"),
        (0, 1, "-1"),
        (-1, 1, 1.0),
        (0, None, 1.0),
        (False, 1, 1.0),
        (0, 1, True),
        (0, 1),
        "0 1 2",
    ],
)
def test_rejects_whole_record_on_any_bad_field(fields):
    with pytest.raises(MalformedGraph) as info:
        decode_edge_record(fields, index=4)

    assert info.value.index == 4
    assert info.value.record == fields


def test_decode_many_reports_offending_index():
    rows = [(0, 1, 1), ("1", "2", "3"), (2, "x", 1)]

    with pytest.raises(MalformedGraph) as info:
        decode_edge_records(rows)

    assert info.value.index == 2
    assert "edge #2" in str(info.value)


def test_decoded_edges_feed_graph_construction():
    edges = decode_edge_records([("0", "1", "4"), ("1", "0", "4"), ("1", "2", "2")])

    g = AdjacencyListGraph(3, edges)

    assert g.neighbours_of(1) == ((0, 4.0), (2, 2.0))


def test_range_is_checked_by_the_graph():
    edges = decode_edge_records([("0", "5", "1")])

    with pytest.raises(MalformedGraph):
        AdjacencyListGraph(3, edges)


def test_weight_too_large_for_float_is_rejected():
    with pytest.raises(MalformedGraph) as info:
        decode_edge_record((0, 1, 10**400), index=0)

    assert "too large" in str(info.value)
    assert info.value.record == (0, 1, 10**400)
