from __future__ import annotations

import io
import zipfile

from cograph.export import export_dot, format_price, graph_tables, to_dot, to_zip
from cograph.graph_builder import TransactionRecord, build_graph


def _graph():
    return build_graph(
        [
            TransactionRecord("A", "u1", "Electronics", 12.5, "Cable"),
            TransactionRecord("B", "u1", 'Home "Kitchen"', 40.0, "Pan"),
        ]
    )


def test_to_dot_labels() -> None:
    text = to_dot(_graph())
    assert text.startswith("digraph {")
    assert '0 [ label = "Electronics: 12.5" ]' in text
    assert '1 [ label = "Home \\"Kitchen\\": 40" ]' in text
    assert '0 -> 1 [ label = "" ]' in text
    assert text.rstrip().endswith("}")


def test_export_dot_writes_file(tmp_path) -> None:
    path = export_dot(_graph(), tmp_path / "graph.dot")
    assert path.read_text(encoding="utf-8") == to_dot(_graph())


def test_graph_tables_and_zip() -> None:
    nodes, edges = graph_tables(_graph())
    assert nodes["product_id"].tolist() == ["A", "B"]
    assert edges.to_dict("records") == [{"source": "A", "target": "B", "weight": 1.0}]
    payload = to_zip({"nodes": nodes, "edges": edges})
    with zipfile.ZipFile(io.BytesIO(payload)) as zf:
        assert sorted(zf.namelist()) == ["edges.csv", "nodes.csv"]


def test_format_price_drops_integral_fraction() -> None:
    assert format_price(40.0) == "40"
    assert format_price(12.5) == "12.5"
    assert format_price(0.1) == "0.1"
