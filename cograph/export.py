"""エクスポートユーティリティ。"""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Dict, List, Tuple

import networkx as nx
import pandas as pd


def _quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def format_price(price: float) -> str:
    """Shortest round-trip text for ``price``, without a trailing ``.0``."""

    text = repr(float(price))
    return text[:-2] if text.endswith(".0") else text


def node_label(data: dict) -> str:
    """Return ``"{category}: {price}"`` for a node's attribute dict."""

    product = data.get("product")
    if product is None:
        return ""
    return f"{product.category}: {format_price(product.price)}"


def to_dot(graph: nx.MultiDiGraph) -> str:
    """Render ``graph`` as Graphviz DOT with unlabeled edges."""

    index = {node: i for i, node in enumerate(graph.nodes())}
    lines: List[str] = ["digraph {"]
    for node, data in graph.nodes(data=True):
        lines.append(f'    {index[node]} [ label = "{_quote(node_label(data))}" ]')
    for u, v in graph.edges():
        lines.append(f'    {index[u]} -> {index[v]} [ label = "" ]')
    lines.append("}")
    return "\n".join(lines) + "\n"


def export_dot(graph: nx.MultiDiGraph, path: str | Path) -> Path:
    """Write :func:`to_dot` output to ``path`` in one go."""

    path = Path(path)
    text = to_dot(graph)
    path.write_text(text, encoding="utf-8")
    return path


def graph_tables(graph: nx.MultiDiGraph) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Return plain node and edge tables for ``graph``."""

    node_rows = []
    for node, data in graph.nodes(data=True):
        product = data.get("product")
        node_rows.append(
            {
                "product_id": node,
                "category": getattr(product, "category", None),
                "price": getattr(product, "price", None),
                "name": getattr(product, "name", None),
            }
        )
    edge_rows = [
        {"source": u, "target": v, "weight": float(d.get("weight", 0.0))}
        for u, v, d in graph.edges(data=True)
    ]
    nodes = pd.DataFrame(node_rows, columns=["product_id", "category", "price", "name"])
    edges = pd.DataFrame(edge_rows, columns=["source", "target", "weight"])
    return nodes, edges


def to_zip(tables: Dict[str, pd.DataFrame]) -> bytes:
    """複数のデータフレームを ZIP (CSV) にまとめる。"""

    buff = io.BytesIO()
    with zipfile.ZipFile(buff, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, df in tables.items():
            zf.writestr(f"{name}.csv", df.to_csv(index=False, encoding="utf-8-sig"))
    buff.seek(0)
    return buff.read()
