"""Strongly connected components and clustering coefficients.

All functions are read-only queries over the graph they are given. Results
describe that snapshot only and must be recomputed after any node or edge
removal.
"""

from __future__ import annotations

from typing import Collection, Hashable, List

import networkx as nx

from cograph.errors import GraphConsistencyError

Component = frozenset


def strongly_connected_components(graph: nx.MultiDiGraph) -> List[Component]:
    """Return the SCCs of ``graph`` as a list of ``frozenset`` node groups.

    Uses networkx's non-recursive Tarjan variant, so the order is stable for
    a fixed graph.
    """

    return [frozenset(c) for c in nx.strongly_connected_components(graph)]


EDGE_SEQ = "seq"


def add_edge(graph: nx.MultiDiGraph, u: Hashable, v: Hashable, weight: float = 1.0) -> None:
    """Add ``u -> v`` stamped with the graph-wide insertion sequence."""

    seq = graph.graph.get("next_edge_seq", 0)
    graph.graph["next_edge_seq"] = seq + 1
    graph.add_edge(u, v, weight=weight, **{EDGE_SEQ: seq})


def out_neighbors(graph: nx.MultiDiGraph, node: Hashable) -> List[Hashable]:
    """One entry per out-edge of ``node``, most recently attached first.

    Edges added without :func:`add_edge` carry no sequence; they sort after
    stamped ones in reverse adjacency order.
    """

    edges = list(graph.out_edges(node, data=EDGE_SEQ, default=-1))
    edges.reverse()
    edges.sort(key=lambda e: e[2], reverse=True)
    return [target for _, target, _ in edges]


def clustering_coefficient(graph: nx.MultiDiGraph, node: Hashable) -> float:
    """Fraction of out-neighbor pairs joined by an edge.

    A pair of entries ``(a, b)`` with ``a`` listed before ``b`` counts when
    the edge ``a -> b`` exists. Nodes with fewer than two out-neighbor
    entries score 0.0.
    """

    neighbors = out_neighbors(graph, node)
    k = len(neighbors)
    if k < 2:
        return 0.0

    linked = 0
    for i, ni in enumerate(neighbors):
        for nj in neighbors[i + 1 :]:
            if ni != nj and graph.has_edge(ni, nj):
                linked += 1
    return linked / (k * (k - 1) // 2)


def component_clustering_coefficient(
    graph: nx.MultiDiGraph, component: Collection[Hashable]
) -> float:
    """Mean clustering coefficient of the nodes in ``component``."""

    if len(component) == 0:
        raise ValueError("component must contain at least one node")
    total = 0.0
    for node in component:
        if node not in graph:
            raise GraphConsistencyError(f"component refers to unknown node {node!r}")
        total += clustering_coefficient(graph, node)
    return total / len(component)
