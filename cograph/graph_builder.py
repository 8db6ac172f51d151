"""Co-purchase graph construction.

Products become nodes keyed by ``product_id``; every pair of distinct
products bought by the same user becomes (or reinforces) an edge whose
``weight`` counts the users who bought both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List

import networkx as nx
import pandas as pd

from cograph.components import add_edge
from cograph.errors import IngestionError
from cograph.io import TRANSACTION_COLUMNS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Product:
    """Node payload."""

    product_id: str
    category: str
    price: float
    name: str


@dataclass(frozen=True)
class TransactionRecord:
    product_id: str
    user_id: str
    category: str
    price: float
    name: str


def records_from_frame(df: pd.DataFrame) -> Iterator[TransactionRecord]:
    """Decode rows positionally into :class:`TransactionRecord` objects."""

    if df.shape[1] < len(TRANSACTION_COLUMNS):
        raise IngestionError(
            f"Expected {len(TRANSACTION_COLUMNS)} fields per record, found {df.shape[1]}"
        )
    for pos, row in enumerate(df.itertuples(index=False, name=None)):
        product_id, user_id, category, price, name = row[: len(TRANSACTION_COLUMNS)]
        if any(pd.isna(v) for v in (product_id, user_id, category, price, name)):
            raise IngestionError(f"Record {pos} is missing a field")
        try:
            price = float(price)
        except (TypeError, ValueError) as exc:
            raise IngestionError(f"Record {pos} has a non-numeric price {price!r}") from exc
        yield TransactionRecord(str(product_id), str(user_id), str(category), price, str(name))


def _add_or_increment(graph: nx.MultiDiGraph, src: str, dst: str) -> None:
    # One edge per unordered pair; its direction is the first one observed.
    for u, v in ((src, dst), (dst, src)):
        if graph.has_edge(u, v):
            first_key = next(iter(graph[u][v]))
            graph[u][v][first_key]["weight"] += 1.0
            return
    add_edge(graph, src, dst, weight=1.0)


def build_graph(records: Iterable[TransactionRecord]) -> nx.MultiDiGraph:
    """Build the co-purchase graph from ``records``.

    The first record seen for a ``product_id`` defines its attributes. Each
    user's purchases are kept as an ordered set, so a product bought twice
    by the same user contributes once and never produces a self loop.
    """

    graph = nx.MultiDiGraph()
    users: Dict[str, List[str]] = {}

    for rec in records:
        if rec.product_id not in graph:
            graph.add_node(
                rec.product_id,
                product=Product(rec.product_id, rec.category, rec.price, rec.name),
            )
        basket = users.setdefault(rec.user_id, [])
        if rec.product_id not in basket:
            basket.append(rec.product_id)

    logger.info("Number of nodes in graph: %d", graph.number_of_nodes())

    for basket in users.values():
        for i, first in enumerate(basket):
            for second in basket[i + 1 :]:
                if first == second:
                    continue
                _add_or_increment(graph, first, second)

    logger.info("Number of edges in graph: %d", graph.number_of_edges())
    return graph


def co_purchase_weight(graph: nx.MultiDiGraph, a: str, b: str) -> float:
    """Return the total weight between ``a`` and ``b`` in either direction."""

    total = 0.0
    for u, v in ((a, b), (b, a)):
        if graph.has_edge(u, v):
            total += sum(float(data.get("weight", 0.0)) for data in graph[u][v].values())
    return total
