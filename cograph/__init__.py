"""Co-purchase graph construction and cluster pruning."""

from __future__ import annotations

from cograph.coefficient_filter import ComponentScore, FilterResult, filter_by_coefficient
from cograph.components import (
    clustering_coefficient,
    component_clustering_coefficient,
    strongly_connected_components,
)
from cograph.errors import CographError, GraphConsistencyError, IngestionError
from cograph.graph_builder import Product, TransactionRecord, build_graph
from cograph.pruning import IterativePruner, PruneResult

__all__ = [
    "CographError",
    "ComponentScore",
    "FilterResult",
    "GraphConsistencyError",
    "IngestionError",
    "IterativePruner",
    "Product",
    "PruneResult",
    "TransactionRecord",
    "build_graph",
    "clustering_coefficient",
    "component_clustering_coefficient",
    "filter_by_coefficient",
    "strongly_connected_components",
]
