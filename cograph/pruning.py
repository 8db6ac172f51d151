"""Iterative removal of undersized strongly connected components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import networkx as nx

from cograph.components import Component, strongly_connected_components

logger = logging.getLogger(__name__)

REMOVAL_FLOOR = 3
MAX_ITERATIONS = 100

STATUS_RUNNING = "running"
STATUS_CONVERGED = "converged"
STATUS_EMPTY = "empty"
STATUS_ITERATION_CAP = "iteration_cap"


def remove_small_components(
    graph: nx.MultiDiGraph,
    components: Iterable[Component],
    floor: int = REMOVAL_FLOOR,
) -> int:
    """Drop every component smaller than ``floor`` from ``graph`` in place.

    Returns the number of nodes removed.
    """

    doomed = [node for comp in components if len(comp) < floor for node in comp]
    graph.remove_nodes_from(doomed)
    return len(doomed)


@dataclass
class PruneResult:
    graph: nx.MultiDiGraph
    iterations: int
    status: str
    component_count: int
    min_component_size: Optional[int]
    max_component_size: Optional[int]

    @property
    def converged(self) -> bool:
        return self.status == STATUS_CONVERGED


class IterativePruner:
    """Repeat SCC decomposition and small-component removal until stable.

    Every step removes components below the fixed floor of
    :data:`REMOVAL_FLOOR` nodes, then re-derives the components of what is
    left. The loop stops once the smallest remaining component reaches
    ``min_component_size``, once nothing is left, or after
    :data:`MAX_ITERATIONS` steps, whichever comes first.
    """

    def __init__(self, min_component_size: int = 5) -> None:
        if min_component_size < 1:
            raise ValueError("min_component_size must be a positive integer")
        self.min_component_size = min_component_size
        self.graph: Optional[nx.MultiDiGraph] = None
        self.components: List[Component] = []
        self.iteration = 0
        self.status = STATUS_RUNNING

    def reset(self, graph: nx.MultiDiGraph) -> None:
        """Start over on a private copy of ``graph``."""

        self.graph = graph.copy()
        self.components = []
        self.iteration = 0
        self.status = STATUS_RUNNING

    @property
    def done(self) -> bool:
        return self.status != STATUS_RUNNING

    def step(self) -> str:
        """Run one decomposition/removal round and return the new status."""

        if self.graph is None:
            raise RuntimeError("call reset() with a graph before step()")
        if self.done:
            return self.status

        removed = remove_small_components(self.graph, strongly_connected_components(self.graph))
        # removal invalidates the decomposition above
        self.components = strongly_connected_components(self.graph)
        self.iteration += 1
        logger.debug(
            "Iteration %d: removed %d nodes, %d components remain",
            self.iteration,
            removed,
            len(self.components),
        )

        if not self.components:
            self.status = STATUS_EMPTY
        elif min(len(c) for c in self.components) >= self.min_component_size:
            self.status = STATUS_CONVERGED
        elif self.iteration >= MAX_ITERATIONS:
            self.status = STATUS_ITERATION_CAP
        return self.status

    def result(self) -> PruneResult:
        sizes = [len(c) for c in self.components]
        return PruneResult(
            graph=self.graph,
            iterations=self.iteration,
            status=self.status,
            component_count=len(sizes),
            min_component_size=min(sizes) if sizes else None,
            max_component_size=max(sizes) if sizes else None,
        )

    def run(self, graph: nx.MultiDiGraph) -> PruneResult:
        """Prune a copy of ``graph``; the argument is left untouched."""

        self.reset(graph)
        while not self.done:
            self.step()

        res = self.result()
        if res.component_count == 0:
            logger.info("No components remain after %d iteration(s)", res.iterations)
        else:
            logger.info("Number of connected components: %d", res.component_count)
            logger.info("Number of nodes in the largest connected component: %d", res.max_component_size)
            logger.info("Number of nodes in the smallest connected component: %d", res.min_component_size)
        if res.status == STATUS_ITERATION_CAP:
            logger.warning(
                "Stopped after %d iterations without reaching minimum component size %d",
                res.iterations,
                self.min_component_size,
            )
        return res


def prune_graph(graph: nx.MultiDiGraph, min_component_size: int = 5) -> PruneResult:
    return IterativePruner(min_component_size).run(graph)
