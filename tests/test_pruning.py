from __future__ import annotations

import itertools

import networkx as nx
import pytest

from cograph.components import strongly_connected_components
from cograph.pruning import (
    MAX_ITERATIONS,
    STATUS_CONVERGED,
    STATUS_EMPTY,
    STATUS_ITERATION_CAP,
    IterativePruner,
    prune_graph,
    remove_small_components,
)


def _complete(graph: nx.MultiDiGraph, nodes) -> None:
    for u, v in itertools.permutations(nodes, 2):
        graph.add_edge(u, v, weight=1.0)


@pytest.fixture
def mixed_graph() -> nx.MultiDiGraph:
    graph = nx.MultiDiGraph()
    _complete(graph, ["a1", "a2", "a3", "a4", "a5"])
    _complete(graph, ["b1", "b2"])
    graph.add_node("lonely")
    graph.add_edge("a1", "b1", weight=1.0)
    return graph


def test_small_components_are_removed(mixed_graph) -> None:
    result = IterativePruner(min_component_size=5).run(mixed_graph)
    assert result.status == STATUS_CONVERGED
    assert result.converged
    assert result.iterations == 1
    assert set(result.graph.nodes()) == {"a1", "a2", "a3", "a4", "a5"}
    assert result.component_count == 1
    assert result.min_component_size == result.max_component_size == 5


def test_input_graph_is_not_mutated(mixed_graph) -> None:
    before = mixed_graph.number_of_nodes()
    prune_graph(mixed_graph)
    assert mixed_graph.number_of_nodes() == before


def test_converged_graph_is_idempotent(mixed_graph) -> None:
    result = prune_graph(mixed_graph)
    graph = result.graph.copy()
    removed = remove_small_components(graph, strongly_connected_components(graph))
    assert removed == 0
    assert graph.number_of_nodes() == result.graph.number_of_nodes()


def test_all_removed_graph_stops_without_error() -> None:
    graph = nx.MultiDiGraph()
    _complete(graph, ["x", "y"])
    graph.add_edge("y", "z", weight=1.0)
    result = prune_graph(graph)
    assert result.status == STATUS_EMPTY
    assert result.graph.number_of_nodes() == 0
    assert result.component_count == 0
    assert result.min_component_size is None
    assert result.max_component_size is None


def test_empty_input_graph() -> None:
    result = prune_graph(nx.MultiDiGraph())
    assert result.status == STATUS_EMPTY
    assert result.iterations == 1


def test_unreachable_target_stops_at_iteration_cap() -> None:
    graph = nx.MultiDiGraph()
    _complete(graph, ["p", "q", "r", "s"])
    result = IterativePruner(min_component_size=5).run(graph)
    assert result.status == STATUS_ITERATION_CAP
    assert result.iterations == MAX_ITERATIONS
    # the floor of three keeps the four-node component alive
    assert result.graph.number_of_nodes() == 4


def test_floor_and_target_are_separate() -> None:
    graph = nx.MultiDiGraph()
    _complete(graph, ["p", "q", "r"])
    result = IterativePruner(min_component_size=3).run(graph)
    assert result.status == STATUS_CONVERGED
    assert result.graph.number_of_nodes() == 3


def test_step_reports_state() -> None:
    graph = nx.MultiDiGraph()
    _complete(graph, range(6))
    pruner = IterativePruner(min_component_size=5)
    pruner.reset(graph)
    assert not pruner.done
    assert pruner.step() == STATUS_CONVERGED
    assert pruner.done
    assert pruner.step() == STATUS_CONVERGED
    assert pruner.iteration == 1


def test_step_requires_reset() -> None:
    with pytest.raises(RuntimeError):
        IterativePruner().step()


def test_invalid_target_rejected() -> None:
    with pytest.raises(ValueError):
        IterativePruner(min_component_size=0)


def test_iteration_cap_is_not_configurable() -> None:
    with pytest.raises(TypeError):
        IterativePruner(5, max_iterations=10)
