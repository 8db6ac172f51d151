from __future__ import annotations

from typing import Any, Dict, List

import networkx as nx
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from cograph.components import clustering_coefficient, strongly_connected_components
from cograph.export import node_label

CONFIG_BASE = {
    "responsive": True,
    "displaylogo": False,
    "modeBarButtonsToRemove": [
        "lasso2d",
        "select2d",
        "autoScale2d",
    ],
    "toImageButtonOptions": {"scale": 2, "format": "png"},
}

UNASSIGNED_COLOR = "#9ca3af"
MAX_DRAW_NODES = 250


def component_colors(graph: nx.MultiDiGraph) -> Dict[Any, str]:
    """Assign one palette colour per SCC, largest component first."""

    palette = px.colors.qualitative.G10 + px.colors.qualitative.Safe + px.colors.qualitative.Bold
    comps = sorted(strongly_connected_components(graph), key=len, reverse=True)
    colors: Dict[Any, str] = {}
    for idx, comp in enumerate(comps):
        for node in comp:
            colors[node] = palette[idx % len(palette)] if len(comp) > 1 else UNASSIGNED_COLOR
    return colors


def build_network_figure(graph: nx.MultiDiGraph, *, seed: int = 42) -> go.Figure:
    """Spring-layout scatter of ``graph`` coloured by component."""

    if graph.number_of_nodes() > MAX_DRAW_NODES:
        keep = sorted(graph.nodes(), key=graph.degree, reverse=True)[:MAX_DRAW_NODES]
        graph = graph.subgraph(keep).copy()

    pos = nx.spring_layout(nx.Graph(graph), weight="weight", seed=seed)
    edge_x: List[float] = []
    edge_y: List[float] = []
    for u, v in graph.edges():
        edge_x += [pos[u][0], pos[v][0], None]
        edge_y += [pos[u][1], pos[v][1], None]

    colors = component_colors(graph)
    nodes = list(graph.nodes())
    node_text = [
        f"{node}<br>{node_label(graph.nodes[node])}"
        f"<br>係数: {clustering_coefficient(graph, node):.2f}"
        for node in nodes
    ]

    edge_trace = go.Scatter(
        x=edge_x,
        y=edge_y,
        line=dict(width=0.5, color="rgba(100,100,100,0.4)"),
        hoverinfo="none",
        mode="lines",
    )
    node_trace = go.Scatter(
        x=[pos[n][0] for n in nodes],
        y=[pos[n][1] for n in nodes],
        mode="markers",
        marker=dict(
            size=[10 + 3 * graph.degree(n) for n in nodes],
            color=[colors.get(n, UNASSIGNED_COLOR) for n in nodes],
            line=dict(width=1, color="#1f2937"),
        ),
        hoverinfo="text",
        text=node_text,
    )
    fig = go.Figure(data=[edge_trace, node_trace])
    fig.update_layout(
        showlegend=False,
        margin=dict(l=20, r=20, t=20, b=20),
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        height=620,
        template="plotly_white",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def render_plotly_with_spinner(
    fig: go.Figure,
    *,
    spinner_text: str = "グラフを描画中…",
    use_container_width: bool = True,
    config: dict | None = None,
) -> None:
    """Render a Plotly figure with a spinner to highlight processing."""

    with st.spinner(spinner_text):
        merged_config = dict(CONFIG_BASE)
        if config:
            merged_config.update(config)
        st.plotly_chart(fig, use_container_width=use_container_width, config=merged_config)
