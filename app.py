import io
from typing import Optional

import pandas as pd
import streamlit as st

from cograph.errors import CographError
from cograph.export import graph_tables, to_dot, to_zip
from cograph.io import read_transactions
from cograph.pipeline import PipelineResult, run_frame
from cograph.plotting import build_network_figure, render_plotly_with_spinner
from cograph.preprocess import normalize_transactions
from cograph.settings import load_settings
from sample_data import make_demo_transactions

APP_TITLE = "併買クラスタ探索"

st.set_page_config(
    page_title=APP_TITLE, layout="wide", initial_sidebar_state="expanded"
)


def _load_input(data_source: str, raw_mode: bool) -> Optional[pd.DataFrame]:
    if data_source == "サンプルデータ":
        return make_demo_transactions()
    uploaded = st.sidebar.file_uploader("CSV", type=["csv", "txt"])
    if uploaded is None:
        st.info("左サイドバーからファイルを選択してください。")
        return None
    if raw_mode:
        raw = pd.read_csv(uploaded, dtype=str, keep_default_na=False)
        cleaned = normalize_transactions(raw)
        return read_transactions(io.BytesIO(cleaned.to_csv(index=False).encode("utf-8")))
    return read_transactions(uploaded)


def _render_result(result: PipelineResult, threshold: float) -> None:
    graph = result.graph
    prune = result.prune

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("ノード数", f"{graph.number_of_nodes():,}")
    c2.metric("エッジ数", f"{graph.number_of_edges():,}")
    c3.metric("ランク対象コンポーネント", f"{len(result.filtered.ranking)}")
    c4.metric("剪定反復回数", f"{prune.iterations}")
    if prune.status == "iteration_cap":
        st.warning("反復上限に達しました。最小サイズ条件を満たさないコンポーネントが残っています。")
    if graph.number_of_nodes() == 0:
        st.warning(f"係数 {threshold:.2f} 以上のコンポーネントが残りませんでした。閾値を下げてください。")
        return

    st.subheader("コンポーネント一覧")
    st.dataframe(result.filtered.ranking_frame(), use_container_width=True)

    st.subheader("ネットワークグラフ")
    render_plotly_with_spinner(build_network_figure(graph))

    st.subheader("エクスポート")
    nodes_df, edges_df = graph_tables(graph)
    st.download_button(
        "DOTファイルを保存",
        data=to_dot(graph),
        file_name="graph.dot",
        mime="text/vnd.graphviz",
    )
    st.download_button(
        "ノード/エッジCSVを保存",
        data=to_zip({"nodes": nodes_df, "edges": edges_df}),
        file_name="graph_tables.zip",
        mime="application/zip",
    )


def main() -> None:
    st.title(APP_TITLE)
    st.caption("併買グラフの強連結成分を剪定し、密なクラスタ係数を持つ商品群を抽出します。")

    defaults = load_settings()
    side = st.sidebar.container()
    side.subheader("設定")
    data_source = side.radio("データソース", ("サンプルデータ", "ファイルアップロード"))
    raw_mode = side.checkbox("未加工データを正規化する", value=False)
    threshold = side.slider(
        "クラスタ係数閾値 τ", 0.0, 1.0, float(defaults.coefficient_threshold), 0.01
    )
    min_size = int(side.slider("最小コンポーネントサイズ", 3, 20, int(defaults.min_component_size)))

    try:
        df = _load_input(data_source, raw_mode)
    except (CographError, KeyError) as exc:
        st.error(str(exc))
        return
    if df is None:
        return

    config = defaults.override(coefficient_threshold=threshold, min_component_size=min_size)
    with st.spinner("グラフを構築中…"):
        try:
            result = run_frame(df, config)
        except CographError as exc:
            st.error(str(exc))
            return
    _render_result(result, threshold)


main()
