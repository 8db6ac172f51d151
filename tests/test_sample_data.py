from cograph.graph_builder import build_graph, records_from_frame
from sample_data import make_demo_transactions


def test_demo_transactions_structure() -> None:
    df = make_demo_transactions(n_users=80, seed=1)
    assert list(df.columns) == ["product_id", "user_id", "category", "price", "product_name"]
    assert df["price"].between(0, 100).all()
    assert df["user_id"].nunique() == 80


def test_demo_transactions_reproducible() -> None:
    a = make_demo_transactions(seed=5)
    b = make_demo_transactions(seed=5)
    assert a.equals(b)


def test_demo_graph_has_one_node_per_product() -> None:
    df = make_demo_transactions(seed=2)
    graph = build_graph(records_from_frame(df))
    assert graph.number_of_nodes() == df["product_id"].nunique()
    assert graph.number_of_edges() > 0
