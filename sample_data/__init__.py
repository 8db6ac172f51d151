"""Utility helpers for generating the built-in demo dataset."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np
import pandas as pd

__all__ = ["make_demo_transactions"]


@dataclass(frozen=True)
class _Cluster:
    category: str
    codes: tuple[str, ...]
    base_price: float


_CLUSTERS = [
    _Cluster("Electronics", ("E01", "E02", "E03", "E04", "E05", "E06"), 60.0),
    _Cluster("Home&Kitchen", ("H01", "H02", "H03", "H04", "H05"), 25.0),
    _Cluster("Computers&Accessories", ("C01", "C02", "C03"), 40.0),
]
_NOISE = tuple(f"N{i:02d}" for i in range(1, 13))


def make_demo_transactions(n_users: int = 150, seed: int = 42) -> pd.DataFrame:
    """併買パターンが分かりやすいダミー取引データを生成する。

    Users mostly buy several products of one cluster in random order, which
    yields co-purchase edges in both directions inside each cluster. A share
    of users buys one or two unrelated "noise" products instead.
    Prices are already on the 0–100 scale.
    """

    rng = np.random.default_rng(seed)
    catalogue: Dict[str, Dict[str, Any]] = {}
    for cluster in _CLUSTERS:
        for code in cluster.codes:
            catalogue[code] = {
                "category": cluster.category,
                "price": round(float(cluster.base_price + rng.normal(0, 5)), 2),
            }
    for code in _NOISE:
        catalogue[code] = {"category": "Toys&Games", "price": round(float(rng.uniform(1, 100)), 2)}

    records: List[Dict[str, Any]] = []
    for uid in range(n_users):
        user_id = f"U{uid:04d}"
        if rng.random() < 0.8:
            cluster = _CLUSTERS[int(rng.integers(0, len(_CLUSTERS)))]
            size = int(rng.integers(2, len(cluster.codes) + 1))
            basket = list(rng.choice(cluster.codes, size=size, replace=False))
        else:
            basket = list(rng.choice(_NOISE, size=int(rng.integers(1, 3)), replace=False))
        for code in basket:
            records.append(
                {
                    "product_id": str(code),
                    "user_id": user_id,
                    "category": catalogue[code]["category"],
                    "price": catalogue[code]["price"],
                    "product_name": f"商品{code}",
                }
            )
    return pd.DataFrame(
        records, columns=["product_id", "user_id", "category", "price", "product_name"]
    )
