"""前処理モジュール。

Turns a raw marketplace export into the normalized transaction table read by
:func:`cograph.io.read_transactions`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

RAW_COLUMNS = ["product_id", "user_id", "category", "actual_price", "product_name"]
CLEANED_COLUMNS = ["product_id", "user_id", "category", "price", "product_name"]


def parse_price(values: pd.Series) -> pd.Series:
    """Strip the rupee sign and thousands separators; unparseable prices become 0."""

    cleaned = (
        values.astype(str)
        .str.replace("₹", "", regex=False)
        .str.replace(",", "", regex=False)
        .str.strip()
    )
    return pd.to_numeric(cleaned, errors="coerce").fillna(0.0).astype(float)


def normalize_transactions(
    df: pd.DataFrame,
    *,
    price_scale: float = 100.0,
) -> pd.DataFrame:
    """生データを商品×ユーザーの明細に正規化する。

    Keeps the first ``|``-separated category segment, scales prices so the
    most expensive product sits at ``price_scale`` and emits one row per user
    listed in the comma-separated ``user_id`` field.
    """

    missing = [c for c in RAW_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Raw export is missing columns: {', '.join(missing)}")

    work = df[RAW_COLUMNS].copy()
    work["category"] = work["category"].astype(str).str.split("|").str[0]
    price = parse_price(work.pop("actual_price"))
    max_price = price.max()
    work["price"] = price_scale * price / max_price if max_price > 0 else 0.0

    work["user_id"] = work["user_id"].astype(str).str.split(",")
    work = work.explode("user_id", ignore_index=True)
    work["user_id"] = work["user_id"].str.strip()
    work = work[work["user_id"] != ""]
    return work[CLEANED_COLUMNS].reset_index(drop=True)


def normalize_file(raw_path: str | Path, cleaned_path: str | Path) -> pd.DataFrame:
    """Normalize ``raw_path`` and write the result as CSV to ``cleaned_path``."""

    raw = pd.read_csv(raw_path, dtype=str, keep_default_na=False)
    cleaned = normalize_transactions(raw)
    cleaned.to_csv(cleaned_path, index=False)
    logger.info("Wrote %d normalized rows to %s", len(cleaned), cleaned_path)
    return cleaned
