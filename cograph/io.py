"""入出力ユーティリティ。

Reads normalized transaction files, guessing the text encoding the same way
for paths and uploaded byte streams.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Union

import chardet
import pandas as pd

from cograph.errors import IngestionError

TRANSACTION_COLUMNS = ["product_id", "user_id", "category", "price", "name"]

Source = Union[str, Path, BinaryIO]


def detect_encoding(data: bytes) -> str:
    """バイト列から推定される文字コードを返す。"""
    result = chardet.detect(data)
    return result.get("encoding") or "utf-8"


def _read_bytes(source: Source) -> bytes:
    if isinstance(source, (str, Path)):
        try:
            return Path(source).read_bytes()
        except OSError as exc:
            raise IngestionError(f"Cannot read transaction file {source}: {exc}") from exc
    data = source.read()
    source.seek(0)
    return data


def read_transactions(source: Source) -> pd.DataFrame:
    """Read a normalized transaction table.

    Args:
        source: path to a delimited text file or a binary file-like object.
            The first row is a header; fields are taken by position as
            ``product_id, user_id, category, price, name``.

    Returns:
        ``pd.DataFrame`` with the canonical column names and a float
        ``price`` column.

    Raises:
        IngestionError: the source cannot be read, has fewer than five
            columns, contains a short row or an empty or non-numeric
            price.
    """

    data = _read_bytes(source)
    enc = detect_encoding(data)
    try:
        # python engine leaves NaN in cells a short row never reached
        df = pd.read_csv(
            io.BytesIO(data),
            encoding=enc,
            dtype=str,
            keep_default_na=False,
            engine="python",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise IngestionError(f"Malformed transaction file: {exc}") from exc

    if df.shape[1] < len(TRANSACTION_COLUMNS):
        raise IngestionError(
            f"Expected {len(TRANSACTION_COLUMNS)} columns, found {df.shape[1]}"
        )
    df = df.iloc[:, : len(TRANSACTION_COLUMNS)].copy()
    df.columns = TRANSACTION_COLUMNS

    short = df.isna().any(axis=1)
    if short.any():
        # header is line 1
        line = int(short.idxmax()) + 2
        raise IngestionError(f"Missing field on line {line}")

    try:
        df["price"] = pd.to_numeric(df["price"], errors="raise").astype(float)
    except (TypeError, ValueError) as exc:
        raise IngestionError(f"Price column is not numeric: {exc}") from exc
    if df["price"].isna().any():
        line = int(df["price"].isna().idxmax()) + 2
        raise IngestionError(f"Empty price on line {line}")
    return df
