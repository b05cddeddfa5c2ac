import sqlite3
from pathlib import Path
from typing import Any, Union

import numpy as np
import pandas as pd

from catalog_reporter.logger import setup_logger

logger = setup_logger("etl.extract")

CATALOG_COLUMNS = [
    "sku_id",
    "category",
    "name",
    "mrp",
    "discountPercent",
    "availableQuantity",
    "discountedSellingPrice",
    "weightInGms",
    "outOfStock",
    "quantity",
]

PRICE_COLUMNS = ["mrp", "discountedSellingPrice"]
FLOAT_COLUMNS = ["mrp", "discountPercent", "discountedSellingPrice"]
INT_COLUMNS = ["sku_id", "availableQuantity", "weightInGms", "quantity"]
PRICE_UNITS = ("paise", "rupees")

_TRUE_VALUES = {"true", "t", "1", "yes", "y"}
_FALSE_VALUES = {"false", "f", "0", "no", "n"}


def _to_bool(value: Any) -> Any:
    if value is None or value is pd.NA:
        return pd.NA
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        # 0/1 flags come back as floats when the column holds a null
        if pd.isna(value):
            return pd.NA
        return bool(value) if value in (0, 1) else pd.NA
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return pd.NA


def normalize_catalog(df: pd.DataFrame, price_unit: str = "paise") -> pd.DataFrame:
    """
    Map raw source columns onto the catalog schema.

    Headers are matched case-insensitively ("Category" -> "category").
    sku_id is generated when the source does not carry one. Values that do
    not parse become nulls so that validation can report them.
    """
    if price_unit not in PRICE_UNITS:
        raise ValueError(f"Unknown price unit '{price_unit}', expected one of {PRICE_UNITS}")

    lookup = {col.lower(): col for col in CATALOG_COLUMNS}
    renamed = {}
    for col in df.columns:
        key = str(col).strip().lower()
        if key in lookup:
            renamed[col] = lookup[key]
    df = df.rename(columns=renamed)

    missing = [col for col in CATALOG_COLUMNS if col != "sku_id" and col not in df.columns]
    if missing:
        raise ValueError(f"Catalog source is missing required columns: {missing}")

    df = df.copy()
    if "sku_id" not in df.columns:
        df.insert(0, "sku_id", range(1, len(df) + 1))
        logger.info(f"Assigned sku_id 1..{len(df)}")

    for col in FLOAT_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
    for col in INT_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("Int64")
    df["outOfStock"] = df["outOfStock"].map(_to_bool).astype("boolean")

    normalized = df[CATALOG_COLUMNS].reset_index(drop=True)
    normalized.attrs["price_unit"] = price_unit
    return normalized


def extract_catalog_csv(
    path: Union[str, Path],
    encoding: str = "utf-8",
    price_unit: str = "paise",
) -> pd.DataFrame:
    """Read the catalog from a delimited file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    logger.info(f"Extracting catalog from {path}")
    raw_df = pd.read_csv(path, encoding=encoding)
    logger.info(f"Successfully extracted {len(raw_df)} rows, columns: {list(raw_df.columns)}")

    return normalize_catalog(raw_df, price_unit=price_unit)


def extract_catalog_sqlite(
    db_path: Union[str, Path],
    table: str = "zepto",
    price_unit: str = "paise",
) -> pd.DataFrame:
    """Read the catalog from an existing SQLite table."""
    db_path = Path(db_path)
    if not db_path.exists():
        raise FileNotFoundError(f"SQLite database not found: {db_path}")

    logger.info(f"Extracting catalog from sqlite://{db_path}#{table}")
    conn = sqlite3.connect(db_path)
    try:
        raw_df = pd.read_sql_query(f'SELECT * FROM "{table}"', conn)
    finally:
        conn.close()
    logger.info(f"Successfully extracted {len(raw_df)} rows from {table}")

    return normalize_catalog(raw_df, price_unit=price_unit)


def extract_catalog(source: dict) -> pd.DataFrame:
    """Extract the catalog described by the `source` config section."""
    fmt = source.get("format", "csv")
    price_unit = source.get("price_unit", "paise")

    if fmt == "csv":
        return extract_catalog_csv(
            source["path"],
            encoding=source.get("encoding", "utf-8"),
            price_unit=price_unit,
        )
    if fmt == "sqlite":
        return extract_catalog_sqlite(
            source["path"],
            table=source.get("table", "zepto"),
            price_unit=price_unit,
        )
    raise ValueError(f"Unsupported catalog source format: {fmt}")
