import pandas as pd

from catalog_reporter.etl.clean import find_null_rows, find_zero_price_rows


def row_count(df: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame({"total_rows": [len(df)]})


def sample_rows(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    return df.head(n).reset_index(drop=True)


def null_rows(df: pd.DataFrame) -> pd.DataFrame:
    return find_null_rows(df).reset_index(drop=True)


def distinct_categories(df: pd.DataFrame) -> pd.DataFrame:
    categories = df["category"].dropna().drop_duplicates().sort_values(kind="stable")
    return categories.to_frame().reset_index(drop=True)


def stock_status_counts(df: pd.DataFrame) -> pd.DataFrame:
    """SKU count for in-stock vs out-of-stock products."""
    return (
        df.groupby("outOfStock", dropna=False)["sku_id"]
        .count()
        .reset_index(name="sku_count")
    )


def duplicate_product_names(df: pd.DataFrame) -> pd.DataFrame:
    """Product names listed under more than one SKU, most repeated first."""
    counts = df.groupby("name")["sku_id"].count().reset_index(name="sku_count")
    duplicates = counts[counts["sku_count"] > 1].sort_values(
        "sku_count", ascending=False, kind="stable"
    )
    return duplicates.reset_index(drop=True)


def zero_price_rows(df: pd.DataFrame) -> pd.DataFrame:
    return find_zero_price_rows(df).reset_index(drop=True)
