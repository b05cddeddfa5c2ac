"""
Analytical questions over the cleaned catalog.

Every function is read-only: it takes the post-cleaning catalog and returns a
new result frame with a fresh RangeIndex. Null handling follows SQL: filters
treat an unknown comparison as false, aggregates skip nulls, and a division
by zero yields null instead of raising.

Rounding uses Series.round(2), which is NumPy's round-half-to-even applied to
the binary value (0.125 -> 0.12, 0.375 -> 0.38). Null sort keys always go
last, also under descending order.
"""

import numpy as np
import pandas as pd

from catalog_reporter.logger import setup_logger

logger = setup_logger("reports.queries")


def _mask(condition: pd.Series) -> pd.Series:
    # Comparisons on nullable columns yield <NA>; SQL WHERE treats that as false
    return condition.fillna(False).astype(bool)


def _num(df: pd.DataFrame, column: str) -> pd.Series:
    return df[column].astype("float64")


def _safe_divide(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    return numerator / denominator.where(denominator != 0)


def _revenue(df: pd.DataFrame) -> pd.Series:
    return _num(df, "discountedSellingPrice") * _num(df, "availableQuantity")


def _finish(df: pd.DataFrame) -> pd.DataFrame:
    return df.reset_index(drop=True)


# --------------------------------------------------
# Filter + sort
# --------------------------------------------------

def top_discounted_products(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """Q1: best-value products by discount percentage."""
    result = (
        df[["name", "mrp", "discountPercent"]]
        .drop_duplicates()
        .sort_values("discountPercent", ascending=False, kind="stable", na_position="last")
        .head(n)
    )
    return _finish(result)


def high_mrp_out_of_stock(df: pd.DataFrame, min_mrp: float = 300) -> pd.DataFrame:
    """Q2: expensive products that are out of stock."""
    selected = df[_mask(df["outOfStock"].astype("boolean")) & _mask(df["mrp"] > min_mrp)]
    result = (
        selected[["name", "mrp"]]
        .drop_duplicates()
        .sort_values("mrp", ascending=False, kind="stable")
    )
    return _finish(result)


def premium_low_discount_products(
    df: pd.DataFrame,
    min_mrp: float = 500,
    max_discount: float = 10,
) -> pd.DataFrame:
    """Q4: high MRP products carrying only a small discount."""
    selected = df[_mask(df["mrp"] > min_mrp) & _mask(df["discountPercent"] < max_discount)]
    result = (
        selected[["name", "mrp", "discountPercent"]]
        .drop_duplicates()
        .sort_values(["mrp", "discountPercent"], ascending=[False, False], kind="stable")
    )
    return _finish(result)


def price_per_gram(df: pd.DataFrame, min_weight: int = 100) -> pd.DataFrame:
    """Q6: selling price per gram, cheapest first."""
    selected = df[_mask(df["weightInGms"] >= min_weight)]
    result = selected[["name", "weightInGms", "discountedSellingPrice"]].drop_duplicates().copy()
    result["price_per_gram"] = _safe_divide(
        _num(result, "discountedSellingPrice"), _num(result, "weightInGms")
    ).round(2)
    result = result.sort_values("price_per_gram", kind="stable", na_position="last")
    return _finish(result)


def weight_segments(df: pd.DataFrame) -> pd.DataFrame:
    """Q7: bucket products into Low / Medium / Bulk by weight."""
    result = df[["name", "weightInGms"]].drop_duplicates().copy()
    weight = _num(result, "weightInGms")
    segments = np.select([weight < 1000, weight < 5000], ["Low", "Medium"], default="Bulk")
    result["weight_category"] = pd.Series(segments, index=result.index).where(weight.notna())
    return _finish(result)


def top_inventory_value_products(df: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """Q9: products tying up the most stock value."""
    result = df[["name", "category", "discountedSellingPrice", "availableQuantity"]].copy()
    result["inventory_value"] = _revenue(df)
    result = result.sort_values(
        "inventory_value", ascending=False, kind="stable", na_position="last"
    ).head(n)
    return _finish(result)


def slow_moving_inventory(
    df: pd.DataFrame,
    min_available: int = 5,
    max_quantity: int = 2,
) -> pd.DataFrame:
    """Q11: plenty on the shelf but little movement."""
    selected = df[
        _mask(df["availableQuantity"] > min_available) & _mask(df["quantity"] < max_quantity)
    ]
    result = selected[["name", "category", "availableQuantity", "quantity"]].sort_values(
        "availableQuantity", ascending=False, kind="stable"
    )
    return _finish(result)


def price_anomalies(df: pd.DataFrame) -> pd.DataFrame:
    """Q16: rows selling above their MRP. Detected, never corrected."""
    selected = df[_mask(df["discountedSellingPrice"] > df["mrp"])]
    overshoot = selected["discountedSellingPrice"] - selected["mrp"]
    order = overshoot.sort_values(ascending=False, kind="stable").index
    result = selected.loc[order, ["sku_id", "name", "mrp", "discountedSellingPrice"]]
    if not result.empty:
        logger.warning(f"{len(result)} products priced above MRP")
    return _finish(result)


# --------------------------------------------------
# Group + aggregate
# --------------------------------------------------

def revenue_by_category(df: pd.DataFrame) -> pd.DataFrame:
    """Q3: estimated revenue (price x available stock) per category."""
    result = (
        df.assign(total_revenue=_revenue(df))
        .groupby("category")["total_revenue"]
        .sum(min_count=1)
        .reset_index()
        .sort_values("total_revenue", kind="stable", na_position="last")
    )
    return _finish(result)


def top_categories_by_avg_discount(df: pd.DataFrame, n: int = 5) -> pd.DataFrame:
    """Q5: categories with the highest average discount."""
    result = (
        df.groupby("category")["discountPercent"]
        .mean()
        .round(2)
        .rename("avg_discount")
        .reset_index()
        .sort_values("avg_discount", ascending=False, kind="stable", na_position="last")
        .head(n)
    )
    return _finish(result)


def inventory_weight_by_category(df: pd.DataFrame) -> pd.DataFrame:
    """Q8: total weight of stock on hand per category, in grams."""
    result = (
        df.assign(total_weight=df["weightInGms"] * df["availableQuantity"])
        .groupby("category")["total_weight"]
        .sum(min_count=1)
        .reset_index()
        .sort_values("total_weight", kind="stable", na_position="last")
    )
    return _finish(result)


def category_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Q10: product count and average prices per category."""
    result = df.groupby("category").agg(
        product_count=("sku_id", "count"),
        avg_mrp=("mrp", "mean"),
        avg_selling_price=("discountedSellingPrice", "mean"),
    )
    result[["avg_mrp", "avg_selling_price"]] = result[["avg_mrp", "avg_selling_price"]].round(2)
    result = result.reset_index().sort_values(
        ["product_count", "category"], ascending=[False, True], kind="stable"
    )
    return _finish(result)


def avg_price_per_gram_by_category(df: pd.DataFrame) -> pd.DataFrame:
    """Q15: mean price per gram per category; zero-weight rows count as null."""
    per_gram = _safe_divide(_num(df, "discountedSellingPrice"), _num(df, "weightInGms"))
    result = (
        df.assign(avg_price_per_gram=per_gram)
        .groupby("category")["avg_price_per_gram"]
        .mean()
        .round(2)
        .reset_index()
        .sort_values("avg_price_per_gram", kind="stable", na_position="last")
    )
    return _finish(result)


def out_of_stock_rate_by_category(df: pd.DataFrame) -> pd.DataFrame:
    """Q17: share of each category's SKUs that are out of stock."""
    flagged = df.assign(is_out_of_stock=_mask(df["outOfStock"].astype("boolean")).astype(int))
    result = flagged.groupby("category").agg(
        total_products=("sku_id", "count"),
        out_of_stock_count=("is_out_of_stock", "sum"),
    )
    result["out_of_stock_pct"] = _safe_divide(
        result["out_of_stock_count"] * 100.0, result["total_products"].astype("float64")
    ).round(2)
    result = result.reset_index().sort_values(
        ["out_of_stock_pct", "category"], ascending=[False, True], kind="stable"
    )
    return _finish(result)


def savings_by_category(df: pd.DataFrame) -> pd.DataFrame:
    """Q20: customer savings (MRP minus selling price) per category."""
    per_unit = _num(df, "mrp") - _num(df, "discountedSellingPrice")
    savings = df.assign(
        total_savings=per_unit * _num(df, "availableQuantity"),
        avg_discount_amount=per_unit,
    )
    result = savings.groupby("category").agg(
        total_savings=("total_savings", lambda s: s.sum(min_count=1)),
        avg_discount_amount=("avg_discount_amount", "mean"),
    )
    result = result.round(2).reset_index().sort_values(
        "total_savings", ascending=False, kind="stable", na_position="last"
    )
    return _finish(result)


# --------------------------------------------------
# Window functions
# --------------------------------------------------

def discount_rank_within_category(df: pd.DataFrame) -> pd.DataFrame:
    """
    Q13: rank products inside their category by discount, highest first.

    Competition ranking: equal discounts share a rank and the next rank
    skips (20, 20, 10 -> 1, 1, 3). A null discountPercent gets a null rank
    and sorts last in its category; engines that put nulls first under DESC
    would rank it 1 instead.
    """
    result = df[["category", "name", "discountPercent"]].copy()
    result["discount_rank"] = (
        result.groupby("category", dropna=False)["discountPercent"]
        .rank(method="min", ascending=False)
        .astype("Int64")
    )
    result = result.sort_values(
        ["category", "discount_rank"], kind="stable", na_position="last"
    )
    return _finish(result)


def revenue_contribution(df: pd.DataFrame) -> pd.DataFrame:
    """Q14: each product's percentage of total estimated revenue."""
    result = df[["name", "category"]].copy()
    result["revenue"] = _revenue(df)
    total = result["revenue"].sum()
    result["revenue_pct"] = (
        (result["revenue"] * 100 / total).round(2) if total != 0 else np.nan
    )
    result = result.sort_values(
        "revenue_pct", ascending=False, kind="stable", na_position="last"
    )
    return _finish(result)


def top_products_per_category(df: pd.DataFrame, n: int = 3) -> pd.DataFrame:
    """Q18: the n highest-revenue products of every category (row numbering)."""
    result = df[["category", "name"]].copy()
    result["revenue"] = _revenue(df)
    result["revenue_rank"] = (
        result.groupby("category", dropna=False)["revenue"]
        .rank(method="first", ascending=False)
        .astype("Int64")
    )
    result = result[_mask(result["revenue_rank"] <= n)].sort_values(
        ["category", "revenue_rank"], kind="stable", na_position="last"
    )
    return _finish(result)


def category_revenue_share(df: pd.DataFrame) -> pd.DataFrame:
    """Q19: each category's percentage of total estimated revenue."""
    result = revenue_by_category(df)
    total = result["total_revenue"].sum()
    result["revenue_share_pct"] = (
        (result["total_revenue"] * 100 / total).round(2) if total != 0 else np.nan
    )
    result = result.sort_values(
        "revenue_share_pct", ascending=False, kind="stable", na_position="last"
    )
    return _finish(result)


# --------------------------------------------------
# Join-based comparison
# --------------------------------------------------

def above_category_avg_discount(df: pd.DataFrame) -> pd.DataFrame:
    """Q12: products discounted more deeply than their category average."""
    category_avg = (
        df.groupby("category")["discountPercent"]
        .mean()
        .rename("category_avg_discount")
        .reset_index()
    )
    joined = df[["name", "category", "discountPercent"]].merge(
        category_avg, on="category", how="inner"
    )
    selected = joined[_mask(joined["discountPercent"] > joined["category_avg_discount"])].copy()
    selected["category_avg_discount"] = selected["category_avg_discount"].round(2)
    result = selected.sort_values(
        ["category", "discountPercent"], ascending=[True, False], kind="stable"
    )
    return _finish(result)
