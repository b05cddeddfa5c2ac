"""
Report registry.

Maps stable report names to read-only functions over the cleaned catalog.
The names double as CSV file names and SQLite table names.
"""

from typing import Callable, Iterable, Optional

import pandas as pd

from catalog_reporter.logger import setup_logger
from . import explore, queries

logger = setup_logger("reports")

ReportFn = Callable[..., pd.DataFrame]

EXPLORATORY_REPORTS: dict[str, ReportFn] = {
    "explore_row_count": explore.row_count,
    "explore_sample_rows": explore.sample_rows,
    "explore_null_rows": explore.null_rows,
    "explore_distinct_categories": explore.distinct_categories,
    "explore_stock_status_counts": explore.stock_status_counts,
    "explore_duplicate_product_names": explore.duplicate_product_names,
    "explore_zero_price_rows": explore.zero_price_rows,
}

ANALYTICAL_REPORTS: dict[str, ReportFn] = {
    "q01_top_discounted_products": queries.top_discounted_products,
    "q02_high_mrp_out_of_stock": queries.high_mrp_out_of_stock,
    "q03_revenue_by_category": queries.revenue_by_category,
    "q04_premium_low_discount_products": queries.premium_low_discount_products,
    "q05_top_categories_by_avg_discount": queries.top_categories_by_avg_discount,
    "q06_price_per_gram": queries.price_per_gram,
    "q07_weight_segments": queries.weight_segments,
    "q08_inventory_weight_by_category": queries.inventory_weight_by_category,
    "q09_top_inventory_value_products": queries.top_inventory_value_products,
    "q10_category_summary": queries.category_summary,
    "q11_slow_moving_inventory": queries.slow_moving_inventory,
    "q12_above_category_avg_discount": queries.above_category_avg_discount,
    "q13_discount_rank_within_category": queries.discount_rank_within_category,
    "q14_revenue_contribution": queries.revenue_contribution,
    "q15_avg_price_per_gram_by_category": queries.avg_price_per_gram_by_category,
    "q16_price_anomalies": queries.price_anomalies,
    "q17_out_of_stock_rate_by_category": queries.out_of_stock_rate_by_category,
    "q18_top_products_per_category": queries.top_products_per_category,
    "q19_category_revenue_share": queries.category_revenue_share,
    "q20_savings_by_category": queries.savings_by_category,
}

REPORTS: dict[str, ReportFn] = {**EXPLORATORY_REPORTS, **ANALYTICAL_REPORTS}


def run_reports(
    df: pd.DataFrame,
    enabled: Optional[Iterable[str]] = None,
    params: Optional[dict] = None,
    raw_df: Optional[pd.DataFrame] = None,
) -> dict[str, pd.DataFrame]:
    """
    Run the enabled reports (all of them when `enabled` is empty) against
    one catalog snapshot. `params` maps report names to keyword arguments.

    When `raw_df` is given, the exploratory checks run against it instead, so
    rows removed by cleaning still show up in them.
    """
    names = list(enabled) if enabled else list(REPORTS)
    unknown = [name for name in names if name not in REPORTS]
    if unknown:
        raise KeyError(f"Unknown report names: {unknown}")

    params = params or {}
    results = {}
    for name in names:
        source = raw_df if raw_df is not None and name in EXPLORATORY_REPORTS else df
        results[name] = REPORTS[name](source, **params.get(name, {}))
        logger.info(f"✓ {name}: {len(results[name])} rows")
    return results
