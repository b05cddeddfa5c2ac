import pandas as pd

from catalog_reporter.etl.extract import PRICE_COLUMNS, PRICE_UNITS
from catalog_reporter.logger import setup_logger

logger = setup_logger("etl.clean")


def find_null_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Rows with at least one null field. Reported only, never repaired."""
    return df[df.isna().any(axis=1)]


def find_zero_price_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Rows where either price field is zero."""
    return df[(df["mrp"] == 0) | (df["discountedSellingPrice"] == 0)]


def drop_invalid_price_rows(df: pd.DataFrame) -> tuple[pd.DataFrame, int]:
    """
    Delete rows whose mrp is zero or null.

    Returns the remaining rows and the number of rows removed. Running it
    again on its own output removes nothing.
    """
    price_unit = df.attrs.get("price_unit")
    invalid = df["mrp"].isna() | (df["mrp"] == 0)
    dropped = int(invalid.sum())

    clean_df = df[~invalid].reset_index(drop=True)
    clean_df.attrs["price_unit"] = price_unit

    if dropped > 0:
        logger.warning(f"Quality filter: removed {dropped} rows with zero or missing mrp")
    return clean_df, dropped


def rescale_prices(df: pd.DataFrame) -> pd.DataFrame:
    """
    Convert mrp and discountedSellingPrice from paise to rupees.

    The frame's attrs["price_unit"] marker records the current unit, so a
    frame that is already in rupees is returned unchanged instead of being
    divided a second time.
    """
    price_unit = df.attrs.get("price_unit")
    if price_unit not in PRICE_UNITS:
        raise ValueError(
            f"Cannot rescale prices: unknown price unit marker {price_unit!r}"
        )

    if price_unit == "rupees":
        logger.warning("Prices already in rupees, skipping rescale")
        return df

    rescaled = df.copy()
    for col in PRICE_COLUMNS:
        rescaled[col] = rescaled[col] / 100.0
    rescaled.attrs["price_unit"] = "rupees"

    logger.info(f"Rescaled {PRICE_COLUMNS} from paise to rupees on {len(rescaled)} rows")
    return rescaled


def clean_catalog(df: pd.DataFrame) -> tuple[pd.DataFrame, dict]:
    """
    Run the cleaning pass: report nulls and zero prices, delete rows with an
    invalid mrp, then rescale prices to rupees.

    The input frame is left untouched and can serve as the raw backup.
    """
    logger.info(f"Starting cleaning pass on {len(df)} rows")

    null_rows = find_null_rows(df)
    if not null_rows.empty:
        logger.warning(
            f"{len(null_rows)} rows contain null fields "
            f"(sku_id: {null_rows['sku_id'].tolist()[:20]})"
        )

    zero_price_rows = find_zero_price_rows(df)
    if not zero_price_rows.empty:
        logger.warning(f"{len(zero_price_rows)} rows have a zero price")

    clean_df, dropped = drop_invalid_price_rows(df)
    clean_df = rescale_prices(clean_df)

    summary = {
        "null_rows": len(null_rows),
        "zero_price_rows": len(zero_price_rows),
        "dropped_rows": dropped,
        "rows_remaining": len(clean_df),
        "price_unit": clean_df.attrs["price_unit"],
    }
    logger.info(f"Cleaning completed: {summary}")
    return clean_df, summary
