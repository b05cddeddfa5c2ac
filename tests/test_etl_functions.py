"""
Unit tests for the loader and the cleaning pass.

Covers column mapping and type coercion on load, null / zero-price
reporting, invalid-price deletion and the paise -> rupees rescale guard.
"""

import pytest
import numpy as np
import pandas as pd
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_reporter.etl.extract import (
    CATALOG_COLUMNS,
    extract_catalog,
    extract_catalog_csv,
    normalize_catalog,
)
from catalog_reporter.etl.clean import (
    clean_catalog,
    drop_invalid_price_rows,
    find_null_rows,
    find_zero_price_rows,
    rescale_prices,
)


class TestNormalizeCatalog:
    """Test suite for normalize_catalog."""

    @pytest.fixture
    def raw_source_df(self):
        """Raw rows as they appear in the source export (no sku_id, mixed-case headers)."""
        return pd.DataFrame({
            "Category": ["Fruits & Vegetables", "Beverages", "Snacks"],
            "name": ["Onion", "Cola", "Chips"],
            "mrp": [5000, 60000, 2000],
            "discountPercent": [10, 5, 15],
            "availableQuantity": [10, 8, 20],
            "discountedSellingPrice": [4500, 57000, 1700],
            "weightInGms": [1000, 2000, 50],
            "outOfStock": ["FALSE", "TRUE", "false"],
            "quantity": [3, 1, 1],
        })

    def test_assigns_sku_id_when_absent(self, raw_source_df):
        """Test that sku_id is generated as 1..n."""
        result = normalize_catalog(raw_source_df)
        assert result["sku_id"].tolist() == [1, 2, 3]

    def test_maps_headers_case_insensitively(self, raw_source_df):
        """Test that 'Category' is mapped onto 'category' and columns are ordered."""
        result = normalize_catalog(raw_source_df)
        assert list(result.columns) == CATALOG_COLUMNS
        assert result.loc[0, "category"] == "Fruits & Vegetables"

    def test_parses_stock_flag_strings(self, raw_source_df):
        """Test that TRUE/FALSE strings become a nullable boolean column."""
        result = normalize_catalog(raw_source_df)
        assert str(result["outOfStock"].dtype) == "boolean"
        assert result["outOfStock"].tolist() == [False, True, False]

    def test_unparseable_values_become_null(self, raw_source_df):
        """Test that bad numbers and flags are kept as nulls for reporting."""
        df = raw_source_df.assign(
            mrp=["5000", "n/a", "2000"],
            outOfStock=["FALSE", "TRUE", "maybe"],
        )
        result = normalize_catalog(df)
        assert pd.isna(result.loc[1, "mrp"])
        assert pd.isna(result.loc[2, "outOfStock"])

    def test_integer_columns_are_nullable(self, raw_source_df):
        """Test that integer fields use Int64 so nulls survive loading."""
        result = normalize_catalog(raw_source_df.assign(quantity=[None, 1, 1]))
        assert str(result["quantity"].dtype) == "Int64"
        assert pd.isna(result.loc[0, "quantity"])

    def test_sets_price_unit_marker(self, raw_source_df):
        """Test that the price unit marker is attached to the frame."""
        assert normalize_catalog(raw_source_df).attrs["price_unit"] == "paise"
        assert normalize_catalog(raw_source_df, price_unit="rupees").attrs["price_unit"] == "rupees"

    def test_missing_columns_raise(self, raw_source_df):
        """Test that a source without required columns is rejected."""
        with pytest.raises(ValueError, match="weightInGms"):
            normalize_catalog(raw_source_df.drop(columns=["weightInGms"]))

    def test_unknown_price_unit_raises(self, raw_source_df):
        """Test that only paise and rupees are accepted."""
        with pytest.raises(ValueError, match="price unit"):
            normalize_catalog(raw_source_df, price_unit="dollars")

    def test_duplicate_names_are_kept(self, raw_source_df):
        """Test that the loader performs no de-duplication."""
        doubled = pd.concat([raw_source_df, raw_source_df], ignore_index=True)
        result = normalize_catalog(doubled)
        assert len(result) == 6
        assert result["sku_id"].is_unique


class TestExtractCatalog:
    """Test suite for file-based extraction."""

    def test_extract_csv(self, tmp_path):
        """Test reading a CSV export into the catalog schema."""
        path = tmp_path / "zepto.csv"
        path.write_text(
            "Category,name,mrp,discountPercent,availableQuantity,"
            "discountedSellingPrice,weightInGms,outOfStock,quantity\n"
            "Snacks,Chips,2000,15,20,1700,50,FALSE,1\n"
            "Beverages,Cola,60000,5,8,57000,2000,TRUE,1\n"
        )
        result = extract_catalog_csv(path)
        assert len(result) == 2
        assert result.loc[1, "mrp"] == 60000.0
        assert result.attrs["price_unit"] == "paise"

    def test_extract_csv_numeric_flags_with_blank(self, tmp_path):
        """Test that 1/0 stock flags survive a blank cell in the same column."""
        path = tmp_path / "zepto.csv"
        path.write_text(
            "Category,name,mrp,discountPercent,availableQuantity,"
            "discountedSellingPrice,weightInGms,outOfStock,quantity\n"
            "Snacks,Chips,2000,15,20,1700,50,1,1\n"
            "Snacks,Nuts,3000,10,5,2700,100,0,1\n"
            "Snacks,Mints,1000,0,3,1000,20,,1\n"
        )
        result = extract_catalog_csv(path)
        flags = result["outOfStock"]
        assert flags.tolist()[:2] == [True, False]
        assert pd.isna(flags.iloc[2])
        assert str(flags.dtype) == "boolean"

    def test_normalize_float_flags(self):
        """Test that float 1.0/0.0 flags map to booleans and other numbers to null."""
        raw = pd.DataFrame({
            "category": ["Snacks"] * 4,
            "name": ["a", "b", "c", "d"],
            "mrp": [100.0] * 4,
            "discountPercent": [0.0] * 4,
            "availableQuantity": [1] * 4,
            "discountedSellingPrice": [100.0] * 4,
            "weightInGms": [100] * 4,
            "outOfStock": [1.0, 0.0, np.nan, 2.0],
            "quantity": [1] * 4,
        })
        flags = normalize_catalog(raw, price_unit="rupees")["outOfStock"]
        assert flags.tolist()[:2] == [True, False]
        assert pd.isna(flags.iloc[2])
        assert pd.isna(flags.iloc[3])

    def test_extract_missing_file_raises(self, tmp_path):
        """Test that a missing source file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            extract_catalog_csv(tmp_path / "missing.csv")

    def test_extract_unknown_format_raises(self):
        """Test that the dispatcher rejects unsupported formats."""
        with pytest.raises(ValueError, match="Unsupported"):
            extract_catalog({"format": "parquet", "path": "x.parquet"})


class TestCleaning:
    """Test suite for the cleaning pass."""

    def test_clean_scenario_deletes_zero_mrp_and_rescales(self, make_catalog):
        """Test that {A: 1000 paise, B: 0 paise} cleans to only A at 10.00 rupees."""
        raw = make_catalog(
            [
                {"name": "A", "mrp": 1000, "discountedSellingPrice": 1000},
                {"name": "B", "mrp": 0, "discountedSellingPrice": 0},
            ],
            price_unit="paise",
        )
        clean_df, summary = clean_catalog(raw)
        assert clean_df["name"].tolist() == ["A"]
        assert clean_df.loc[0, "mrp"] == 10.0
        assert clean_df.loc[0, "discountedSellingPrice"] == 10.0
        assert summary["dropped_rows"] == 1
        assert summary["price_unit"] == "rupees"

    def test_clean_does_not_mutate_input(self, make_catalog):
        """Test that the raw frame is left untouched as a backup."""
        raw = make_catalog([{"mrp": 1000}, {"mrp": 0}], price_unit="paise")
        clean_catalog(raw)
        assert len(raw) == 2
        assert raw.loc[0, "mrp"] == 1000.0
        assert raw.attrs["price_unit"] == "paise"

    def test_all_rows_have_positive_mrp_after_cleaning(self, make_catalog):
        """Test that no row with mrp <= 0 or null survives."""
        raw = make_catalog(
            [{"mrp": 1000}, {"mrp": 0}, {"mrp": None}, {"mrp": 2550}],
            price_unit="paise",
        )
        clean_df, _ = clean_catalog(raw)
        assert (clean_df["mrp"] > 0).all()
        assert clean_df["mrp"].tolist() == [10.0, 25.5]

    def test_invalid_price_drop_is_idempotent(self, make_catalog):
        """Test that a second deletion pass finds nothing to delete."""
        raw = make_catalog([{"mrp": 1000}, {"mrp": 0}], price_unit="paise")
        once, dropped_first = drop_invalid_price_rows(raw)
        twice, dropped_second = drop_invalid_price_rows(once)
        assert dropped_first == 1
        assert dropped_second == 0
        assert len(twice) == len(once)

    def test_rescale_guard_prevents_double_division(self, make_catalog):
        """Test that rescaling an already rescaled frame leaves prices alone."""
        raw = make_catalog([{"mrp": 1000, "discountedSellingPrice": 900}], price_unit="paise")
        once = rescale_prices(raw)
        twice = rescale_prices(once)
        assert once.loc[0, "mrp"] == 10.0
        assert twice.loc[0, "mrp"] == 10.0
        assert twice.loc[0, "discountedSellingPrice"] == 9.0
        assert twice.attrs["price_unit"] == "rupees"

    def test_clean_twice_keeps_rupee_prices(self, make_catalog):
        """Test that running the whole cleaning pass twice divides only once."""
        raw = make_catalog([{"mrp": 1000}, {"mrp": 0}], price_unit="paise")
        first, _ = clean_catalog(raw)
        second, summary = clean_catalog(first)
        assert second["mrp"].tolist() == [10.0]
        assert summary["dropped_rows"] == 0

    def test_rescale_without_marker_raises(self, make_catalog):
        """Test that a frame with no unit marker is refused."""
        df = make_catalog([{"mrp": 1000}], price_unit="paise")
        df.attrs.clear()
        with pytest.raises(ValueError, match="unknown price unit"):
            rescale_prices(df)

    def test_null_rows_are_reported_not_removed(self, make_catalog):
        """Test that rows with null fields are found but survive cleaning."""
        raw = make_catalog(
            [{"name": "A", "mrp": 1000}, {"name": "B", "mrp": 1000, "category": None}],
            price_unit="paise",
        )
        assert find_null_rows(raw)["name"].tolist() == ["B"]

        clean_df, summary = clean_catalog(raw)
        assert summary["null_rows"] == 1
        assert len(clean_df) == 2

    def test_zero_selling_price_is_reported(self, make_catalog):
        """Test that a zero selling price is flagged but only zero mrp is deleted."""
        raw = make_catalog(
            [{"name": "A", "mrp": 1000, "discountedSellingPrice": 0}],
            price_unit="paise",
        )
        assert len(find_zero_price_rows(raw)) == 1
        clean_df, summary = clean_catalog(raw)
        assert summary["zero_price_rows"] == 1
        assert len(clean_df) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
