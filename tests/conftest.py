"""
Pytest configuration and fixtures for catalog reporter tests.

This file is automatically discovered by pytest and provides
shared catalog fixtures for all test modules.
"""

import pytest
import pandas as pd
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_reporter.etl.extract import normalize_catalog


DEFAULT_ROW = {
    "category": "Snacks",
    "name": "Product",
    "mrp": 100.0,
    "discountPercent": 0.0,
    "availableQuantity": 1,
    "discountedSellingPrice": 100.0,
    "weightInGms": 100,
    "outOfStock": False,
    "quantity": 1,
}


@pytest.fixture
def make_catalog():
    """
    Build a normalized catalog frame from partial row dicts.
    Missing fields fall back to DEFAULT_ROW; sku_id is assigned 1..n.
    """
    def _make(rows, price_unit="rupees"):
        df = pd.DataFrame([{**DEFAULT_ROW, **row} for row in rows])
        return normalize_catalog(df, price_unit=price_unit)

    return _make


@pytest.fixture
def catalog_df(make_catalog):
    """A small cleaned catalog (prices in rupees) spanning three categories."""
    return make_catalog([
        {"category": "Fruits & Vegetables", "name": "Onion", "mrp": 50.0, "discountPercent": 10.0,
         "discountedSellingPrice": 45.0, "availableQuantity": 10, "weightInGms": 1000, "quantity": 3},
        {"category": "Fruits & Vegetables", "name": "Tomato", "mrp": 40.0, "discountPercent": 20.0,
         "discountedSellingPrice": 32.0, "availableQuantity": 5, "weightInGms": 500, "quantity": 1},
        {"category": "Fruits & Vegetables", "name": "Watermelon", "mrp": 120.0, "discountPercent": 0.0,
         "discountedSellingPrice": 120.0, "availableQuantity": 0, "weightInGms": 6000,
         "outOfStock": True, "quantity": 1},
        {"category": "Beverages", "name": "Cola", "mrp": 600.0, "discountPercent": 5.0,
         "discountedSellingPrice": 570.0, "availableQuantity": 8, "weightInGms": 2000, "quantity": 1},
        {"category": "Beverages", "name": "Juice", "mrp": 350.0, "discountPercent": 30.0,
         "discountedSellingPrice": 245.0, "availableQuantity": 2, "weightInGms": 1000,
         "outOfStock": True, "quantity": 4},
        {"category": "Snacks", "name": "Chips", "mrp": 20.0, "discountPercent": 15.0,
         "discountedSellingPrice": 17.0, "availableQuantity": 20, "weightInGms": 50, "quantity": 1},
    ])


def pytest_addoption(parser):
    """Add custom pytest options."""
    parser.addoption(
        "--skip-integration",
        action="store_true",
        default=False,
        help="Skip end-to-end tests that write CSV and SQLite files"
    )


def pytest_collection_modifyitems(config, items):
    """Mark integration tests for conditional execution."""
    if not config.getoption("--skip-integration"):
        return

    skip_integration = pytest.mark.skip(reason="--skip-integration given")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)
