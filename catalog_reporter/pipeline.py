"""
Catalog report pipeline.

Data Flow:
1. Extract: load the product catalog from CSV or SQLite
2. Validate: report schema problems (nulls, ranges) without repairing them
3. Clean: delete rows with a zero/missing MRP, rescale prices to rupees
4. Validate: enforce post-cleaning invariants (mrp > 0)
5. Report: exploratory checks on the extracted catalog, analytical queries
   on the cleaned one
6. Load: write result sets to CSV and, optionally, to SQLite

Run manually:
    python -m catalog_reporter.pipeline --config my_config.yaml
"""

import argparse
from pathlib import Path
from typing import Optional

import pandas as pd

from catalog_reporter.config import load_config
from catalog_reporter.etl.clean import clean_catalog
from catalog_reporter.etl.extract import extract_catalog
from catalog_reporter.etl.load_csv import write_reports_csv
from catalog_reporter.etl.load_sqlite import load_catalog_to_sqlite, load_reports_to_sqlite
from catalog_reporter.exceptions import CatalogPipelineError
from catalog_reporter.logger import setup_logger
from catalog_reporter.reports import run_reports
from catalog_reporter.validations.validate_inputs import validate_products
from catalog_reporter.validations.validate_outputs import validate_catalog_clean

logger = setup_logger("catalog_reporter.pipeline")


def run_catalog_report(config: Optional[dict] = None) -> dict[str, pd.DataFrame]:
    """
    Run every stage once and return the report result sets by name.
    """
    config = config if config is not None else load_config()
    source_cfg = config.get("source", {})
    output_cfg = config.get("output", {})
    reports_cfg = config.get("reports", {})

    try:
        raw_df = extract_catalog(source_cfg)
        logger.info(f"✓ Extracted {len(raw_df)} catalog rows")
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"✗ Extraction failed: {e}")
        raise CatalogPipelineError("Extraction", str(e)) from e

    _, failure_cases = validate_products(raw_df)
    if failure_cases.empty:
        logger.info("✓ Input validation passed")
    else:
        logger.warning(f"⚠ Input validation reported {len(failure_cases)} issues")

    try:
        clean_df, summary = clean_catalog(raw_df)
        clean_df, dropped = validate_catalog_clean(clean_df)
    except ValueError as e:
        logger.error(f"✗ Cleaning failed: {e}")
        raise CatalogPipelineError("Cleaning", str(e)) from e

    if clean_df.empty:
        raise CatalogPipelineError("Cleaning", "catalog is empty after cleaning")
    logger.info(f"✓ Cleaning completed: {len(clean_df)} rows ({summary['dropped_rows']} deleted)")
    if dropped > 0:
        logger.warning(f"  ⚠ {dropped} rows failed output validation and were excluded")

    try:
        reports = run_reports(
            clean_df,
            enabled=reports_cfg.get("enabled"),
            params=reports_cfg.get("params"),
            raw_df=raw_df,
        )
    except KeyError as e:
        logger.error(f"✗ Report configuration invalid: {e}")
        raise CatalogPipelineError("Reporting", str(e)) from e
    except Exception as e:
        logger.error(f"✗ Reporting failed: {e}", exc_info=True)
        raise CatalogPipelineError("Reporting", str(e)) from e
    logger.info(f"✓ {len(reports)} reports computed")

    reports_dir = output_cfg.get("reports_dir")
    if reports_dir:
        try:
            write_reports_csv(reports, reports_dir)
        except (ValueError, OSError) as e:
            logger.error(f"✗ CSV output failed: {e}")
            raise CatalogPipelineError("CSV output", str(e)) from e

    sqlite_cfg = output_cfg.get("sqlite") or {}
    if sqlite_cfg.get("enabled", False):
        row_count = load_catalog_to_sqlite(
            clean_df,
            db_path=sqlite_cfg.get("path", "output/catalog.db"),
            table_name=sqlite_cfg.get("table_name", "zepto"),
            truncate_before_load=sqlite_cfg.get("truncate_before_load", True),
        )
        logger.info(f"✓ Catalog loaded to SQLite: {row_count} rows")
        if sqlite_cfg.get("load_reports", True):
            load_reports_to_sqlite(reports, sqlite_cfg.get("path", "output/catalog.db"))
    else:
        logger.info("SQLite load skipped (output.sqlite.enabled = false)")

    logger.info(f"✓ Pipeline SUCCESS: {len(reports)} reports over {len(clean_df)} products")
    return reports


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Clean a product catalog and run the catalog reports.")
    parser.add_argument("--config", type=Path, default=None, help="YAML file merged over the defaults")
    args = parser.parse_args(argv)

    run_catalog_report(load_config(args.config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
