import sqlite3
from pathlib import Path
from typing import Union

import pandas as pd

from catalog_reporter.etl.extract import CATALOG_COLUMNS
from catalog_reporter.exceptions import CatalogPipelineError
from catalog_reporter.logger import setup_logger

logger = setup_logger("etl.load_sqlite")


def _connect(db_path: Union[str, Path]) -> sqlite3.Connection:
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_path)


def ensure_catalog_table(conn: sqlite3.Connection, table_name: str = "zepto") -> None:
    """Create the catalog table with the canonical schema if it does not exist."""
    create_table_sql = f"""
    CREATE TABLE IF NOT EXISTS "{table_name}" (
        sku_id INTEGER PRIMARY KEY,
        category VARCHAR(120),
        name VARCHAR(150) NOT NULL,
        mrp NUMERIC(8,2),
        discountPercent NUMERIC(5,2),
        availableQuantity INTEGER,
        discountedSellingPrice NUMERIC(8,2),
        weightInGms INTEGER,
        outOfStock BOOLEAN,
        quantity INTEGER
    )
    """
    conn.execute(create_table_sql)


def load_catalog_to_sqlite(
    df: pd.DataFrame,
    db_path: Union[str, Path],
    table_name: str = "zepto",
    truncate_before_load: bool = True,
) -> int:
    """
    Load the cleaned catalog into SQLite and return the table's row count.
    """
    logger.info(f"Loading {len(df)} catalog rows into sqlite://{db_path}#{table_name}")

    conn = _connect(db_path)
    try:
        ensure_catalog_table(conn, table_name)
        if truncate_before_load:
            conn.execute(f'DELETE FROM "{table_name}"')

        df[CATALOG_COLUMNS].to_sql(table_name, conn, if_exists="append", index=False)
        conn.commit()

        count = conn.execute(f'SELECT COUNT(*) FROM "{table_name}"').fetchone()
        row_count = int(count[0]) if count else 0
        logger.info(f"SQLite load complete: {row_count} rows in {table_name}")
        return row_count

    except Exception as exc:
        conn.rollback()
        logger.error(f"SQLite load failed: {exc}", exc_info=True)
        raise CatalogPipelineError("SQLite load", str(exc)) from exc
    finally:
        conn.close()


def load_reports_to_sqlite(
    reports: dict[str, pd.DataFrame],
    db_path: Union[str, Path],
) -> None:
    """Write every report to its own table, replacing earlier runs."""
    conn = _connect(db_path)
    try:
        for name, report_df in reports.items():
            report_df.to_sql(name, conn, if_exists="replace", index=False)
        conn.commit()
        logger.info(f"SQLite load complete: {len(reports)} report tables")

    except Exception as exc:
        conn.rollback()
        logger.error(f"SQLite report load failed: {exc}", exc_info=True)
        raise CatalogPipelineError("SQLite report load", str(exc)) from exc
    finally:
        conn.close()
