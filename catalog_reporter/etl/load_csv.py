from pathlib import Path
from typing import Union

import pandas as pd

from catalog_reporter.logger import setup_logger
from catalog_reporter.utils import build_report_path

logger = setup_logger("etl.load_csv")


def write_reports_csv(
    reports: dict[str, pd.DataFrame],
    output_dir: Union[str, Path],
) -> list[Path]:
    """
    Write each report to <output_dir>/<report_name>.csv and return the paths.
    Empty result sets are still written (header only).
    """
    if not output_dir:
        raise ValueError("Output directory must not be empty")

    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create output directory {output_dir}: {e}")
        raise

    written = []
    for name, df in reports.items():
        path = build_report_path(output_dir, name)
        df.to_csv(path, index=False)
        logger.info(f"Wrote {len(df)} rows to {path}")
        written.append(path)

    logger.info(f"{len(written)} report files written to {output_dir}")
    return written
