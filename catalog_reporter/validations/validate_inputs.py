import pandas as pd
from pandera.errors import SchemaErrors

from .input_schemas import product_schema
from catalog_reporter.logger import setup_logger

logger = setup_logger("validation.input")


def validate_products(df: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Check the raw catalog against the product schema.

    Problems are logged and returned as pandera failure cases; rows are
    never dropped or repaired here.
    """
    logger.info(f"Starting product validation on {len(df)} rows")
    try:
        validated_df = product_schema.validate(df, lazy=True)
        validated_df.attrs = dict(df.attrs)
        logger.info("Product validation passed")
        return validated_df, pd.DataFrame()

    except SchemaErrors as err:
        failed = err.failure_cases
        logger.warning(f"Product validation found {len(failed)} issues")
        logger.warning(f"Errors summary:\n{failed.groupby(['column', 'check']).size()}")
        return df, failed
