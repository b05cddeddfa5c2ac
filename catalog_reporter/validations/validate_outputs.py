import pandas as pd
from pandera.errors import SchemaErrors

from .output_schemas import catalog_clean_schema
from catalog_reporter.logger import setup_logger

logger = setup_logger("validation.output")


def validate_catalog_clean(df: pd.DataFrame) -> tuple[pd.DataFrame, int]:
    """
    Validate the cleaned catalog before it is analysed.
    """
    logger.info(f"Starting output validation on {len(df)} records")
    price_unit = df.attrs.get("price_unit")

    try:
        validated_df = catalog_clean_schema.validate(df, lazy=True)
        validated_df.attrs["price_unit"] = price_unit
        logger.info("Output validation passed")
        return validated_df, 0

    except SchemaErrors as err:
        failed = err.failure_cases
        logger.error(f"Output validation failed with {len(failed)} issues")
        logger.error(
            f"Failure summary:\n{failed.groupby(['column', 'check']).size()}"
        )

        # Drop invalid rows by filtering out failed indices
        failed_indices = failed["index"].dropna().unique()
        clean_df = df.drop(index=failed_indices) if len(failed_indices) > 0 else df.copy()
        dropped = len(df) - len(clean_df)

        if clean_df.empty:
            raise ValueError(
                "All rows failed output validation, nothing left to analyse"
            )

        try:
            clean_df = catalog_clean_schema.validate(clean_df, lazy=True)
            logger.info(f"Cleaned output dataset: {len(clean_df)} valid rows")
        except SchemaErrors as remaining:
            # Column-level failures carry no row index and survive the drop
            logger.warning(
                f"Could not clean all invalid rows ({len(remaining.failure_cases)} issues left). "
                "Returning best effort."
            )

        clean_df = clean_df.reset_index(drop=True)
        clean_df.attrs["price_unit"] = price_unit
        return clean_df, dropped
