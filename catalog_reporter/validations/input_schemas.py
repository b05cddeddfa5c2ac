from pandera.pandas import Check, Column, DataFrameSchema


product_schema = DataFrameSchema(
    {
        # Identifier
        "sku_id": Column("Int64", nullable=False, unique=True, coerce=True),

        # Descriptive fields
        "category": Column(str, nullable=False),
        "name": Column(str, nullable=False),

        # Prices (still in paise; zero is reported by the cleaner, not here)
        "mrp": Column(float, Check.ge(0), nullable=False, coerce=True),
        "discountPercent": Column(float, Check.between(0, 100), nullable=False, coerce=True),
        "discountedSellingPrice": Column(float, Check.ge(0), nullable=False, coerce=True),

        # Stock and size
        "availableQuantity": Column("Int64", Check.ge(0), nullable=False, coerce=True),
        "weightInGms": Column("Int64", Check.ge(0), nullable=False, coerce=True),
        "outOfStock": Column("boolean", nullable=False, coerce=True),
        "quantity": Column("Int64", Check.ge(0), nullable=False, coerce=True),
    },
    strict=False  # Allow extra columns
)
