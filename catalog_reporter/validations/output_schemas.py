from pandera.pandas import Check, Column, DataFrameSchema


catalog_clean_schema = DataFrameSchema(
    {
        # Nulls are reported upstream and survive cleaning; only prices are enforced
        "sku_id": Column("Int64", nullable=False, unique=True),
        "category": Column(str, nullable=True),
        "name": Column(str, nullable=True),

        # Prices in rupees after cleaning
        "mrp": Column(float, Check.gt(0), nullable=False),
        "discountPercent": Column(float, nullable=True),
        "discountedSellingPrice": Column(float, Check.ge(0), nullable=True),

        "availableQuantity": Column("Int64", nullable=True),
        "weightInGms": Column("Int64", nullable=True),
        "outOfStock": Column("boolean", nullable=True),
        "quantity": Column("Int64", nullable=True),
    },
    strict=True
)
