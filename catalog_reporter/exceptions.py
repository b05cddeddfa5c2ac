class CatalogPipelineError(Exception):
    """Raised when a catalog report stage fails."""

    def __init__(self, stage: str, detail: str):
        self.stage = stage
        self.detail = detail
        super().__init__(f"{stage} failed: {detail}")
