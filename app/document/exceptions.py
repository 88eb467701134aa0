class DocumentBuildError(Exception):
    """Raised when the output word-processor document cannot be produced."""
