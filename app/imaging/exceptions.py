class ImageNormalizationError(Exception):
    """Raised when an uploaded image cannot be converted or resized."""
