class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document does not exist or is not owned by the caller."""


class MissingOwnerError(ProcessorError):
    """Raised when an operation is attempted without an owner identifier."""


class UploadError(ProcessorError):
    """Raised when an uploaded file cannot be written to the temp directory."""
