"""Domain errors raised by the feeding analysis pipeline."""


class AnalysisError(Exception):
    """Base error for an analysis run that cannot produce a result."""


class StructuralError(AnalysisError):
    """The feeding log is missing rows or required columns."""


class EmptyResultError(AnalysisError):
    """The feeding log parsed but contained no usable bottle feeds."""


class DataFileNotFoundError(Exception):
    """The feeding log is not present in the blob store."""

    def __init__(self, file_name: str) -> None:
        super().__init__(f"Feeding data file not found: {file_name}")
        self.file_name = file_name


class InvalidUploadError(Exception):
    """An uploaded file does not look like a feeding log export."""


class UploadTooLargeError(InvalidUploadError):
    """An uploaded file exceeds the configured size limit."""
