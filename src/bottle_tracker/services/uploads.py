"""Validation and storage of uploaded feeding logs."""

import logging
from dataclasses import dataclass

from bottle_tracker.domain.errors import InvalidUploadError, UploadTooLargeError
from bottle_tracker.services.analysis import BlobStore

REQUIRED_HEADER_TERMS = ("type", "start", "location", "condition")
CSV_CONTENT_TYPE = "text/csv"

_logger = logging.getLogger(__name__)


def validate_feeding_header(content: bytes) -> str:
    """Check the first line names the feeding log columns and return the text."""
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise InvalidUploadError("File is not UTF-8 text") from exc
    if not text.strip():
        raise InvalidUploadError("File is empty")
    header = text.split("\n", 1)[0].lower()
    missing = [term for term in REQUIRED_HEADER_TERMS if term not in header]
    if missing:
        raise InvalidUploadError(
            "Invalid CSV format. Header is missing: " + ", ".join(missing)
        )
    return text


@dataclass
class UploadService:
    """Service that replaces the stored feeding log with an upload."""

    blob_store: BlobStore
    file_name: str
    max_bytes: int

    def store(self, content: bytes) -> int:
        """Validate and store an upload, returning its size in bytes."""
        if len(content) > self.max_bytes:
            raise UploadTooLargeError(f"File is larger than {self.max_bytes} bytes")
        validate_feeding_header(content)
        self.blob_store.put(self.file_name, content, CSV_CONTENT_TYPE)
        _logger.info("Stored feeding log %s (%s bytes)", self.file_name, len(content))
        return len(content)
