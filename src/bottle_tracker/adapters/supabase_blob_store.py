"""Supabase Storage-backed blob store."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from bottle_tracker.domain.feeding import BlobMetadata
from bottle_tracker.services.analysis import BlobStore


@dataclass
class SupabaseBlobStore(BlobStore):
    """Supabase Storage implementation over a single bucket."""

    client: Client
    bucket: str

    def get_text(self, name: str) -> str | None:
        """Download an object as UTF-8 text."""
        if self._find_object(name) is None:
            return None
        data = self.client.storage.from_(self.bucket).download(name)
        return data.decode("utf-8-sig")

    def get_metadata(self, name: str) -> BlobMetadata | None:
        """Return object size and last modification time."""
        row = self._find_object(name)
        if row is None:
            return None
        metadata = row.get("metadata") or {}
        return BlobMetadata(
            name=name,
            size=int(metadata.get("size", 0)),
            last_modified=_parse_timestamp(
                metadata.get("lastModified") or row.get("updated_at")
            ),
        )

    def put(self, name: str, data: bytes, content_type: str) -> None:
        """Upload an object, replacing any existing version."""
        self.client.storage.from_(self.bucket).upload(
            name,
            data,
            file_options={"content-type": content_type, "upsert": "true"},
        )

    def _find_object(self, name: str) -> dict | None:
        folder, _, base_name = name.rpartition("/")
        rows = self.client.storage.from_(self.bucket).list(
            folder or None, {"search": base_name, "limit": 100}
        )
        for row in rows or []:
            if row.get("name") == base_name:
                return row
        return None


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)
