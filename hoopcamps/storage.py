"""Camp image bucket on top of PocketBase file storage.

PocketBase stores files on records, so the `camp-images` bucket is a
`storage_objects` collection: one record per uploaded object holding the
bucket name, the object key and the file itself. The public URL returned
for an object is the PocketBase file URL of that record.

Keys follow `{ownerOrSubmissionId}/{timestampMs}-{index}.{ext}`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from pocketbase import PocketBase
from pocketbase.client import FileUpload  # type: ignore[attr-defined]

from .data.pocketbase_helpers import call_store, get_field
from .models import ImageUpload

logger = logging.getLogger(__name__)

STORAGE_OBJECTS = "storage_objects"


@dataclass(frozen=True)
class StoredObject:
    key: str
    public_url: str
    record_id: str


def object_key(prefix: str, index: int, extension: str, timestamp_ms: int | None = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{prefix}/{timestamp_ms}-{index}.{extension}"


class ImageStorage:
    """Write-once image uploads into a named bucket"""

    def __init__(self, pb_client: PocketBase, bucket: str = "camp-images") -> None:
        self.pb = pb_client
        self.bucket = bucket

    async def upload(self, prefix: str, index: int, image: ImageUpload) -> StoredObject:
        """Upload one image and return its key and public URL."""
        key = object_key(prefix, index, image.extension)
        record = await call_store(
            self.pb.collection(STORAGE_OBJECTS).create,
            {
                "bucket": self.bucket,
                "key": key,
                "file": FileUpload((image.filename or key.rsplit("/", 1)[-1], image.data, image.content_type)),
            },
        )
        public_url = self.pb.get_file_url(record, get_field(record, "file", ""), {})
        logger.debug(f"Uploaded {key} to {self.bucket} ({len(image.data)} bytes)")
        return StoredObject(key=key, public_url=public_url, record_id=str(record.id))

    async def delete(self, stored: StoredObject) -> None:
        await call_store(self.pb.collection(STORAGE_OBJECTS).delete, stored.record_id)
        logger.debug(f"Deleted {stored.key} from {self.bucket}")

