"""Multipart upload helpers."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import UploadFile

from hoopcamps.models import ImageUpload


async def read_image_uploads(files: Sequence[UploadFile] | None) -> list[ImageUpload]:
    """Read uploaded files into ImageUpload values, keeping their order."""
    uploads: list[ImageUpload] = []
    for file in files or []:
        data = await file.read()
        uploads.append(
            ImageUpload(
                filename=file.filename or "",
                content_type=file.content_type or "",
                data=data,
            )
        )
    return uploads
