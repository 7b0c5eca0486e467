"""API utility modules."""

from .uploads import read_image_uploads

__all__ = ["read_image_uploads"]
