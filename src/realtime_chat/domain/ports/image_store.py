"""Image store port."""

from typing import Protocol


class ImageStore(Protocol):
    """Port for the object storage collaborator that hosts images."""

    async def upload(self, image: str) -> str:
        """Upload an image (data URI or remote URL) and return its durable URL.

        Raises:
            ImageUploadError: If the storage backend rejects the image.
        """
        ...
