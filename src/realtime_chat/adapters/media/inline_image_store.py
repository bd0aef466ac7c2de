"""Image store that keeps images inline."""

import logging

from realtime_chat.domain.errors import InvalidImageError
from realtime_chat.domain.ports.image_store import ImageStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024


class InlineImageStore(ImageStore):
    """Returns data URIs and URLs unchanged, for development without object storage."""

    def __init__(self, max_bytes: int = DEFAULT_MAX_IMAGE_BYTES) -> None:
        self.max_bytes = max_bytes

    async def upload(self, image: str) -> str:
        if not image.startswith(("data:image/", "http://", "https://")):
            raise InvalidImageError("Image must be a data:image URI or an http(s) URL")
        size = len(image.encode())
        if size > self.max_bytes:
            raise InvalidImageError(f"Image exceeds {self.max_bytes} bytes")
        logger.debug(f"Keeping inline image ({size} bytes)")
        return image
