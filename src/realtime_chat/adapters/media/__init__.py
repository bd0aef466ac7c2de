"""Image storage adapters."""

from realtime_chat.adapters.media.cloudinary_image_store import CloudinaryImageStore
from realtime_chat.adapters.media.inline_image_store import InlineImageStore

__all__ = ["CloudinaryImageStore", "InlineImageStore"]
