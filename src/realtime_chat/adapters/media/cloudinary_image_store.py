"""Cloudinary image store using signed uploads.

API documentation: https://cloudinary.com/documentation/image_upload_api_reference
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import TYPE_CHECKING, Any

import aiohttp

from realtime_chat.domain.errors import ImageUploadError
from realtime_chat.domain.ports.image_store import ImageStore

if TYPE_CHECKING:
    from aiohttp import ClientSession

logger = logging.getLogger(__name__)

CLOUDINARY_UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Compute the Cloudinary request signature.

    Parameters are sorted by name, joined as ``key=value`` pairs with ``&``,
    suffixed with the API secret and hashed with SHA-1.
    """
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] != "")
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryImageStore(ImageStore):
    """Uploads base64 data URIs or remote URLs to Cloudinary."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        session: ClientSession | None = None,
        timeout_seconds: int = 30,
    ) -> None:
        """Initialize the store.

        Args:
            cloud_name: Cloudinary cloud name.
            api_key: Cloudinary API key.
            api_secret: Cloudinary API secret.
            session: Shared aiohttp session. If omitted, one is created on the
                first upload and closed by `close`.
            timeout_seconds: Upload request timeout.
        """
        self.upload_url = CLOUDINARY_UPLOAD_URL.format(cloud_name=cloud_name)
        self.api_key = api_key
        self._api_secret = api_secret
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def _get_session(self) -> ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session if this store created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _handle_upload_response(self, response: aiohttp.ClientResponse) -> str:
        """Extract the secure URL from an upload response."""
        if response.status != 200:
            response_text = await response.text()
            logger.warning(
                f"Cloudinary returned status {response.status}: {response_text[:200]}"
            )
            raise ImageUploadError(f"Image upload failed with status {response.status}")

        data = await response.json()
        secure_url = data.get("secure_url") if isinstance(data, dict) else None
        if not secure_url:
            raise ImageUploadError("Image upload response did not contain a URL")
        return str(secure_url)

    async def upload(self, image: str) -> str:
        """Upload an image and return its HTTPS URL.

        Raises:
            ImageUploadError: If the upload is rejected or the request fails.
        """
        params: dict[str, Any] = {"timestamp": int(time.time())}
        form = {
            "file": image,
            "api_key": self.api_key,
            "timestamp": str(params["timestamp"]),
            "signature": sign_params(params, self._api_secret),
        }

        try:
            async with self._get_session().post(
                self.upload_url, data=form, timeout=self._timeout
            ) as response:
                url = await self._handle_upload_response(response)
        except ImageUploadError:
            raise
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error(f"Error uploading image to Cloudinary: {e}", exc_info=True)
            raise ImageUploadError(f"Image upload failed: {e}") from e

        logger.info(f"Uploaded image to {url}")
        return url
