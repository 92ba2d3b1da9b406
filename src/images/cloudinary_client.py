"""
Cloudinary Client

Minimal signed client for the Cloudinary upload API, used as a transient
hop: images from relay-only hosts are uploaded here so Shopify can fetch
them, then destroyed once Shopify has its own copy.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import requests

from ..common.errors import ImageRelocationError

logger = logging.getLogger(__name__)

RELAY_FOLDER = "senetic-relay"
RELAY_TAGS = ("senetic-relay", "temp")


@dataclass
class StagedImage:
    """An image temporarily hosted on Cloudinary."""
    public_id: str
    secure_url: str


class CloudinaryClient:
    """
    Upload-by-buffer and delete-by-id against Cloudinary.

    Usage:
        cloudinary = CloudinaryClient("cloud", "key", "secret")
        staged = cloudinary.upload(image_bytes, folder="senetic-relay/123")
        ...
        cloudinary.destroy(staged.public_id)
    """

    API_BASE = "https://api.cloudinary.com/v1_1"

    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: int = 60):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.session = requests.Session()

    def close(self):
        self.session.close()

    def _endpoint(self, action: str) -> str:
        return f"{self.API_BASE}/{self.cloud_name}/image/{action}"

    def sign(self, params: Dict[str, str]) -> str:
        """
        Cloudinary request signature: SHA-1 of the alphabetically sorted
        'key=value' pairs joined by '&', followed by the API secret.
        """
        to_sign = "&".join(f"{k}={v}" for k, v in sorted(params.items()) if v not in (None, ""))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    def _signed(self, params: Dict[str, str]) -> Dict[str, str]:
        params = dict(params, timestamp=str(int(time.time())))
        params["signature"] = self.sign(params)
        params["api_key"] = self.api_key
        return params

    @staticmethod
    def _json(response: requests.Response, action: str) -> Dict:
        try:
            body = response.json()
        except ValueError as e:
            raise ImageRelocationError(
                f"Cloudinary {action} failed: non-JSON response {response.text[:200]}"
            ) from e
        if not isinstance(body, dict):
            raise ImageRelocationError(f"Cloudinary {action} failed: unexpected response")
        return body

    def upload(
        self,
        data: bytes,
        folder: str = RELAY_FOLDER,
        public_id: Optional[str] = None,
        tags: Iterable[str] = RELAY_TAGS,
    ) -> StagedImage:
        """
        Upload image bytes.

        Raises:
            ImageRelocationError: Upload rejected or Cloudinary unreachable
        """
        params = {"folder": folder, "tags": ",".join(tags)}
        if public_id:
            params["public_id"] = public_id

        try:
            response = self.session.post(
                self._endpoint("upload"),
                data=self._signed(params),
                files={"file": ("image", data)},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ImageRelocationError(f"Cloudinary upload failed: {e}") from e

        if response.status_code >= 400:
            raise ImageRelocationError(
                f"Cloudinary upload failed: HTTP {response.status_code} {response.text[:200]}"
            )

        body = self._json(response, "upload")
        if not body.get("secure_url") or not body.get("public_id"):
            raise ImageRelocationError("Cloudinary upload returned no URL")

        logger.debug("Staged %s on Cloudinary", body["public_id"])
        return StagedImage(public_id=body["public_id"], secure_url=body["secure_url"])

    def destroy(self, public_id: str) -> bool:
        """
        Delete an uploaded image.

        Returns:
            True if Cloudinary reports the image deleted

        Raises:
            ImageRelocationError: Cloudinary unreachable or request rejected
        """
        try:
            response = self.session.post(
                self._endpoint("destroy"),
                data=self._signed({"public_id": public_id}),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ImageRelocationError(f"Cloudinary delete failed: {e}") from e

        if response.status_code >= 400:
            raise ImageRelocationError(
                f"Cloudinary delete failed: HTTP {response.status_code} {response.text[:200]}"
            )
        return self._json(response, "delete").get("result") == "ok"
