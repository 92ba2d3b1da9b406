"""
Image Relocator

Attaches description images to a Shopify product.

Direct hosts are handed to Shopify as-is. Relay hosts refuse Shopify's
fetcher, so their images are downloaded here, staged on Cloudinary,
attached from the Cloudinary URL, and the staged copy is deleted.

Images are processed one at a time with a pause after each call; a failed
image is reported and never retried.
"""

import logging
from typing import Callable, List, Optional, Set, Union

import requests

from ..common.errors import ImageRelocationError, ShopifyAPIError
from ..common.pacing import Pacer
from ..models import ImageUploadResult
from ..shopify.products import ShopifyProductStore
from .cloudinary_client import RELAY_FOLDER, CloudinaryClient, StagedImage
from .domains import DomainClassifier, DomainPolicy
from .filenames import generate_unique_filename, normalize_for_comparison

logger = logging.getLogger(__name__)

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)
SUPPLIER_REFERER = "https://www.senetic.it/"


class ImageRelocator:
    """
    Moves extracted images onto Shopify products.

    Usage:
        relocator = ImageRelocator(store, classifier, cloudinary, pacer=Pacer())
        results = relocator.relocate_all(result.image_urls, product_id)
    """

    MAX_IMAGES_PER_PRODUCT = 5
    DOWNLOAD_TIMEOUT = 30
    MAX_REDIRECTS = 5

    def __init__(
        self,
        store: ShopifyProductStore,
        classifier: DomainClassifier,
        cloudinary: Optional[CloudinaryClient] = None,
        pacer: Optional[Callable[[float], None]] = None,
        image_delay: float = 0.5,
        relay_delay: float = 2.0,
        dry_run: bool = False,
        skip_existing_images: bool = False,
    ):
        """
        Args:
            store: Shopify product store used for the image attach call
            classifier: Image host policy
            cloudinary: Relay storage; relay images fail without it
            pacer: Wait strategy between image calls
            image_delay: Pause after a direct attach (seconds)
            relay_delay: Pause after a relayed attach (seconds)
            dry_run: Report what would be uploaded without calling anything
            skip_existing_images: Skip images whose name already exists on the product
        """
        self.store = store
        self.classifier = classifier
        self.cloudinary = cloudinary
        self.pace = pacer or Pacer()
        self.image_delay = image_delay
        self.relay_delay = relay_delay
        self.dry_run = dry_run
        self.skip_existing_images = skip_existing_images

        self.session = requests.Session()
        self.session.max_redirects = self.MAX_REDIRECTS
        self.session.headers.update({
            "User-Agent": BROWSER_USER_AGENT,
            "Referer": SUPPLIER_REFERER,
            "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
        })

    def download(self, url: str) -> bytes:
        """
        Download image bytes from a relay host.

        Raises:
            ImageRelocationError: Network error, too many redirects, non-200 or empty body
        """
        try:
            response = self.session.get(url, timeout=self.DOWNLOAD_TIMEOUT, allow_redirects=True)
        except requests.exceptions.RequestException as e:
            raise ImageRelocationError(f"Download failed: {e}") from e

        if response.status_code != 200:
            raise ImageRelocationError(f"Download failed: HTTP {response.status_code}")
        if not response.content:
            raise ImageRelocationError("Download failed: empty body")
        return response.content

    def _cleanup(self, staged: StagedImage) -> None:
        """Delete a staged image. Failures are only logged."""
        try:
            if not self.cloudinary.destroy(staged.public_id):
                logger.warning("Cloudinary did not delete %s", staged.public_id)
        except ImageRelocationError as e:
            logger.warning("Could not delete staged image %s: %s", staged.public_id, e)

    def _relay(self, url: str, product_id: Union[int, str], filename: str) -> ImageUploadResult:
        if self.cloudinary is None:
            return ImageUploadResult(url, False, "relay", filename, error="Cloudinary not configured")

        staged = None
        try:
            data = self.download(url)
            staged = self.cloudinary.upload(data, folder=f"{RELAY_FOLDER}/{product_id}")
            image = self.store.add_image(product_id, staged.secure_url, filename=filename)
        except (ImageRelocationError, ShopifyAPIError) as e:
            logger.warning("Relay upload failed for %s: %s", url, e)
            if staged is not None:
                self._cleanup(staged)
            return ImageUploadResult(url, False, "relay", filename, error=str(e))

        self._cleanup(staged)
        return ImageUploadResult(url, True, "relay", filename, shopify_image_id=image.get("id"))

    def _direct(self, url: str, product_id: Union[int, str], filename: str) -> ImageUploadResult:
        try:
            image = self.store.add_image(product_id, url, filename=filename)
        except ShopifyAPIError as e:
            logger.warning("Image attach failed for %s: %s", url, e)
            return ImageUploadResult(url, False, "direct", filename, error=str(e))
        return ImageUploadResult(url, True, "direct", filename, shopify_image_id=image.get("id"))

    def relocate(self, url: str, product_id: Union[int, str]) -> ImageUploadResult:
        """
        Attach one image to a product.

        Returns:
            ImageUploadResult; failures are reported, never raised
        """
        filename = generate_unique_filename(url, product_id)
        try:
            return self._relocate(url, product_id, filename)
        except Exception as e:
            logger.error("Unexpected error uploading %s: %s", url, e)
            return ImageUploadResult(url, False, "", filename, error=str(e))

    def _relocate(self, url: str, product_id: Union[int, str], filename: str) -> ImageUploadResult:
        policy = self.classifier.classify_url(url)

        if policy is DomainPolicy.BLOCKED:
            return ImageUploadResult(url, False, "", filename, error="Image host not allowed")

        if self.dry_run:
            logger.info("[DRY RUN] Would upload %s as %s (%s)", url, filename, policy.value)
            return ImageUploadResult(url, True, policy.value, filename)

        if policy is DomainPolicy.RELAY:
            return self._relay(url, product_id, filename)
        return self._direct(url, product_id, filename)

    def _existing_image_keys(self, product_id: Union[int, str]) -> Set[str]:
        try:
            images = self.store.list_product_images(product_id)
        except ShopifyAPIError as e:
            logger.warning("Could not list images of product %s: %s", product_id, e)
            return set()
        return {normalize_for_comparison(image.get("src")) for image in images if image.get("src")}

    def relocate_all(self, urls: List[str], product_id: Union[int, str]) -> List[ImageUploadResult]:
        """
        Attach up to MAX_IMAGES_PER_PRODUCT images to a product, in order.

        Args:
            urls: Extracted image URLs (already filtered by host policy)
            product_id: Target Shopify product

        Returns:
            One ImageUploadResult per attempted image
        """
        candidates = urls[:self.MAX_IMAGES_PER_PRODUCT]
        if len(urls) > len(candidates):
            logger.info("Product %s: %d images found, only the first %d are uploaded",
                        product_id, len(urls), len(candidates))

        existing: Set[str] = set()
        if self.skip_existing_images and not self.dry_run and candidates:
            existing = self._existing_image_keys(product_id)

        results = []
        for position, url in enumerate(candidates, 1):
            if existing:
                key = normalize_for_comparison(generate_unique_filename(url, product_id))
                if key in existing:
                    logger.info("Image %d/%d already on product %s, skipped: %s",
                                position, len(candidates), product_id, url)
                    continue

            result = self.relocate(url, product_id)
            results.append(result)
            logger.info("Image %d/%d %s (%s): %s", position, len(candidates),
                        "uploaded" if result.success else "FAILED", result.method or "-", url)

            self.pace(self.relay_delay if result.method == "relay" else self.image_delay)

        return results

    def close(self):
        self.session.close()
