"""
Product Description Cleaner

Prepares a Senetic longItemDescription for Shopify:
- Decodes HTML entities
- Cuts the trailing "Confronto" (comparison) section
- Collects the product images worth migrating
- Strips images and videos from the body (images are re-attached as
  product media, videos are not supported)
- Tidies up the markup left behind

Marker and media stripping are regex based; the Senetic markup is
generated by their CMS and stays within a small set of shapes.
"""

import logging
import re
from html import unescape
from typing import List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from ..images.domains import DomainClassifier, DomainPolicy
from ..models import ExtractionStats, ImageExtractionResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.senetic.it/"
IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.gif')

COMPARISON_MARKER = "Confronto"

# Tag names are matched case-insensitively, the marker text is not
_MARKER_PATTERNS = [
    re.compile(r'(?i:<p\b[^>]*>)\s*(?i:<strong\b[^>]*>)\s*Confronto\s*(?i:</strong>)\s*(?i:</p>)'),
    re.compile(r'(?i:<h2\b[^>]*>)\s*Confronto\s*(?i:</h2>)'),
    re.compile(r'(?i:<h3\b[^>]*>)\s*Confronto\s*(?i:</h3>)'),
    re.compile(r'(?i:<h4\b[^>]*>)\s*Confronto\s*(?i:</h4>)'),
    re.compile(r'(?i:<strong\b[^>]*>)\s*Confronto\s*(?i:</strong>)'),
    re.compile(r'(?i:<b\b[^>]*>)\s*Confronto\s*(?i:</b>)'),
]

_IMG_TAG = re.compile(r'<img\b[^>]*>', re.IGNORECASE)
_VIDEO_ELEMENT = re.compile(r'<video\b[^>]*>.*?</video\s*>', re.IGNORECASE | re.DOTALL)
_VIDEO_TAG = re.compile(r'</?video\b[^>]*>', re.IGNORECASE)
_MP4_SOURCE = re.compile(r'<source\b[^>]*\.mp4[^>]*>', re.IGNORECASE)
_MP4_LINK = re.compile(r'<a\b[^>]*href\s*=\s*["\'][^"\']*\.mp4[^"\']*["\'][^>]*>.*?</a\s*>',
                       re.IGNORECASE | re.DOTALL)
_MP4_REFERENCE = re.compile(r'[^\s<>"\']*\.mp4[^\s<>"\']*', re.IGNORECASE)
_EMPTY_BLOCK = re.compile(
    r'<(figure|div|p)\b[^>]*>(?:\s|&nbsp;|\xa0|<br\s*/?>)*</\1\s*>',
    re.IGNORECASE,
)
_BR_RUN = re.compile(r'(?:<br\s*/?>\s*){2,}', re.IGNORECASE)
_WHITESPACE = re.compile(r'\s+')
_TRAILING_CLOSE = re.compile(r'</([a-zA-Z][a-zA-Z0-9]*)\s*>\s*$')


def find_comparison_marker(html: str) -> Optional[int]:
    """
    Find where the comparison section starts.

    Returns:
        Offset of the earliest "Confronto" marker, or None
    """
    positions = [m.start() for m in (p.search(html) for p in _MARKER_PATTERNS) if m]
    return min(positions) if positions else None


def strip_media(html: str) -> str:
    """Remove <img> tags, <video> elements and every .mp4 reference."""
    html = _IMG_TAG.sub('', html)
    html = _VIDEO_ELEMENT.sub('', html)
    html = _VIDEO_TAG.sub('', html)
    html = _MP4_SOURCE.sub('', html)
    html = _MP4_LINK.sub('', html)
    return _MP4_REFERENCE.sub('', html)


def tidy_markup(html: str) -> str:
    """Drop empty blocks, squash <br> runs and whitespace, fix a dangling close tag."""
    previous = None
    while html != previous:
        previous = html
        html = _EMPTY_BLOCK.sub('', html)

    html = _BR_RUN.sub('<br>', html)
    html = _WHITESPACE.sub(' ', html).strip()

    trailing = _TRAILING_CLOSE.search(html)
    if trailing:
        tag = trailing.group(1)
        opened = len(re.findall(rf'<{tag}\b', html, re.IGNORECASE))
        closed = len(re.findall(rf'</{tag}\s*>', html, re.IGNORECASE))
        if closed > opened:
            html = html[:trailing.start()].rstrip()

    return html


class DescriptionProcessor:
    """
    Cleans product descriptions and extracts their migratable images.

    Usage:
        processor = DescriptionProcessor(classifier)
        result = processor.process(record.long_item_description)
        result.cleaned_html, result.image_urls, result.stats
    """

    def __init__(self, classifier: DomainClassifier, base_url: str = DEFAULT_BASE_URL):
        """
        Args:
            classifier: Image host policy; blocked hosts are dropped
            base_url: Base for resolving relative image paths
        """
        self.classifier = classifier
        self.base_url = base_url or DEFAULT_BASE_URL

    def resolve_url(self, src: str) -> str:
        """Make an <img src> absolute. Protocol-relative URLs become https."""
        src = src.strip()
        if src.startswith('//'):
            return f"https:{src}"
        if re.match(r'^https?://', src, re.IGNORECASE):
            return src
        return urljoin(self.base_url, src)

    def extract_image_urls(self, html: str) -> List[str]:
        """
        Collect image URLs from <img src> attributes.

        Only .jpg/.jpeg/.png/.gif sources on allowed hosts are kept, in
        first-seen order without duplicates.
        """
        urls: List[str] = []
        seen = set()

        soup = BeautifulSoup(html, "lxml")
        for img in soup.find_all("img", src=True):
            src = img["src"].strip()
            if not src or src.lower().startswith("data:"):
                continue

            url = self.resolve_url(src)
            try:
                parsed = urlparse(url)
            except ValueError:
                logger.debug("Unparseable image URL skipped: %s", src)
                continue

            if not any(ext in parsed.path.lower() for ext in IMAGE_EXTENSIONS):
                continue

            if self.classifier.classify(parsed.hostname) is DomainPolicy.BLOCKED:
                logger.debug("Image host not allowed, dropped: %s", url)
                continue

            if url not in seen:
                seen.add(url)
                urls.append(url)

        return urls

    def process(self, html: Optional[str]) -> ImageExtractionResult:
        """
        Clean a description and extract its images.

        Args:
            html: Raw (possibly entity-encoded) description; None or '' allowed

        Returns:
            ImageExtractionResult with image_urls, cleaned_html and stats
        """
        if not html:
            return ImageExtractionResult()

        decoded = unescape(html)
        stats = ExtractionStats(original_length=len(decoded))

        marker = find_comparison_marker(decoded)
        if marker is not None:
            kept = decoded[:marker]
            stats.comparison_section_removed = True
        else:
            kept = decoded

        stats.images_found = len(_IMG_TAG.findall(decoded))
        stats.videos_found = len(_VIDEO_ELEMENT.findall(decoded)) + len(_MP4_LINK.findall(decoded))
        stats.images_removed = len(_IMG_TAG.findall(kept))
        stats.videos_removed = len(_VIDEO_ELEMENT.findall(kept)) + len(_MP4_LINK.findall(kept))

        image_urls = self.extract_image_urls(kept) if stats.images_removed else []
        cleaned = tidy_markup(strip_media(kept))
        stats.cleaned_length = len(cleaned)

        if stats.comparison_section_removed:
            logger.debug("Comparison section removed at offset %d", marker)

        return ImageExtractionResult(image_urls=image_urls, cleaned_html=cleaned, stats=stats)
