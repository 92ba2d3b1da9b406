"""
Image filename normalization.

Shopify keeps the filename it is given, but appends its own UUID/hash when
a name is already taken in the store. Giving every image a name that embeds
the destination product id keeps names unique per product, and the
comparison key lets an existing upload be recognized by name alone.
"""

import logging
import os
import re
import time
from typing import Optional, Union
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".jpg"
IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

_UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9._-]')
_UNDERSCORE_RUNS = re.compile(r'_+')

# Suffixes Shopify (or a previous upload) may have appended to a name
_UUID_SUFFIX = re.compile(
    r'[_-][0-9a-f]{8}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{4}-?[0-9a-f]{12}$'
)
_TIMESTAMP_SUFFIX = re.compile(r'[_-]\d{10,13}$')
# Hex hashes must mix letters and digits so plain words/numbers survive
_HASH_SUFFIX = re.compile(r'[_-](?=[0-9a-f]*[a-f])(?=[0-9a-f]*\d)[0-9a-f]{8,}$')


def sanitize_stem(stem: str) -> str:
    """
    Replace characters outside [A-Za-z0-9._-] with '_', collapse runs of
    '_' and trim leading/trailing '_'.

    Example:
        'Telecamera IP (front).v2' -> 'Telecamera_IP_front_.v2'
    """
    cleaned = _UNSAFE_CHARS.sub('_', stem)
    cleaned = _UNDERSCORE_RUNS.sub('_', cleaned)
    return cleaned.strip('_')


def _split_basename(url: str):
    """Return (stem, extension) of the last path segment of a URL or path."""
    path = urlparse(url).path if '://' in url or url.startswith('//') else url.split('?', 1)[0]
    basename = unquote(path.rstrip('/').rsplit('/', 1)[-1])
    stem, ext = os.path.splitext(basename)
    return stem, ext.lower()


def generate_unique_filename(url: str, product_id: Union[int, str]) -> str:
    """
    Build a deterministic, per-product filename for an image.

    Args:
        url: Original image URL
        product_id: Shopify product the image is attached to

    Returns:
        '<sanitized stem>_<product_id><ext>'. Falls back to a timestamp-based
        name when the URL cannot be parsed. Never raises.

    Example:
        ('https://static.senetic.com/img/DS-2CD2143G2-I.png', 812) -> 'DS-2CD2143G2-I_812.png'
    """
    try:
        stem, ext = _split_basename(url)
        if ext not in IMAGE_EXTENSIONS:
            ext = DEFAULT_EXTENSION
        stem = sanitize_stem(stem)
        if not stem:
            raise ValueError("empty filename")
        return f"{stem}_{product_id}{ext}"
    except (ValueError, TypeError, AttributeError) as e:
        logger.debug("Falling back to synthetic filename for %r: %s", url, e)
        return f"image_{int(time.time() * 1000)}_{product_id}{DEFAULT_EXTENSION}"


def normalize_for_comparison(name: Optional[str]) -> str:
    """
    Reduce a filename or image URL to a lower-case comparison key.

    Strips the directory, query string, extension and any Shopify-assigned
    UUID, hash or timestamp suffixes, so two uploads of the same source image
    map to the same key. Never raises; returns '' for unusable input.

    Example:
        'https://cdn.shopify.com/files/Camera_Front_3f2a9c1e-1b2c-4d5e-8f90-a1b2c3d4e5f6.jpg?v=1699'
        -> 'camera_front'
    """
    if not name:
        return ""
    try:
        stem, _ = _split_basename(name)
    except (ValueError, TypeError, AttributeError):
        return ""

    key = sanitize_stem(stem).lower()
    previous = None
    while key and key != previous:
        previous = key
        for pattern in (_UUID_SUFFIX, _TIMESTAMP_SUFFIX, _HASH_SUFFIX):
            key = pattern.sub('', key)
        key = key.rstrip('_-')
    return key
