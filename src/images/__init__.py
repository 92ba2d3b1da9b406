"""
Image migration.

Modules:
    domains           - Direct / relay / blocked host classification
    filenames         - Per-product filenames and comparison keys
    cloudinary_client - Transient relay storage
    relocator         - Attaches description images to Shopify products
"""

from .cloudinary_client import CloudinaryClient, StagedImage
from .domains import DomainClassifier, DomainPolicy
from .filenames import generate_unique_filename, normalize_for_comparison, sanitize_stem
from .relocator import ImageRelocator

__all__ = [
    'CloudinaryClient',
    'StagedImage',
    'DomainClassifier',
    'DomainPolicy',
    'generate_unique_filename',
    'normalize_for_comparison',
    'sanitize_stem',
    'ImageRelocator',
]
