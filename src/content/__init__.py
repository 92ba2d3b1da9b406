"""
Product description processing.

Modules:
    description_cleaner - Comparison-section cut, image extraction, media stripping
"""

from .description_cleaner import (
    DescriptionProcessor,
    find_comparison_marker,
    strip_media,
    tidy_markup,
)

__all__ = [
    'DescriptionProcessor',
    'find_comparison_marker',
    'strip_media',
    'tidy_markup',
]
