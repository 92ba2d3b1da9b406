"""
Text Utilities

Helper functions for text normalization.
"""

from typing import Iterable, Optional, Set


def normalize_key(text: Optional[str]) -> str:
    """
    Normalize a name for comparison: trim and case-fold.

    Args:
        text: Category, brand or other name (None is treated as empty)

    Returns:
        Normalized key

    Example:
        '  Sistemi di Sorveglianza ' -> 'sistemi di sorveglianza'
    """
    if not text:
        return ""
    return text.strip().casefold()


def normalize_keys(values: Iterable[str]) -> Set[str]:
    """Normalize a collection of names into a set of comparison keys."""
    return {normalize_key(v) for v in values if normalize_key(v)}
