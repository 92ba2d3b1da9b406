"""
Configuration Loader

Loads YAML configuration files for the import filters and the image
domain policy.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'filters.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_filter_config() -> Dict[str, Optional[List[str]]]:
    """
    Load category/brand filter configuration.

    Returns:
        Dictionary with 'categories' (list) and 'brands' (list or None
        when every brand is accepted)

    Example:
        {
            'categories': ['Sistemi di sorveglianza', 'Reti'],
            'brands': None,
        }
    """
    config = load_config('filters.yaml')
    brands = config.get('brands') or None
    return {
        'categories': list(config.get('categories') or []),
        'brands': list(brands) if brands else None,
    }


def load_image_domains() -> Dict[str, Any]:
    """
    Load the image host policy.

    Returns:
        Dictionary with 'direct' and 'relay' host lists and the
        'relative_base_url' used to resolve relative image paths
    """
    config = load_config('image_domains.yaml')
    return {
        'direct': list(config.get('direct') or []),
        'relay': list(config.get('relay') or []),
        'relative_base_url': config.get('relative_base_url', ''),
    }


def split_csv_setting(value: Optional[str]) -> List[str]:
    """
    Split a comma-separated setting into trimmed, non-empty items.

    Example:
        'Reti, Sistemi di sorveglianza,' -> ['Reti', 'Sistemi di sorveglianza']
    """
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]
