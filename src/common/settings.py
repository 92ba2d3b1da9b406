"""
Runtime settings.

Credentials and endpoints come from the environment (a local .env file is
loaded with python-dotenv); filter and image-host policy come from the YAML
files under config/. Everything is read once into a Settings value that is
passed to the clients and services that need it.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .config_loader import load_filter_config, load_image_domains, split_csv_setting

REQUIRED_VARIABLES = ("SENETIC_AUTH", "SHOPIFY_STORE_URL", "SHOPIFY_ACCESS_TOKEN")

SENETIC_BASE_URL = "https://b2b.senetic.com/Gateway/ClientApi"


@dataclass
class Settings:
    """Everything a run needs to know about its environment."""

    senetic_auth: str = ""
    senetic_base_url: str = SENETIC_BASE_URL
    senetic_lang: str = "IT"

    shopify_store_url: str = ""
    shopify_access_token: str = ""

    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""

    webhook_url: str = ""
    port: int = 3000

    # Filters
    categories: List[str] = field(default_factory=list)
    brands: Optional[List[str]] = None
    max_products: Optional[int] = None

    # Image host policy
    direct_image_hosts: List[str] = field(default_factory=list)
    relay_image_hosts: List[str] = field(default_factory=list)
    relative_image_base_url: str = ""

    # Pacing (seconds)
    product_delay: float = 0.5
    image_delay: float = 0.5
    relay_delay: float = 2.0

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """
        Build settings from the environment and the YAML config files.

        CATEGORIES / BRANDS / MAX_PRODUCTS environment variables override the
        filters.yaml values when set.
        """
        load_dotenv(env_file)

        filters = load_filter_config()
        domains = load_image_domains()

        categories = split_csv_setting(os.getenv("CATEGORIES")) or filters["categories"]
        brands = split_csv_setting(os.getenv("BRANDS")) or filters["brands"]
        max_products = os.getenv("MAX_PRODUCTS")

        return cls(
            senetic_auth=os.getenv("SENETIC_AUTH", ""),
            senetic_lang=os.getenv("SENETIC_LANG", "IT"),
            shopify_store_url=os.getenv("SHOPIFY_STORE_URL", ""),
            shopify_access_token=os.getenv("SHOPIFY_ACCESS_TOKEN", ""),
            cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
            cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY", ""),
            cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
            webhook_url=os.getenv("SHOPIFY_WEBHOOK_URL", ""),
            port=int(os.getenv("PORT", "3000")),
            categories=categories,
            brands=brands or None,
            max_products=int(max_products) if max_products else None,
            direct_image_hosts=domains["direct"],
            relay_image_hosts=domains["relay"],
            relative_image_base_url=domains["relative_base_url"],
            product_delay=float(os.getenv("PRODUCT_DELAY", "0.5")),
        )

    def missing_required(self) -> List[str]:
        """Return the names of required variables that are not set."""
        values = {
            "SENETIC_AUTH": self.senetic_auth,
            "SHOPIFY_STORE_URL": self.shopify_store_url,
            "SHOPIFY_ACCESS_TOKEN": self.shopify_access_token,
        }
        return [name for name in REQUIRED_VARIABLES if not values[name]]

    @property
    def cloudinary_configured(self) -> bool:
        return bool(self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret)
