# Common utilities
from .config_loader import (
    load_config,
    load_filter_config,
    load_image_domains,
    split_csv_setting,
)
from .errors import (
    ConfigurationError,
    FeedFetchError,
    ImageRelocationError,
    ImportRunError,
    ShopifyAPIError,
    ShopifyNotFoundError,
    SyncError,
)
from .log_config import setup_logging
from .pacing import Pacer, no_delay
from .settings import Settings
from .text_utils import normalize_key, normalize_keys
